"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class AuthenticationRequired(InterfaceError):
    """The request needs a signed-in user."""

    pass


class AccessDenied(InterfaceError):
    """The signed-in user lacks a required capability."""

    pass


class AntiforgeryError(InterfaceError):
    """Anti-forgery token missing or mismatched."""

    pass
