"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class TokenError(UtilError):
    """Signed token could not be issued or read."""

    pass
