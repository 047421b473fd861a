"""Programmatic storefront API.

Requests under this prefix never get login redirects; unauthenticated or
forbidden calls answer 401/403.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from storefront.domain.model import WorkContext
from storefront.interface.api.dependencies import require_registered_user

# Mounted under storefront.api_path_prefix
router = APIRouter(tags=["storefront-api"])


class AccountResponse(BaseModel):
    """Signed-in user summary."""

    id: str
    user_name: str
    email: str | None
    store_id: str | None
    is_impersonated: bool
    operator_user_name: str | None = None


@router.get("/account", response_model=AccountResponse)
async def get_account(
    context: WorkContext = Depends(require_registered_user),
) -> AccountResponse:
    """Return the signed-in user.

    Raises:
        AuthenticationRequired: If the caller is anonymous (answered with 401)
    """
    user = context.current_user
    return AccountResponse(
        id=user.id,
        user_name=user.user_name,
        email=user.email,
        store_id=user.store_id,
        is_impersonated=user.is_impersonated,
        operator_user_name=user.operator_user_name,
    )
