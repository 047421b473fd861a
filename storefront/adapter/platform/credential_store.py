"""Credential store backed by the commerce platform security API."""

from typing import Optional
from urllib.parse import quote

import logfire

from storefront.adapter.platform.client import PlatformClient
from storefront.adapter.platform.mappers import (
    dto_to_identity_result,
    dto_to_login_outcome,
    dto_to_user,
    user_to_dto,
)
from storefront.domain.model.user import User
from storefront.domain.repository import CredentialStore
from storefront.domain.value import (
    ExternalLoginInfo,
    IdentityResult,
    LoginOutcome,
    TokenPurpose,
    UserId,
)

USERS_PATH = "/api/platform/security/users"


def _segment(value: str) -> str:
    return quote(value, safe="")


class PlatformCredentialStore(CredentialStore):
    """CredentialStore implementation over the platform REST API."""

    def __init__(self, client: PlatformClient) -> None:
        self.client = client

    async def _find(self, path: str) -> Optional[User]:
        dto = await self.client.get(path, allow_not_found=True)
        return dto_to_user(dto) if dto else None

    async def create_user(self, user: User, password: Optional[str]) -> IdentityResult:
        with logfire.span("platform.create_user", user_name=user.user_name):
            body = {**user_to_dto(user), "password": password}
            return dto_to_identity_result(
                await self.client.post(f"{USERS_PATH}/create", json=body)
            )

    async def update_user(self, user: User) -> IdentityResult:
        with logfire.span("platform.update_user", user_id=user.id):
            return dto_to_identity_result(
                await self.client.put(USERS_PATH, json=user_to_dto(user))
            )

    async def find_by_name(self, user_name: str) -> Optional[User]:
        return await self._find(f"{USERS_PATH}/{_segment(user_name)}")

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self._find(f"{USERS_PATH}/email/{_segment(email)}")

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return await self._find(f"{USERS_PATH}/id/{_segment(user_id)}")

    async def find_by_login(
        self, login_provider: str, provider_key: str
    ) -> Optional[User]:
        return await self._find(
            f"{USERS_PATH}/login/external/{_segment(login_provider)}/{_segment(provider_key)}"
        )

    async def password_sign_in(
        self, user_name: str, password: str, lockout_on_failure: bool = True
    ) -> LoginOutcome:
        with logfire.span("platform.password_sign_in", user_name=user_name):
            dto = await self.client.post(
                f"{USERS_PATH}/{_segment(user_name)}/checkpassword",
                json={"password": password, "lockoutOnFailure": lockout_on_failure},
            )
            return dto_to_login_outcome(dto)

    async def external_login_sign_in(
        self, login_provider: str, provider_key: str, bypass_two_factor: bool = True
    ) -> LoginOutcome:
        with logfire.span("platform.external_login_sign_in", login_provider=login_provider):
            dto = await self.client.post(
                f"{USERS_PATH}/login/external/{_segment(login_provider)}/{_segment(provider_key)}/check",
                json={"bypassTwoFactor": bypass_two_factor},
            )
            return dto_to_login_outcome(dto)

    async def add_external_login(
        self, user_id: UserId, info: ExternalLoginInfo
    ) -> IdentityResult:
        return dto_to_identity_result(
            await self.client.post(
                f"{USERS_PATH}/{_segment(user_id)}/logins",
                json={
                    "loginProvider": info.login_provider,
                    "providerKey": info.provider_key,
                },
            )
        )

    async def generate_token(self, user: User, purpose: TokenPurpose) -> str:
        dto = await self.client.post(
            f"{USERS_PATH}/{_segment(user.id)}/tokens", json={"purpose": purpose.value}
        )
        return dto["token"]

    async def verify_token(self, user: User, purpose: TokenPurpose, token: str) -> bool:
        dto = await self.client.post(
            f"{USERS_PATH}/{_segment(user.id)}/tokens/verify",
            json={"purpose": purpose.value, "token": token},
        )
        return bool(dto and dto.get("isValid"))

    async def reset_password(
        self, user: User, token: str, new_password: str
    ) -> IdentityResult:
        return dto_to_identity_result(
            await self.client.post(
                f"{USERS_PATH}/{_segment(user.id)}/resetpasswordconfirm",
                json={"token": token, "newPassword": new_password},
            )
        )

    async def change_password(
        self, user: User, current_password: str, new_password: str
    ) -> IdentityResult:
        return dto_to_identity_result(
            await self.client.post(
                f"{USERS_PATH}/{_segment(user.user_name)}/changepassword",
                json={"oldPassword": current_password, "newPassword": new_password},
            )
        )

    async def confirm_email(self, user: User, token: str) -> IdentityResult:
        return dto_to_identity_result(
            await self.client.post(
                f"{USERS_PATH}/{_segment(user.id)}/confirmemail", json={"token": token}
            )
        )

    async def sign_in(self, user: User, is_persistent: bool) -> None:
        await self.client.post(
            f"{USERS_PATH}/{_segment(user.id)}/signin",
            json={"isPersistent": is_persistent},
        )

    async def sign_out(self, user: User) -> None:
        await self.client.post(f"{USERS_PATH}/{_segment(user.id)}/signout")
