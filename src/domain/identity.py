"""
Caller identity variants.

Every request resolves to exactly one of AnonymousCaller, AuthenticatedUser
or AdminUser. Authorization dispatches on the variant type rather than on
role strings.
"""

from dataclasses import dataclass
from typing import Union
from uuid import UUID

from src.domain.entities.enums import UserRole


@dataclass(frozen=True)
class AnonymousCaller:
    """No (or no usable) session token"""


@dataclass(frozen=True)
class AuthenticatedUser:
    id: UUID

    @property
    def role(self) -> UserRole:
        return UserRole.user


@dataclass(frozen=True)
class AdminUser:
    id: UUID

    @property
    def role(self) -> UserRole:
        return UserRole.admin


Caller = Union[AnonymousCaller, AuthenticatedUser, AdminUser]
SignedInCaller = Union[AuthenticatedUser, AdminUser]


def caller_for(user_id: UUID, role: UserRole) -> SignedInCaller:
    if role == UserRole.admin:
        return AdminUser(id=user_id)
    return AuthenticatedUser(id=user_id)


def is_admin(caller: Caller) -> bool:
    return isinstance(caller, AdminUser)


def can_delete_resource(caller: Caller, uploaded_by: UUID) -> bool:
    """Uploader or any admin may delete a resource"""
    if isinstance(caller, AdminUser):
        return True
    if isinstance(caller, AuthenticatedUser):
        return caller.id == uploaded_by
    return False


def as_context(caller: SignedInCaller) -> dict:
    """Request-context form: {id, role}, never credentials"""
    return {"id": str(caller.id), "role": caller.role.value}
