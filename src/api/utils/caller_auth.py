"""
Caller resolution for routes.

get_optional_caller: resolves the session cookie, anonymous when absent
get_current_caller:  401 unless a signed-in caller is resolved
require_admin:       403 unless the signed-in caller is an admin

The resolved caller is also kept on request.state.caller as {id, role}.
"""

import logging
from typing import Optional

from fastapi import Cookie, Depends, Request, status

from libs.result import Error
from src.api.error import ClientError
from src.app.services.access_gate import AccessGate
from src.app.services.session_tokens import SESSION_COOKIE_NAME, SessionTokenService
from src.app.services.unit_of_work import UnitOfWork
from src.depends import get_session_tokens, get_unit_of_work
from src.domain.identity import AdminUser, AnonymousCaller, Caller, SignedInCaller, as_context

logger = logging.getLogger(__name__)


async def get_optional_caller(
    request: Request,
    token: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: SessionTokenService = Depends(get_session_tokens),
) -> Caller:
    result = await AccessGate(uow, tokens).authenticate(token)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)

    caller = result.value
    if not isinstance(caller, AnonymousCaller):
        request.state.caller = as_context(caller)
    return caller


async def get_current_caller(caller: Caller = Depends(get_optional_caller)) -> SignedInCaller:
    if isinstance(caller, AnonymousCaller):
        raise ClientError(
            Error("NOT_AUTHENTICATED", "No token provided"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return caller


async def require_admin(caller: SignedInCaller = Depends(get_current_caller)) -> AdminUser:
    result = AccessGate.authorize_admin(caller)
    if result.is_err():
        logger.info("Admin route refused for caller %s", caller.id)
        raise ClientError(result.error, status_code=status.HTTP_403_FORBIDDEN)
    return result.value
