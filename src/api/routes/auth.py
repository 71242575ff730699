from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.api.utils.caller_auth import get_current_caller
from src.api.utils.session_cookie import clear_session_cookie, set_session_cookie
from src.app.services.credentials import CredentialService, UserInfo
from src.app.services.email_sender import IEmailSender
from src.app.services.file_storage import IFileStorage
from src.app.services.session_tokens import AuthSettings, IssuedToken, SessionTokenService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthResponse,
    ChangePasswordResponse,
    ChangePasswordUseCase,
    ConfirmPasswordResetUseCase,
    DeleteAccountResponse,
    DeleteAccountUseCase,
    LoginUseCase,
    RegisterCommand,
    RegisterUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
)
from src.depends import (
    get_auth_settings,
    get_credentials,
    get_email_sender,
    get_file_storage,
    get_session_tokens,
    get_unit_of_work,
)
from src.domain.identity import SignedInCaller
from config import ApplicationConfig

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    name: str = Field(..., min_length=1, max_length=50, description="Display name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, description="New password (min 8 chars)")


class DeleteAccountRequest(BaseModel):
    password: str = Field(..., min_length=1, description="Password confirmation")


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    password: str = Field(..., min_length=8, description="New password (min 8 chars)")


class SessionResponse(BaseModel):
    """Signed-in response; the token itself travels only in the HTTP-only cookie"""

    message: str
    user: UserInfo


class LogoutResponse(BaseModel):
    message: str


def _start_session(
    response: Response, auth: AuthResponse, settings: AuthSettings
) -> SessionResponse:
    set_session_cookie(
        response, IssuedToken(token=auth.token, expires_at=auth.expires_at), settings
    )
    return SessionResponse(message=auth.message, user=auth.user)


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=SessionResponse)
async def register(
    request: RegisterRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    credentials: CredentialService = Depends(get_credentials),
    tokens: SessionTokenService = Depends(get_session_tokens),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    User Registration

    Creates the account and signs the user in (session cookie set).

    Raises:
        - 409 Conflict: Email already exists
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = RegisterCommand(name=request.name, email=request.email, password=request.password)

    result = await RegisterUseCase(uow, credentials, tokens).execute(command)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return _start_session(response, result.value, settings)


@router.post("/login", status_code=status.HTTP_200_OK, response_model=SessionResponse)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    credentials: CredentialService = Depends(get_credentials),
    tokens: SessionTokenService = Depends(get_session_tokens),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    User Login

    Raises:
        - 401 Unauthorized: Invalid credentials (same for unknown email and wrong password)
    """
    result = await LoginUseCase(uow, credentials, tokens).execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return _start_session(response, result.value, settings)


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    response: Response,
    caller: SignedInCaller = Depends(get_current_caller),
    settings: AuthSettings = Depends(get_auth_settings),
):
    clear_session_cookie(response, settings)
    return LogoutResponse(message="Logged out successfully")


@router.post(
    "/changepassword", status_code=status.HTTP_200_OK, response_model=ChangePasswordResponse
)
async def change_password(
    request: ChangePasswordRequest,
    caller: SignedInCaller = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
    credentials: CredentialService = Depends(get_credentials),
):
    """
    Change Password

    Raises:
        - 401 Unauthorized: Not signed in, or current password incorrect
        - 404 Not Found: Account no longer exists
    """
    result = await ChangePasswordUseCase(uow, credentials).execute(
        caller.id, request.current_password, request.new_password
    )

    if result.is_err():
        error = result.error
        if error.code == "INCORRECT_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.delete(
    "/deleteaccount", status_code=status.HTTP_200_OK, response_model=DeleteAccountResponse
)
async def delete_account(
    request: DeleteAccountRequest,
    response: Response,
    caller: SignedInCaller = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
    credentials: CredentialService = Depends(get_credentials),
    storage: IFileStorage = Depends(get_file_storage),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Delete Own Account

    Removes the account with all of its resources and ratings, then clears
    the session cookie.

    Raises:
        - 401 Unauthorized: Not signed in, or password incorrect
        - 404 Not Found: Account no longer exists
    """
    result = await DeleteAccountUseCase(uow, credentials, storage).execute(
        caller.id, request.password
    )

    if result.is_err():
        error = result.error
        if error.code == "INCORRECT_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    clear_session_cookie(response, settings)
    return result.value


@router.post(
    "/forgotpassword",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Request Password Reset

    Always answers with the same acknowledgement, whether or not the email
    belongs to an account and whether or not the email could be sent.
    """
    use_case = RequestPasswordResetUseCase(
        uow, email_sender, reset_url=ApplicationConfig.RESET_PASSWORD_URL
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.put(
    "/resetpassword/{reset_token}", status_code=status.HTTP_200_OK, response_model=SessionResponse
)
async def reset_password(
    reset_token: str,
    request: ResetPasswordRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    credentials: CredentialService = Depends(get_credentials),
    tokens: SessionTokenService = Depends(get_session_tokens),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Confirm Password Reset

    Consumes the reset token, sets the new password and signs the user in.

    Raises:
        - 400 Bad Request: Token unknown, expired or already used
    """
    result = await ConfirmPasswordResetUseCase(uow, credentials, tokens).execute(
        reset_token, request.password
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_OR_EXPIRED_TOKEN":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return _start_session(response, result.value, settings)
