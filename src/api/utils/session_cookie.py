from fastapi import Response

from src.app.services.session_tokens import SESSION_COOKIE_NAME, AuthSettings, IssuedToken


def set_session_cookie(response: Response, issued: IssuedToken, settings: AuthSettings) -> None:
    """
    Attach the session token as an HTTP-only cookie

    Expires together with the token. The cross-origin production profile adds
    Secure and SameSite=None so browsers send it from the separate frontend.
    """
    cross_origin = settings.cross_origin_cookies
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=issued.token,
        httponly=True,
        expires=issued.expires_at,
        secure=cross_origin,
        samesite="none" if cross_origin else None,
        path="/",
    )


def clear_session_cookie(response: Response, settings: AuthSettings) -> None:
    cross_origin = settings.cross_origin_cookies
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        httponly=True,
        secure=cross_origin,
        samesite="none" if cross_origin else None,
        path="/",
    )
