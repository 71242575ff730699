from fastapi import status
from libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def error_body(base_error: Error, message: str = None) -> dict:
    """{"error": {code, message[, reason]}}"""
    error_dict = {"code": base_error.code, "message": message or base_error.message}
    if base_error.reason is not None:
        error_dict["reason"] = base_error.reason
    return {"error": error_dict}
