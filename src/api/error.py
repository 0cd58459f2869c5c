from typing import Any, Dict, Optional

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


def error_body(
    code: str,
    message: str,
    status_code: int,
    request_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Standard `{"error": {...}}` envelope shared by handlers and middleware."""
    error_dict: Dict[str, Any] = {
        "code": code,
        "message": message,
        "status": status_code,
        "requestId": request_id,
    }
    if details:
        error_dict["details"] = details
    return {"error": error_dict}
