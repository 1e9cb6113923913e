from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from hugh.exceptions import DecodeError, UnexpectedResponseShape


class ApiErrorModel(BaseModel):
    type: int = 0
    address: str = ""
    description: str = ""


# One element of the [{"success": ...} | {"error": ...}] array the v1 API answers with
class ApiResponse(BaseModel):
    success: Optional[dict[str, Any]] = None
    error: Optional[ApiErrorModel] = None


def single_response(body: Any) -> ApiResponse:
    """Unwrap a response array that must hold exactly one element."""
    if not isinstance(body, list):
        raise DecodeError(f"Expected a response array, got {type(body).__name__}")
    if len(body) != 1:
        raise UnexpectedResponseShape(len(body))

    try:
        return ApiResponse.model_validate(body[0])
    except ValidationError as e:
        raise DecodeError(f"Unexpected response element: {body[0]!r}") from e
