from typing import Any, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(
    data: Optional[Any] = None,
    *,
    status_code: int = status.HTTP_200_OK,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """
    Serialize a success payload. Pydantic models are dumped by alias, so
    camelCase schemas come out camelCase.
    """
    content = jsonable_encoder(data) if data is not None else {}
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def error_response(
    message: str,
    *,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    details: Optional[Any] = None,
    headers: Optional[dict] = None,
    **extra: Any,
) -> JSONResponse:
    """
    Single source of truth for ALL error responses: {"error": true, "message": ...}
    """
    content = {"error": True, "message": message}
    if details is not None:
        content["details"] = jsonable_encoder(details)
    content.update(jsonable_encoder(extra))

    return JSONResponse(status_code=status_code, content=content, headers=headers)
