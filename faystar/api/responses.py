from typing import Any, Optional

from fastapi import status
from fastapi.responses import JSONResponse

from faystar.domain.schemas.envelope import ServiceEnvelope, new_request_id
from faystar.services.base import ServiceResult


def envelope_response(result: ServiceResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.envelope.to_dict())


def success_response(
    data: Any,
    status_code: int = status.HTTP_200_OK,
    request_prefix: str = "api",
    message: Optional[str] = None,
) -> JSONResponse:
    envelope = ServiceEnvelope(
        success=True,
        data=data,
        message=message,
        request_id=new_request_id(request_prefix),
    )
    return JSONResponse(status_code=status_code, content=envelope.to_dict())
