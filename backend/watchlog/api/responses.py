"""
Envelope responses

Maps a ServiceResult onto an HTTP response; the body is always the envelope.
"""
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from watchlog.core.result import ErrorType, ServiceResult

STATUS_BY_ERROR = {
    ErrorType.NOT_FOUND: 404,
    ErrorType.VALIDATION: 422,
    ErrorType.STORE: 500,
    ErrorType.PARTIAL: 500,
}


def envelope(result: ServiceResult, success_status: int = 200) -> JSONResponse:
    if result.success:
        status_code = success_status
    else:
        status_code = STATUS_BY_ERROR.get(result.error_type, 500)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(result.to_dict()))
