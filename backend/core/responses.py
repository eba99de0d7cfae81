from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from backend.core.errors import ServiceError

INTERNAL_ERROR_MESSAGE = 'Internal Server Error'


def send_success(payload: dict | None = None, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={'status': True, 'data': jsonable_encoder(payload or {})},
    )


def send_error(error: ServiceError | str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> JSONResponse:
    if isinstance(error, ServiceError):
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    return JSONResponse(
        status_code=status_code,
        content={'success': False, 'error': error or INTERNAL_ERROR_MESSAGE},
    )
