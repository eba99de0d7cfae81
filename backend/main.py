import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError

from backend.core import config
from backend.core.errors import ServiceError
from backend.core.responses import send_error
from backend.database import Base, engine, ensure_appointment_schema, ensure_slot_schema
from backend.models import appointment, doctor_slot  # noqa: F401
from backend.routes import booking_routes, slot_routes


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )


configure_logging()
logger = logging.getLogger(__name__)

REQUEST_SECTIONS = {'body', 'query', 'path', 'header', 'cookie'}

app = FastAPI(title='Doctor Appointment API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
        ensure_slot_schema()
        ensure_appointment_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error('%s %s failed: %s', request.method, request.url.path, exc.message)
    return send_error(exc)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.warning('Validation error on %s %s: %s', request.method, request.url.path, errors)
    first = errors[0] if errors else {}
    location = '.'.join(
        to_camel(part) if '_' in part else part
        for part in first.get('loc', ())
        if isinstance(part, str) and part not in REQUEST_SECTIONS
    )
    message = first.get('msg', 'Invalid request')
    return send_error(f'{location}: {message}' if location else message, status.HTTP_400_BAD_REQUEST)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception('Database error on %s %s', request.method, request.url.path, exc_info=exc)
    return send_error('Internal Server Error')


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception('Unexpected error on %s %s', request.method, request.url.path, exc_info=exc)
    return send_error('Internal Server Error')


@app.get('/')
def root():
    return {'status': 'Doctor Appointment API Running'}


app.include_router(slot_routes.router, prefix='/api')
app.include_router(booking_routes.router, prefix='/api')
