from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from crm.api.v1.api import api_router
from crm.core.config import get_settings
from crm.core.errors import CRMError
from crm.core.metrics import instrument_app
from crm.core.logging import get_logger
from crm.db.session import init_db
from crm.utils.decorators import log_request

logger = get_logger(__name__)

settings = get_settings()
app = FastAPI(title="CRM Service")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.ENABLE_METRICS:
    instrument_app(app)

app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(CRMError)
async def crm_error_handler(request: Request, exc: CRMError):
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies, path and query values are reported like any other validation error: 400, first problem only."""
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = f"{location}: {first['msg']}" if location else first["msg"]
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Something went wrong"},
    )


@app.on_event("startup")
async def startup_event():
    init_db()
    logger.info("Application startup")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
@log_request
async def read_root():
    return {"message": "Welcome to the CRM Service"}
