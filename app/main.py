import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.infrastructure.database import init_db
from app.api import create_api_router
from app.modules.common import LedgerError, StoreUnavailableError
from app.schemas import ErrorResponse

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("%s %s started", settings.project_name, __version__)
    yield


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s refused (%s): %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.code, message=exc.message).model_dump(),
    )


async def store_unavailable_handler(request: Request, exc: StoreUnavailableError) -> JSONResponse:
    logger.error("%s %s: store unavailable", request.method, request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.code, message=StoreUnavailableError.default_message).model_dump(),
        headers={"Retry-After": "1"},
    )


def create_app() -> FastAPI:
    configure_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        description="Wallet ledger and deposit approval service for a storefront",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)
    app.add_exception_handler(LedgerError, ledger_error_handler)

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": __version__}

    return app


app = create_app()
