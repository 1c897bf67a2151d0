# invoicething/main.py

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from invoicething.api.clients import router as clients_router
from invoicething.api.dashboard import router as dashboard_router
from invoicething.api.files import router as files_router
from invoicething.api.invoices import router as invoices_router
from invoicething.api.settings import router as settings_router
from invoicething.api.users import router as users_router
from invoicething.core.config import get_config
from invoicething.core.exceptions import (
    AuthenticationError,
    InvalidArgumentError,
    NotFoundError,
)
from invoicething.core.logging_config import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

config = get_config()

app = FastAPI(
    title=config.APP_NAME,
    version=config.APP_VERSION,
    debug=config.DEBUG,
)


@app.exception_handler(InvalidArgumentError)
def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(AuthenticationError)
def authentication_handler(request: Request, exc: AuthenticationError):
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=401, content={"detail": str(exc)})


@app.get("/health")
def health_check():
    return {"status": "ok"}

app.include_router(users_router)
app.include_router(clients_router)
app.include_router(settings_router)
app.include_router(invoices_router)
app.include_router(dashboard_router)
app.include_router(files_router)
