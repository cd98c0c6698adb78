from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text

from notifyhub import __version__
from notifyhub.config import settings
from notifyhub.database import async_session, engine
from notifyhub.exceptions import ChannelValidationError, NotifyError
from notifyhub.models import Base
from notifyhub.response import error_response
from notifyhub.routers import notifications


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


app = FastAPI(
    title="NotifyHub",
    description="Deliver alert messages through one configured notification channel.",
    version=__version__,
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)


# --- Exception Handlers ---


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.status_code, exc.detail),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        clean = {k: v for k, v in err.items() if k != "ctx"}
        if "msg" in clean:
            clean["msg"] = str(clean["msg"])
        errors.append(clean)
    content = error_response(422, "Validation error")
    content["error"]["details"] = errors
    return JSONResponse(status_code=422, content=content)


@app.exception_handler(ChannelValidationError)
async def channel_validation_handler(request: Request, exc: ChannelValidationError):
    return JSONResponse(status_code=400, content=error_response(400, exc.message))


@app.exception_handler(NotifyError)
async def delivery_error_handler(request: Request, exc: NotifyError):
    # Provider or transport failure: the upstream, not the caller, is at fault
    return JSONResponse(status_code=502, content=error_response(502, exc.message))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    return JSONResponse(status_code=500, content=error_response(500, "Internal server error"))


# --- Routes ---

api_v1 = APIRouter(prefix="/v1")
api_v1.include_router(notifications.router)
app.include_router(api_v1)


@app.get("/", summary="API root")
async def root():
    return {"name": settings.app_name, "status": "ok", "version": __version__}


@app.get("/health", summary="Health check")
async def health_ping():
    status = "healthy"
    checks = {}

    try:
        async with async_session() as session:
            await session.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception:
        checks["database"] = "unavailable"
        status = "degraded"

    return {
        "status": status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
        "checks": checks,
    }
