import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from string_analyzer.config import get_settings
from string_analyzer.errors import InvalidInputError, StringAnalyzerError
from string_analyzer.limiter import limiter
from string_analyzer.logging import RequestLoggingMiddleware, init_logging
from string_analyzer.routes import router
from string_analyzer.store import StringStore

settings = get_settings()

init_logging()
logger = logging.getLogger("string_analyzer")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "%s %s starting (rate limiting %s)",
        settings.APP_NAME,
        settings.APP_VERSION,
        "enabled" if settings.RATE_LIMIT_ENABLED else "disabled",
    )
    yield
    logger.info("Shutdown: %d strings discarded", len(app.state.store))


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=(
        "Stores strings, computes their properties and lets you filter them "
        "with query parameters or a plain-English query."
    ),
    lifespan=lifespan,
)
app.state.store = StringStore()
app.state.limiter = limiter

app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


# -------------------------------
# Unified error response handlers
# -------------------------------
@app.exception_handler(StringAnalyzerError)
async def string_analyzer_error_handler(request: Request, exc: StringAnalyzerError):
    logger.warning(
        "%s: %s %s -> %s | %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc.status_code,
        exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def _is_missing_value(err: dict) -> bool:
    if err.get("type") in {"missing", "field_required"}:
        return True
    # An explicit null counts as no text at all
    return tuple(err.get("loc", ()))[-1:] == ("value",) and err.get("input") is None


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.warning("ValidationError: %s %s | errors=%s", request.method, request.url.path, errors)

    is_post_strings = request.method == "POST" and request.url.path.rstrip("/").endswith("/strings")
    if is_post_strings:
        if any(err.get("type") in {"json_invalid", "value_error.jsondecode"} for err in errors):
            return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})
        if any(_is_missing_value(err) for err in errors):
            error = InvalidInputError("Need text", kind=InvalidInputError.MISSING)
            return JSONResponse(status_code=error.status_code, content={"error": error.message})
        if any(tuple(err.get("loc", ()))[-1:] == ("value",) for err in errors):
            error = InvalidInputError("Must be string", kind=InvalidInputError.WRONG_TYPE)
            return JSONResponse(status_code=error.status_code, content={"error": error.message})

    return JSONResponse(
        status_code=400,
        content={"error": "Validation failed", "details": jsonable_encoder(errors)},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    body = {"error": exc.detail if isinstance(exc.detail, str) else "Error"}
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def run() -> None:
    import uvicorn

    uvicorn.run("string_analyzer.main:app", host=settings.HOST, port=settings.PORT)
