from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import stocks, transcript
from app.config import config, get_settings
from app.utils.errors import ApiError, MethodNotAllowed, should_include_details
from app.utils.logger import logger, setup_logging

# -----------------------------------------------------------------------------
# Set up logging
# -----------------------------------------------------------------------------
setup_logging(config.get("logging", {}))

# -----------------------------------------------------------------------------
# Initialize FastAPI
# -----------------------------------------------------------------------------
app_cfg = config.get("app", {})
app = FastAPI(
    title=app_cfg.get("name", "Competitor Dashboard API"),
    version=app_cfg.get("version", "0.1.0")
)

# -----------------------------------------------------------------------------
# CORS: the same three headers on every response, preflight or not
# -----------------------------------------------------------------------------
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response

# -----------------------------------------------------------------------------
# Error envelopes: {error, message[, details]}
# -----------------------------------------------------------------------------
@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    include_details = should_include_details(exc, get_settings().expose_error_details)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(include_details))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        err = MethodNotAllowed()
        return JSONResponse(status_code=err.status_code, content=err.to_body(), headers=exc.headers)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP error", "message": str(exc.detail)},
        headers=exc.headers,
    )

# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------
app.include_router(stocks.router, tags=["Stock Prices"])
app.include_router(transcript.router, tags=["Earnings Transcripts"])


@app.get("/")
async def root():
    return {"message": f"Welcome to {app_cfg.get('name', 'the API')}!"}

# -----------------------------------------------------------------------------
# Startup log
# -----------------------------------------------------------------------------
logger.info(f"✅ {app_cfg.get('name', 'API')} is starting up!")
