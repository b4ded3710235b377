import logging
import time
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
from endpoints.webhook import router as webhook_router
from core.http_client import init_async_client, close_async_client
from core.config import settings
from core.errors import RelayError, ServerError, describe_exception
from core.logging import setup_logging, set_request_id, clear_request_id
from schemas.relay import ErrorResponse, HealthResponse

load_dotenv()
setup_logging(settings.log_level)
app = FastAPI(title="survey-relay")

# TODO: tighten CORS_ORIGINS to the funnel domain; everything is allowed for now.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(webhook_router)

http_logger = logging.getLogger("http.request")
logger = logging.getLogger(__name__)

@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    token = set_request_id(request_id)
    start = time.perf_counter()
    response = None
    try:
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response
    finally:
        duration = time.perf_counter() - start
        http_request = {
            "requestMethod": request.method,
            "requestUrl": str(request.url),
            "status": response.status_code if response is not None else 500,
            "userAgent": request.headers.get("user-agent"),
            "remoteIp": request.client.host if request.client else None,
            "latency": f"{duration:.6f}s",
        }
        request_size = request.headers.get("content-length")
        if request_size:
            http_request["requestSize"] = request_size
        http_logger.info("HTTP request", extra={"httpRequest": http_request})
        clear_request_id(token)

def _error_response(exc: RelayError) -> JSONResponse:
    body = ErrorResponse(error=exc.error, detail=exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )

@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    return _error_response(exc)

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        exc_info=exc,
        extra={"path": request.url.path},
    )
    return _error_response(ServerError(describe_exception(exc)))

@app.on_event("startup")
async def startup() -> None:
    init_async_client(settings)
    logger.info("server listening on %s", settings.public_base_url)

@app.on_event("shutdown")
async def shutdown() -> None:
    await close_async_client()

@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(ok=True)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)
