# app/main.py
from __future__ import annotations

from fastapi import APIRouter, FastAPI, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response as StarletteResponse

from api.routers.trends import router as trends_router
from app.config import settings
from app.core.logging import configure_logging, get_logger
from app.core.request_id import clear_request_id, new_request_id, set_request_id

configure_logging(service_name=settings.SERVICE_NAME, level=settings.LOG_LEVEL)
logger = get_logger()

app = FastAPI(
    title="Trends Aggregator",
    description="Trending topics aggregated from X, HackerNews and CoinGecko, with cross-platform analysis.",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        req_id = request.headers.get("x-request-id") or new_request_id()
        set_request_id(req_id)
        logger.info("request_started", method=request.method, path=str(request.url.path))
        try:
            response: StarletteResponse = await call_next(request)
        except Exception as exc:
            logger.error("request_exception", error=str(exc.__class__.__name__))
            clear_request_id()
            raise
        logger.info("request_ended", status_code=response.status_code)
        response.headers["X-Request-Id"] = req_id
        clear_request_id()
        return response


app.add_middleware(RequestIdMiddleware)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", path=str(request.url.path), exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


# --- Health endpoints ---
@app.get("/")
async def root():
    return {"ok": True, "app": settings.SERVICE_NAME, "version": settings.APP_VERSION}


@app.head("/")
async def root_head():
    return Response(status_code=200)


@app.get("/healthz")
async def healthz():
    return {"status": "healthy"}


# --- API v1 router ---
api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(trends_router)
app.include_router(api_v1_router)


def run() -> None:
    """Console entrypoint: serve the API with uvicorn on ``PORT``."""
    import uvicorn

    logger.info(
        "server_starting",
        port=settings.PORT,
        endpoints=["overview", "hackernews", "crypto", "twitter", "all", "analyze"],
    )
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
