import logging

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ossgate.api.v1.deps import get_oss_service, require_api_key
from ossgate.api.v1.routers.multipart import router as multipart_router
from ossgate.api.v1.routers.objects import router as objects_router
from ossgate.api.v1.schemas.oss import StoreStatusOut
from ossgate.app.services.oss_service import ObjectStorageService
from ossgate.common.config import get_settings
from ossgate.common.logging import setup_logging
from ossgate.infra.observability.metrics import metrics_app
from ossgate.infra.observability.middleware import MetricsMiddleware

ERROR_CODE_BY_STATUS = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    412: "precondition_failed",
    413: "payload_too_large",
    415: "unsupported_media_type",
    416: "range_not_satisfiable",
    429: "too_many_requests",
    500: "internal_error",
    501: "not_implemented",
    502: "bad_gateway",
    503: "service_unavailable",
}


def _normalize_detail(detail):
    if isinstance(detail, dict):
        maybe_code = detail.get("error_code")
        cleaned = {k: v for k, v in detail.items() if k != "error_code"}
        if len(cleaned) == 1 and "message" in cleaned:
            cleaned = cleaned["message"]
        if not cleaned:
            cleaned = None
        return cleaned, maybe_code if isinstance(maybe_code, str) else None
    return detail, None


def _resolve_error_code(status_code: int, override: str | None = None) -> str:
    if override:
        return override
    if status_code == 422:
        return "validation_error"
    return ERROR_CODE_BY_STATUS.get(status_code, "unknown_error")


def create_app(oss_service: ObjectStorageService | None = None) -> FastAPI:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    app = FastAPI(
        title="OSS Gateway",
        version="v1.0",
        description="Object storage gateway over S3-compatible backends",
    )
    app.state.oss_service = oss_service

    # Optional CORS
    if settings.CORS_ENABLED:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS or ["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Routers
    app.include_router(
        objects_router,
        prefix="/api/v1",
        tags=["objects"],
        dependencies=[Depends(require_api_key)],
    )
    app.include_router(
        multipart_router,
        prefix="/api/v1",
        tags=["multipart"],
        dependencies=[Depends(require_api_key)],
    )

    # Metrics
    if settings.ENABLE_METRICS:
        app.add_middleware(MetricsMiddleware)
        app.mount("/metrics", metrics_app)

    @app.on_event("startup")
    def on_startup() -> None:
        startup_logger = logging.getLogger("ossgate.startup")
        if app.state.oss_service is None:
            app.state.oss_service = ObjectStorageService.from_settings(settings)
        service: ObjectStorageService = app.state.oss_service
        if not service.names:
            startup_logger.warning(
                "未配置任何对象存储，请设置 OSS_CONFIG_PATH 或 OSS_ENDPOINT。"
                " [event=oss_no_stores]"
            )
        else:
            startup_logger.info(
                "对象存储注册完成。[event=oss_stores_ready] (stores=%s)",
                ", ".join(service.names),
            )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger = logging.getLogger("http")
        normalized_detail, code_override = _normalize_detail(exc.detail)
        logger.log(
            logging.WARNING if exc.status_code < 500 else logging.ERROR,
            "http_exception status=%s detail=%s method=%s path=%s request_id=%s",
            exc.status_code,
            normalized_detail,
            request.method,
            request.url.path,
            request.headers.get("X-Request-Id"),
            extra={
                "extra": {
                    "status": exc.status_code,
                    "detail": normalized_detail,
                    "method": request.method,
                    "route": request.url.path,
                    "request_id": request.headers.get("X-Request-Id"),
                }
            },
        )
        return JSONResponse(
            status_code=exc.status_code,
            media_type="application/problem+json",
            content={
                "type": "about:blank",
                "title": "HTTP Error",
                "status": exc.status_code,
                "detail": normalized_detail,
                "error_code": _resolve_error_code(exc.status_code, code_override),
                "instance": str(request.url),
                "request_id": request.headers.get("X-Request-Id"),
            },
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        return JSONResponse(
            status_code=422,
            media_type="application/problem+json",
            content={
                "type": "about:blank",
                "title": "Validation Error",
                "status": 422,
                # 确保可序列化
                "detail": jsonable_encoder(exc.errors()),
                "error_code": _resolve_error_code(422),
                "instance": str(request.url),
                "request_id": request.headers.get("X-Request-Id"),
            },
        )

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/ready")
    def ready(service: ObjectStorageService = Depends(get_oss_service)):
        stores = [
            StoreStatusOut(
                name=item.name,
                type=item.type,
                initialized=item.initialized,
                error=item.error,
            )
            for item in service.statuses()
        ]
        if not stores:
            return {"status": "not_ready", "detail": {"stores": "none configured"}}
        failed = [store.name for store in stores if not store.initialized]
        if failed:
            return {
                "status": "not_ready",
                "detail": {"failed_stores": failed},
                "stores": jsonable_encoder(stores),
            }
        return {"status": "ready", "stores": jsonable_encoder(stores)}

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("ossgate.main:app", host="0.0.0.0", port=8000, reload=True)
