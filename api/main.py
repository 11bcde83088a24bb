from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.errors import ApiError
from api.models import ErrorResponse
from api.routes import health_router, plans_router, risk_router
from api.services.config_service import ConfigService
from api.services.container import build_container
from api.services.logging_service import setup_api_logger


def create_app(config_path: str | None = None) -> FastAPI:
    settings = ConfigService(config_path=config_path).load()
    api_cfg = settings.get("api", {})
    logger = setup_api_logger(settings.get("logging", {}))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.container = build_container()
        logger.info("api_started", extra={"event": "app.startup"})
        yield
        logger.info("api_stopped", extra={"event": "app.shutdown"})

    app = FastAPI(title=str(api_cfg.get("title")), version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(api_cfg.get("cors_origins") or ["*"]),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        body = ErrorResponse.from_detail(exc.message, exc.errors)
        return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json", by_alias=True))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {
                "field": ".".join(str(part) for part in error.get("loc", ())[1:]) or "body",
                "message": str(error.get("msg", "Invalid value")),
            }
            for error in exc.errors()
        ]
        body = ErrorResponse.from_detail("Invalid request body", errors)
        return JSONResponse(status_code=400, content=body.model_dump(mode="json", by_alias=True))

    app.include_router(health_router)
    app.include_router(risk_router)
    app.include_router(plans_router)

    @app.get("/")
    def root() -> dict[str, str]:
        return {"status": "ok", "service": "leverage-risk-planner-api"}

    return app


app = create_app()
