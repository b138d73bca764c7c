"""FastAPI entry point: one controller per process, i.e. one local profile."""
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates
from starlette.middleware.base import BaseHTTPMiddleware

from gestor_produtos.core.config import Settings, get_settings
from gestor_produtos.core.log import configure_logging
from gestor_produtos.routers import pages as pages_router
from gestor_produtos.services.app_controller import AppController
from gestor_produtos.services.context import build_context

BASE = os.path.dirname(__file__)
logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (CSP, anti clickjacking, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; style-src 'self' 'unsafe-inline'",
        )
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Factory compatível com uvicorn (``uvicorn gestor_produtos.app:create_app --factory``)."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    context = build_context(settings)
    controller = AppController(context)
    controller.start()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        context.close()

    app = FastAPI(title="Gestão de Produtos", lifespan=lifespan)
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    app.state.settings = settings
    app.state.context = context
    app.state.controller = controller
    app.state.templates = Jinja2Templates(directory=os.path.join(BASE, "templates"))
    app.include_router(pages_router.router)

    logger.info("Aplicacao iniciada na tela %s", controller.state.view.value)
    return app
