from fastapi import FastAPI

from app.boudoir.api import api_router
from app.boudoir.core.config import settings
from app.boudoir.core.errors import setup_exception_handlers
from app.boudoir.core.logging import configure_logging
from app.boudoir.middleware.observability import ObservabilityMiddleware
from app.boudoir.middleware.trace import TraceIdMiddleware
from app.boudoir.middleware.user_context import UserContextMiddleware


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.APP_NAME)
    app.add_middleware(UserContextMiddleware)
    app.add_middleware(TraceIdMiddleware)
    app.add_middleware(ObservabilityMiddleware)
    setup_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()
