from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqladmin import Admin

from accounts.admin.auth import AdminAuth
from accounts.admin.views import UserAdmin, UserProfileAdmin
from accounts.core.exception_handlers import register_exception_handlers
from accounts.core.logging import configure_logging
from accounts.core.middleware import add_cors_middleware, add_request_logging_middleware
from accounts.core.settings import Settings, get_settings
from accounts.db.engine import create_db_engine, init_db
from accounts.router import build_api_router

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(app.state.engine)
    yield
    app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around a single database engine."""
    settings = settings or get_settings()
    engine = create_db_engine(settings)

    app = FastAPI(title="User Accounts", version="0.1.0", lifespan=lifespan)
    app.state.engine = engine

    app.include_router(build_api_router(settings.api_prefix))

    add_request_logging_middleware(app)
    add_cors_middleware(app, settings)
    register_exception_handlers(app)

    # Mount SQLAdmin UI at /admin (session middleware comes from the auth backend)
    admin = Admin(
        app=app,
        engine=engine,
        authentication_backend=AdminAuth(settings),
    )
    admin.add_view(UserAdmin)
    admin.add_view(UserProfileAdmin)
    return app


app = create_app()
