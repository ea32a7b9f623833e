from fastapi import FastAPI

from openauth.api.routes_oauth import router as oauth_router
from openauth.core.config import settings
from openauth.core.errors import register_error_handlers
from openauth.core.logger import init_logging


def create_app() -> FastAPI:
    init_logging()

    is_production = settings.ENV.lower() == "prod"
    app = FastAPI(
        title=settings.APP_NAME,
        debug=False,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
    )
    register_error_handlers(app)
    app.include_router(oauth_router)
    return app


app = create_app()
