# main.py — Local Library catalog
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, configure_logging
from crud import Store
from database import Database
from errors import CatalogError
from routes import router as catalog_router
from views import BASE_DIR, catalog_error_handler, http_error_handler, templates, unhandled_error_handler


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = Database(settings.database_url, echo=settings.echo_sql)
        await db.init()
        app.state.store = Store(db)
        logger.info("{} started ({})", settings.app_name, settings.environment)
        try:
            yield
        finally:
            await db.dispose()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    templates.env.globals["app_name"] = settings.app_name

    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - started) * 1000
        logger.info("{} {} {} {:.1f} ms", request.method, request.url.path, response.status_code, elapsed)
        return response

    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/", include_in_schema=False)
    async def home():
        return RedirectResponse("/catalog/", status_code=303)

    app.include_router(catalog_router)
    return app


app = create_app()
