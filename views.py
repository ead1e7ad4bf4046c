# views.py — turns controller results and errors into HTTP responses
import traceback
from pathlib import Path

from fastapi import Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from controllers.results import Page, Redirect
from errors import CatalogError
from presenters import TEMPLATE_GLOBALS

BASE_DIR = Path(__file__).resolve().parent

templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))
templates.env.globals.update(TEMPLATE_GLOBALS)


def render(request: Request, result: Page | Redirect):
    if isinstance(result, Redirect):
        return RedirectResponse(result.url, status_code=303)
    return templates.TemplateResponse(request, result.template, result.context, status_code=result.status_code)


def render_error(request: Request, status_code: int, message: str, exc: Exception | None = None):
    # exception detail is only shown outside production
    error = {}
    if request.app.state.settings.debug and exc is not None:
        error = {
            "type": type(exc).__name__,
            "message": str(exc),
            "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        }
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": "Error", "message": message, "status": status_code, "error": error},
        status_code=status_code,
    )


async def catalog_error_handler(request: Request, exc: CatalogError):
    logger.info("{} {} -> {} {}", request.method, request.url.path, exc.status_code, exc.message)
    return render_error(request, exc.status_code, exc.message, exc)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Error"
    return render_error(request, exc.status_code, message, exc)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
    message = str(exc) if request.app.state.settings.debug else "Internal Server Error"
    return render_error(request, 500, message, exc)
