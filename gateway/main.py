import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from fastapi.templating import Jinja2Templates

from gateway import __version__
from gateway.core.config import Settings, get_settings
from gateway.infrastructure.database import dispose_engine, init_db
from gateway.infrastructure.namespace import DispatchNamespaceClient, NamespaceError
from gateway.interfaces.http.routers import create_api_router
from gateway.modules.common import StoreUnavailableError

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = BASE_DIR.parent

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _resolve_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (PROJECT_ROOT / path).resolve()


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.logging.level.upper(), format=settings.logging.format)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield
    await app.state.namespace.aclose()
    await dispose_engine()


def create_app(namespace: DispatchNamespaceClient | None = None) -> FastAPI:
    settings = get_settings()
    _configure_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        description="Routes requests to tenant scripts in a shared dispatch namespace",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.namespace = namespace or DispatchNamespaceClient.from_settings(settings.namespace)
    app.state.templates = Jinja2Templates(directory=str(_resolve_path(settings.template_dir)))

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
        return JSONResponse(
            {"detail": "Could not complete request"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.exception_handler(NamespaceError)
    async def namespace_error_handler(request: Request, exc: NamespaceError):
        logger.error("Dispatch namespace request failed: %s", exc)
        return JSONResponse(
            {"detail": "Could not complete request"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response()

    @app.get("/upload", response_class=HTMLResponse)
    async def upload_page(request: Request):
        return app.state.templates.TemplateResponse(request, "upload.html", {})

    app.include_router(create_api_router())

    @app.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
    async def not_routed(request: Request, path: str):
        return PlainTextResponse(f"Could not route from url: {request.url}", status_code=status.HTTP_404_NOT_FOUND)

    logger.info("Dispatch namespace %s configured", settings.namespace_name)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("gateway.main:app", host=settings.host, port=settings.port, reload=settings.server.reload)
