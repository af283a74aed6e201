import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from inkwell import __version__
from inkwell.api import create_api_router
from inkwell.core.config import Settings, get_settings
from inkwell.core.container import ApplicationContainer, build_container
from inkwell.core.errors import DomainError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: ApplicationContainer = app.state.container
    await container.startup()
    try:
        yield
    finally:
        await container.shutdown()


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "status_code": exc.status_code,
            "kind": exc.kind.value,
            "message": exc.message,
        },
    )


def create_app(settings: Optional[Settings] = None, container: Optional[ApplicationContainer] = None) -> FastAPI:
    settings = settings or (container.settings if container else get_settings())
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.project_name,
        description="Blog platform backend",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container or build_container(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(DomainError, domain_error_handler)

    served_path = settings.storage.served_path
    if served_path:
        app.mount(
            served_path,
            StaticFiles(directory=str(settings.storage.blob_dir), check_dir=False),
            name="blobs",
        )
    else:
        logger.info("Blobs are served externally from %s", settings.storage.blob_base_url)

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", include_in_schema=False)
    async def health():
        return {"status": "ok", "version": __version__}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("inkwell.main:app", host=_settings.host, port=_settings.port, reload=_settings.server.reload)
