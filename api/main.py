from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from core import settings
from core.db import Database, StoreError
from core.dependencies import get_db
from favorites import router as favorites_router
from products import repository as products_repository
from products import router as products_router
from ratings import router as ratings_router

logger = logging.getLogger(__name__)

LANDING_PAGE = Path("views") / "Home.html"
IMAGES_SUBDIR = "imagens"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One store client per process, shared by all requests.
    database = Database(
        settings.database_url(),
        max_size=settings.db_pool_max_size(),
        command_timeout=settings.db_command_timeout(),
    )
    try:
        await database.connect()
    except StoreError:
        # Keep serving; store-backed routes answer with their error responses.
        logger.exception("db_connect_failed")
    app.state.db = database
    try:
        yield
    finally:
        await database.close()


def create_app(public_dir: Path | None = None) -> FastAPI:
    public_dir = public_dir or settings.public_dir()

    app = FastAPI(title="Catalog API", lifespan=lifespan)

    # The static frontend may be served from another origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(products_router.router, tags=["products"])
    app.include_router(ratings_router.router, tags=["ratings"])
    app.include_router(favorites_router.router, tags=["favorites"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/", include_in_schema=False)
    async def home(db: Database = Depends(get_db)):
        try:
            await products_repository.ping(db)
        except StoreError:
            logger.exception("home_db_probe_failed")
            return PlainTextResponse("Erro ao conectar no banco de dados.", status_code=500)

        landing = public_dir / LANDING_PAGE
        if not landing.is_file():
            logger.error("landing_page_missing path=%s", landing)
            return PlainTextResponse("Página inicial não encontrada.", status_code=500)
        return FileResponse(landing, media_type="text/html")

    # Mounted last so API routes take precedence over static paths.
    images_dir = public_dir / IMAGES_SUBDIR
    if images_dir.is_dir():
        app.mount(f"/{IMAGES_SUBDIR}", StaticFiles(directory=images_dir), name="images")
    if public_dir.is_dir():
        app.mount("/", StaticFiles(directory=public_dir), name="static")
    else:
        logger.warning("public_dir_missing path=%s", public_dir)

    return app


settings.load_env()
app = create_app()


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Servidor rodando em http://localhost:%s", settings.port())
    uvicorn.run(app, host=settings.host(), port=settings.port(), log_level=settings.log_level().lower())
