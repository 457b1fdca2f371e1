"""
main.py
-------
Entry point for the personal website API.

Responsibilities:
    - Own the database connection pool for the lifetime of the process.
    - Build the FastAPI application with all handlers.
    - Serve uploaded photos and the built frontend.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import CORS_ORIGINS, DATABASE_URL, HOST, PHOTOS_URL_PREFIX, PORT, STATIC_DIR, UPLOAD_DIR
from db.connection import Database
from handlers import photo_handler, post_handler, upload_handler
from handlers.errors import register_error_handlers
from services.upload_service import UploadError, UploadService
from utils.logger import get_logger

logger = get_logger(__name__)


class SPAStaticFiles(StaticFiles):
    """
    Static files with `index.html` returned for unknown paths (client-side routing).
    Unknown `/api/...` paths keep their 404.
    """

    async def get_response(self, path, scope):
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as e:
            if e.status_code != 404 or path == "api" or path.startswith("api/"):
                raise
            return await super().get_response("index.html", scope)


def create_app(
    database: Optional[Database] = None,
    upload_dir: str = UPLOAD_DIR,
    static_dir: Optional[str] = STATIC_DIR,
    photos_url_prefix: str = PHOTOS_URL_PREFIX,
) -> FastAPI:
    """
    Build the application.

    Args:
        database: Pool owner; defaults to one for ``DATABASE_URL``.
        upload_dir: Where uploaded files are written and served from.
        static_dir: Built frontend; mounted at ``/`` only if it exists.
        photos_url_prefix: Public URL prefix of uploaded files.
    """
    database = database or Database(DATABASE_URL)
    uploads = UploadService(upload_dir, photos_url_prefix)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # ── 1. Database setup (fatal if it fails) ─────────
        logger.info("Initializing database...")
        database.init_pool()
        try:
            uploads.ensure_upload_dir()
        except UploadError as e:
            logger.warning(f"Upload directory unavailable, uploads will fail: {e}")
        try:
            yield
        finally:
            # ── 2. Cleanup on shutdown ────────────────────
            database.close_pool()

    app = FastAPI(title="Personal Website API", version="0.1.0", lifespan=lifespan)
    app.state.database = database
    app.state.upload_service = uploads

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    app.include_router(post_handler.router)
    app.include_router(photo_handler.router)
    app.include_router(upload_handler.router)

    app.mount(
        photos_url_prefix,
        StaticFiles(directory=upload_dir, check_dir=False),
        name="photos",
    )
    if static_dir and Path(static_dir).is_dir():
        app.mount("/", SPAStaticFiles(directory=static_dir, html=True), name="frontend")
    elif static_dir:
        logger.info(f"Frontend directory {static_dir} not found; serving API only.")

    return app


def main() -> None:
    """Run the API server."""
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(create_app(), host=HOST, port=PORT)


if __name__ == "__main__":
    main()
