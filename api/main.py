import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from core import db, errors, settings
from countries import router as countries_router
from documents import router as documents_router
from health import router as health_router
from submissions import router as submissions_router
from users import router as users_router

logger = logging.getLogger(__name__)

UPLOADS_MOUNT = "uploads"


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def mount_uploads(app: FastAPI, directory: Path) -> None:
    """
    Serve `directory` at /uploads (files land in /uploads/documents/<filename>).

    Mounted at startup so it points at the same UPLOAD_ROOT the intake code
    writes to; a previous mount from an earlier startup is replaced.
    """
    app.router.routes[:] = [
        route for route in app.router.routes if getattr(route, "name", None) != UPLOADS_MOUNT
    ]
    app.mount("/uploads", StaticFiles(directory=directory), name=UPLOADS_MOUNT)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    upload_root = settings.upload_root()
    upload_root.mkdir(parents=True, exist_ok=True)
    mount_uploads(app, upload_root)
    # Initialize the DB pool once per process.
    await db.init_pool()
    logger.info("api_started environment=%s upload_root=%s", settings.app_env(), upload_root)
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

errors.install(app)

app.include_router(countries_router.router, tags=["countries"])
app.include_router(users_router.router, tags=["users"])
app.include_router(documents_router.router, tags=["documents"])
app.include_router(submissions_router.router, tags=["submissions"])
app.include_router(health_router.router, tags=["health"])
