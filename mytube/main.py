# mytube/main.py
import os
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from mytube.core.json import UTF8JSONResponse
from mytube.core.config import settings
from mytube.core.errors import install_error_handlers
from mytube.db.local import LocalStore
from mytube.db.session import get_store
from mytube.db.store import JsonFileStore
from mytube.media.storage import uploads_dir, uploads_url_prefix

# routers
from mytube.users.router import router as users_router
from mytube.content.router import router as content_router
from mytube.comments.router import router as comments_router
from mytube.notifications.router import router as notifications_router
from mytube.messages.router import router as messages_router
from mytube.media.router import router as media_router
from mytube.discovery.router import router as discovery_router

log = logging.getLogger("uvicorn")

app = FastAPI(
    title="MyTube API",
    default_response_class=UTF8JSONResponse,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

# directorios
os.makedirs(settings.DATA_DIR, exist_ok=True)
os.makedirs(uploads_dir(), exist_ok=True)

# uploads públicos, servidos tal cual
app.mount(
    uploads_url_prefix().rstrip("/"),
    StaticFiles(directory=uploads_dir(), html=False),
    name="uploads",
)


@app.middleware("http")
async def cache_uploads(request: Request, call_next):
    """
    Los uploads nunca se reescriben (nombre nuevo por archivo): cache fuerte.
    """
    response = await call_next(request)
    if request.url.path.startswith(uploads_url_prefix()):
        response.headers["Cache-Control"] = "public, max-age=31536000, immutable"
    return response


@app.on_event("startup")
async def on_startup():
    log.info("🚀 Iniciando servicio…")
    store = await get_store()
    if isinstance(store, LocalStore):
        await store.init()
        await store.seed_from(JsonFileStore(settings.DATA_DIR))
    log.info(f"✅ Startup listo (store={settings.STORE_BACKEND}).")


@app.get("/api/health/")
async def health():
    return {"ok": True, "service": "mytube", "store": settings.STORE_BACKEND}


# routers
app.include_router(users_router)          # /api/users/...
app.include_router(content_router)        # /api/content/...
app.include_router(comments_router)       # /api/comments/...
app.include_router(notifications_router)  # /api/notifications/...
app.include_router(messages_router)       # /api/messages/...
app.include_router(media_router)          # /api/media/...
app.include_router(discovery_router)      # /api/discover/...
