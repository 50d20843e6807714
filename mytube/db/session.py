# mytube/db/session.py
from mytube.core.config import settings
from mytube.db.local import LocalStore
from mytube.db.store import JsonFileStore, Store

_store: Store | None = None


def build_store() -> Store:
    if settings.STORE_BACKEND == "local":
        return LocalStore(settings.LOCAL_DB_URL)
    return JsonFileStore(settings.DATA_DIR)


async def get_store() -> Store:
    """Dependencia FastAPI: el almacén configurado (uno por proceso)."""
    global _store
    if _store is None:
        _store = build_store()
    return _store
