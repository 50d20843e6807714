# mytube/media/storage.py
import os
import time
import random
import logging

from mytube.core.config import settings
from mytube.core.errors import IOFailure

log = logging.getLogger("uvicorn")


def uploads_dir() -> str:
    return os.path.join(settings.PUBLIC_DIR, settings.UPLOADS_SUBDIR)


def uploads_url_prefix() -> str:
    return f"/{settings.UPLOADS_SUBDIR}/"


def _new_name(original_name: str | None) -> str:
    """
    `<epoch-millis>-<random-int><ext>`; la extensión se copia tal cual
    del nombre original (puede ir vacía).
    """
    ext = os.path.splitext(original_name or "")[1]
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"


def save_upload(data: bytes, original_name: str | None) -> str:
    """
    Guarda los bytes en el directorio público de uploads y devuelve la URL
    servida directamente al cliente (p. ej. '/uploads/1700000000000-42.mp4').
    Sin validación de tipo ni de tamaño.
    """
    folder = uploads_dir()
    name = _new_name(original_name)
    try:
        os.makedirs(folder, exist_ok=True)
        with open(os.path.join(folder, name), "wb") as out:
            out.write(data)
    except OSError as e:
        log.error(f"❌ Error guardando upload {name}: {e!r}")
        raise IOFailure("could not store upload") from e
    log.info(f"📦 Upload guardado: {name} ({len(data)} bytes)")
    return f"{uploads_url_prefix()}{name}"


def delete_local_media(url: str | None) -> None:
    """
    Elimina el archivo de un upload local si la URL apunta a uno.
    URLs externas o archivos que ya no están se ignoran.
    """
    prefix = uploads_url_prefix()
    if not url or not url.startswith(prefix):
        return
    name = os.path.basename(url[len(prefix):])
    if not name:
        return
    try:
        os.remove(os.path.join(uploads_dir(), name))
    except FileNotFoundError:
        pass
    except OSError as e:
        log.warning(f"⚠️ No se pudo borrar {name}: {e!r}")
