# mytube/db/store.py
"""
Almacén de archivos planos.

Un archivo JSON por tipo de entidad (users, videos, posts, messages,
notifications), cada uno con un array de registros planos identificados
por `id`. Sin locks ni escritura atómica: dos mutaciones simultáneas sobre
el mismo archivo pueden pisarse (lectura-modificación-escritura).
"""
from __future__ import annotations

import os
import json
import uuid
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Protocol

from mytube.core.errors import IOFailure
from mytube.core.json import dumps_records

log = logging.getLogger("uvicorn")


class Kind(str, Enum):
    USERS = "users"
    VIDEOS = "videos"
    POSTS = "posts"
    MESSAGES = "messages"
    NOTIFICATIONS = "notifications"


class Store(Protocol):
    async def read(self, kind: Kind) -> list[dict]: ...

    async def write(self, kind: Kind, records: list[dict]) -> None: ...


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex}"


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class JsonFileStore:
    def __init__(self, data_dir: str):
        self.data_dir = data_dir

    def path_for(self, kind: Kind) -> str:
        return os.path.join(self.data_dir, f"{kind.value}.json")

    async def read(self, kind: Kind) -> list[dict]:
        path = self.path_for(kind)
        try:
            os.makedirs(self.data_dir, exist_ok=True)
            if not os.path.exists(path):
                # primer uso: archivo vacío
                with open(path, "w", encoding="utf-8") as f:
                    f.write("[]")
                return []
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            log.error(f"❌ Error leyendo {path}: {e!r}")
            raise IOFailure(f"could not read {kind.value}") from e

        if not isinstance(data, list):
            log.error(f"❌ {path} no contiene un array JSON")
            raise IOFailure(f"could not read {kind.value}")
        return data

    async def write(self, kind: Kind, records: list[dict]) -> None:
        path = self.path_for(kind)
        try:
            os.makedirs(self.data_dir, exist_ok=True)
            payload = dumps_records(records)
            with open(path, "w", encoding="utf-8") as f:
                f.write(payload)
        except (OSError, TypeError, ValueError) as e:
            log.error(f"❌ Error escribiendo {path}: {e!r}")
            raise IOFailure(f"could not write {kind.value}") from e
