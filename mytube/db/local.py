# mytube/db/local.py
"""
Almacén local alternativo (modo demo / sin servidor de archivos).

Refleja el mismo esquema que los JSON planos, pero en sqlite vía
SQLAlchemy async. Cumple el mismo contrato read/write, así que todas las
acciones funcionan igual sobre él, y además expone get/put/delete por id
y una siembra única desde otro almacén.
"""
from __future__ import annotations

import os
import logging

from sqlalchemy import select, delete, func
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from mytube.core.errors import IOFailure
from mytube.db.models import Base, LocalRecord, LocalSyncState
from mytube.db.store import Kind, Store, utc_now

log = logging.getLogger("uvicorn")

SYNC_KEY = "seed"


def _engine_for(url: str):
    u = make_url(url)
    if u.database in (None, "", ":memory:"):
        # una sola conexión compartida, si no cada conexión ve una DB vacía
        return create_async_engine(url, poolclass=StaticPool)
    folder = os.path.dirname(u.database)
    if folder:
        os.makedirs(folder, exist_ok=True)
    return create_async_engine(url)


class LocalStore:
    def __init__(self, url: str):
        self.engine = _engine_for(url)
        self.sessionmaker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._ready = False

    async def init(self) -> "LocalStore":
        if not self._ready:
            try:
                async with self.engine.begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
            except SQLAlchemyError as e:
                log.error(f"❌ Local store init falló: {e!r}")
                raise IOFailure("could not open local store") from e
            self._ready = True
        return self

    async def dispose(self) -> None:
        await self.engine.dispose()

    # -------------------------
    # contrato read/write
    # -------------------------
    async def read(self, kind: Kind) -> list[dict]:
        await self.init()
        try:
            async with self.sessionmaker() as db:
                res = await db.execute(
                    select(LocalRecord)
                    .where(LocalRecord.kind == kind.value)
                    .order_by(LocalRecord.position.asc())
                )
                return [dict(r.data) for r in res.scalars()]
        except SQLAlchemyError as e:
            log.error(f"❌ Error leyendo {kind.value} (local): {e!r}")
            raise IOFailure(f"could not read {kind.value}") from e

    async def write(self, kind: Kind, records: list[dict]) -> None:
        await self.init()
        try:
            async with self.sessionmaker() as db:
                await db.execute(delete(LocalRecord).where(LocalRecord.kind == kind.value))
                db.add_all(
                    LocalRecord(kind=kind.value, id=str(rec["id"]), position=i, data=rec)
                    for i, rec in enumerate(records)
                )
                await db.commit()
        except SQLAlchemyError as e:
            log.error(f"❌ Error escribiendo {kind.value} (local): {e!r}")
            raise IOFailure(f"could not write {kind.value}") from e

    # -------------------------
    # acceso por id
    # -------------------------
    async def get(self, kind: Kind, record_id: str) -> dict | None:
        await self.init()
        try:
            async with self.sessionmaker() as db:
                row = await db.get(LocalRecord, (kind.value, str(record_id)))
                return dict(row.data) if row else None
        except SQLAlchemyError as e:
            log.error(f"❌ Error leyendo {kind.value}/{record_id} (local): {e!r}")
            raise IOFailure(f"could not read {kind.value}") from e

    async def put(self, kind: Kind, record: dict) -> None:
        """Inserta o reemplaza por id; los nuevos van al final."""
        await self.init()
        record_id = str(record["id"])
        try:
            async with self.sessionmaker() as db:
                row = await db.get(LocalRecord, (kind.value, record_id))
                if row:
                    row.data = dict(record)
                else:
                    res = await db.execute(
                        select(func.max(LocalRecord.position)).where(LocalRecord.kind == kind.value)
                    )
                    last = res.scalar_one_or_none()
                    db.add(
                        LocalRecord(
                            kind=kind.value,
                            id=record_id,
                            position=(last + 1) if last is not None else 0,
                            data=dict(record),
                        )
                    )
                await db.commit()
        except SQLAlchemyError as e:
            log.error(f"❌ Error guardando {kind.value}/{record_id} (local): {e!r}")
            raise IOFailure(f"could not write {kind.value}") from e

    async def delete(self, kind: Kind, record_id: str) -> bool:
        await self.init()
        try:
            async with self.sessionmaker() as db:
                res = await db.execute(
                    delete(LocalRecord).where(
                        LocalRecord.kind == kind.value,
                        LocalRecord.id == str(record_id),
                    )
                )
                await db.commit()
                return (res.rowcount or 0) > 0
        except SQLAlchemyError as e:
            log.error(f"❌ Error borrando {kind.value}/{record_id} (local): {e!r}")
            raise IOFailure(f"could not write {kind.value}") from e

    # -------------------------
    # siembra
    # -------------------------
    async def is_seeded(self) -> bool:
        await self.init()
        async with self.sessionmaker() as db:
            return await db.get(LocalSyncState, SYNC_KEY) is not None

    async def seed_from(self, source: Store) -> bool:
        """
        Copia usuarios, videos y posts desde `source` una sola vez.
        El password se copia ya hasheado (argon2): este almacén es el único
        contra el que se autentica. Devuelve False si ya estaba sembrado.
        """
        if await self.is_seeded():
            log.info("Local store ya sincronizado.")
            return False

        users = await source.read(Kind.USERS)
        videos = await source.read(Kind.VIDEOS)
        posts = await source.read(Kind.POSTS)

        await self.write(Kind.USERS, users)
        await self.write(Kind.VIDEOS, videos)
        await self.write(Kind.POSTS, posts)

        async with self.sessionmaker() as db:
            db.add(LocalSyncState(key=SYNC_KEY, synced_at=utc_now()))
            await db.commit()

        log.info(
            f"✅ Local store sembrado: {len(users)} usuarios, "
            f"{len(videos)} videos, {len(posts)} posts."
        )
        return True
