# mytube/db/models.py
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import String, Integer, JSON


class Base(DeclarativeBase):
    pass


class LocalRecord(Base):
    """
    Un registro del almacén local: mismo JSON que en los archivos planos,
    indexado por (kind, id). `position` conserva el orden del array.
    """
    __tablename__ = "local_records"

    kind: Mapped[str] = mapped_column(String(32), primary_key=True)
    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    data: Mapped[dict] = mapped_column(JSON, nullable=False)


class LocalSyncState(Base):
    __tablename__ = "local_sync_state"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    synced_at: Mapped[str] = mapped_column(String(64), nullable=False)
