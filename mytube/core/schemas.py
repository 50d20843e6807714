# mytube/core/schemas.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def unique_ids(values: list[str]) -> list[str]:
    """Listas de ids con semántica de conjunto (sin duplicados, orden estable)."""
    return list(dict.fromkeys(values))


class CamelModel(BaseModel):
    """
    Base de todos los modelos: en Python snake_case, en JSON (disco y API)
    camelCase, igual que los archivos existentes.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Record(CamelModel):
    """Registro plano tal como vive en el almacén."""

    def dump(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
