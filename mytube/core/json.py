# mytube/core/json.py
from typing import Any
import json
from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse


def dumps_records(records: list[dict]) -> str:
    """
    Formato de los archivos del almacén: array JSON indentado a 4,
    UTF-8 sin escapar (emojis y acentos tal cual).
    """
    return json.dumps(jsonable_encoder(records), ensure_ascii=False, indent=4)


class UTF8JSONResponse(JSONResponse):
    """
    Respuesta JSON en UTF-8, sin escapes ASCII y con jsonable_encoder
    previo (datetime, modelos pydantic, etc.).
    """
    media_type = "application/json; charset=utf-8"

    def render(self, content: Any) -> bytes:
        payload = jsonable_encoder(content, by_alias=True, exclude_none=True)
        return json.dumps(
            payload,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")
