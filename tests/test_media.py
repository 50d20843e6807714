# tests/test_media.py
import os
import re

import pytest

from mytube.core.errors import IOFailure
from mytube.media.storage import delete_local_media, save_upload


def test_save_upload_names_and_url(public_dir) -> None:
    url = save_upload(b"\x89PNG", "avatar.png")

    assert re.fullmatch(r"/uploads/\d+-\d+\.png", url)
    path = os.path.join(public_dir, "uploads", url.rsplit("/", 1)[1])
    with open(path, "rb") as f:
        assert f.read() == b"\x89PNG"


def test_save_upload_without_extension(public_dir) -> None:
    assert re.fullmatch(r"/uploads/\d+-\d+", save_upload(b"x", None))


def test_save_upload_unwritable_dir_raises(public_dir) -> None:
    # un archivo donde debería ir la carpeta pública
    with open(public_dir, "w") as f:
        f.write("")

    with pytest.raises(IOFailure):
        save_upload(b"x", "a.mp4")


def test_delete_local_media_ignores_foreign_and_missing(public_dir) -> None:
    url = save_upload(b"x", "a.jpg")

    delete_local_media("https://cdn.example.com/uploads/a.jpg")
    delete_local_media("/uploads/does-not-exist.jpg")
    delete_local_media(None)
    assert os.path.exists(os.path.join(public_dir, "uploads", url.rsplit("/", 1)[1]))

    delete_local_media(url)
    assert not os.path.exists(os.path.join(public_dir, "uploads", url.rsplit("/", 1)[1]))
