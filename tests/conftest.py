# tests/conftest.py
from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterator
from typing import Any

# settings se leen al importar mytube: apuntarlos a un directorio temporal
_TMP_ROOT = tempfile.mkdtemp(prefix="mytube-tests-")
os.environ.setdefault("DATA_DIR", os.path.join(_TMP_ROOT, "data"))
os.environ.setdefault("PUBLIC_DIR", os.path.join(_TMP_ROOT, "public"))
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("STORE_BACKEND", "json")

import pytest
from fastapi.testclient import TestClient

from mytube.core.config import settings
from mytube.core.security import create_access_token
from mytube.db.session import get_store
from mytube.db.store import JsonFileStore, Kind
from mytube.main import app as fastapi_app


def make_user(user_id: str, username: str, **extra: Any) -> dict:
    record = {
        "id": user_id,
        "username": username,
        "displayName": username.title(),
        "profilePicture": f"https://example.com/{username}.png",
        "subscribers": 0,
        "subscriptions": [],
        "likedVideos": [],
        "likedPosts": [],
        "viewedVideos": [],
    }
    record.update(extra)
    return record


def make_video(video_id: str, author_id: str, **extra: Any) -> dict:
    record = {
        "id": video_id,
        "authorId": author_id,
        "title": f"Video {video_id}",
        "description": "a video",
        "thumbnailUrl": "https://example.com/thumb.jpg",
        "videoUrl": "https://example.com/video.mp4",
        "duration": 42,
        "views": 0,
        "likes": 0,
        "dislikes": 0,
        "createdAt": "2024-01-01T00:00:00+00:00",
        "comments": [],
    }
    record.update(extra)
    return record


def make_post(post_id: str, author_id: str, **extra: Any) -> dict:
    record = {
        "id": post_id,
        "authorId": author_id,
        "imageUrl": "https://example.com/post.jpg",
        "caption": f"Post {post_id}",
        "likes": 0,
        "dislikes": 0,
        "createdAt": "2024-01-02T00:00:00+00:00",
        "comments": [],
    }
    record.update(extra)
    return record


def make_comment(comment_id: str, author_id: str, text: str = "hi", **extra: Any) -> dict:
    record = {
        "id": comment_id,
        "authorId": author_id,
        "text": text,
        "createdAt": "2024-01-03T00:00:00+00:00",
        "likes": 0,
        "replies": [],
    }
    record.update(extra)
    return record


def seed(store: JsonFileStore, kind: Kind, records: list[dict]) -> None:
    """Escribe el archivo directamente, sin pasar por el store."""
    os.makedirs(store.data_dir, exist_ok=True)
    with open(store.path_for(kind), "w", encoding="utf-8") as f:
        json.dump(records, f)


def load(store: JsonFileStore, kind: Kind) -> list[dict]:
    path = store.path_for(kind)
    if not os.path.exists(path):
        return []
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def auth_headers(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(sub=user_id)}"}


@pytest.fixture()
def store(tmp_path) -> JsonFileStore:
    return JsonFileStore(str(tmp_path / "data"))


@pytest.fixture()
def seeded(store: JsonFileStore) -> JsonFileStore:
    """
    alice (u1), bob (u2), carol (u3); bob publica el video v1 y el post p1.
    carol está suscrita a bob.
    """
    seed(
        store,
        Kind.USERS,
        [
            make_user("u1", "alice"),
            make_user("u2", "bob", subscribers=1),
            make_user("u3", "carol", subscriptions=["u2"]),
        ],
    )
    seed(store, Kind.VIDEOS, [make_video("v1", "u2")])
    seed(store, Kind.POSTS, [make_post("p1", "u2")])
    return store


@pytest.fixture()
def public_dir(tmp_path, monkeypatch) -> str:
    path = str(tmp_path / "public")
    monkeypatch.setattr(settings, "PUBLIC_DIR", path)
    return path


@pytest.fixture()
def client(seeded: JsonFileStore) -> Iterator[TestClient]:
    fastapi_app.dependency_overrides[get_store] = lambda: seeded
    try:
        with TestClient(fastapi_app) as test_client:
            yield test_client
    finally:
        fastapi_app.dependency_overrides.pop(get_store, None)
