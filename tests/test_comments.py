# tests/test_comments.py
import pytest

from mytube.comments import service as svc
from mytube.content.schemas import ContentType
from mytube.core.errors import NotFound, Unauthorized
from mytube.db.store import Kind
from tests.conftest import load, make_comment, make_video, seed


def _comments_of(store, video_id: str = "v1") -> list[dict]:
    return next(v for v in load(store, Kind.VIDEOS) if v["id"] == video_id)["comments"]


def test_extract_mentions_dedupes_in_order() -> None:
    assert svc.extract_mentions("@bob hola @carol y @bob otra vez") == ["bob", "carol"]
    assert svc.extract_mentions("sin menciones") == []
    assert svc.extract_mentions("") == []


def test_is_media_comment() -> None:
    assert svc.is_media_comment("https://media.giphy.com/media/abc/giphy.mp4")
    assert svc.is_media_comment("https://example.com/sticker.GIF")
    assert svc.is_media_comment("  https://example.com/s.webp  ")
    assert not svc.is_media_comment("mira esto https://example.com/a.gif hola")
    assert not svc.is_media_comment("un gif.gif")
    assert not svc.is_media_comment("")


@pytest.mark.asyncio
async def test_comment_notifies_owner_and_each_mention_once(seeded) -> None:
    comment = await svc.add_comment(
        seeded, "v1", ContentType.VIDEO, "u1", "@bob @carol @bob hola @nadie"
    )

    assert comment["author"]["username"] == "alice"
    assert comment["replies"] == []
    assert _comments_of(seeded)[0]["id"] == comment["id"]

    notifications = load(seeded, Kind.NOTIFICATIONS)
    pairs = sorted((n["type"], n["recipientId"]) for n in notifications)
    assert pairs == [("comment", "u2"), ("mention", "u2"), ("mention", "u3")]
    assert all(n["senderId"] == "u1" for n in notifications)
    assert all(n["contentId"] == "v1" for n in notifications)


@pytest.mark.asyncio
async def test_comment_on_own_content_only_notifies_mentions(seeded) -> None:
    await svc.add_comment(seeded, "v1", ContentType.VIDEO, "u2", "gracias @bob @alice")

    notifications = load(seeded, Kind.NOTIFICATIONS)
    assert [(n["type"], n["recipientId"]) for n in notifications] == [("mention", "u1")]


@pytest.mark.asyncio
async def test_new_comments_go_first(seeded) -> None:
    first = await svc.add_comment(seeded, "p1", ContentType.POST, "u1", "primero")
    second = await svc.add_comment(seeded, "p1", "post", "u3", "segundo")

    listed = await svc.list_comments(seeded, "p1", ContentType.POST)

    assert [c["id"] for c in listed] == [second["id"], first["id"]]
    assert listed[0]["author"]["username"] == "carol"


@pytest.mark.asyncio
async def test_comment_by_unknown_author_fails(seeded) -> None:
    with pytest.raises(NotFound, match="Comment author not found"):
        await svc.add_comment(seeded, "v1", ContentType.VIDEO, "ghost", "hola")
    assert _comments_of(seeded) == []


@pytest.mark.asyncio
async def test_comment_on_missing_content_fails(seeded) -> None:
    with pytest.raises(NotFound):
        await svc.add_comment(seeded, "nope", ContentType.VIDEO, "u1", "hola")


@pytest.mark.asyncio
async def test_replies_are_chronological_and_notify_parent_author(seeded) -> None:
    parent = await svc.add_comment(seeded, "v1", ContentType.VIDEO, "u1", "buen video")
    await seeded.write(Kind.NOTIFICATIONS, [])

    r1 = await svc.add_reply(seeded, "v1", ContentType.VIDEO, parent["id"], "u2", "gracias")
    r2 = await svc.add_reply(seeded, "v1", ContentType.VIDEO, parent["id"], "u3", "@bob crack")

    assert r1["id"].startswith("reply-")
    replies = _comments_of(seeded)[0]["replies"]
    assert [r["id"] for r in replies] == [r1["id"], r2["id"]]

    notifications = load(seeded, Kind.NOTIFICATIONS)
    pairs = sorted((n["type"], n["recipientId"], n["senderId"]) for n in notifications)
    assert pairs == [
        ("mention", "u2", "u3"),
        ("reply", "u1", "u2"),
        ("reply", "u1", "u3"),
    ]


@pytest.mark.asyncio
async def test_reply_to_own_comment_does_not_notify(seeded) -> None:
    parent = await svc.add_comment(seeded, "v1", ContentType.VIDEO, "u2", "fijado")

    await svc.add_reply(seeded, "v1", ContentType.VIDEO, parent["id"], "u2", "edit: typo")

    assert load(seeded, Kind.NOTIFICATIONS) == []


@pytest.mark.asyncio
async def test_reply_to_a_reply_is_rejected(seeded) -> None:
    parent = await svc.add_comment(seeded, "v1", ContentType.VIDEO, "u1", "raíz")
    reply = await svc.add_reply(seeded, "v1", ContentType.VIDEO, parent["id"], "u2", "hijo")

    with pytest.raises(NotFound, match="Parent comment not found"):
        await svc.add_reply(seeded, "v1", ContentType.VIDEO, reply["id"], "u3", "nieto")


@pytest.mark.asyncio
async def test_delete_comment_permissions(seeded) -> None:
    seed(
        seeded,
        Kind.VIDEOS,
        [make_video("v1", "u2", comments=[make_comment("c1", "u1"), make_comment("c2", "u3")])],
    )

    with pytest.raises(Unauthorized):
        await svc.delete_comment(seeded, "v1", ContentType.VIDEO, "c1", "u3")

    # el autor del comentario
    await svc.delete_comment(seeded, "v1", ContentType.VIDEO, "c1", "u1")
    # el dueño del video
    await svc.delete_comment(seeded, "v1", ContentType.VIDEO, "c2", "u2")

    assert _comments_of(seeded) == []


@pytest.mark.asyncio
async def test_delete_root_comment_takes_its_replies(seeded) -> None:
    root = make_comment("c1", "u1", replies=[make_comment("r1", "u3")])
    seed(seeded, Kind.VIDEOS, [make_video("v1", "u2", comments=[root, make_comment("c2", "u3")])])

    await svc.delete_comment(seeded, "v1", ContentType.VIDEO, "c1", "u1")

    assert [c["id"] for c in _comments_of(seeded)] == ["c2"]


@pytest.mark.asyncio
async def test_delete_reply_with_and_without_parent_hint(seeded) -> None:
    root = make_comment("c1", "u1", replies=[make_comment("r1", "u3"), make_comment("r2", "u3")])
    seed(seeded, Kind.VIDEOS, [make_video("v1", "u2", comments=[root])])

    await svc.delete_comment(
        seeded, "v1", ContentType.VIDEO, "r1", "u3", parent_comment_id="c1"
    )
    await svc.delete_comment(seeded, "v1", ContentType.VIDEO, "r2", "u3")

    comments = _comments_of(seeded)
    assert [c["id"] for c in comments] == ["c1"]
    assert comments[0]["replies"] == []


@pytest.mark.asyncio
async def test_delete_missing_comment_not_found(seeded) -> None:
    with pytest.raises(NotFound, match="Comment not found"):
        await svc.delete_comment(seeded, "v1", ContentType.VIDEO, "nope", "u2")

    seed(seeded, Kind.VIDEOS, [make_video("v1", "u2", comments=[make_comment("c1", "u1")])])
    with pytest.raises(NotFound):
        await svc.delete_comment(
            seeded, "v1", ContentType.VIDEO, "c1", "u1", parent_comment_id="other"
        )


@pytest.mark.asyncio
async def test_gif_comments_are_flagged_as_media(seeded) -> None:
    gif = await svc.add_comment(
        seeded, "v1", ContentType.VIDEO, "u1", "https://media.giphy.com/media/xyz/giphy.gif"
    )
    text = await svc.add_reply(seeded, "v1", ContentType.VIDEO, gif["id"], "u3", "jaja")

    assert gif["isMedia"] is True
    assert text["isMedia"] is False

    listed = await svc.list_comments(seeded, "v1", ContentType.VIDEO)
    assert listed[0]["isMedia"] is True
    assert listed[0]["replies"][0]["isMedia"] is False
    # en disco no se guarda
    assert "isMedia" not in _comments_of(seeded)[0]
