import pytest

from core.errors import NotFoundError
from models import Like, Post, User
from schemas.post import PostCreate, PostUpdate
from services.like_service import LikeService
from services.post_service import PostService


def _reload(db, model, pk):
    db.expire_all()
    return db.get(model, pk)


def test_create_top_level_post(test_db, create_user):
    author = create_user()

    post = PostService(test_db).create_post(PostCreate(user_id=author.id, content="hello"))

    assert post.parent_post_id is None
    assert post.like_count == 0
    assert post.reply_count == 0
    assert _reload(test_db, User, author.id).post_count == 1


def test_create_reply_updates_parent_only(test_db, create_user, create_post):
    author = create_user()
    parent = create_post()
    other = create_post()

    reply = PostService(test_db).create_post(
        PostCreate(user_id=author.id, content="a reply", parent_post_id=parent.id)
    )

    assert reply.is_reply
    assert _reload(test_db, Post, parent.id).reply_count == 1
    assert _reload(test_db, Post, other.id).reply_count == 0
    assert _reload(test_db, User, author.id).post_count == 1


def test_create_post_stores_media_urls_as_strings(test_db, create_user):
    author = create_user()

    post = PostService(test_db).create_post(PostCreate(
        user_id=author.id,
        content="pic",
        media_urls=["https://example.com/media/1.jpg"]
    ))

    assert post.media_urls == ["https://example.com/media/1.jpg"]


def test_create_post_unknown_author(test_db):
    with pytest.raises(NotFoundError, match="User not found"):
        PostService(test_db).create_post(PostCreate(user_id=7, content="x"))


def test_create_reply_unknown_parent_leaves_counters(test_db, create_user):
    author = create_user()

    with pytest.raises(NotFoundError, match="Parent post not found"):
        PostService(test_db).create_post(PostCreate(user_id=author.id, content="x", parent_post_id=55))

    assert _reload(test_db, User, author.id).post_count == 0


def test_get_posts_excludes_replies_newest_first(test_db, create_user):
    author = create_user()
    service = PostService(test_db)
    first = service.create_post(PostCreate(user_id=author.id, content="first"))
    second = service.create_post(PostCreate(user_id=author.id, content="second"))
    service.create_post(PostCreate(user_id=author.id, content="reply", parent_post_id=first.id))

    assert [p.id for p in service.get_posts()] == [second.id, first.id]
    assert [p.id for p in service.get_posts(limit=1, offset=1)] == [first.id]


def test_get_posts_by_user_includes_replies(test_db, create_user, create_post):
    author = create_user()
    parent = create_post()
    service = PostService(test_db)
    reply = service.create_post(PostCreate(user_id=author.id, content="r", parent_post_id=parent.id))

    assert [p.id for p in service.get_posts_by_user(author.id)] == [reply.id]


def test_get_posts_by_unknown_user(test_db):
    with pytest.raises(NotFoundError, match="User with id 3 does not exist"):
        PostService(test_db).get_posts_by_user(3)


def test_get_post_replies_direct_children_only(test_db, create_user, create_post):
    author = create_user()
    root = create_post()
    service = PostService(test_db)
    child = service.create_post(PostCreate(user_id=author.id, content="c", parent_post_id=root.id))
    service.create_post(PostCreate(user_id=author.id, content="gc", parent_post_id=child.id))

    assert [p.id for p in service.get_post_replies(root.id)] == [child.id]


def test_get_replies_of_unknown_post(test_db):
    with pytest.raises(NotFoundError, match="Post with id 9 does not exist"):
        PostService(test_db).get_post_replies(9)


def test_update_post(test_db, create_post):
    post = create_post(content="before")

    updated = PostService(test_db).update_post(post.id, PostUpdate(is_pinned=True))

    assert updated.is_pinned is True
    assert updated.content == "before"


def test_update_post_rejects_null_content():
    with pytest.raises(ValueError):
        PostUpdate.model_validate({"content": None})


def test_delete_reply_rolls_back_counters(test_db, create_user, create_post):
    author = create_user()
    parent = create_post()
    service = PostService(test_db)
    reply = service.create_post(PostCreate(user_id=author.id, content="r", parent_post_id=parent.id))
    reply_id = reply.id

    assert service.delete_post(reply_id) is True

    assert _reload(test_db, Post, reply_id) is None
    assert _reload(test_db, Post, parent.id).reply_count == 0
    assert _reload(test_db, User, author.id).post_count == 0


def test_delete_post_removes_likes_and_detaches_replies(test_db, create_user):
    author, fan = create_user(), create_user()
    service = PostService(test_db)
    post = service.create_post(PostCreate(user_id=author.id, content="p"))
    reply = service.create_post(PostCreate(user_id=fan.id, content="r", parent_post_id=post.id))
    LikeService(test_db).create_like(fan.id, post.id)
    post_id, reply_id = post.id, reply.id

    service.delete_post(post_id)

    test_db.expire_all()
    assert test_db.query(Like).filter(Like.post_id == post_id).count() == 0
    assert test_db.get(Post, reply_id).parent_post_id is None
    assert test_db.get(User, author.id).post_count == 0
    assert test_db.get(User, fan.id).post_count == 1


def test_delete_missing_post(test_db):
    with pytest.raises(NotFoundError, match="Post not found"):
        PostService(test_db).delete_post(1)


class TestPostEndpoints:
    def test_create_reply_and_list_replies(self, client, create_user):
        author = create_user()

        response = client.post("/api/v1/posts", json={"user_id": author.id, "content": "root"})
        assert response.status_code == 201
        root_id = response.json()["id"]

        response = client.post(
            "/api/v1/posts",
            json={"user_id": author.id, "content": "reply", "parent_post_id": root_id}
        )
        assert response.status_code == 201

        response = client.get(f"/api/v1/posts/{root_id}")
        assert response.json()["reply_count"] == 1

        response = client.get(f"/api/v1/posts/{root_id}/replies")
        assert [p["content"] for p in response.json()] == ["reply"]

        response = client.get("/api/v1/posts")
        assert [p["id"] for p in response.json()] == [root_id]

    def test_content_too_long(self, client, create_user):
        author = create_user()

        response = client.post("/api/v1/posts", json={"user_id": author.id, "content": "x" * 281})

        assert response.status_code == 400

    def test_missing_parent_is_404(self, client, create_user):
        author = create_user()

        response = client.post("/api/v1/posts", json={"user_id": author.id, "content": "x", "parent_post_id": 77})

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Parent post not found"

    def test_unknown_post_is_null(self, client):
        response = client.get("/api/v1/posts/123")

        assert response.status_code == 200
        assert response.json() is None

    def test_delete(self, client, create_post):
        post_id = create_post().id

        response = client.delete(f"/api/v1/posts/{post_id}")
        assert response.status_code == 200
        assert response.json() is True

        response = client.delete(f"/api/v1/posts/{post_id}")
        assert response.status_code == 404
