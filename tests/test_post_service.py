"""Post service absent-marker contract and router handling of a vanished post."""

import asyncio

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine

from src.apps.blog.routers.post_router import PostRouter, get_post_service
from src.apps.blog.schemas.post import PostCreate, PostUpdate
from src.core import database
from src.core.guards import GuardChain
from src.core.response.handlers import register_exception_handlers


@pytest.fixture
def run_with_service(tmp_path, monkeypatch):
    """Run an async scenario against a PostService backed by a fresh database."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'service.db'}")
    monkeypatch.setattr(database, "engine", engine)

    def _run(scenario):
        async def _main():
            await database.init_db()
            try:
                return await scenario(get_post_service())
            finally:
                await database.close_db()

        return asyncio.run(_main())

    return _run


def test_update_missing_post_returns_none(run_with_service):
    async def scenario(service):
        return await service.update("nope", PostUpdate(content="x"))

    assert run_with_service(scenario) is None


def test_remove_missing_post_returns_none(run_with_service):
    async def scenario(service):
        return await service.remove("nope")

    assert run_with_service(scenario) is None


def test_remove_returns_last_known_state(run_with_service):
    async def scenario(service):
        created = await service.create(PostCreate(content="hi"), author_id=1)
        removed = await service.remove(created.id)
        return created, removed, await service.find_one(created.id)

    created, removed, after = run_with_service(scenario)

    assert removed.id == created.id
    assert removed.content == "hi"
    assert removed.user_id == 1
    assert after is None


def test_update_keeps_author_and_timestamp(run_with_service):
    async def scenario(service):
        created = await service.create(PostCreate(content="before"), author_id=4)
        updated = await service.update(created.id, PostUpdate(content="after"))
        return created, updated

    created, updated = run_with_service(scenario)

    assert updated.content == "after"
    assert updated.user_id == 4
    assert updated.timestamp == created.timestamp


class VanishingPostService:
    """Acts as if the post was deleted after the ownership check passed."""

    def __init__(self):
        self.removed = []

    async def update(self, post_id, post_in):
        return None

    async def remove(self, post_id):
        self.removed.append(post_id)
        return None


def build_client(post_service) -> TestClient:
    async def as_owner(context):
        context.principal_id = 1

    guards = GuardChain(as_owner)
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(
        PostRouter(
            post_service=post_service,  # type: ignore[arg-type]
            user_service=None,  # type: ignore[arg-type]
            auth_guards=guards,
            owner_guards=guards,
        ).get_router()
    )
    return TestClient(app)


def test_update_of_vanished_post_is_not_found():
    client = build_client(VanishingPostService())

    resp = client.patch("/posts/gone", json={"content": "x"})

    assert resp.status_code == 404
    assert resp.json()["message"] == "Post with ID gone not found"


def test_delete_of_vanished_post_still_reports_success():
    service = VanishingPostService()
    client = build_client(service)

    resp = client.delete("/posts/gone")

    assert resp.status_code == 200
    assert resp.json() == {"statusCode": 200, "message": "Post deleted successfully"}
    assert service.removed == ["gone"]
