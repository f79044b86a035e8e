"""Guard chain ordering, bearer parsing and the ownership guard."""

import asyncio

import pytest
from fastapi import Request

from src.apps.blog.guards import PostOwnershipGuard
from src.apps.blog.models.post import Post
from src.core import exceptions, security
from src.core.guards import GuardChain, JwtAuthGuard, RequestContext, extract_bearer_token


def make_context(headers=None, path_params=None) -> RequestContext:
    raw_headers = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    request = Request({"type": "http", "headers": raw_headers, "path_params": path_params or {}})
    return RequestContext(request=request, path_params=path_params or {})


def test_chain_runs_guards_in_order():
    calls = []

    def recorder(name):
        async def guard(context):
            calls.append(name)
        return guard

    chain = GuardChain(recorder("first")).then(recorder("second"), recorder("third"))
    asyncio.run(chain.run(make_context()))

    assert calls == ["first", "second", "third"]


def test_chain_stops_at_first_failure():
    calls = []

    async def deny(context):
        calls.append("deny")
        raise exceptions.ForbiddenException("no")

    async def after(context):
        calls.append("after")

    with pytest.raises(exceptions.ForbiddenException):
        asyncio.run(GuardChain(deny, after).run(make_context()))

    assert calls == ["deny"]


def test_then_does_not_modify_original_chain():
    async def noop(context):
        pass

    base = GuardChain(noop)
    extended = base.then(noop)

    assert len(base.guards) == 1
    assert len(extended.guards) == 2


@pytest.mark.parametrize(
    "header",
    [None, "", "Bearer", "Basic abc", "Bearer    "],
)
def test_extract_bearer_token_rejects_malformed_headers(header):
    with pytest.raises(exceptions.UnauthorizedException):
        extract_bearer_token(header)


def test_extract_bearer_token():
    assert extract_bearer_token("bearer abc.def") == "abc.def"


def test_jwt_guard_sets_principal():
    token = security.build_access_token(user_id=7, username="alice")
    context = make_context(headers={"Authorization": f"Bearer {token}"})

    asyncio.run(JwtAuthGuard()(context))

    assert context.principal_id == 7


def test_jwt_guard_checks_principal_exists():
    async def never(principal_id):
        return False

    token = security.build_access_token(user_id=7, username="alice")
    context = make_context(headers={"Authorization": f"Bearer {token}"})

    with pytest.raises(exceptions.UnauthorizedException):
        asyncio.run(JwtAuthGuard(principal_exists=never)(context))
    assert context.principal_id is None


class FakePostService:
    def __init__(self, posts):
        self.posts = {post.id: post for post in posts}

    async def find_one(self, post_id):
        return self.posts.get(post_id)


def test_ownership_guard():
    post = Post(id="p1", content="x", user_id=1)
    guard = PostOwnershipGuard(FakePostService([post]))  # type: ignore[arg-type]

    owner = make_context(path_params={"post_id": "p1"})
    owner.principal_id = 1
    asyncio.run(guard(owner))
    assert owner.principal_id == 1

    other = make_context(path_params={"post_id": "p1"})
    other.principal_id = 2
    with pytest.raises(exceptions.ForbiddenException):
        asyncio.run(guard(other))

    missing = make_context(path_params={"post_id": "p2"})
    missing.principal_id = 1
    with pytest.raises(exceptions.NotFoundException):
        asyncio.run(guard(missing))


def test_ownership_guard_requires_principal():
    guard = PostOwnershipGuard(FakePostService([]))  # type: ignore[arg-type]

    with pytest.raises(exceptions.UnauthorizedException):
        asyncio.run(guard(make_context(path_params={"post_id": "p1"})))
