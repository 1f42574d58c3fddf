"""Tests for the GitHub REST source."""

import asyncio
import base64

import httpx
import pytest

from repo_insight.schemas import EntryKind
from repo_insight.sources import GitHubSource, RepositoryNotFoundError, SourceError
from repo_insight.sources.github import split_repo_id

API = "https://api.github.test"


def make_source(handler) -> GitHubSource:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GitHubSource(base_url=API, client=client)


def run(coro):
    return asyncio.run(coro)


def test_split_repo_id():
    assert split_repo_id("octo/hello") == ("octo", "hello")
    assert split_repo_id(" /octo/hello/ ") == ("octo", "hello")
    for bad in ("octo", "octo/", "/hello", "a/b/c", ""):
        with pytest.raises(RepositoryNotFoundError):
            split_repo_id(bad)


def test_fetch_details():
    def handler(request):
        assert request.url.path == "/repos/octo/hello"
        return httpx.Response(200, json={
            "full_name": "octo/hello",
            "description": "demo",
            "default_branch": "trunk",
            "homepage": "",
            "language": "JavaScript",
            "private": True,
        })

    details = run(make_source(handler).fetch_details("octo/hello"))

    assert details.full_name == "octo/hello"
    assert details.default_branch == "trunk"
    assert details.homepage is None
    assert details.private is True


def test_fetch_details_not_found():
    source = make_source(lambda request: httpx.Response(404, json={"message": "Not Found"}))

    with pytest.raises(RepositoryNotFoundError):
        run(source.fetch_details("octo/missing"))


def test_fetch_tree_falls_back_to_master():
    seen = []

    def handler(request):
        seen.append(request.url.path)
        if request.url.path.endswith("/main"):
            return httpx.Response(404)
        assert request.url.params["recursive"] == "true"
        return httpx.Response(200, json={"tree": [
            {"path": "src", "type": "tree"},
            {"path": "src/app.js", "type": "blob", "size": 42},
            {"path": "vendor/lib", "type": "commit"},
        ]})

    entries = run(make_source(handler).fetch_tree("octo/hello"))

    assert seen == ["/repos/octo/hello/git/trees/main", "/repos/octo/hello/git/trees/master"]
    assert [(e.path, e.kind, e.size) for e in entries] == [
        ("src", EntryKind.TREE, 0),
        ("src/app.js", EntryKind.BLOB, 42),
    ]


def test_fetch_tree_uses_default_branch_when_not_main_or_master():
    def handler(request):
        if not request.url.path.endswith("/HEAD"):
            return httpx.Response(404)
        return httpx.Response(200, json={"tree": [{"path": "app.py", "type": "blob", "size": 7}]})

    entries = run(make_source(handler).fetch_tree("octo/develop-only"))

    assert [e.path for e in entries] == ["app.py"]


def test_fetch_tree_missing_everywhere_is_empty():
    source = make_source(lambda request: httpx.Response(404))

    assert run(source.fetch_tree("octo/empty")) == []


def test_fetch_file_decodes_base64():
    encoded = base64.encodebytes(b'{"name": "demo"}').decode()

    def handler(request):
        assert request.url.path == "/repos/octo/hello/contents/client/package.json"
        return httpx.Response(200, json={"content": encoded, "encoding": "base64"})

    file = run(make_source(handler).fetch_file("octo/hello", "client/package.json"))

    assert file.path == "client/package.json"
    assert file.content == '{"name": "demo"}'


def test_fetch_file_missing_or_directory_is_none():
    assert run(make_source(lambda r: httpx.Response(404)).fetch_file("octo/hello", "nope.json")) is None
    assert run(make_source(lambda r: httpx.Response(200, json=[])).fetch_file("octo/hello", "src")) is None


def test_server_error_raises_source_error():
    source = make_source(lambda request: httpx.Response(502))

    with pytest.raises(SourceError) as exc:
        run(source.fetch_file("octo/hello", "package.json"))

    assert exc.value.status_code == 502


def test_network_error_raises_source_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(SourceError):
        run(make_source(handler).fetch_tree("octo/hello"))


def test_fetch_commits():
    def handler(request):
        assert request.url.params["per_page"] == "2"
        return httpx.Response(200, json=[
            {
                "sha": "0123456789abcdef",
                "html_url": "https://github.com/octo/hello/commit/0123456",
                "commit": {
                    "message": "Add login page\n\nLong body",
                    "author": {"name": "Octo", "date": "2024-01-01T00:00:00Z"},
                },
            },
        ])

    commits = run(make_source(handler).fetch_commits("octo/hello", count=2))

    assert len(commits) == 1
    assert commits[0].sha == "0123456"
    assert commits[0].message == "Add login page"
    assert commits[0].author == "Octo"


def test_owned_client_is_closed():
    async def scenario():
        async with GitHubSource(token="t") as source:
            client = source._get_client()
            assert client.headers["Authorization"] == "Bearer t"
        return client

    client = run(scenario())

    assert client.is_closed
