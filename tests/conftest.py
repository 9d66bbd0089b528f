"""Shared test fixtures for the Profile Desk test suite."""

import itertools
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
from unittest.mock import AsyncMock, MagicMock

from api.client import ApiClient
from api.upload import UploadAdapter
from profiles.store import ProfileStore


# ── Fake profile backend ──


class FakeBackend:
    """In-memory stand-in for the profile REST API.

    Records every request so tests can assert that no network call happened.
    ``fail[(method, route)] = status`` forces an error response for a route.
    """

    def __init__(self):
        self.profiles: dict[str, dict] = {}
        self.requests: list[tuple[str, str]] = []
        self.fail: dict[tuple[str, str], int] = {}
        self.content_types: list[str] = []
        self.uploads: list[dict] = []
        self.upload_response: dict = {}
        self._ids = itertools.count(1)
        self._clock = itertools.count(1)

    def _timestamp(self) -> str:
        return f"2026-01-01T00:00:{next(self._clock):02d}.000Z"

    def seed(self, full_name: str, email: str, **extra) -> dict:
        """Insert a profile directly, bypassing the HTTP layer."""
        profile_id = f"p{next(self._ids)}"
        now = self._timestamp()
        record = {
            "_id": profile_id,
            "fullName": full_name,
            "email": email,
            "isActive": True,
            "createdAt": now,
            "updatedAt": now,
            **extra,
        }
        self.profiles[profile_id] = record
        return record

    def calls(self, method: str) -> list[str]:
        return [path for m, path in self.requests if m == method]

    # ── handlers ──

    async def list_profiles(self, request: web.Request) -> web.Response:
        return web.json_response(list(self.profiles.values()))

    async def create_profile(self, request: web.Request) -> web.Response:
        body = await request.json()
        record = self.seed(body.pop("fullName"), body.pop("email"), **body)
        return web.json_response(record, status=201)

    async def update_profile(self, request: web.Request) -> web.Response:
        record = self.profiles.get(request.match_info["profile_id"])
        if record is None:
            return web.json_response({"message": "Profile not found"}, status=404)
        record.update(await request.json())
        record["updatedAt"] = self._timestamp()
        return web.json_response(record)

    async def delete_profile(self, request: web.Request) -> web.Response:
        if self.profiles.pop(request.match_info["profile_id"], None) is None:
            return web.json_response({"message": "Profile not found"}, status=404)
        return web.Response(status=204)

    async def upload(self, request: web.Request) -> web.Response:
        data = await request.post()
        field = data["file"]
        content = field.file.read()
        self.uploads.append({
            "filename": field.filename,
            "content_type": field.content_type,
            "size": len(content),
        })
        response = self.upload_response or {"url": f"https://cdn.example.com/avatars/{field.filename}"}
        return web.json_response(response)

    async def broken(self, request: web.Request) -> web.Response:
        return web.Response(text="<html>not json</html>", content_type="text/html")

    def app(self) -> web.Application:
        @web.middleware
        async def record(request, handler):
            self.requests.append((request.method, request.path))
            self.content_types.append(request.headers.get("Content-Type", ""))
            resource = request.match_info.route.resource
            route = resource.canonical if resource else request.path
            status = self.fail.get((request.method, route))
            if status:
                return web.json_response({"message": "forced failure"}, status=status)
            return await handler(request)

        app = web.Application(middlewares=[record], client_max_size=16 * 1024 * 1024)
        app.router.add_get("/api/profiles", self.list_profiles)
        app.router.add_post("/api/profiles", self.create_profile)
        app.router.add_patch("/api/profiles/{profile_id}", self.update_profile)
        app.router.add_delete("/api/profiles/{profile_id}", self.delete_profile)
        app.router.add_post("/api/upload", self.upload)
        app.router.add_get("/api/broken", self.broken)
        return app


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
async def server(backend):
    srv = TestServer(backend.app())
    await srv.start_server()
    yield srv
    await srv.close()


@pytest.fixture
async def api_client(server):
    client = ApiClient(f"http://{server.host}:{server.port}")
    yield client
    await client.close()


@pytest.fixture
def store(api_client):
    return ProfileStore(api_client)


@pytest.fixture
def adapter(api_client):
    return UploadAdapter(api_client)


# ── Mock API client ──


@pytest.fixture
def mock_api():
    """ApiClient stand-in with every request method as AsyncMock."""
    api = MagicMock(spec=ApiClient)
    api.get = AsyncMock(return_value=[])
    api.post = AsyncMock(return_value={})
    api.patch = AsyncMock(return_value={})
    api.delete = AsyncMock(return_value=None)
    api.close = AsyncMock()
    return api


@pytest.fixture
def ada():
    """A profile record as the backend returns it."""
    return {
        "_id": "p1",
        "fullName": "Ada Lovelace",
        "email": "ada@example.com",
        "phoneNumber": "+44 20 7946 0000",
        "country": "United Kingdom",
        "isActive": True,
        "createdAt": "2026-01-01T00:00:00.000Z",
        "updatedAt": "2026-01-01T00:00:00.000Z",
    }
