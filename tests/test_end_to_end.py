"""End-to-end tests against an ASGI application."""

from __future__ import annotations

from typing import Any

import httpx
import pytest
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from http_facade.exceptions import ForbiddenError, NotFoundError, ServerError
from http_facade.services import HttpClient
from tests.helpers import RecordingLogger, StaticTokenProvider


class NewItem(BaseModel):
    name: str


def build_app() -> FastAPI:
    app = FastAPI()
    items: dict[int, dict[str, Any]] = {}

    @app.get("/api/items")
    async def list_items() -> dict[str, list[Any]]:
        return {"items": list(items.values())}

    @app.get("/api/items/{item_id}")
    async def get_item(item_id: int) -> dict[str, Any]:
        if item_id not in items:
            raise HTTPException(status_code=404, detail="not found")
        return items[item_id]

    @app.post("/api/items", status_code=201)
    async def create_item(payload: NewItem) -> dict[str, Any]:
        item = {"id": len(items) + 1, "name": payload.name}
        items[item["id"]] = item
        return item

    @app.delete("/api/items/{item_id}", status_code=204)
    async def delete_item(item_id: int, request: Request) -> None:
        if request.headers.get("Authorization") != "Bearer admin":
            raise HTTPException(status_code=403, detail="admins only")
        items.pop(item_id, None)

    @app.get("/api/maintenance")
    async def maintenance() -> JSONResponse:
        return JSONResponse(status_code=503, content={"error": {"message": "back soon"}})

    return app


def make_client(token: str | None) -> HttpClient:
    return HttpClient(
        "http://testserver/api",
        StaticTokenProvider(token),
        transport=httpx.ASGITransport(app=build_app()),
        logger=RecordingLogger(),
    )


@pytest.mark.asyncio
async def test_crud_round_trip() -> None:
    async with make_client("user") as client:
        assert await client.fetch("/items") == {"items": []}

        created = await client.create("/items", {"name": "x"})
        assert created == {"id": 1, "name": "x"}

        assert await client.fetch("/items/1") == created


@pytest.mark.asyncio
async def test_missing_item_raises_not_found() -> None:
    async with make_client("user") as client:
        with pytest.raises(NotFoundError) as exc_info:
            await client.fetch("/items/1")

    assert exc_info.value.message == "not found"


@pytest.mark.asyncio
async def test_forbidden_delete() -> None:
    async with make_client("user") as client:
        with pytest.raises(ForbiddenError, match="admins only"):
            await client.remove("/items/1")


@pytest.mark.asyncio
async def test_admin_delete_returns_empty_body() -> None:
    async with make_client("admin") as client:
        assert await client.remove("/items/1") is None


@pytest.mark.asyncio
async def test_service_unavailable_is_server_error() -> None:
    async with make_client(None) as client:
        with pytest.raises(ServerError, match="back soon"):
            await client.fetch("/maintenance")
