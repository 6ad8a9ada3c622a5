"""Tests for collection and assistant API endpoints."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from commanders_vault.models.failure import PersistenceError
from commanders_vault.store.sql import SqlStore
from commanders_vault.views.assistant import WELCOME_MESSAGE


class TestCollectionEndpoints:
    async def test_empty_collection(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.get("/collection", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["loading"] is False
        assert data["mode"] == "browsing"
        assert data["cards"] == []

    async def test_create_then_search(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        for name, colors in [("Sol Ring", []), ("Swords to Plowshares", ["W"])]:
            response = await client.post(
                "/collection/cards",
                json={"name": name, "colors": colors},
                headers=auth_headers,
            )
            assert response.status_code == 201

        response = await client.get("/collection?search=SWORDS", headers=auth_headers)

        data = response.json()
        assert data["search_term"] == "SWORDS"
        assert data["total_rows"] == 2
        assert [c["card"]["name"] for c in data["cards"]] == ["Swords to Plowshares"]
        assert data["cards"][0]["card"]["bucket"] == "white"

    async def test_created_card_response(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.post(
            "/collection/cards",
            json={"name": "Atraxa, Praetors' Voice", "is_legendary": True},
            headers=auth_headers,
        )

        data = response.json()
        assert data["card"]["is_legendary"] is True
        assert data["collection"]["mode"] == "browsing"
        assert len(data["collection"]["cards"]) == 1

    async def test_blank_name_rejected(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.post("/collection/cards", json={"name": ""}, headers=auth_headers)

        assert response.status_code == 422

    async def test_store_failure_is_502(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        store: SqlStore,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(
            store, "insert_card", AsyncMock(side_effect=PersistenceError("duplicate key"))
        )

        response = await client.post(
            "/collection/cards", json={"name": "Sol Ring"}, headers=auth_headers
        )

        assert response.status_code == 502
        failure = response.json()["failure"]
        assert failure["kind"] == "persistence_failed"
        assert failure["message"] == "Error creating card: duplicate key"

    async def test_mode_toggle(self, client: AsyncClient, auth_headers: dict[str, str]) -> None:
        response = await client.put(
            "/collection/mode", json={"mode": "adding_card"}, headers=auth_headers
        )

        assert response.json()["mode"] == "adding_card"


class TestAssistantEndpoints:
    async def test_transcript_starts_with_welcome(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.get("/assistant", headers=auth_headers)

        data = response.json()
        assert data["messages"] == [{"role": "assistant", "content": WELCOME_MESSAGE}]
        assert data["waiting"] is False

    async def test_message_then_reply(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.post(
            "/assistant/messages", json={"content": "Best ramp?"}, headers=auth_headers
        )

        assert response.status_code == 202
        data = response.json()
        assert data["accepted"] is True
        assert data["waiting"] is True
        assert data["messages"][-1] == {"role": "user", "content": "Best ramp?"}

        await asyncio.sleep(0.1)
        data = (await client.get("/assistant", headers=auth_headers)).json()

        assert data["waiting"] is False
        assert [m["role"] for m in data["messages"]] == ["assistant", "user", "assistant"]

    async def test_blank_message_not_accepted(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.post(
            "/assistant/messages", json={"content": "  "}, headers=auth_headers
        )

        assert response.json()["accepted"] is False
        assert len(response.json()["messages"]) == 1
