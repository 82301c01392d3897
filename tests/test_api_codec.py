"""Tests for the codec endpoints."""

import pytest
from httpx import AsyncClient

from spellforge.models.deck import Deck, create_empty_deck
from spellforge.services.codec import encode_deck, encode_team, encode_team_v1


@pytest.fixture
def deck_payload() -> dict:
    return {
        "id": "d1",
        "name": "Burn",
        "spellcaster": {"id": "sc_pyromancer", "kind": "Spellcaster"},
        "slots": [
            {"id": "u_fire_imp", "kind": "Creature"},
            None,
            {"id": "u_fireball", "kind": "Spell"},
            None,
            {"id": "t_stone_golem", "kind": "Titan"},
        ],
    }


class TestDeckEndpoints:
    async def test_encode_then_decode(self, client: AsyncClient, deck_payload: dict) -> None:
        encoded = await client.post("/codec/deck/encode", json=deck_payload)
        token = encoded.json()["token"]

        response = await client.post("/codec/deck/decode", json={"token": token})

        assert response.status_code == 200
        body = response.json()
        assert body["outcome"] == "success"
        assert body["data"] == {
            "spellcaster_id": "sc_pyromancer",
            "slot_ids": ["u_fire_imp", None, "u_fireball", None, "t_stone_golem"],
            "name": "Burn",
        }

    async def test_decode_garbage(self, client: AsyncClient) -> None:
        response = await client.post("/codec/deck/decode", json={"token": "garbage!!"})

        assert response.status_code == 422
        body = response.json()
        assert body["outcome"] == "known_failure"
        assert body["failure"]["kind"] == "decode_failed"

    async def test_slots_must_have_five_entries(
        self, client: AsyncClient, deck_payload: dict
    ) -> None:
        deck_payload["slots"] = deck_payload["slots"][:4]

        response = await client.post("/codec/deck/encode", json=deck_payload)

        assert response.status_code == 422


class TestTeamEndpoints:
    async def test_encode_then_decode(self, client: AsyncClient, deck_payload: dict) -> None:
        encoded = await client.post(
            "/codec/team/encode",
            json={"name": "Trio", "decks": [deck_payload, deck_payload, deck_payload]},
        )
        token = encoded.json()["token"]

        response = await client.post("/codec/team/decode", json={"token": token})

        assert token.startswith("v2~")
        data = response.json()["data"]
        assert data["name"] == "Trio"
        assert len(data["decks"]) == 3
        assert data["decks"][2]["spellcaster_id"] == "sc_pyromancer"

    async def test_encode_requires_three_decks(
        self, client: AsyncClient, deck_payload: dict
    ) -> None:
        response = await client.post(
            "/codec/team/encode", json={"decks": [deck_payload, deck_payload]}
        )

        assert response.status_code == 422

    async def test_decode_legacy(self, client: AsyncClient, full_deck: Deck) -> None:
        token = encode_team_v1([full_deck, create_empty_deck(), full_deck])

        response = await client.post("/codec/team/decode", json={"token": token})

        data = response.json()["data"]
        assert data["name"] == ""
        assert data["decks"][0]["name"] == "Burn"
        assert data["decks"][1]["slot_ids"] == [None] * 5

    async def test_decode_garbage(self, client: AsyncClient) -> None:
        response = await client.post("/codec/team/decode", json={"token": "v2~garbage!!"})

        assert response.status_code == 422


class TestImport:
    async def test_team_takes_precedence(self, client: AsyncClient, full_deck: Deck) -> None:
        team_token = encode_team([full_deck, full_deck, full_deck], "Trio")

        response = await client.get(
            "/codec/import", params={"team": team_token, "d": encode_deck(full_deck)}
        )

        data = response.json()["data"]
        assert data["mode"] == "team"
        assert data["team"]["name"] == "Trio"
        assert data["deck"] is None

    async def test_deck(self, client: AsyncClient, full_deck: Deck) -> None:
        response = await client.get("/codec/import", params={"d": encode_deck(full_deck)})

        data = response.json()["data"]
        assert data["mode"] == "deck"
        assert data["deck"]["spellcaster_id"] == "sc_pyromancer"

    async def test_nothing_to_import(self, client: AsyncClient) -> None:
        response = await client.get("/codec/import")

        assert response.json()["data"]["mode"] == "none"

    async def test_bad_deck_token(self, client: AsyncClient) -> None:
        response = await client.get("/codec/import", params={"d": "garbage!!"})

        assert response.status_code == 422
        assert response.json()["failure"]["kind"] == "decode_failed"
