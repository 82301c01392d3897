"""Tests for the builder endpoints."""

import pytest
from httpx import AsyncClient


def empty_deck(deck_id: str) -> dict:
    return {"id": deck_id, "name": "", "spellcaster": None, "slots": [None] * 5}


IMP = {"id": "u_fire_imp", "kind": "Creature", "name": "Fire Imp", "rank": "I"}
GOLEM = {"id": "t_stone_golem", "kind": "Titan", "name": "Stone Golem"}
MAGE = {"id": "sc_pyromancer", "kind": "Spellcaster", "name": "Pyromancer"}


@pytest.fixture
def team_payload() -> list[dict]:
    first = empty_deck("a")
    first["slots"][0] = IMP
    first["slots"][4] = GOLEM
    first["spellcaster"] = MAGE
    return [first, empty_deck("b"), empty_deck("c")]


class TestDrag:
    async def test_browser_card_into_solo_deck(self, client: AsyncClient) -> None:
        response = await client.post(
            "/builder/drag",
            json={
                "decks": [empty_deck("a")],
                "source": {"type": "BROWSER_CARD", "item": IMP},
                "target": {
                    "type": "DECK_SLOT",
                    "deck_id": "a",
                    "slot_index": 2,
                    "accepts": ["UNIT"],
                },
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["outcome"] == "success"
        assert body["data"]["action"]["type"] == "SET_SLOT"
        assert body["data"]["decks"][0]["slots"][2]["id"] == "u_fire_imp"

    async def test_rule_violation_is_refusal(self, client: AsyncClient) -> None:
        """Without pre-filtering the rules engine still refuses a titan in a unit slot."""
        response = await client.post(
            "/builder/drag",
            json={
                "decks": [empty_deck("a")],
                "source": {"type": "BROWSER_CARD", "item": GOLEM},
                "target": {"type": "DECK_SLOT", "deck_id": "a", "slot_index": 0},
            },
        )

        body = response.json()
        assert body["outcome"] == "refusal"
        assert body["failure"]["code"] == "WRONG_SLOT_TYPE"
        assert body["data"] is None

    async def test_cross_deck_move(self, client: AsyncClient, team_payload: list[dict]) -> None:
        response = await client.post(
            "/builder/drag",
            json={
                "decks": team_payload,
                "source": {
                    "type": "DECK_SLOT",
                    "item": GOLEM,
                    "source_deck_id": "a",
                    "source_slot_index": 4,
                },
                "target": {"type": "DECK_HEADER", "deck_id": "c"},
            },
        )

        decks = response.json()["data"]["decks"]
        assert decks[0]["slots"][4] is None
        assert decks[2]["slots"][4]["id"] == "t_stone_golem"

    async def test_cross_deck_spellcaster(
        self, client: AsyncClient, team_payload: list[dict]
    ) -> None:
        response = await client.post(
            "/builder/drag",
            json={
                "decks": team_payload,
                "source": {"type": "SPELLCASTER_SLOT", "item": MAGE, "source_deck_id": "a"},
                "target": {"type": "SPELLCASTER_SLOT", "deck_id": "b"},
            },
        )

        decks = response.json()["data"]["decks"]
        assert decks[0]["spellcaster"] is None
        assert decks[1]["spellcaster"]["id"] == "sc_pyromancer"

    async def test_drag_to_void_clears_slot(
        self, client: AsyncClient, team_payload: list[dict]
    ) -> None:
        response = await client.post(
            "/builder/drag",
            json={
                "decks": team_payload,
                "source": {
                    "type": "DECK_SLOT",
                    "item": IMP,
                    "source_deck_id": "a",
                    "source_slot_index": 0,
                },
            },
        )

        body = response.json()
        assert body["data"]["action"]["type"] == "CLEAR_SLOT"
        assert body["data"]["decks"][0]["slots"][0] is None

    async def test_two_decks_rejected(self, client: AsyncClient) -> None:
        response = await client.post(
            "/builder/drag",
            json={
                "decks": [empty_deck("a"), empty_deck("b")],
                "source": {"type": "BROWSER_CARD", "item": IMP},
            },
        )

        assert response.status_code == 400
        assert response.json()["failure"]["kind"] == "invalid_input"


class TestValidate:
    async def test_empty_deck(self, client: AsyncClient) -> None:
        response = await client.post("/builder/validate", json=empty_deck("a"))

        body = response.json()
        assert body["is_valid"] is False
        assert body["errors"] == ["Must have 4 Units", "Must have 1 Titan", "Select a Spellcaster"]
        assert body["unit_count"] == 0


class TestResolve:
    async def test_resolve_deck(self, client: AsyncClient) -> None:
        response = await client.post(
            "/builder/resolve/deck",
            json={
                "deck": {
                    "spellcaster_id": "sc_pyromancer",
                    "slot_ids": ["u_fire_imp", "u_gone", None, None, "t_stone_golem"],
                    "name": None,
                },
                "catalog": [IMP, GOLEM, MAGE],
            },
        )

        body = response.json()
        assert body["name"] == "Imported Deck"
        assert body["spellcaster"]["id"] == "sc_pyromancer"
        assert [slot["id"] if slot else None for slot in body["slots"]] == [
            "u_fire_imp",
            None,
            None,
            None,
            "t_stone_golem",
        ]

    async def test_resolve_team(self, client: AsyncClient) -> None:
        response = await client.post(
            "/builder/resolve/team",
            json={
                "team": {
                    "name": "",
                    "decks": [
                        {"spellcaster_id": "sc_pyromancer", "slot_ids": [None] * 5},
                        None,
                        None,
                    ],
                },
                "catalog": [MAGE],
            },
        )

        body = response.json()
        assert body["name"] == "Imported Team"
        assert len(body["decks"]) == 3
        assert body["decks"][0]["spellcaster"]["id"] == "sc_pyromancer"
        assert body["decks"][1]["spellcaster"] is None
