"""
Codec API endpoints.

Encode live decks/teams into share tokens and decode tokens back into
bare IDs. Decoding never errors on the core side; a token that yields no
deck is reported as a decode failure envelope.
"""

from typing import Any

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from spellforge.api.schemas import DecodedDeckModel, DecodedTeamModel, DeckModel
from spellforge.config import MAX_SHARE_HASH_LENGTH
from spellforge.models.deck import TEAM_SIZE
from spellforge.models.failure import (
    ApiResponse,
    InvalidTokenError,
    create_success,
)
from spellforge.services.codec import decode_deck, decode_team, encode_deck, encode_team

router = APIRouter(prefix="/codec", tags=["codec"])


class TokenResponse(BaseModel):
    """An encoded share token."""

    token: str


class TokenRequest(BaseModel):
    """A share token to decode."""

    token: str = Field(..., max_length=MAX_SHARE_HASH_LENGTH)


class TeamEncodeRequest(BaseModel):
    """Three decks and a team name to encode."""

    name: str = ""
    decks: list[DeckModel] = Field(..., min_length=TEAM_SIZE, max_length=TEAM_SIZE)


class ImportResponse(BaseModel):
    """Which import mode a builder URL selects, and what it decodes to."""

    mode: str
    deck: DecodedDeckModel | None = None
    team: DecodedTeamModel | None = None


@router.post("/deck/encode", response_model=TokenResponse)
async def encode_deck_token(deck: DeckModel) -> TokenResponse:
    """Encode a single deck."""
    return TokenResponse(token=encode_deck(deck.to_deck()))


@router.post("/deck/decode", response_model=ApiResponse[DecodedDeckModel])
async def decode_deck_token(request: TokenRequest) -> ApiResponse[Any]:
    """Decode a deck token into IDs."""
    decoded = decode_deck(request.token)
    if decoded is None:
        raise InvalidTokenError("deck")
    return create_success(DecodedDeckModel.from_decoded(decoded))


@router.post("/team/encode", response_model=TokenResponse)
async def encode_team_token(request: TeamEncodeRequest) -> TokenResponse:
    """Encode a team using the current (v2) format."""
    decks = [deck.to_deck() for deck in request.decks]
    return TokenResponse(token=encode_team(decks, request.name))


@router.post("/team/decode", response_model=ApiResponse[DecodedTeamModel])
async def decode_team_token(request: TokenRequest) -> ApiResponse[Any]:
    """Decode a v2 or legacy v1 team token."""
    decoded = decode_team(request.token)
    if not decoded.has_data:
        raise InvalidTokenError("team")
    return create_success(DecodedTeamModel.from_decoded(decoded))


@router.get("/import", response_model=ApiResponse[ImportResponse])
async def import_from_query(
    d: str | None = Query(default=None, max_length=MAX_SHARE_HASH_LENGTH),
    team: str | None = Query(default=None, max_length=MAX_SHARE_HASH_LENGTH),
) -> ApiResponse[Any]:
    """
    Decode the builder's ``?team=`` or ``?d=`` query parameter.

    ``team`` takes precedence when both are present.
    """
    if team:
        decoded_team = decode_team(team)
        if not decoded_team.has_data:
            raise InvalidTokenError("team")
        return create_success(
            ImportResponse(mode="team", team=DecodedTeamModel.from_decoded(decoded_team))
        )

    if d:
        decoded_deck = decode_deck(d)
        if decoded_deck is None:
            raise InvalidTokenError("deck")
        return create_success(
            ImportResponse(mode="deck", deck=DecodedDeckModel.from_decoded(decoded_deck))
        )

    return create_success(ImportResponse(mode="none"))
