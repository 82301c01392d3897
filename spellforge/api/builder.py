"""
Builder API endpoints.

Expose the drag routing / rules engine round trip and catalog resolution
to clients that do not run the core themselves.
"""

import logging
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from spellforge.api.schemas import (
    CardModel,
    DecodedDeckModel,
    DecodedTeamModel,
    DeckModel,
    DragActionModel,
    DragSourceModel,
    DropTargetModel,
)
from spellforge.models.deck import TEAM_SIZE, DecodedDeck, DecodedTeam
from spellforge.models.failure import (
    ApiResponse,
    FailureKind,
    KnownError,
    create_rule_refusal,
    create_success,
)
from spellforge.services.deck_validation import validate_deck
from spellforge.services.dispatch import apply_deck_action, apply_team_action
from spellforge.services.drag_routing import determine_action
from spellforge.services.reconstruction import Catalog, resolve_deck, resolve_team

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/builder", tags=["builder"])


class DragRequest(BaseModel):
    """
    A drop event against the current builder state.

    ``decks`` holds one deck in solo mode and three in team mode.
    ``target`` is None when the item was dropped outside any drop zone.
    """

    decks: list[DeckModel] = Field(..., min_length=1, max_length=TEAM_SIZE)
    source: DragSourceModel
    target: DropTargetModel | None = None


class DragResult(BaseModel):
    action: DragActionModel
    decks: list[DeckModel]


class ValidationResponse(BaseModel):
    is_valid: bool
    errors: list[str]
    unit_count: int
    titan_count: int
    has_spellcaster: bool


class ResolveDeckRequest(BaseModel):
    deck: DecodedDeckModel
    catalog: list[CardModel] = Field(default_factory=list)


class ResolveTeamRequest(BaseModel):
    team: DecodedTeamModel
    catalog: list[CardModel] = Field(default_factory=list)


class ResolvedTeamResponse(BaseModel):
    name: str
    decks: list[DeckModel]


@router.post("/drag", response_model=ApiResponse[DragResult])
async def apply_drag(request: DragRequest) -> ApiResponse[Any]:
    """
    Classify a drop and apply it.

    Rule violations come back as refusals carrying the stable error code;
    the decks in the request are not changed.
    """
    if len(request.decks) not in (1, TEAM_SIZE):
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message=f"Send one deck (solo) or {TEAM_SIZE} decks (team).",
        )

    decks = tuple(model.to_deck() for model in request.decks)
    target = request.target.to_target() if request.target else None
    action = determine_action(request.source.to_source(), target)

    if len(decks) == 1:
        result = apply_deck_action(decks[0], action)
        new_decks = (result.data,) if result.success else None
    else:
        team_result = apply_team_action(decks, action)  # type: ignore[arg-type]
        result = team_result
        new_decks = team_result.data if team_result.success else None

    if new_decks is None:
        logger.info(
            "drag_refused",
            extra={"action": action.type.value, "code": result.code.value if result.code else None},
        )
        return create_rule_refusal(result)

    return create_success(
        DragResult(
            action=DragActionModel.from_action(action),
            decks=[DeckModel.from_deck(deck) for deck in new_decks],
        )
    )


@router.post("/validate", response_model=ValidationResponse)
async def validate(deck: DeckModel) -> ValidationResponse:
    """Report what a deck still needs before it is playable."""
    validation = validate_deck(deck.to_deck())
    return ValidationResponse(
        is_valid=validation.is_valid,
        errors=validation.errors,
        unit_count=validation.stats.unit_count,
        titan_count=validation.stats.titan_count,
        has_spellcaster=validation.stats.has_spellcaster,
    )


@router.post("/resolve/deck", response_model=DeckModel)
async def resolve_deck_ids(request: ResolveDeckRequest) -> DeckModel:
    """Materialize decoded IDs against the given catalog. Unknown IDs stay empty."""
    catalog = Catalog(card.to_ref() for card in request.catalog)
    decoded = DecodedDeck(
        spellcaster_id=request.deck.spellcaster_id,
        slot_ids=tuple(request.deck.slot_ids),  # type: ignore[arg-type]
        name=request.deck.name,
    )
    return DeckModel.from_deck(resolve_deck(decoded, catalog))


@router.post("/resolve/team", response_model=ResolvedTeamResponse)
async def resolve_team_ids(request: ResolveTeamRequest) -> ResolvedTeamResponse:
    """Materialize a decoded team. Missing deck positions become empty decks."""
    catalog = Catalog(card.to_ref() for card in request.catalog)
    decoded = DecodedTeam(
        name=request.team.name,
        decks=tuple(  # type: ignore[arg-type]
            DecodedDeck(
                spellcaster_id=deck.spellcaster_id,
                slot_ids=tuple(deck.slot_ids),  # type: ignore[arg-type]
                name=deck.name,
            )
            if deck is not None
            else None
            for deck in request.team.decks
        ),
    )
    team = resolve_team(decoded, catalog)
    return ResolvedTeamResponse(
        name=team.name,
        decks=[DeckModel.from_deck(deck) for deck in team.decks],
    )
