"""
Catalog resolution: turn decoded IDs back into live decks.

Card data changes between when a deck is shared and when it is opened
(balance patches, removed content). An ID that is no longer in the catalog
resolves to an empty slot, never an error.
"""

import logging
from collections.abc import Iterable
from dataclasses import replace

from spellforge.models.card import CardRef
from spellforge.models.deck import (
    DecodedDeck,
    DecodedTeam,
    Deck,
    Team,
    create_empty_deck,
    create_initial_slots,
    sanitize_name,
)

logger = logging.getLogger(__name__)

DEFAULT_IMPORTED_DECK_NAME = "Imported Deck"
DEFAULT_IMPORTED_TEAM_NAME = "Imported Team"


class Catalog:
    """
    ID index over a freshly loaded list of catalog entries.

    Built per resolution call by the host; nothing here is cached globally.
    """

    def __init__(self, entries: Iterable[CardRef]):
        self._by_id: dict[str, CardRef] = {entry.id: entry for entry in entries}

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._by_id

    def get(self, card_id: str | None) -> CardRef | None:
        if not card_id:
            return None
        return self._by_id.get(card_id)


def _as_catalog(catalog: Catalog | Iterable[CardRef]) -> Catalog:
    return catalog if isinstance(catalog, Catalog) else Catalog(catalog)


def serialize_deck(deck: Deck) -> DecodedDeck:
    """The IDs-only stored form of a deck."""
    return DecodedDeck(
        spellcaster_id=deck.spellcaster_id,
        slot_ids=deck.slot_ids(),  # type: ignore[arg-type]
        name=deck.name or None,
    )


def resolve_deck(
    decoded: DecodedDeck,
    catalog: Catalog | Iterable[CardRef],
    deck_id: str | None = None,
) -> Deck:
    """
    Materialize a deck from stored IDs.

    Unknown IDs leave their slot (or the spellcaster) empty. Cards are placed
    at their stored index even when their kind does not fit the slot, so that
    legacy decks with such states still load; ``validate_deck`` reports them.
    A spellcaster ID that points at a non-spellcaster entry is dropped.

    Resolving the serialized form of a resolved deck (with its id) gives an
    equal deck.
    """
    index = _as_catalog(catalog)

    slots = list(create_initial_slots())
    missing: list[str] = []
    for i, card_id in enumerate(decoded.slot_ids):
        if not card_id:
            continue
        card = index.get(card_id)
        if card is None or card.is_spellcaster:
            missing.append(card_id)
            continue
        slots[i] = replace(slots[i], occupant=card)

    spellcaster = index.get(decoded.spellcaster_id)
    if spellcaster is not None and not spellcaster.is_spellcaster:
        spellcaster = None
    if decoded.spellcaster_id and spellcaster is None:
        missing.append(decoded.spellcaster_id)

    if missing:
        logger.debug("Unresolved catalog ids left empty: %s", missing)

    base = create_empty_deck(deck_id=deck_id)
    return replace(
        base,
        name=sanitize_name(decoded.name) or DEFAULT_IMPORTED_DECK_NAME,
        spellcaster=spellcaster,
        slots=tuple(slots),
    )


def resolve_team(
    decoded: DecodedTeam,
    catalog: Catalog | Iterable[CardRef],
    team_id: str | None = None,
) -> Team:
    """
    Materialize a team. Positions that did not decode become empty decks.
    """
    index = _as_catalog(catalog)

    decks = tuple(
        resolve_deck(decoded_deck, index) if decoded_deck is not None else create_empty_deck()
        for decoded_deck in decoded.decks
    )

    kwargs = {"id": team_id} if team_id else {}
    return Team(
        name=sanitize_name(decoded.name) or DEFAULT_IMPORTED_TEAM_NAME,
        decks=decks,  # type: ignore[arg-type]
        **kwargs,
    )
