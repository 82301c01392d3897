"""
Deck and Team value types.

A Deck is one spellcaster plus exactly five slots. Slots 0-3 take units
(creatures, buildings, spells), slot 4 takes a titan. A Team is exactly
three decks.

INVARIANT: A Deck always has five slots and ``slots[i].index == i``.
A Team always has three decks. Both are enforced at construction, so a
malformed value cannot be built through the normal constructors.

All types are frozen. Mutation helpers return new values.
"""

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum

from spellforge.models.card import CardRef

DECK_SLOT_COUNT = 5
UNIT_SLOT_COUNT = 4
TITAN_SLOT_INDEX = 4
TEAM_SIZE = 3

MAX_NAME_LENGTH = 50

# Reserved characters used by the share codec. Names never contain them.
FIELD_DELIMITER = "\x1f"
TEAM_DELIMITER = "~"


class SlotKind(str, Enum):
    """What a deck slot may hold."""

    UNIT = "UNIT"
    TITAN = "TITAN"


UNIT_SLOT_KINDS = frozenset({SlotKind.UNIT})
TITAN_SLOT_KINDS = frozenset({SlotKind.TITAN})


class DeckShapeError(ValueError):
    """Raised when a Deck or Team is built with the wrong shape."""


def sanitize_name(name: str | None) -> str:
    """Strip codec delimiters and cap the length at MAX_NAME_LENGTH."""
    if not name:
        return ""
    cleaned = name.replace(FIELD_DELIMITER, "").replace(TEAM_DELIMITER, "")
    return cleaned[:MAX_NAME_LENGTH]


def slot_kind_for(card: CardRef) -> SlotKind | None:
    """Slot kind a card needs, or None for spellcasters (which never go in slots)."""
    if card.is_spellcaster:
        return None
    if card.is_titan:
        return SlotKind.TITAN
    return SlotKind.UNIT


def allowed_kinds_for_index(index: int) -> frozenset[SlotKind]:
    return TITAN_SLOT_KINDS if index == TITAN_SLOT_INDEX else UNIT_SLOT_KINDS


@dataclass(frozen=True, slots=True)
class DeckSlot:
    """
    One of the five card positions in a deck.

    Attributes:
        index: Position in the deck (0-4)
        occupant: Card in the slot, or None when empty
        allowed_kinds: Slot kinds this position accepts
    """

    index: int
    occupant: CardRef | None = None
    allowed_kinds: frozenset[SlotKind] = UNIT_SLOT_KINDS

    @property
    def is_empty(self) -> bool:
        return self.occupant is None

    def accepts(self, card: CardRef) -> bool:
        """Whether ``card`` may be placed in this slot."""
        kind = slot_kind_for(card)
        return kind is not None and kind in self.allowed_kinds


def create_initial_slots() -> tuple[DeckSlot, DeckSlot, DeckSlot, DeckSlot, DeckSlot]:
    """Five empty slots with the standard kind restrictions."""
    return tuple(  # type: ignore[return-value]
        DeckSlot(index=i, allowed_kinds=allowed_kinds_for_index(i))
        for i in range(DECK_SLOT_COUNT)
    )


@dataclass(frozen=True, slots=True)
class Deck:
    """
    A spellcaster plus five card slots.

    Attributes:
        id: Opaque deck identifier
        name: User-defined deck name
        spellcaster: The deck's spellcaster, or None
        slots: Exactly five DeckSlot values in index order
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    spellcaster: CardRef | None = None
    slots: tuple[DeckSlot, DeckSlot, DeckSlot, DeckSlot, DeckSlot] = field(
        default_factory=create_initial_slots
    )

    def __post_init__(self) -> None:
        slots = tuple(self.slots)
        if len(slots) != DECK_SLOT_COUNT:
            raise DeckShapeError(f"Deck must have {DECK_SLOT_COUNT} slots, got {len(slots)}")
        for position, slot in enumerate(slots):
            if not isinstance(slot, DeckSlot):
                raise DeckShapeError(f"Slot {position} is not a DeckSlot")
            if slot.index != position:
                raise DeckShapeError(f"Slot at position {position} has index {slot.index}")
            if slot.allowed_kinds != allowed_kinds_for_index(position):
                raise DeckShapeError(f"Slot {position} has non-standard allowed kinds")
        # Accept lists from callers but always store a tuple
        object.__setattr__(self, "slots", slots)

    @property
    def is_empty(self) -> bool:
        """True when there is no spellcaster and every slot is unoccupied."""
        return self.spellcaster is None and all(slot.is_empty for slot in self.slots)

    def slot_ids(self) -> tuple[str | None, ...]:
        """IDs of the five slot occupants (None for empty slots)."""
        return tuple(slot.occupant.id if slot.occupant else None for slot in self.slots)

    @property
    def spellcaster_id(self) -> str | None:
        return self.spellcaster.id if self.spellcaster else None

    def with_slot(self, index: int, occupant: CardRef | None) -> "Deck":
        """Copy of this deck with ``occupant`` at ``index``. No kind checks."""
        slots = list(self.slots)
        slots[index] = replace(slots[index], occupant=occupant)
        return replace(self, slots=tuple(slots))

    def with_spellcaster(self, spellcaster: CardRef | None) -> "Deck":
        return replace(self, spellcaster=spellcaster)


TeamDecks = tuple[Deck, Deck, Deck]


@dataclass(frozen=True, slots=True)
class Team:
    """
    Three decks played together.

    Attributes:
        id: Opaque team identifier
        name: Team name
        decks: Exactly three decks
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    decks: TeamDecks = field(default_factory=lambda: create_initial_team_decks())

    def __post_init__(self) -> None:
        decks = tuple(self.decks)
        if len(decks) != TEAM_SIZE:
            raise DeckShapeError(f"Team must have {TEAM_SIZE} decks, got {len(decks)}")
        if not all(isinstance(deck, Deck) for deck in decks):
            raise DeckShapeError("Team decks must be Deck values")
        object.__setattr__(self, "decks", decks)

    def with_decks(self, decks: TeamDecks) -> "Team":
        return replace(self, decks=decks)


def create_empty_deck(deck_id: str | None = None, name: str = "") -> Deck:
    """Factory for a new empty deck. Generates a UUID when no id is given."""
    return Deck(
        id=deck_id or str(uuid.uuid4()),
        name=sanitize_name(name),
    )


def create_initial_team_decks() -> TeamDecks:
    """Three fresh empty decks, each with its own id."""
    return (create_empty_deck(), create_empty_deck(), create_empty_deck())


def create_empty_team(team_id: str | None = None, name: str = "") -> Team:
    """Factory for a new team of three empty decks."""
    return Team(
        id=team_id or str(uuid.uuid4()),
        name=sanitize_name(name),
        decks=create_initial_team_decks(),
    )


# --- Decoded (IDs only) forms ---


@dataclass(frozen=True, slots=True)
class DecodedDeck:
    """
    A deck as carried by a share token: bare IDs, no catalog records.

    Decoded decks are "partial" until resolved against a catalog.
    """

    spellcaster_id: str | None = None
    slot_ids: tuple[str | None, str | None, str | None, str | None, str | None] = (
        None,
        None,
        None,
        None,
        None,
    )
    name: str | None = None

    def __post_init__(self) -> None:
        ids = tuple(self.slot_ids)[:DECK_SLOT_COUNT]
        ids = ids + (None,) * (DECK_SLOT_COUNT - len(ids))
        object.__setattr__(self, "slot_ids", ids)


@dataclass(frozen=True, slots=True)
class DecodedTeam:
    """A team as carried by a share token."""

    name: str = ""
    decks: tuple[DecodedDeck | None, DecodedDeck | None, DecodedDeck | None] = (
        None,
        None,
        None,
    )

    def __post_init__(self) -> None:
        decks = tuple(self.decks)[:TEAM_SIZE]
        decks = decks + (None,) * (TEAM_SIZE - len(decks))
        object.__setattr__(self, "decks", decks)

    @property
    def has_data(self) -> bool:
        """False when no deck could be decoded."""
        return any(deck is not None for deck in self.decks)
