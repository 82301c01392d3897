"""
Pydantic request/response models shared by the API routers, and the
conversions between them and the core value types.
"""

from pydantic import BaseModel, Field

from spellforge.models.card import CardKind, CardRef
from spellforge.models.deck import (
    DECK_SLOT_COUNT,
    TEAM_SIZE,
    DecodedDeck,
    DecodedTeam,
    Deck,
    SlotKind,
    create_empty_deck,
)
from spellforge.services.drag_routing import (
    ActionType,
    DragAction,
    DragSource,
    DragSourceType,
    DropTarget,
    DropTargetType,
)


class CardModel(BaseModel):
    """A card reference as sent by the client."""

    id: str = Field(..., min_length=1)
    kind: CardKind = CardKind.UNIT
    name: str = ""
    rank: str | None = None

    def to_ref(self) -> CardRef:
        return CardRef(id=self.id, kind=self.kind, name=self.name, rank=self.rank)

    @classmethod
    def from_ref(cls, card: CardRef | None) -> "CardModel | None":
        if card is None:
            return None
        return cls(id=card.id, kind=card.kind, name=card.name, rank=card.rank)


class DeckModel(BaseModel):
    """A live deck. ``slots`` always has five entries, None for empty."""

    id: str | None = None
    name: str = ""
    spellcaster: CardModel | None = None
    slots: list[CardModel | None] = Field(
        default_factory=lambda: [None] * DECK_SLOT_COUNT,
        min_length=DECK_SLOT_COUNT,
        max_length=DECK_SLOT_COUNT,
    )

    def to_deck(self) -> Deck:
        deck = create_empty_deck(deck_id=self.id, name=self.name)
        deck = deck.with_spellcaster(self.spellcaster.to_ref() if self.spellcaster else None)
        for i, card in enumerate(self.slots):
            if card is not None:
                deck = deck.with_slot(i, card.to_ref())
        return deck

    @classmethod
    def from_deck(cls, deck: Deck) -> "DeckModel":
        return cls(
            id=deck.id,
            name=deck.name,
            spellcaster=CardModel.from_ref(deck.spellcaster),
            slots=[CardModel.from_ref(slot.occupant) for slot in deck.slots],
        )


class DecodedDeckModel(BaseModel):
    """A deck as carried by a share token (IDs only)."""

    spellcaster_id: str | None = None
    slot_ids: list[str | None] = Field(
        default_factory=lambda: [None] * DECK_SLOT_COUNT,
        min_length=DECK_SLOT_COUNT,
        max_length=DECK_SLOT_COUNT,
    )
    name: str | None = None

    @classmethod
    def from_decoded(cls, decoded: DecodedDeck | None) -> "DecodedDeckModel | None":
        if decoded is None:
            return None
        return cls(
            spellcaster_id=decoded.spellcaster_id,
            slot_ids=list(decoded.slot_ids),
            name=decoded.name,
        )


class DecodedTeamModel(BaseModel):
    """A team as carried by a share token. Always three deck positions."""

    name: str = ""
    decks: list[DecodedDeckModel | None] = Field(min_length=TEAM_SIZE, max_length=TEAM_SIZE)

    @classmethod
    def from_decoded(cls, decoded: DecodedTeam) -> "DecodedTeamModel":
        return cls(
            name=decoded.name,
            decks=[DecodedDeckModel.from_decoded(deck) for deck in decoded.decks],
        )


class DragSourceModel(BaseModel):
    type: DragSourceType
    item: CardModel | None = None
    source_deck_id: str | None = None
    source_slot_index: int | None = None

    def to_source(self) -> DragSource:
        return DragSource(
            type=self.type,
            item=self.item.to_ref() if self.item else None,
            source_deck_id=self.source_deck_id,
            source_slot_index=self.source_slot_index,
        )


class DropTargetModel(BaseModel):
    type: DropTargetType
    deck_id: str | None = None
    slot_index: int | None = None
    accepts: list[SlotKind] = Field(default_factory=list)

    def to_target(self) -> DropTarget:
        return DropTarget(
            type=self.type,
            deck_id=self.deck_id,
            slot_index=self.slot_index,
            accepts=frozenset(self.accepts),
        )


class DragActionModel(BaseModel):
    type: ActionType
    item: CardModel | None = None
    index: int | None = None
    source_index: int | None = None
    target_index: int | None = None
    deck_id: str | None = None
    source_deck_id: str | None = None

    @classmethod
    def from_action(cls, action: DragAction) -> "DragActionModel":
        return cls(
            type=action.type,
            item=CardModel.from_ref(action.item),
            index=action.index,
            source_index=action.source_index,
            target_index=action.target_index,
            deck_id=action.deck_id,
            source_deck_id=action.source_deck_id,
        )
