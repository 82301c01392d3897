"""
Drag routing: classify a drag/drop pair into a mutation intent.

This module only decides WHAT should happen. It never applies the
mutation; see ``spellforge.services.dispatch`` for that.
"""

from collections.abc import Collection
from dataclasses import dataclass, field
from enum import Enum

from spellforge.models.card import CardRef
from spellforge.models.deck import SlotKind, slot_kind_for


class DragSourceType(str, Enum):
    """Where a drag started."""

    BROWSER_CARD = "BROWSER_CARD"
    DECK_SLOT = "DECK_SLOT"
    SPELLCASTER_SLOT = "SPELLCASTER_SLOT"


class DropTargetType(str, Enum):
    """Where a drag ended."""

    DECK_SLOT = "DECK_SLOT"
    SPELLCASTER_SLOT = "SPELLCASTER_SLOT"
    DECK_HEADER = "DECK_HEADER"
    DECK_BACKGROUND = "DECK_BACKGROUND"
    VOID = "VOID"


class ActionType(str, Enum):
    """Closed set of intents a drop can resolve to."""

    NO_OP = "NO_OP"
    MOVE_SLOT = "MOVE_SLOT"
    SET_SLOT = "SET_SLOT"
    CLEAR_SLOT = "CLEAR_SLOT"
    SET_SPELLCASTER = "SET_SPELLCASTER"
    REMOVE_SPELLCASTER = "REMOVE_SPELLCASTER"


@dataclass(frozen=True, slots=True)
class DragSource:
    """
    Descriptor of the dragged item.

    Attributes:
        type: Where the drag started
        item: The dragged card, if any
        source_deck_id: Deck the item was dragged out of (deck/spellcaster slots)
        source_slot_index: Slot the item was dragged out of (deck slots)
    """

    type: DragSourceType
    item: CardRef | None = None
    source_deck_id: str | None = None
    source_slot_index: int | None = None


@dataclass(frozen=True, slots=True)
class DropTarget:
    """
    Descriptor of the drop zone.

    Attributes:
        type: Kind of drop zone
        deck_id: Deck the zone belongs to
        slot_index: Slot index for DECK_SLOT targets
        accepts: Slot kinds the zone accepts; empty means "don't pre-filter"
    """

    type: DropTargetType
    deck_id: str | None = None
    slot_index: int | None = None
    accepts: frozenset[SlotKind] = field(default_factory=frozenset)


@dataclass(frozen=True, slots=True)
class DragAction:
    """
    A resolved intent.

    Field use per type:
        SET_SLOT: item, index (None = first free slot), deck_id
        MOVE_SLOT: source_deck_id, source_index, deck_id (target), target_index
            (None = first free slot)
        CLEAR_SLOT: index, deck_id
        SET_SPELLCASTER: item, deck_id, source_deck_id (set for cross-deck moves)
        REMOVE_SPELLCASTER: deck_id
    """

    type: ActionType
    item: CardRef | None = None
    index: int | None = None
    source_index: int | None = None
    target_index: int | None = None
    deck_id: str | None = None
    source_deck_id: str | None = None


NO_OP = DragAction(type=ActionType.NO_OP)


def is_compatible(item: CardRef, accepts: Collection[SlotKind]) -> bool:
    """Whether a drop zone accepting ``accepts`` can take ``item``."""
    if not accepts:
        return True
    kind = slot_kind_for(item)
    return kind is not None and kind in accepts


def is_cross_deck(action: DragAction) -> bool:
    """True when the action moves something between two different decks."""
    return (
        action.source_deck_id is not None
        and action.deck_id is not None
        and action.source_deck_id != action.deck_id
    )


def determine_action(source: DragSource | None, target: DropTarget | None) -> DragAction:
    """
    Map a drag source and drop target to exactly one intent.

    Rules are checked in order and the first match wins. Anything not
    covered resolves to NO_OP.
    """
    if source is None:
        return NO_OP

    # 1. Dropped outside any deck: drag-to-remove
    if target is None or target.type == DropTargetType.VOID:
        if source.type == DragSourceType.SPELLCASTER_SLOT:
            return DragAction(type=ActionType.REMOVE_SPELLCASTER, deck_id=source.source_deck_id)
        if source.type == DragSourceType.DECK_SLOT and source.source_slot_index is not None:
            return DragAction(
                type=ActionType.CLEAR_SLOT,
                index=source.source_slot_index,
                deck_id=source.source_deck_id,
            )
        return NO_OP

    item = source.item

    if source.type == DragSourceType.BROWSER_CARD:
        if item is None:
            return NO_OP

        # 2. Browser -> slot
        if target.type == DropTargetType.DECK_SLOT:
            if target.slot_index is None or item.is_spellcaster:
                return NO_OP
            if not is_compatible(item, target.accepts):
                return NO_OP
            return DragAction(
                type=ActionType.SET_SLOT,
                item=item,
                index=target.slot_index,
                deck_id=target.deck_id,
            )

        # 3. Browser -> spellcaster region
        if target.type == DropTargetType.SPELLCASTER_SLOT:
            if not item.is_spellcaster:
                return NO_OP
            return DragAction(type=ActionType.SET_SPELLCASTER, item=item, deck_id=target.deck_id)

        # Browser -> header: first free slot. Spellcasters have no slot to fill.
        if target.type == DropTargetType.DECK_HEADER:
            if item.is_spellcaster:
                return NO_OP
            return DragAction(type=ActionType.SET_SLOT, item=item, index=None, deck_id=target.deck_id)

        return NO_OP

    if source.type == DragSourceType.DECK_SLOT:
        if source.source_slot_index is None or item is None:
            return NO_OP

        # 4. Slot -> slot, same or different deck
        if target.type == DropTargetType.DECK_SLOT:
            if target.slot_index is None or not is_compatible(item, target.accepts):
                return NO_OP
            return DragAction(
                type=ActionType.MOVE_SLOT,
                source_index=source.source_slot_index,
                target_index=target.slot_index,
                source_deck_id=source.source_deck_id,
                deck_id=target.deck_id,
            )

        # Slot -> header: move into the target deck's first free slot
        if target.type == DropTargetType.DECK_HEADER:
            return DragAction(
                type=ActionType.MOVE_SLOT,
                source_index=source.source_slot_index,
                target_index=None,
                source_deck_id=source.source_deck_id,
                deck_id=target.deck_id,
            )

        return NO_OP

    # 5. Spellcaster slot -> another spellcaster region
    if (
        source.type == DragSourceType.SPELLCASTER_SLOT
        and target.type == DropTargetType.SPELLCASTER_SLOT
    ):
        if item is None:
            return NO_OP
        return DragAction(
            type=ActionType.SET_SPELLCASTER,
            item=item,
            deck_id=target.deck_id,
            source_deck_id=source.source_deck_id,
        )

    # 6. Background drops snap back; everything else is ignored
    return NO_OP
