"""
Deck rules engine.

Each function applies exactly one atomic mutation to a Deck and returns an
OperationResult. The input deck is never modified; on failure nothing is
applied at all.

INVARIANT: A card is only ever placed in a slot whose ``allowed_kinds``
include the card's slot kind. Illegal placements are rejected, never
coerced.

INVARIANT: No operation changes a deck's ``id`` or ``name``.
"""

from spellforge.models.card import CardRef
from spellforge.models.deck import (
    DECK_SLOT_COUNT,
    TITAN_SLOT_INDEX,
    UNIT_SLOT_COUNT,
    Deck,
    DeckSlot,
)
from spellforge.models.result import ErrorCode, OperationResult

DeckResult = OperationResult[Deck]


def _shape_error(deck: object) -> DeckResult | None:
    """
    Guard against malformed values that bypassed Deck construction.

    Returns a failure result, or None when the deck is well formed.
    """
    if not isinstance(deck, Deck):
        return OperationResult.fail(ErrorCode.INVALID_SHAPE, "Value is not a Deck")
    slots = deck.slots
    if not isinstance(slots, tuple) or len(slots) != DECK_SLOT_COUNT:
        return OperationResult.fail(ErrorCode.INVALID_SHAPE)
    for position, slot in enumerate(slots):
        if not isinstance(slot, DeckSlot) or slot.index != position:
            return OperationResult.fail(ErrorCode.INVALID_SHAPE)
    return None


def is_valid_slot_index(index: object) -> bool:
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < DECK_SLOT_COUNT


def _placement_error(slot: DeckSlot, card: CardRef) -> str | None:
    if slot.accepts(card):
        return None
    if slot.index == TITAN_SLOT_INDEX:
        return "Titan slot only accepts Titans"
    return "Unit slots cannot hold Titans"


def set_slot(deck: Deck, index: int, card: CardRef) -> DeckResult:
    """
    Place ``card`` at ``index``, overwriting any current occupant.

    Fails with WRONG_SLOT_TYPE when the slot does not accept the card's kind,
    and INVALID_TYPE for spellcasters.
    """
    if (error := _shape_error(deck)) is not None:
        return error
    if not is_valid_slot_index(index):
        return OperationResult.fail(ErrorCode.INVALID_INDEX)
    if card.is_spellcaster:
        return OperationResult.fail(ErrorCode.INVALID_TYPE)

    placement_error = _placement_error(deck.slots[index], card)
    if placement_error:
        return OperationResult.fail(ErrorCode.WRONG_SLOT_TYPE, placement_error)

    return OperationResult.ok(deck.with_slot(index, card))


def clear_slot(deck: Deck, index: int) -> DeckResult:
    """Empty the slot at ``index``. Clearing an empty slot is a no-op."""
    if (error := _shape_error(deck)) is not None:
        return error
    if not is_valid_slot_index(index):
        return OperationResult.fail(ErrorCode.INVALID_INDEX)
    if deck.slots[index].is_empty:
        return OperationResult.ok(deck)
    return OperationResult.ok(deck.with_slot(index, None))


def swap_slots(deck: Deck, index_a: int, index_b: int) -> DeckResult:
    """
    Exchange the occupants of two slots in the same deck.

    Both resulting placements must satisfy the destination slot's
    ``allowed_kinds``; otherwise the swap fails with WRONG_SLOT_TYPE.
    Swapping a slot with itself succeeds without change.
    """
    if (error := _shape_error(deck)) is not None:
        return error
    if not is_valid_slot_index(index_a) or not is_valid_slot_index(index_b):
        return OperationResult.fail(ErrorCode.INVALID_INDEX)
    if index_a == index_b:
        return OperationResult.ok(deck)

    slot_a = deck.slots[index_a]
    slot_b = deck.slots[index_b]
    card_a = slot_a.occupant
    card_b = slot_b.occupant

    if card_b is not None:
        placement_error = _placement_error(slot_a, card_b)
        if placement_error:
            return OperationResult.fail(ErrorCode.WRONG_SLOT_TYPE, f"Taking: {placement_error}")

    if card_a is not None:
        placement_error = _placement_error(slot_b, card_a)
        if placement_error:
            return OperationResult.fail(ErrorCode.WRONG_SLOT_TYPE, f"Target: {placement_error}")

    return OperationResult.ok(deck.with_slot(index_a, card_b).with_slot(index_b, card_a))


def set_spellcaster(deck: Deck, spellcaster: CardRef) -> DeckResult:
    """Replace the deck's spellcaster."""
    if (error := _shape_error(deck)) is not None:
        return error
    if not spellcaster.is_spellcaster:
        return OperationResult.fail(ErrorCode.INVALID_TYPE, "Only spellcasters can lead a deck")
    return OperationResult.ok(deck.with_spellcaster(spellcaster))


def remove_spellcaster(deck: Deck) -> DeckResult:
    """Clear the deck's spellcaster."""
    if (error := _shape_error(deck)) is not None:
        return error
    return OperationResult.ok(deck.with_spellcaster(None))


# --- Auto placement ---


def find_auto_fill_slot(deck: Deck, card: CardRef) -> int | None:
    """
    Slot a card would land in when dropped on a deck as a whole.

    Titans always go to the titan slot. Other cards take the first empty
    unit slot. Spellcasters and full decks give None.
    """
    if card.is_spellcaster:
        return None
    if card.is_titan:
        return TITAN_SLOT_INDEX
    for slot in deck.slots[:UNIT_SLOT_COUNT]:
        if slot.is_empty:
            return slot.index
    return None


def quick_add(deck: Deck, card: CardRef) -> DeckResult:
    """
    Add a card wherever it fits.

    - Spellcasters become the deck's spellcaster.
    - Titans go to the titan slot, replacing any current titan.
    - Other cards take the first empty unit slot; a card already in the
      deck is rejected with DUPLICATE_UNIT and a full deck with DECK_FULL.
    """
    if (error := _shape_error(deck)) is not None:
        return error

    if card.is_spellcaster:
        result = set_spellcaster(deck, card)
        return OperationResult.ok(result.data, f"{card.name or card.id} set as Spellcaster")  # type: ignore[arg-type]

    if card.is_titan:
        result = set_slot(deck, TITAN_SLOT_INDEX, card)
        if result.success:
            return OperationResult.ok(result.data, f"Added {card.name or card.id} to Titan Slot")  # type: ignore[arg-type]
        return result

    unit_slots = deck.slots[:UNIT_SLOT_COUNT]
    if any(slot.occupant is not None and slot.occupant.id == card.id for slot in unit_slots):
        return OperationResult.fail(ErrorCode.DUPLICATE_UNIT)

    index = find_auto_fill_slot(deck, card)
    if index is None:
        return OperationResult.fail(ErrorCode.DECK_FULL)

    result = set_slot(deck, index, card)
    if result.success:
        return OperationResult.ok(result.data, f"Added {card.name or card.id}")  # type: ignore[arg-type]
    return result
