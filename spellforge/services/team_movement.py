"""
Team movement: moves and swaps that span two decks of a team.

Within-deck mechanics are delegated to the rules engine. Every operation
returns a new 3-tuple of decks; a failure at any step returns the failure
and the input decks are left untouched.
"""

from collections.abc import Callable

from spellforge.models.deck import TEAM_SIZE, Deck, TeamDecks
from spellforge.models.result import ErrorCode, OperationResult
from spellforge.services import deck_rules

TeamResult = OperationResult[TeamDecks]
DeckModifier = Callable[[Deck], OperationResult[Deck]]


def _valid_deck_index(decks: TeamDecks, index: object) -> bool:
    return (
        isinstance(index, int)
        and not isinstance(index, bool)
        and 0 <= index < len(decks)
        and isinstance(decks[index], Deck)
    )


def _check_team(decks: TeamDecks, *indices: int) -> TeamResult | None:
    if not isinstance(decks, tuple | list) or len(decks) != TEAM_SIZE:
        return OperationResult.fail(ErrorCode.INVALID_SHAPE, "Team must have exactly 3 decks")
    if not all(_valid_deck_index(decks, index) for index in indices):
        return OperationResult.fail(ErrorCode.INVALID_DECK)
    return None


def _replace(decks: TeamDecks, updates: dict[int, Deck]) -> TeamDecks:
    return tuple(updates.get(i, deck) for i, deck in enumerate(decks))  # type: ignore[return-value]


def apply_deck_transaction(
    decks: TeamDecks,
    deck_index: int,
    modifier: DeckModifier,
) -> TeamResult:
    """
    Apply a single-deck rules operation to one deck of a team.

    Example:
        apply_deck_transaction(decks, 1, lambda d: deck_rules.clear_slot(d, 2))
    """
    if (error := _check_team(decks, deck_index)) is not None:
        return error

    result = modifier(decks[deck_index])
    if not result.success or result.data is None:
        return result.propagate(ErrorCode.MOVE_FAILED)  # type: ignore[return-value]

    return OperationResult.ok(_replace(decks, {deck_index: result.data}))


def move_card_between_decks(
    decks: TeamDecks,
    source_deck_index: int,
    source_slot_index: int,
    target_deck_index: int,
    target_slot_index: int,
) -> TeamResult:
    """
    Move a card from one deck slot to another, swapping if the target is occupied.

    Same-deck moves are plain swaps. Cross-deck moves place the source card
    in the target slot, then put the target's previous occupant (if any)
    back in the source slot.
    """
    if (error := _check_team(decks, source_deck_index, target_deck_index)) is not None:
        return error

    if source_deck_index == target_deck_index:
        return _move_within_deck(decks, source_deck_index, source_slot_index, target_slot_index)

    return _move_across_decks(
        decks,
        source_deck_index,
        source_slot_index,
        target_deck_index,
        target_slot_index,
    )


def _move_within_deck(
    decks: TeamDecks,
    deck_index: int,
    source_slot_index: int,
    target_slot_index: int,
) -> TeamResult:
    result = deck_rules.swap_slots(decks[deck_index], source_slot_index, target_slot_index)
    if not result.success or result.data is None:
        return result.propagate(ErrorCode.MOVE_FAILED)  # type: ignore[return-value]
    return OperationResult.ok(_replace(decks, {deck_index: result.data}))


def _move_across_decks(
    decks: TeamDecks,
    source_deck_index: int,
    source_slot_index: int,
    target_deck_index: int,
    target_slot_index: int,
) -> TeamResult:
    source_deck = decks[source_deck_index]
    target_deck = decks[target_deck_index]

    if not deck_rules.is_valid_slot_index(source_slot_index):
        return OperationResult.fail(ErrorCode.INVALID_INDEX)
    if not deck_rules.is_valid_slot_index(target_slot_index):
        return OperationResult.fail(ErrorCode.INVALID_INDEX)

    source_item = source_deck.slots[source_slot_index].occupant
    target_item = target_deck.slots[target_slot_index].occupant

    if source_item is None:
        return OperationResult.fail(ErrorCode.EMPTY_SOURCE)

    # 1. Place the source card in the target slot
    target_result = deck_rules.set_slot(target_deck, target_slot_index, source_item)
    if not target_result.success or target_result.data is None:
        return target_result.propagate(ErrorCode.MOVE_FAILED)  # type: ignore[return-value]

    # 2. Swap the old target card back, or clear the source slot
    if target_item is not None:
        source_result = deck_rules.set_slot(source_deck, source_slot_index, target_item)
    else:
        source_result = deck_rules.clear_slot(source_deck, source_slot_index)
    if not source_result.success or source_result.data is None:
        return source_result.propagate(ErrorCode.SOURCE_FAIL)  # type: ignore[return-value]

    return OperationResult.ok(
        _replace(
            decks,
            {target_deck_index: target_result.data, source_deck_index: source_result.data},
        )
    )


def move_spellcaster_between_decks(
    decks: TeamDecks,
    source_deck_index: int,
    target_deck_index: int,
) -> TeamResult:
    """
    Move a spellcaster to another deck, swapping if the target already has one.

    Fails only with INVALID_DECK or EMPTY_SOURCE.
    """
    if (error := _check_team(decks, source_deck_index, target_deck_index)) is not None:
        return error

    source_deck = decks[source_deck_index]
    target_deck = decks[target_deck_index]
    source_spellcaster = source_deck.spellcaster
    target_spellcaster = target_deck.spellcaster

    if source_spellcaster is None:
        return OperationResult.fail(ErrorCode.EMPTY_SOURCE, "No spellcaster at source")

    if source_deck_index == target_deck_index:
        return OperationResult.ok(tuple(decks))  # type: ignore[arg-type]

    target_result = deck_rules.set_spellcaster(target_deck, source_spellcaster)
    if not target_result.success or target_result.data is None:
        return target_result.propagate(ErrorCode.MOVE_FAILED)  # type: ignore[return-value]

    if target_spellcaster is not None:
        source_result = deck_rules.set_spellcaster(source_deck, target_spellcaster)
    else:
        source_result = deck_rules.remove_spellcaster(source_deck)
    if not source_result.success or source_result.data is None:
        return source_result.propagate(ErrorCode.SOURCE_FAIL)  # type: ignore[return-value]

    return OperationResult.ok(
        _replace(
            decks,
            {target_deck_index: target_result.data, source_deck_index: source_result.data},
        )
    )
