"""
Apply resolved drag intents to deck state.

``apply_deck_action`` handles the solo builder (one deck).
``apply_team_action`` handles the team builder, routing same-deck intents to
the rules engine and cross-deck intents to team movement.
"""

import logging

from spellforge.models.deck import Deck, TeamDecks
from spellforge.models.result import ErrorCode, OperationResult
from spellforge.services import deck_rules, team_movement
from spellforge.services.drag_routing import ActionType, DragAction, is_cross_deck

logger = logging.getLogger(__name__)


def apply_deck_action(deck: Deck, action: DragAction) -> OperationResult[Deck]:
    """Apply a single-deck intent. Cross-deck intents are rejected."""
    if action.type == ActionType.NO_OP:
        return OperationResult.ok(deck)

    if is_cross_deck(action):
        return OperationResult.fail(ErrorCode.INVALID_DECK, "Cross-deck moves need a team")

    if action.type == ActionType.SET_SLOT:
        if action.item is None:
            return OperationResult.fail(ErrorCode.EMPTY_SOURCE)
        index = action.index
        if index is None:
            index = deck_rules.find_auto_fill_slot(deck, action.item)
            if index is None:
                return OperationResult.fail(ErrorCode.DECK_FULL)
        return deck_rules.set_slot(deck, index, action.item)

    if action.type == ActionType.CLEAR_SLOT:
        if action.index is None:
            return OperationResult.fail(ErrorCode.INVALID_INDEX)
        return deck_rules.clear_slot(deck, action.index)

    if action.type == ActionType.SET_SPELLCASTER:
        if action.item is None:
            return OperationResult.fail(ErrorCode.EMPTY_SOURCE)
        return deck_rules.set_spellcaster(deck, action.item)

    if action.type == ActionType.REMOVE_SPELLCASTER:
        return deck_rules.remove_spellcaster(deck)

    if action.type == ActionType.MOVE_SLOT:
        if action.source_index is None:
            return OperationResult.fail(ErrorCode.INVALID_INDEX)
        target_index = action.target_index
        if target_index is None:
            # Dropping on your own deck's header leaves the card where it is
            return OperationResult.ok(deck)
        return deck_rules.swap_slots(deck, action.source_index, target_index)

    return OperationResult.fail(ErrorCode.MOVE_FAILED, f"Unsupported action {action.type}")


def _deck_index(decks: TeamDecks, deck_id: str | None) -> int | None:
    for i, deck in enumerate(decks):
        if deck.id == deck_id:
            return i
    return None


def apply_team_action(decks: TeamDecks, action: DragAction) -> OperationResult[TeamDecks]:
    """
    Apply an intent to a team's decks.

    Deck ids in the action are resolved against ``decks``. An unknown id
    fails with INVALID_DECK.
    """
    if action.type == ActionType.NO_OP:
        return OperationResult.ok(tuple(decks))  # type: ignore[arg-type]

    if action.type == ActionType.MOVE_SLOT:
        return _apply_team_move(decks, action)

    if action.type == ActionType.SET_SPELLCASTER and is_cross_deck(action):
        source = _deck_index(decks, action.source_deck_id)
        target = _deck_index(decks, action.deck_id)
        if source is None or target is None:
            return OperationResult.fail(ErrorCode.INVALID_DECK)
        return team_movement.move_spellcaster_between_decks(decks, source, target)

    deck_index = _deck_index(decks, action.deck_id)
    if deck_index is None:
        logger.debug("Intent %s targets unknown deck %s", action.type.value, action.deck_id)
        return OperationResult.fail(ErrorCode.INVALID_DECK)

    return team_movement.apply_deck_transaction(
        decks, deck_index, lambda deck: apply_deck_action(deck, action)
    )


def _apply_team_move(decks: TeamDecks, action: DragAction) -> OperationResult[TeamDecks]:
    source = _deck_index(decks, action.source_deck_id)
    # Absent target deck means the same deck
    target = source if action.deck_id is None else _deck_index(decks, action.deck_id)
    if source is None or target is None:
        return OperationResult.fail(ErrorCode.INVALID_DECK)
    if action.source_index is None:
        return OperationResult.fail(ErrorCode.INVALID_INDEX)

    target_index = action.target_index
    if target_index is None:
        if source == target:
            return OperationResult.ok(tuple(decks))  # type: ignore[arg-type]
        slots = decks[source].slots
        if not 0 <= action.source_index < len(slots):
            return OperationResult.fail(ErrorCode.INVALID_INDEX)
        card = slots[action.source_index].occupant
        if card is None:
            return OperationResult.fail(ErrorCode.EMPTY_SOURCE)
        target_index = deck_rules.find_auto_fill_slot(decks[target], card)
        if target_index is None:
            return OperationResult.fail(ErrorCode.DECK_FULL)

    return team_movement.move_card_between_decks(
        decks, source, action.source_index, target, target_index
    )
