"""
SpellForge services.

Pure functions over deck/team values: the share codec, the deck rules
engine, drag routing, team movement and catalog resolution.
"""

from spellforge.services.codec import (
    TEAM_V2_PREFIX,
    decode_deck,
    decode_team,
    encode_deck,
    encode_team,
    encode_team_v1,
)
from spellforge.services.deck_rules import (
    clear_slot,
    find_auto_fill_slot,
    quick_add,
    remove_spellcaster,
    set_slot,
    set_spellcaster,
    swap_slots,
)
from spellforge.services.deck_validation import DeckStats, DeckValidation, validate_deck
from spellforge.services.dispatch import apply_deck_action, apply_team_action
from spellforge.services.drag_routing import (
    ActionType,
    DragAction,
    DragSource,
    DragSourceType,
    DropTarget,
    DropTargetType,
    determine_action,
    is_cross_deck,
)
from spellforge.services.reconstruction import (
    Catalog,
    resolve_deck,
    resolve_team,
    serialize_deck,
)
from spellforge.services.team_movement import (
    apply_deck_transaction,
    move_card_between_decks,
    move_spellcaster_between_decks,
)

__all__ = [
    # Codec
    "TEAM_V2_PREFIX",
    "decode_deck",
    "decode_team",
    "encode_deck",
    "encode_team",
    "encode_team_v1",
    # Rules engine
    "clear_slot",
    "find_auto_fill_slot",
    "quick_add",
    "remove_spellcaster",
    "set_slot",
    "set_spellcaster",
    "swap_slots",
    # Drag routing
    "ActionType",
    "DragAction",
    "DragSource",
    "DragSourceType",
    "DropTarget",
    "DropTargetType",
    "determine_action",
    "is_cross_deck",
    # Intent dispatch
    "apply_deck_action",
    "apply_team_action",
    # Team movement
    "apply_deck_transaction",
    "move_card_between_decks",
    "move_spellcaster_between_decks",
    # Catalog resolution
    "Catalog",
    "resolve_deck",
    "resolve_team",
    "serialize_deck",
    # Validation
    "DeckStats",
    "DeckValidation",
    "validate_deck",
]
