from spellforge.models.card import CardKind, CardRef
from spellforge.models.deck import (
    DECK_SLOT_COUNT,
    FIELD_DELIMITER,
    MAX_NAME_LENGTH,
    TEAM_DELIMITER,
    TEAM_SIZE,
    TITAN_SLOT_INDEX,
    DecodedDeck,
    DecodedTeam,
    Deck,
    DeckShapeError,
    DeckSlot,
    SlotKind,
    Team,
    TeamDecks,
    create_empty_deck,
    create_empty_team,
    create_initial_slots,
    create_initial_team_decks,
    sanitize_name,
)
from spellforge.models.failure import (
    ApiResponse,
    FailureDetail,
    FailureKind,
    InvalidTokenError,
    KnownError,
    OutcomeType,
    create_known_failure,
    create_rule_refusal,
    create_success,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)
from spellforge.models.result import ERROR_MESSAGES, ErrorCode, OperationResult

__all__ = [
    "ApiResponse",
    "CardKind",
    "CardRef",
    "DECK_SLOT_COUNT",
    "DecodedDeck",
    "DecodedTeam",
    "Deck",
    "DeckShapeError",
    "DeckSlot",
    "ERROR_MESSAGES",
    "ErrorCode",
    "FIELD_DELIMITER",
    "FailureDetail",
    "FailureKind",
    "InvalidTokenError",
    "KnownError",
    "MAX_NAME_LENGTH",
    "OperationResult",
    "OutcomeType",
    "SlotKind",
    "TEAM_DELIMITER",
    "TEAM_SIZE",
    "TITAN_SLOT_INDEX",
    "Team",
    "TeamDecks",
    "create_empty_deck",
    "create_empty_team",
    "create_initial_slots",
    "create_initial_team_decks",
    "create_known_failure",
    "create_rule_refusal",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
    "is_finalized",
    "sanitize_name",
]
