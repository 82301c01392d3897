"""
Share codec: Deck/Team state to and from short URL-safe tokens.

Deck token:
    LZ(spellcaster ␟ slot0 ␟ slot1 ␟ slot2 ␟ slot3 ␟ slot4 ␟ name)

Team token, v2 (current):
    "v2~" + LZ(team_name ␟ <7 deck fields> ␟ <7 deck fields> ␟ <7 deck fields>)

Team token, v1 (legacy):
    deck_token ~ deck_token ~ deck_token

``␟`` is the ASCII unit separator (0x1F). LZ is lz-string's
``compressToEncodedURIComponent``, which keeps tokens compatible with the
ones produced by the web client.

INVARIANT: Decoding never raises. Malformed input yields None (deck) or an
empty DecodedTeam (team). The caller decides what to show the user.
"""

import logging
import struct
from collections.abc import Sequence

from lzstring import LZString

from spellforge.models.deck import (
    DECK_SLOT_COUNT,
    FIELD_DELIMITER,
    TEAM_DELIMITER,
    TEAM_SIZE,
    DecodedDeck,
    DecodedTeam,
    Deck,
    sanitize_name,
)

logger = logging.getLogger(__name__)

TEAM_V2_PREFIX = "v2~"

# spellcaster + 5 slots + name
DECK_FIELD_COUNT = DECK_SLOT_COUNT + 2
# Older tokens predate the name field
MIN_DECK_FIELD_COUNT = DECK_SLOT_COUNT + 1


def _to_code_units(text: str) -> str:
    """One character per UTF-16 code unit, the way lz-string counts characters."""
    raw = text.encode("utf-16-le", "surrogatepass")
    return "".join(chr(unit) for unit in struct.unpack(f"<{len(raw) // 2}H", raw))


def _from_code_units(units: str) -> str:
    """Rejoin surrogate pairs. A lone surrogate becomes U+FFFD."""
    return units.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")


def _compress(packed: str) -> str:
    return LZString.compressToEncodedURIComponent(_to_code_units(packed))


def _decompress(token: str) -> str | None:
    """Reverse of _compress. Returns None for anything that does not decompress."""
    try:
        packed = LZString.decompressFromEncodedURIComponent(token)
    except Exception as e:
        # lz-string raises assorted errors on characters outside its alphabet
        logger.debug("Decompression failed: %s", type(e).__name__)
        return None
    if not packed or not isinstance(packed, str):
        return None
    return _from_code_units(packed)


def deck_fields(deck: Deck) -> list[str]:
    """The seven packed fields of a deck, empty strings for missing values."""
    return [
        deck.spellcaster_id or "",
        *(slot_id or "" for slot_id in deck.slot_ids()),
        sanitize_name(deck.name),
    ]


def _fields_to_decoded(parts: Sequence[str]) -> DecodedDeck | None:
    if len(parts) < MIN_DECK_FIELD_COUNT:
        return None
    name = parts[DECK_SLOT_COUNT + 1] if len(parts) > DECK_SLOT_COUNT + 1 else ""
    return DecodedDeck(
        spellcaster_id=parts[0] or None,
        slot_ids=tuple(part or None for part in parts[1 : DECK_SLOT_COUNT + 1]),  # type: ignore[arg-type]
        name=name or None,
    )


# --- Deck ---


def encode_deck(deck: Deck) -> str:
    """Encode a deck into a URL-safe token."""
    return _compress(FIELD_DELIMITER.join(deck_fields(deck)))


def decode_deck(token: str | None) -> DecodedDeck | None:
    """
    Decode a deck token.

    Accepts both the named (7 field) and the older unnamed (6 field) format.
    Returns None for empty, corrupt or truncated tokens.
    """
    if not token:
        return None

    packed = _decompress(token)
    if packed is None:
        return None

    decoded = _fields_to_decoded(packed.split(FIELD_DELIMITER))
    if decoded is None:
        logger.debug("Deck token has too few fields")
    return decoded


# --- Team ---


def encode_team(decks: Sequence[Deck], name: str = "") -> str:
    """
    Encode three decks and a team name using the v2 format.

    All 22 fields are compressed in a single pass, which is noticeably
    shorter than three independent deck tokens.
    """
    if len(decks) != TEAM_SIZE:
        raise ValueError(f"A team has exactly {TEAM_SIZE} decks, got {len(decks)}")

    combined = [sanitize_name(name)]
    for deck in decks:
        combined.extend(deck_fields(deck))

    return TEAM_V2_PREFIX + _compress(FIELD_DELIMITER.join(combined))


def encode_team_v1(decks: Sequence[Deck]) -> str:
    """Encode three decks in the legacy v1 format. No team name support."""
    if len(decks) != TEAM_SIZE:
        raise ValueError(f"A team has exactly {TEAM_SIZE} decks, got {len(decks)}")
    return TEAM_DELIMITER.join(encode_deck(deck) for deck in decks)


def decode_team(token: str | None) -> DecodedTeam:
    """
    Decode a team token in either the v2 or the legacy v1 format.

    Always returns exactly three deck positions; positions that could not be
    decoded are None. Spaces are mapped back to "+" first, since some URL
    handling turns "+" into a space.
    """
    if not token:
        return DecodedTeam()

    clean = token.replace(" ", "+")

    if clean.startswith(TEAM_V2_PREFIX):
        return _decode_team_v2(clean[len(TEAM_V2_PREFIX) :])

    return _decode_team_v1(clean)


def _decode_team_v2(payload: str) -> DecodedTeam:
    packed = _decompress(payload)
    if packed is None:
        logger.warning(
            "team_decode_failed",
            extra={"token_format": "v2", "payload_prefix": payload[:20]},
        )
        return DecodedTeam()

    parts = packed.split(FIELD_DELIMITER)
    team_name = parts[0]
    deck_parts = parts[1:]

    decks: list[DecodedDeck | None] = []
    for i in range(TEAM_SIZE):
        start = i * DECK_FIELD_COUNT
        decks.append(_fields_to_decoded(deck_parts[start : start + DECK_FIELD_COUNT]))

    return DecodedTeam(name=team_name, decks=tuple(decks))  # type: ignore[arg-type]


def _decode_team_v1(token: str) -> DecodedTeam:
    chunks = token.split(TEAM_DELIMITER)[:TEAM_SIZE]
    decks = tuple(decode_deck(chunk) for chunk in chunks)

    if not any(decks):
        logger.warning("team_decode_failed", extra={"token_format": "v1"})

    # DecodedTeam pads to three positions
    return DecodedTeam(name="", decks=decks)  # type: ignore[arg-type]
