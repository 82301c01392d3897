"""
Deck completeness validation.

This is advisory: a deck that fails validation can still be edited, saved
and shared. The builder shows the errors as warnings.
"""

from dataclasses import dataclass, field

from spellforge.models.deck import TITAN_SLOT_INDEX, UNIT_SLOT_COUNT, Deck

LOW_RANKS = frozenset({"I", "II"})

MISSING_UNITS = "Must have 4 Units"
MISSING_TITAN = "Must have 1 Titan"
MISSING_SPELLCASTER = "Select a Spellcaster"
MISSING_RANK_1_OR_2 = "Must include at least 1 Rank I or II Creature"
NO_CREATURES = "Deck must include at least 1 Creature (cannot be all Spells/Buildings)"


@dataclass
class DeckStats:
    """Counts used by validation and the builder's summary panel."""

    unit_count: int = 0
    titan_count: int = 0
    has_spellcaster: bool = False
    rank1or2_count: int = 0
    rank1or2_creature_count: int = 0
    creature_count: int = 0
    kind_counts: dict[str, int] = field(default_factory=dict)


@dataclass
class DeckValidation:
    """Result of validating a deck."""

    is_valid: bool
    errors: list[str]
    stats: DeckStats


def deck_stats(deck: Deck) -> DeckStats:
    stats = DeckStats(has_spellcaster=deck.spellcaster is not None)

    for slot in deck.slots:
        card = slot.occupant
        if card is None:
            continue
        stats.kind_counts[card.kind.value] = stats.kind_counts.get(card.kind.value, 0) + 1

        if slot.index < UNIT_SLOT_COUNT:
            stats.unit_count += 1
            if card.is_creature:
                stats.creature_count += 1
            if not card.is_titan and card.rank in LOW_RANKS:
                stats.rank1or2_count += 1
                if card.is_creature:
                    stats.rank1or2_creature_count += 1
        elif slot.index == TITAN_SLOT_INDEX:
            stats.titan_count += 1

    return stats


def validate_deck(deck: Deck) -> DeckValidation:
    """
    Check whether a deck is ready to play.

    Also reports occupants whose kind does not fit their slot. The rules
    engine never produces such states, but decks decoded from older links
    can contain them.
    """
    stats = deck_stats(deck)
    errors: list[str] = []

    for slot in deck.slots:
        if slot.occupant is not None and not slot.accepts(slot.occupant):
            errors.append(f"Slot {slot.index + 1} holds a card of the wrong kind")

    if stats.unit_count < UNIT_SLOT_COUNT:
        errors.append(MISSING_UNITS)
    if not stats.titan_count:
        errors.append(MISSING_TITAN)
    if not stats.has_spellcaster:
        errors.append(MISSING_SPELLCASTER)

    if stats.unit_count == UNIT_SLOT_COUNT and stats.rank1or2_creature_count == 0:
        errors.append(MISSING_RANK_1_OR_2)
    if stats.unit_count == UNIT_SLOT_COUNT and stats.creature_count == 0:
        errors.append(NO_CREATURES)

    return DeckValidation(is_valid=not errors, errors=errors, stats=stats)
