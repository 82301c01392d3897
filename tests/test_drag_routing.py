"""Tests for drag/drop intent classification."""

from spellforge.models.card import CardRef
from spellforge.models.deck import SlotKind
from spellforge.services.drag_routing import (
    NO_OP,
    ActionType,
    DragAction,
    DragSource,
    DragSourceType,
    DropTarget,
    DropTargetType,
    determine_action,
    is_compatible,
    is_cross_deck,
)

UNIT_ONLY = frozenset({SlotKind.UNIT})
TITAN_ONLY = frozenset({SlotKind.TITAN})


def browser(item: CardRef) -> DragSource:
    return DragSource(type=DragSourceType.BROWSER_CARD, item=item)


def from_slot(item: CardRef | None, deck_id: str, index: int) -> DragSource:
    return DragSource(
        type=DragSourceType.DECK_SLOT,
        item=item,
        source_deck_id=deck_id,
        source_slot_index=index,
    )


def slot_target(deck_id: str, index: int, accepts: frozenset[SlotKind] = frozenset()) -> DropTarget:
    return DropTarget(
        type=DropTargetType.DECK_SLOT, deck_id=deck_id, slot_index=index, accepts=accepts
    )


class TestCompatibility:
    def test_empty_accepts_means_anything(self, golem: CardRef) -> None:
        assert is_compatible(golem, frozenset())

    def test_matching_kind(self, imp: CardRef, golem: CardRef) -> None:
        assert is_compatible(imp, UNIT_ONLY)
        assert is_compatible(golem, TITAN_ONLY)
        assert not is_compatible(golem, UNIT_ONLY)

    def test_spellcaster_never_fits_a_slot(self, mage: CardRef) -> None:
        assert not is_compatible(mage, UNIT_ONLY | TITAN_ONLY)


class TestCrossDeck:
    def test_different_decks(self) -> None:
        action = DragAction(type=ActionType.MOVE_SLOT, source_deck_id="a", deck_id="b")

        assert is_cross_deck(action)

    def test_same_deck(self) -> None:
        action = DragAction(type=ActionType.MOVE_SLOT, source_deck_id="a", deck_id="a")

        assert not is_cross_deck(action)

    def test_missing_ids(self) -> None:
        assert not is_cross_deck(DragAction(type=ActionType.SET_SLOT, deck_id="a"))


class TestBrowserDrops:
    def test_card_on_slot(self, imp: CardRef) -> None:
        action = determine_action(browser(imp), slot_target("a", 2, UNIT_ONLY))

        assert action == DragAction(type=ActionType.SET_SLOT, item=imp, index=2, deck_id="a")

    def test_incompatible_slot(self, golem: CardRef) -> None:
        assert determine_action(browser(golem), slot_target("a", 0, UNIT_ONLY)) == NO_OP

    def test_spellcaster_on_slot(self, mage: CardRef) -> None:
        assert determine_action(browser(mage), slot_target("a", 0)) == NO_OP

    def test_spellcaster_on_spellcaster_region(self, mage: CardRef) -> None:
        target = DropTarget(type=DropTargetType.SPELLCASTER_SLOT, deck_id="a")

        action = determine_action(browser(mage), target)

        assert action.type == ActionType.SET_SPELLCASTER
        assert action.item == mage
        assert action.deck_id == "a"
        assert action.source_deck_id is None

    def test_unit_on_spellcaster_region(self, imp: CardRef) -> None:
        target = DropTarget(type=DropTargetType.SPELLCASTER_SLOT, deck_id="a")

        assert determine_action(browser(imp), target) == NO_OP

    def test_card_on_header_auto_fills(self, imp: CardRef) -> None:
        target = DropTarget(type=DropTargetType.DECK_HEADER, deck_id="b")

        action = determine_action(browser(imp), target)

        assert action.type == ActionType.SET_SLOT
        assert action.index is None
        assert action.deck_id == "b"

    def test_spellcaster_on_header_is_noop(self, mage: CardRef) -> None:
        """Auto-fill only places slot cards; spellcasters go to the spellcaster region."""
        target = DropTarget(type=DropTargetType.DECK_HEADER, deck_id="b")

        assert determine_action(browser(mage), target) == NO_OP

    def test_card_on_background(self, imp: CardRef) -> None:
        target = DropTarget(type=DropTargetType.DECK_BACKGROUND, deck_id="a")

        assert determine_action(browser(imp), target) == NO_OP

    def test_browser_card_outside_is_noop(self, imp: CardRef) -> None:
        assert determine_action(browser(imp), None) == NO_OP


class TestSlotDrops:
    def test_same_deck_move(self, imp: CardRef) -> None:
        action = determine_action(from_slot(imp, "a", 0), slot_target("a", 3, UNIT_ONLY))

        assert action.type == ActionType.MOVE_SLOT
        assert action.source_index == 0
        assert action.target_index == 3
        assert not is_cross_deck(action)

    def test_cross_deck_move(self, imp: CardRef) -> None:
        action = determine_action(from_slot(imp, "a", 0), slot_target("b", 1, UNIT_ONLY))

        assert action.type == ActionType.MOVE_SLOT
        assert action.source_deck_id == "a"
        assert action.deck_id == "b"
        assert is_cross_deck(action)

    def test_titan_onto_unit_slot(self, golem: CardRef) -> None:
        action = determine_action(from_slot(golem, "a", 4), slot_target("b", 0, UNIT_ONLY))

        assert action == NO_OP

    def test_slot_on_header(self, imp: CardRef) -> None:
        target = DropTarget(type=DropTargetType.DECK_HEADER, deck_id="c")

        action = determine_action(from_slot(imp, "a", 1), target)

        assert action.type == ActionType.MOVE_SLOT
        assert action.target_index is None
        assert action.deck_id == "c"

    def test_drag_to_void_clears(self, imp: CardRef) -> None:
        void = DropTarget(type=DropTargetType.VOID)

        action = determine_action(from_slot(imp, "a", 2), void)

        assert action == DragAction(type=ActionType.CLEAR_SLOT, index=2, deck_id="a")

    def test_drop_outside_clears(self, imp: CardRef) -> None:
        action = determine_action(from_slot(imp, "a", 2), None)

        assert action.type == ActionType.CLEAR_SLOT

    def test_slot_onto_spellcaster_region(self, imp: CardRef) -> None:
        target = DropTarget(type=DropTargetType.SPELLCASTER_SLOT, deck_id="a")

        assert determine_action(from_slot(imp, "a", 0), target) == NO_OP


class TestSpellcasterDrops:
    def test_move_to_other_deck(self, mage: CardRef) -> None:
        source = DragSource(type=DragSourceType.SPELLCASTER_SLOT, item=mage, source_deck_id="a")
        target = DropTarget(type=DropTargetType.SPELLCASTER_SLOT, deck_id="b")

        action = determine_action(source, target)

        assert action.type == ActionType.SET_SPELLCASTER
        assert action.source_deck_id == "a"
        assert action.deck_id == "b"
        assert is_cross_deck(action)

    def test_drag_to_void_removes(self, mage: CardRef) -> None:
        source = DragSource(type=DragSourceType.SPELLCASTER_SLOT, item=mage, source_deck_id="a")

        action = determine_action(source, DropTarget(type=DropTargetType.VOID))

        assert action == DragAction(type=ActionType.REMOVE_SPELLCASTER, deck_id="a")

    def test_spellcaster_onto_card_slot(self, mage: CardRef) -> None:
        source = DragSource(type=DragSourceType.SPELLCASTER_SLOT, item=mage, source_deck_id="a")

        assert determine_action(source, slot_target("a", 0)) == NO_OP


class TestNoSource:
    def test_missing_source(self) -> None:
        assert determine_action(None, slot_target("a", 0)) == NO_OP

    def test_browser_without_item(self) -> None:
        source = DragSource(type=DragSourceType.BROWSER_CARD)

        assert determine_action(source, slot_target("a", 0)) == NO_OP
