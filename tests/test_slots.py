"""Tests for roster-position parsing and lineup data types."""

import pytest
from lineup_engine.errors import InvalidSlotDefinition
from lineup_engine.models.lineup import Player, Position, SlotKind, round_points
from lineup_engine.models.slots import (
    FLEX_POSITIONS,
    SUPER_FLEX_POSITIONS,
    parse_slot,
    parse_slots,
)


class TestParseSlot:

    @pytest.mark.parametrize("code,position", [
        ("QB", Position.QB),
        ("rb", Position.RB),
        ("K", Position.K),
        ("DEF", Position.DEF),
        ("DST", Position.DEF),
        ("LB", Position.LB),
    ])
    def test_fixed_slots(self, code, position):
        slot = parse_slot(code)
        assert slot.kind == SlotKind.FIXED
        assert slot.accepted_positions == frozenset({position})

    def test_flex(self):
        slot = parse_slot("FLEX")
        assert slot.kind == SlotKind.FLEX
        assert slot.accepted_positions == FLEX_POSITIONS

    def test_narrow_flex_codes(self):
        assert parse_slot("WRRB_FLEX").accepted_positions == frozenset({Position.WR, Position.RB})
        assert parse_slot("REC_FLEX").accepted_positions == frozenset({Position.WR, Position.TE})
        assert parse_slot("IDP_FLEX").kind == SlotKind.FLEX

    def test_super_flex(self):
        slot = parse_slot("SUPER_FLEX")
        assert slot.kind == SlotKind.SUPER_FLEX
        assert slot.accepted_positions == SUPER_FLEX_POSITIONS
        assert Position.K not in slot.accepted_positions

    @pytest.mark.parametrize("code", ["BN", "IR", "TAXI"])
    def test_bench_codes(self, code):
        slot = parse_slot(code)
        assert slot.is_bench
        assert slot.accepted_positions == frozenset()

    @pytest.mark.parametrize("code", ["", "  ", "GOALIE", None])
    def test_invalid_codes(self, code):
        with pytest.raises(InvalidSlotDefinition):
            parse_slot(code)

    def test_parse_slots_keeps_order(self):
        codes = ["QB", "RB", "FLEX", "SUPER_FLEX", "BN"]
        assert [s.code for s in parse_slots(codes)] == codes


class TestPlayerModel:

    def test_primary_position_always_eligible(self):
        player = Player(player_id="1", position="WR", eligible_positions={"RB"})
        assert player.eligible_positions == frozenset({Position.WR, Position.RB})

    def test_player_is_immutable(self):
        player = Player(player_id="1", position="QB", projected_points=10.0)
        with pytest.raises(Exception):
            player.projected_points = 50.0

    def test_slot_accepts(self):
        player = Player(player_id="1", position="TE")
        assert parse_slot("FLEX").accepts(player)
        assert not parse_slot("WRRB_FLEX").accepts(player)

    def test_round_points(self):
        assert round_points(12.3456) == 12.35
        assert round_points(12.3456, 1) == 12.3
