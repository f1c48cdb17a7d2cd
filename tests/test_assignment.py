"""Tests for the lineup assignment engine."""

import pytest
from lineup_engine.errors import DuplicatePlayer, InvalidProjection, InvalidSlotDefinition
from lineup_engine.models.assignment import assign, diff, group_by_position
from lineup_engine.models.lineup import Player, PlayerStatus, Position, Slot, SlotKind
from lineup_engine.models.slots import parse_slots


def make_player(player_id, position, points, status=PlayerStatus.ACTIVE, eligible=()):
    return Player(
        player_id=player_id,
        position=position,
        eligible_positions=frozenset(eligible),
        status=status,
        projected_points=points,
        name=player_id,
    )


@pytest.fixture
def scenario_a_players():
    return [
        make_player("QB1", "QB", 20.0),
        make_player("RB1", "RB", 15.0),
        make_player("RB2", "RB", 12.0),
        make_player("WR1", "WR", 14.0),
        make_player("RB3", "RB", 8.0),
    ]


class TestAssign:
    """Test greedy slot filling."""

    def test_scenario_a_flex_goes_to_best_remaining(self, scenario_a_players):
        """QB, RB, RB, FLEX, BN fills with QB1, RB1, RB2 and WR1 in FLEX."""
        result = assign(scenario_a_players, parse_slots(["QB", "RB", "RB", "FLEX", "BN"]))

        assert result.lineup.player_ids == ["QB1", "RB1", "RB2", "WR1"]
        assert [e.slot.code for e in result.lineup.entries] == ["QB", "RB", "RB", "FLEX"]
        assert result.total_points == pytest.approx(61.0)
        assert result.changes is None

    def test_accepts_slot_codes(self, scenario_a_players):
        result = assign(scenario_a_players, ["QB", "RB", "RB", "FLEX", "BN"])
        assert result.lineup.player_ids == ["QB1", "RB1", "RB2", "WR1"]

    def test_scenario_b_super_flex_takes_remaining_player(self):
        """With QB1 used, SUPER_FLEX falls through to RB1 instead of staying empty."""
        players = [make_player("QB1", "QB", 20.0), make_player("RB1", "RB", 15.0)]

        result = assign(players, ["QB", "SUPER_FLEX"])

        assert result.lineup.player_ids == ["QB1", "RB1"]
        assert result.total_points == pytest.approx(35.0)

    def test_super_flex_prefers_qb_when_higher(self):
        players = [
            make_player("QB1", "QB", 22.0),
            make_player("QB2", "QB", 18.0),
            make_player("WR1", "WR", 16.0),
        ]

        result = assign(players, ["QB", "WR", "SUPER_FLEX"])

        assert result.lineup.player_ids == ["QB1", "WR1", "QB2"]

    def test_scenario_c_missing_position_leaves_slot_empty(self):
        """No active TE: the TE slot is empty and contributes nothing."""
        players = [
            make_player("QB1", "QB", 20.0),
            make_player("TE1", "TE", 9.0, status=PlayerStatus.OUT),
        ]

        result = assign(players, ["QB", "TE"])

        assert result.lineup.player_ids == ["QB1", None]
        assert len(result.lineup.empty_slots) == 1
        assert result.lineup.empty_slots[0].slot.code == "TE"
        assert result.total_points == pytest.approx(20.0)

    def test_inactive_players_are_excluded(self):
        players = [
            make_player("RB1", "RB", 25.0, status=PlayerStatus.INJURED_RESERVE),
            make_player("RB2", "RB", 10.0, status=PlayerStatus.INACTIVE),
            make_player("RB3", "RB", 5.0),
        ]

        result = assign(players, ["RB", "RB"])

        assert result.lineup.player_ids == ["RB3", None]

    def test_bench_slots_are_skipped(self, scenario_a_players):
        result = assign(scenario_a_players, ["BN", "QB", "BN", "IR", "TAXI"])

        assert len(result.lineup.entries) == 1
        assert result.lineup.entries[0].index == 0
        assert result.lineup.player_ids == ["QB1"]

    def test_tie_break_prefers_earlier_input(self):
        """Equal projections: the player listed first wins."""
        players = [
            make_player("WR_A", "WR", 10.0),
            make_player("WR_B", "WR", 10.0),
        ]

        assert assign(players, ["WR"]).lineup.player_ids == ["WR_A"]
        assert assign(list(reversed(players)), ["WR"]).lineup.player_ids == ["WR_B"]

    def test_tie_break_across_flex_positions(self):
        players = [
            make_player("TE1", "TE", 11.0),
            make_player("RB1", "RB", 11.0),
            make_player("WR1", "WR", 11.0),
        ]

        result = assign(players, ["FLEX"])

        assert result.lineup.player_ids == ["TE1"]

    def test_multi_position_player_used_once(self):
        """A player eligible at two positions fills only one slot."""
        players = [
            make_player("X", "RB", 18.0, eligible={"WR"}),
            make_player("WR1", "WR", 9.0),
        ]

        result = assign(players, ["RB", "WR"])

        assert result.lineup.player_ids == ["X", "WR1"]

    def test_order_dependence_is_preserved(self):
        """A flex declared first can take the player a later fixed slot needed."""
        players = [
            make_player("RB1", "RB", 20.0),
            make_player("WR1", "WR", 10.0),
        ]

        result = assign(players, ["FLEX", "RB"])

        assert result.lineup.player_ids == ["RB1", None]
        assert result.total_points == pytest.approx(20.0)

    def test_total_is_exact_sum(self):
        players = [
            make_player("QB1", "QB", 17.333),
            make_player("RB1", "RB", 12.4449),
            make_player("WR1", "WR", 0.005),
        ]

        result = assign(players, ["QB", "RB", "WR", "TE"])

        assert result.total_points == 17.333 + 12.4449 + 0.005
        assert result.total_points == result.lineup.total_points

    def test_no_double_booking_and_slot_bound(self, scenario_a_players):
        slots = ["QB", "RB", "RB", "FLEX", "SUPER_FLEX", "FLEX", "WR", "BN", "BN"]

        result = assign(scenario_a_players, slots)

        filled = [pid for pid in result.lineup.player_ids if pid is not None]
        assert len(filled) == len(set(filled))
        assert len(result.lineup.entries) == 7
        assert len(filled) <= 7

    def test_deterministic(self, scenario_a_players):
        slots = ["QB", "RB", "RB", "FLEX", "SUPER_FLEX", "TE", "BN"]

        first = assign(scenario_a_players, slots)
        second = assign(scenario_a_players, slots)

        assert first == second
        assert first.lineup.player_ids == second.lineup.player_ids

    def test_inputs_not_mutated(self, scenario_a_players):
        snapshot = list(scenario_a_players)
        slots = parse_slots(["QB", "FLEX"])

        assign(scenario_a_players, slots)

        assert scenario_a_players == snapshot
        assert [s.code for s in slots] == ["QB", "FLEX"]

    def test_empty_pool(self):
        result = assign([], ["QB", "RB", "BN"])

        assert result.lineup.player_ids == [None, None]
        assert result.total_points == 0.0

    def test_with_actual_lineup_computes_changes(self, scenario_a_players):
        result = assign(scenario_a_players, ["QB", "RB"], actual=["QB1", "RB2"])

        assert len(result.changes) == 1
        assert result.changes[0].index == 1
        assert result.changes[0].suggested.player_id == "RB1"
        assert result.changes[0].point_gain == pytest.approx(3.0)


class TestAssignValidation:
    """Malformed input fails before any assignment work."""

    def test_negative_projection(self):
        players = [make_player("QB1", "QB", -1.0)]
        with pytest.raises(InvalidProjection) as exc_info:
            assign(players, ["QB"])
        assert exc_info.value.player_id == "QB1"

    def test_nan_projection(self):
        players = [make_player("QB1", "QB", float("nan"))]
        with pytest.raises(InvalidProjection):
            assign(players, ["QB"])

    def test_negative_projection_on_inactive_player_still_fails(self):
        players = [make_player("QB1", "QB", -3.0, status=PlayerStatus.OUT)]
        with pytest.raises(InvalidProjection):
            assign(players, ["QB"])

    def test_duplicate_player(self):
        players = [make_player("QB1", "QB", 10.0), make_player("QB1", "QB", 12.0)]
        with pytest.raises(DuplicatePlayer):
            assign(players, ["QB"])

    def test_unknown_slot_code(self):
        with pytest.raises(InvalidSlotDefinition):
            assign([make_player("QB1", "QB", 10.0)], ["QB", "GOALIE"])

    def test_fixed_slot_with_two_positions(self):
        slot = Slot(code="QB", kind=SlotKind.FIXED,
                    accepted_positions=frozenset({Position.QB, Position.RB}))
        with pytest.raises(InvalidSlotDefinition):
            assign([make_player("QB1", "QB", 10.0)], [slot])

    def test_flex_slot_without_positions(self):
        slot = Slot(code="FLEX", kind=SlotKind.FLEX)
        with pytest.raises(InvalidSlotDefinition):
            assign([], [slot])

    def test_unrecognized_kind(self):
        slot = Slot.model_construct(code="ODD", kind="odd",
                                    accepted_positions=frozenset({Position.QB}))
        with pytest.raises(InvalidSlotDefinition):
            assign([], [slot])

    def test_validation_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            assign([], ["NOPE"])


class TestGroupByPosition:

    def test_groups_sorted_best_first_with_stable_ties(self):
        players = [
            make_player("RB1", "RB", 8.0),
            make_player("RB2", "RB", 12.0),
            make_player("RB3", "RB", 8.0),
            make_player("FLEXY", "WR", 9.0, eligible={"RB"}),
        ]

        groups = group_by_position(players)

        assert [c[2].player_id for c in groups[Position.RB]] == ["RB2", "FLEXY", "RB1", "RB3"]
        assert [c[2].player_id for c in groups[Position.WR]] == ["FLEXY"]


class TestDiff:
    """Test index-aligned lineup comparison."""

    def test_identical_lineups_have_no_changes(self, scenario_a_players):
        result = assign(scenario_a_players, ["QB", "RB", "RB", "FLEX", "TE"])

        assert diff(result.lineup.player_ids, result.lineup, scenario_a_players) == []

    def test_scenario_d_point_gain_uses_current_projection(self):
        """actual=[QB2, RB1] vs optimal=[QB1, RB1]: one change, gain 20 - 10."""
        players = [
            make_player("QB1", "QB", 20.0),
            make_player("QB2", "QB", 10.0),
            make_player("RB1", "RB", 15.0),
        ]
        optimal = assign(players, ["QB", "RB"]).lineup

        changes = diff(["QB2", "RB1"], optimal, players)

        assert len(changes) == 1
        change = changes[0]
        assert change.index == 0
        assert change.current_player_id == "QB2"
        assert change.current.player_id == "QB2"
        assert change.suggested.player_id == "QB1"
        assert change.point_gain == pytest.approx(10.0)
        assert change.slot.code == "QB"

    def test_empty_actual_slot(self):
        players = [make_player("QB1", "QB", 20.0)]
        optimal = assign(players, ["QB"]).lineup

        changes = diff(["0"], optimal, players)

        assert len(changes) == 1
        assert changes[0].current_player_id is None
        assert changes[0].current is None
        assert changes[0].point_gain == pytest.approx(20.0)

    def test_current_player_outside_pool_counts_as_zero(self):
        players = [make_player("QB1", "QB", 20.0)]
        optimal = assign(players, ["QB"]).lineup

        changes = diff(["GONE"], optimal, players)

        assert changes[0].current_player_id == "GONE"
        assert changes[0].current is None
        assert changes[0].point_gain == pytest.approx(20.0)

    def test_injured_starter_uses_own_projection(self):
        players = [
            make_player("QB1", "QB", 20.0),
            make_player("QB9", "QB", 4.0, status=PlayerStatus.OUT),
        ]
        optimal = assign(players, ["QB"]).lineup

        changes = diff(["QB9"], optimal, players)

        assert changes[0].point_gain == pytest.approx(16.0)

    def test_empty_optimal_slot_emits_no_change(self):
        players = [make_player("QB1", "QB", 20.0)]
        optimal = assign(players, ["QB", "TE"]).lineup

        assert diff(["QB1", "TE7"], optimal, players) == []

    def test_short_actual_lineup(self):
        players = [make_player("QB1", "QB", 20.0), make_player("RB1", "RB", 11.0)]
        optimal = assign(players, ["QB", "RB"]).lineup

        changes = diff(["QB1"], optimal, players)

        assert [c.index for c in changes] == [1]
        assert changes[0].current_player_id is None

    def test_long_actual_lineup_is_truncated(self, caplog):
        players = [make_player("QB1", "QB", 20.0)]
        optimal = assign(players, ["QB"]).lineup

        with caplog.at_level("WARNING"):
            changes = diff(["QB1", "RB1", "WR1"], optimal, players)

        assert changes == []
        assert "ignoring the extra starters" in caplog.text

    def test_diff_is_index_aligned_not_set_based(self):
        """Same players in swapped slots still count as changes."""
        players = [
            make_player("X", "RB", 15.0, eligible={"WR"}),
            make_player("Y", "WR", 10.0, eligible={"RB"}),
        ]
        optimal = assign(players, ["RB", "WR"]).lineup

        changes = diff(["Y", "X"], optimal, players)

        assert [c.index for c in changes] == [0, 1]
        assert changes[0].point_gain == pytest.approx(5.0)
        assert changes[1].point_gain == pytest.approx(-5.0)
