"""Tests for EdgeHistory: phase machine, activity lookup, neighbor navigation."""

import os
import sys
from datetime import date, datetime, timedelta
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from temporal_graph.core.outcome import TransitionError
from temporal_graph.graph.edge_history import EdgeHistory, LinkPhase, Transition


BASE = date(2024, 1, 1)


def day(n: int) -> date:
    return BASE + timedelta(days=n)


def make_history(*events: int) -> EdgeHistory:
    """History with alternating activations/deactivations on the given days."""
    h = EdgeHistory("alice", "bob")
    for i, n in enumerate(events):
        assert h.record_transition(day(n), i % 2 == 0).accepted
    return h


# ============================================================
# Construction
# ============================================================

def test_new_history_is_empty():
    h = EdgeHistory("alice", "bob")
    assert len(h) == 0
    assert h.phase is LinkPhase.INACTIVE
    assert h.first_transition is None
    assert h.last_transition is None
    assert h.pair == frozenset({"alice", "bob"})
    assert not h.is_active_at(day(0))
    print("  ✓ new_history_is_empty")


def test_needs_two_participants():
    try:
        EdgeHistory("alice", "alice")
        assert False, "Should have raised"
    except ValueError:
        pass
    try:
        EdgeHistory("alice", None)
        assert False, "Should have raised"
    except TypeError:
        pass
    print("  ✓ needs_two_participants")


def test_other_end():
    h = EdgeHistory("alice", "bob")
    assert h.other("alice") == "bob"
    assert h.other("bob") == "alice"
    try:
        h.other("carol")
        assert False, "Should have raised"
    except KeyError:
        pass
    print("  ✓ other_end")


# ============================================================
# Phase Machine
# ============================================================

def test_activate_then_deactivate():
    h = EdgeHistory("alice", "bob")
    assert h.activate(day(1)).accepted
    assert h.phase is LinkPhase.ACTIVE
    assert h.deactivate(day(10)).accepted
    assert h.phase is LinkPhase.INACTIVE
    assert h.transitions == (Transition(day(1), True), Transition(day(10), False))
    print("  ✓ activate_then_deactivate")


def test_double_activation_wrong_phase():
    h = make_history(1)
    result = h.activate(day(2))
    assert not result.accepted
    assert result.error == TransitionError.WRONG_PHASE
    assert len(h) == 1
    print("  ✓ double_activation_wrong_phase")


def test_double_deactivation_wrong_phase():
    h = make_history(1, 5)
    result = h.deactivate(day(6))
    assert result.error == TransitionError.WRONG_PHASE
    assert len(h) == 2
    print("  ✓ double_deactivation_wrong_phase")


def test_deactivate_empty_never_activated():
    h = EdgeHistory("alice", "bob")
    result = h.deactivate(day(1))
    assert not result
    assert result.error == TransitionError.NEVER_ACTIVATED
    assert len(h) == 0
    print("  ✓ deactivate_empty_never_activated")


def test_out_of_order_rejected_log_unchanged():
    h = make_history(5, 10)
    result = h.activate(day(7))
    assert result.error == TransitionError.OUT_OF_ORDER
    assert h.timestamps == [day(5), day(10)]
    print("  ✓ out_of_order_rejected_log_unchanged")


def test_out_of_order_checked_before_phase():
    h = make_history(5)
    result = h.activate(day(1))  # wrong phase AND out of order
    assert result.error == TransitionError.OUT_OF_ORDER
    print("  ✓ out_of_order_checked_before_phase")


def test_same_day_transitions_allowed():
    h = make_history(3, 3, 3)
    assert h.phase is LinkPhase.ACTIVE
    assert h.timestamps == [day(3)] * 3
    print("  ✓ same_day_transitions_allowed")


def test_datetime_truncated_to_day():
    h = EdgeHistory("alice", "bob")
    h.activate(datetime(2024, 1, 2, 15, 30))
    assert h.first_transition == day(1)
    assert h.is_active_at(datetime(2024, 1, 2, 0, 0))
    print("  ✓ datetime_truncated_to_day")


def test_non_date_timestamp_raises():
    h = EdgeHistory("alice", "bob")
    for bad in (None, "2024-01-01", 5):
        try:
            h.activate(bad)
            assert False, "Should have raised"
        except TypeError:
            pass
    assert len(h) == 0
    print("  ✓ non_date_timestamp_raises")


# ============================================================
# Activity
# ============================================================

def test_active_within_interval():
    h = make_history(1, 10)
    assert not h.is_active_at(day(0))
    assert h.is_active_at(day(1))
    assert h.is_active_at(day(5))
    assert h.is_active_at(day(9))
    assert not h.is_active_at(day(10))
    assert not h.is_active_at(day(15))
    print("  ✓ active_within_interval")


def test_active_forever_after_open_activation():
    h = make_history(1, 10, 20)
    assert not h.is_active_at(day(15))
    assert h.is_active_at(day(20))
    assert h.is_active_at(day(10_000))
    print("  ✓ active_forever_after_open_activation")


def test_same_day_establish_and_tear_down_inactive():
    h = make_history(5, 5)
    assert not h.is_active_at(day(5))
    assert not h.is_active_at(day(6))
    print("  ✓ same_day_establish_and_tear_down_inactive")


def test_reestablish_same_day_stays_active():
    h = make_history(1, 5, 5, 9)
    assert h.is_active_at(day(4))
    assert h.is_active_at(day(5))
    assert h.is_active_at(day(8))
    assert not h.is_active_at(day(9))
    print("  ✓ reestablish_same_day_stays_active")


def test_activity_is_derived_after_every_append():
    h = EdgeHistory("alice", "bob")
    h.activate(day(1))
    for n in range(1, 30):
        assert h.is_active_at(day(n))
    h.deactivate(day(10))
    assert h.is_active_at(day(9))
    assert not h.is_active_at(day(29))
    print("  ✓ activity_is_derived_after_every_append")


# ============================================================
# Navigation
# ============================================================

def test_next_transition_after():
    h = make_history(1, 10, 20)
    assert h.next_transition_after(day(0)) == day(1)
    assert h.next_transition_after(day(1)) == day(10)
    assert h.next_transition_after(day(5)) == day(10)
    assert h.next_transition_after(day(10)) == day(20)
    assert h.next_transition_after(day(20)) is None
    assert h.next_transition_after(day(99)) is None
    assert EdgeHistory("a", "b").next_transition_after(day(0)) is None
    print("  ✓ next_transition_after")


def test_previous_transition_before():
    h = make_history(1, 10, 20)
    assert h.previous_transition_before(day(0)) is None
    assert h.previous_transition_before(day(1)) is None
    assert h.previous_transition_before(day(5)) == day(1)
    assert h.previous_transition_before(day(10)) == day(1)
    assert h.previous_transition_before(day(15)) == day(10)
    assert h.previous_transition_before(day(20)) == day(10)
    assert h.previous_transition_before(day(99)) == day(20)
    print("  ✓ previous_transition_before")


def test_previous_transition_skips_ties():
    h = make_history(1, 5, 5, 9)
    assert h.previous_transition_before(day(5)) == day(1)
    assert h.previous_transition_before(day(6)) == day(5)
    print("  ✓ previous_transition_skips_ties")


def test_transitions_from_includes_ties_and_start():
    h = make_history(1, 5, 5, 9)
    ahead = h.transitions_from(day(5))
    assert [t.timestamp for t in ahead] == [day(5), day(5), day(9)]
    assert [t.activates for t in ahead] == [False, True, False]
    assert h.transitions_from(day(10)) == []
    print("  ✓ transitions_from_includes_ties_and_start")


if __name__ == "__main__":
    print("Testing EdgeHistory...\n")

    print("Construction:")
    test_new_history_is_empty()
    test_needs_two_participants()
    test_other_end()

    print("\nPhase machine:")
    test_activate_then_deactivate()
    test_double_activation_wrong_phase()
    test_double_deactivation_wrong_phase()
    test_deactivate_empty_never_activated()
    test_out_of_order_rejected_log_unchanged()
    test_out_of_order_checked_before_phase()
    test_same_day_transitions_allowed()
    test_datetime_truncated_to_day()
    test_non_date_timestamp_raises()

    print("\nActivity:")
    test_active_within_interval()
    test_active_forever_after_open_activation()
    test_same_day_establish_and_tear_down_inactive()
    test_reestablish_same_day_stays_active()
    test_activity_is_derived_after_every_append()

    print("\nNavigation:")
    test_next_transition_after()
    test_previous_transition_before()
    test_previous_transition_skips_ties()
    test_transitions_from_includes_ties_and_start()

    print("\n" + "=" * 50)
    print("ALL EDGE HISTORY TESTS PASSED ✓")
    print("=" * 50)
