"""Tests for single-record selection."""

from redibo.state.selection import SelectionState
from redibo.vehicles.vehicle_models import CanonicalVehicle


def _fleet(*ids):
    return [CanonicalVehicle(id=i) for i in ids]


def test_select_resolves_against_collection():
    state = SelectionState()
    state.select(7)

    selected = state.current(_fleet(3, 7, 9))

    assert selected is not None
    assert selected.id == 7


def test_no_selection_reads_as_none():
    assert SelectionState().current(_fleet(1, 2)) is None


def test_selection_missing_after_refetch_reads_as_none():
    state = SelectionState()
    state.select(7)

    assert state.current(_fleet(3, 9)) is None


def test_clear():
    state = SelectionState()
    state.select(2)
    state.clear()

    assert state.selected_id is None
    assert state.current(_fleet(2)) is None


def test_prune_drops_stale_id_only():
    state = SelectionState()
    state.select(7)

    state.prune(_fleet(7, 8))
    assert state.selected_id == 7

    state.prune(_fleet(8))
    assert state.selected_id is None


def test_selecting_again_replaces_previous():
    state = SelectionState()
    state.select(1)
    state.select(2)

    assert state.current(_fleet(1, 2)).id == 2
