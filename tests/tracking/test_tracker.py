"""Tests for IdentityCloneTracker."""

from graphclone import IdentityCloneTracker


def test_get_returns_none_for_unvisited():
    tracker = IdentityCloneTracker()

    assert tracker.get([]) is None
    assert len(tracker) == 0


def test_put_then_get():
    tracker = IdentityCloneTracker()
    original, clone = [1], [1]

    tracker.put(original, clone)

    assert tracker.get(original) is clone
    assert original in tracker


def test_equal_originals_are_tracked_separately():
    """Tracking is by identity, never by equality."""
    tracker = IdentityCloneTracker()
    first, second = [1, 2], [1, 2]

    tracker.put(first, "first-clone")

    assert first == second
    assert second not in tracker
    assert tracker.get(second) is None


def test_unhashable_originals_are_supported():
    tracker = IdentityCloneTracker()
    original = {"key": []}

    tracker.put(original, {})

    assert original in tracker


def test_put_overwrites_and_keeps_count():
    tracker = IdentityCloneTracker()
    original = object()

    tracker.put(original, "partial")
    tracker.put(original, "final")

    assert tracker.get(original) == "final"
    assert len(tracker) == 1


def test_originals_are_kept_alive():
    """Temporaries cannot recycle the id of a tracked original."""
    tracker = IdentityCloneTracker()
    tracker.put([1, 2, 3], "clone")

    fresh = [4, 5, 6]

    assert tracker.get(fresh) is None
