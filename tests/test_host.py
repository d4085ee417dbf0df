"""Tests for host collaborators: command registry and panel tracker."""

import pytest

from doc_panels.app.host import CommandRegistry
from doc_panels.app.tracker import PanelTracker
from doc_panels.core.errors import DuplicateCommandError, UnknownCommandError
from doc_panels.core.lifecycle import PanelInstance
from tests.harness import make_descriptor


class TestCommandRegistry:
    def test_execute_in_call_order(self):
        registry = CommandRegistry()
        calls = []
        registry.add_command("a", "A", lambda: calls.append("a"))
        registry.add_command("b", "B", lambda: calls.append("b"))
        registry.execute("b")
        registry.execute("a")
        registry.execute("b")
        assert calls == ["b", "a", "b"]

    def test_duplicate_rejected_and_first_kept(self):
        registry = CommandRegistry()
        registry.add_command("a", "A", lambda: "first")
        with pytest.raises(DuplicateCommandError):
            registry.add_command("a", "A2", lambda: "second")
        assert registry.execute("a") == "first"
        assert [c.label for c in registry.commands()] == ["A"]

    def test_unknown_command(self):
        registry = CommandRegistry()
        assert not registry.has_command("nope")
        with pytest.raises(UnknownCommandError, match="nope"):
            registry.execute("nope")


class TestPanelTracker:
    def test_add_is_idempotent_and_notifies(self):
        tracker = PanelTracker("ns")
        changes = []
        tracker.on_change(lambda t: changes.append(len(t)))
        instance = PanelInstance(make_descriptor())
        assert tracker.add(instance) is True
        assert tracker.add(instance) is False
        assert changes == [1]
        assert list(tracker) == [instance]

    def test_dispose_forgets_and_clears_current(self):
        tracker = PanelTracker("ns")
        instance = PanelInstance(make_descriptor())
        tracker.add(instance)
        tracker.set_current(instance)
        instance.dispose()
        assert not tracker.has(instance)
        assert tracker.current is None

    def test_set_current_ignores_untracked(self):
        tracker = PanelTracker("ns")
        tracker.set_current(PanelInstance(make_descriptor()))
        assert tracker.current is None

    def test_set_current_same_instance_does_not_notify(self):
        tracker = PanelTracker("ns")
        instance = PanelInstance(make_descriptor())
        tracker.add(instance)
        changes = []
        tracker.on_change(lambda t: changes.append(t.current))
        tracker.set_current(instance)
        tracker.set_current(instance)
        assert changes == [instance]
