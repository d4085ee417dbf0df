"""Tests for CommandBinder: lazy singleton lifecycle per command."""

import pytest

from doc_panels.app.command_binder import CommandBinder
from doc_panels.app.tracker import PanelTracker
from doc_panels.core.errors import DuplicateCommandError
from doc_panels.core.lifecycle import PanelState
from tests.harness import RecordingShell, example_descriptors, make_descriptor, make_host


@pytest.fixture
def shell():
    return RecordingShell()


@pytest.fixture
def host(shell):
    return make_host(shell)


@pytest.fixture
def binder(host):
    b = CommandBinder(host, PanelTracker("test"))
    b.bind_all(example_descriptors())
    return b


class TestBind:
    def test_registers_command_with_label_and_caption(self, binder, host):
        command = host.commands.get("x:open_a")
        assert command.label == "A Docs"
        assert command.caption == "Open documentation"

    def test_nothing_created_until_executed(self, binder, shell):
        assert binder.state_of("x:open_a") is PanelState.UNINITIALIZED
        assert binder.instance_for("x:open_a") is None
        assert shell.attach_calls == []

    def test_duplicate_bind_fails_alone(self, binder, host):
        with pytest.raises(DuplicateCommandError):
            binder.bind(make_descriptor(command_id="x:open_a", title="Impostor"))
        # The first binding is intact.
        assert host.commands.label("x:open_a") == "A Docs"
        assert binder.descriptor("x:open_a").title == "A Docs"
        instance = host.commands.execute("x:open_a")
        assert instance.title == "A Docs"

    def test_collision_with_foreign_command(self, host):
        host.commands.add_command("x:open_a", "Someone else", lambda: None)
        binder = CommandBinder(host, PanelTracker("test"))
        bound, failures = binder.bind_all(example_descriptors())
        assert [d.command_id for d in bound] == ["x:open_b"]
        assert [f.command_id for f in failures] == ["x:open_a"]
        assert host.commands.label("x:open_a") == "Someone else"

    def test_bind_all_continues_after_failure(self, host):
        binder = CommandBinder(host, PanelTracker("test"))
        a, b = example_descriptors()
        bound, failures = binder.bind_all([a, make_descriptor(command_id="x:open_a"), b])
        assert [d.command_id for d in bound] == ["x:open_a", "x:open_b"]
        assert len(failures) == 1


class TestSingleton:
    @pytest.mark.parametrize("n", [1, 2, 5])
    def test_n_invocations_one_instance(self, binder, host, shell, n):
        results = [host.commands.execute("x:open_a") for _ in range(n)]
        instance = results[0]
        assert all(r is instance for r in results)
        assert binder.created_count("x:open_a") == 1
        assert instance.state is PanelState.LIVE
        assert instance.attached
        assert instance.attach_count == 1
        assert len(shell.attach_calls) == 1
        assert instance.activation_count == n
        assert shell.activations == [instance.panel_id] * n

    def test_attaches_to_main_area(self, binder, host, shell):
        instance = host.commands.execute("x:open_a")
        assert shell.attach_calls == [(instance.panel_id, "main")]

    def test_tracked_once(self, binder, host):
        host.commands.execute("x:open_a")
        host.commands.execute("x:open_a")
        assert len(binder.tracker) == 1

    def test_activation_sets_tracker_current(self, binder, host):
        a = host.commands.execute("x:open_a")
        b = host.commands.execute("x:open_b")
        assert binder.tracker.current is b
        host.commands.execute("x:open_a")
        assert binder.tracker.current is a


class TestRecreateAfterDispose:
    def test_new_distinct_instance(self, binder, host, shell):
        first = host.commands.execute("x:open_a")
        shell.close(first.panel_id)
        assert binder.state_of("x:open_a") is PanelState.DISPOSED

        second = host.commands.execute("x:open_a")
        assert second is not first
        assert second.panel_id != first.panel_id
        assert second.state is PanelState.LIVE
        assert second.attached
        assert first.state is PanelState.DISPOSED
        assert binder.created_count("x:open_a") == 2

    def test_rank_unchanged(self, binder, host, shell):
        first = host.commands.execute("x:open_b")
        shell.close(first.panel_id)
        second = host.commands.execute("x:open_b")
        assert second.descriptor is first.descriptor
        assert second.descriptor.rank == 1

    def test_disposed_instance_leaves_tracker(self, binder, host, shell):
        first = host.commands.execute("x:open_a")
        shell.close(first.panel_id)
        assert not binder.tracker.has(first)
        second = host.commands.execute("x:open_a")
        assert binder.tracker.has(second)
        assert len(binder.tracker) == 1

    def test_at_most_one_live_attached(self, binder, host, shell):
        for _ in range(3):
            instance = host.commands.execute("x:open_a")
            host.commands.execute("x:open_a")
            live = [
                i for i in shell.attached.values()
                if i.command_id == "x:open_a" and i.attached and i.is_live
            ]
            assert live == [instance]
            shell.close(instance.panel_id)


def test_example_scenario(binder, host, shell):
    """Invoke open_a twice, open_b once."""
    host.commands.execute("x:open_a")
    host.commands.execute("x:open_a")
    host.commands.execute("x:open_b")

    live = binder.live_instances()
    assert sorted(i.command_id for i in live) == ["x:open_a", "x:open_b"]
    a = binder.instance_for("x:open_a")
    b = binder.instance_for("x:open_b")
    assert (a.attach_count, a.activation_count) == (1, 2)
    assert (b.attach_count, b.activation_count) == (1, 1)
    assert binder.instance_by_panel_id(b.panel_id) is b
