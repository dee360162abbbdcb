import pytest
from unittest.mock import MagicMock

from nodeio.core.commands import (
    CompositeCommand, SetPropertyCommand, UndoableCommand, UndoJournal, UndoManager
)
from nodeio.core.config import ConfigManager


class Target:
    def __init__(self):
        self.value = 0


class FailingCommand(UndoableCommand):
    def __init__(self, fail_on: str):
        self.fail_on = fail_on

    def execute(self):
        if self.fail_on == "execute":
            raise RuntimeError("execute failed")

    def undo(self):
        if self.fail_on == "undo":
            raise RuntimeError("undo failed")


# --- UndoManager ---
def test_push_executes_and_records():
    target = Target()
    mgr = UndoManager()
    mgr.push(SetPropertyCommand(target, "value", 5))
    assert target.value == 5
    assert mgr.can_undo and not mgr.can_redo
    assert mgr.undo_description == "Set value to 5"


def test_undo_redo_cycle():
    target = Target()
    mgr = UndoManager()
    mgr.push(SetPropertyCommand(target, "value", 1))
    mgr.push(SetPropertyCommand(target, "value", 2))

    assert mgr.undo()
    assert target.value == 1
    assert mgr.undo()
    assert target.value == 0
    assert not mgr.undo()

    assert mgr.redo()
    assert target.value == 1
    assert mgr.redo_description == "Set value to 2"


def test_new_push_clears_redo():
    target = Target()
    mgr = UndoManager()
    mgr.push(SetPropertyCommand(target, "value", 1))
    mgr.undo()
    mgr.push(SetPropertyCommand(target, "value", 3))
    assert not mgr.can_redo


def test_max_history_enforced():
    target = Target()
    mgr = UndoManager(max_history=2)
    for i in range(1, 5):
        mgr.push(SetPropertyCommand(target, "value", i))
    assert mgr.undo_count == 2
    mgr.undo()
    mgr.undo()
    assert target.value == 2


def test_state_signals():
    mgr = UndoManager()
    can_undo = MagicMock()
    state = MagicMock()
    mgr.can_undo_changed.connect(can_undo)
    mgr.state_changed.connect(state)

    mgr.push(SetPropertyCommand(Target(), "value", 1))
    mgr.push(SetPropertyCommand(Target(), "value", 2))
    can_undo.assert_called_once_with(True)
    assert state.call_count == 2


def test_failed_execute_not_recorded():
    mgr = UndoManager()
    with pytest.raises(RuntimeError):
        mgr.push(FailingCommand("execute"))
    assert not mgr.can_undo


def test_failed_undo_stays_on_stack():
    mgr = UndoManager()
    mgr.push(FailingCommand("undo"))
    with pytest.raises(RuntimeError):
        mgr.undo()
    assert mgr.can_undo


def test_from_config():
    config = ConfigManager(filepath=None)
    config.update("undo", "max_history", 7)
    assert UndoManager.from_config(config).max_history == 7


def test_manager_satisfies_journal_protocol():
    assert isinstance(UndoManager(), UndoJournal)


# --- CompositeCommand ---
def test_composite_undo_in_reverse_order():
    order = []

    class Step(UndoableCommand):
        def __init__(self, name):
            self.name = name

        def execute(self):
            order.append(f"do {self.name}")

        def undo(self):
            order.append(f"undo {self.name}")

    ca = CompositeCommand(description="Batch")
    ca.append(Step("a"))
    ca.append(Step("b"))
    mgr = UndoManager()
    mgr.push(ca)
    mgr.undo()

    assert order == ["do a", "do b", "undo b", "undo a"]
    assert len(ca) == 2 and not ca.is_empty()
    assert mgr.redo_description == "Batch"


def test_set_property_explicit_old_value_none():
    target = Target()
    target.value = 9
    cmd = SetPropertyCommand(target, "value", 1, old_value=None)
    cmd.execute()
    cmd.undo()
    assert target.value is None
