import pytest

from datahandler.manager import (
    Manager,
    ManagerEvent,
    UnknownVariableError,
    get_instance,
)
from datahandler.variable import Naming, Variable


@pytest.fixture
def manager():
    return Manager()


@pytest.fixture
def events(manager):
    seen = []
    for event in ManagerEvent:
        manager.connect(event, lambda event=event: seen.append(event))
    return seen


def test_first_empty_variable_gets_one_zero_measurement(manager):
    assert manager.add_variable(Variable())
    assert manager.variables_count() == 1
    assert manager.measurements_count() == 1
    assert manager.variable(0).measurements == [0.0]


def test_new_variables_are_padded_to_common_length(manager):
    manager.add_variable(Variable([5, 4, 3], Naming("Bar")))
    manager.add_variable(Variable([1], Naming("Var")))
    assert manager.measurements_count() == 3
    assert manager.variable(1).measurements == [1.0, 0.0, 0.0]


def test_longer_variable_pads_the_earlier_ones(manager):
    manager.add_variable(Variable([1], Naming("a")))
    manager.add_variable(Variable([1, 2, 3], Naming("b")))
    assert all(v.measurements_count() == 3 for v in manager)


def test_duplicate_title_is_refused(manager):
    assert manager.add_variable(Variable([1], Naming("Bar")))
    assert not manager.add_variable(Variable([2], Naming("Bar")))
    assert manager.variables_count() == 1


def test_title_matching_existing_tag_is_refused(manager):
    manager.add_variable(Variable([1], Naming("Bar", "b")))
    assert not manager.add_variable(Variable([2], Naming("b")))
    assert manager.variables_count() == 1


def test_unnamed_variables_may_repeat(manager):
    manager.create_new_variable()
    manager.create_new_variable()
    assert manager.variables_count() == 2
    assert [v.naming.title for v in manager] == ["unnamed", "unnamed"]


def test_add_variable_stores_a_copy(manager):
    original = Variable([1, 2], Naming("Bar"))
    manager.add_variable(original)
    original.measurements.append(3.0)
    assert manager.find("Bar").measurements == [1.0, 2.0]


def test_events_for_first_variable_with_measurements(manager, events):
    manager.add_variable(Variable([1, 2], Naming("Bar")))
    assert events == [
        ManagerEvent.MEASUREMENTS_ADDED,
        ManagerEvent.MEASUREMENTS_ADDED,
        ManagerEvent.VARIABLE_ADDED,
    ]


def test_add_measurements_on_empty_manager_creates_variable(manager, events):
    manager.add_measurements()
    assert manager.variables_count() == 1
    assert manager.measurements_count() == 1
    assert events == [
        ManagerEvent.MEASUREMENTS_ADDED,
        ManagerEvent.VARIABLE_ADDED,
        ManagerEvent.MEASUREMENTS_ADDED,
    ]


def test_add_measurements_appends_zero_everywhere(manager):
    manager.add_variable(Variable([1], Naming("a")))
    manager.add_variable(Variable([2], Naming("b")))
    manager.add_measurements()
    assert [v.measurements for v in manager] == [[1.0, 0.0], [2.0, 0.0]]


def test_delete_measurements_removes_row(manager, events):
    manager.add_variable(Variable([5, 4, 3], Naming("Bar")))
    events.clear()
    manager.delete_measurements(1)
    assert manager.variable(0).measurements == [5.0, 3.0]
    assert events == [ManagerEvent.MEASUREMENTS_DELETED]


def test_delete_measurements_when_empty_does_nothing(manager, events):
    manager.delete_measurements()
    assert events == []
    assert manager.measurements_count() == 0


def test_delete_last_variable_drops_measurements(manager, events):
    manager.add_variable(Variable([1, 2], Naming("Bar")))
    events.clear()
    manager.delete_variable(0)
    assert manager.variables_count() == 0
    assert events == [
        ManagerEvent.MEASUREMENTS_DELETED,
        ManagerEvent.MEASUREMENTS_DELETED,
        ManagerEvent.VARIABLE_DELETED,
    ]


def test_delete_variable_by_index(manager):
    manager.add_variable(Variable([1], Naming("a")))
    manager.add_variable(Variable([2], Naming("b")))
    manager.delete_variable(0)
    assert [v.naming.title for v in manager] == ["b"]


def test_clear_empties_manager(manager):
    manager.add_variable(Variable([1, 2], Naming("a")))
    manager.add_variable(Variable([3, 4], Naming("b")))
    manager.clear()
    assert manager.variables_count() == 0
    assert manager.measurements_count() == 0


def test_find_by_title_and_tag(manager):
    manager.add_variable(Variable([1], Naming("Bar", "b")))
    assert manager.find("Bar") is manager.variable(0)
    assert manager.find("b") is manager.variable(0)
    assert manager.exists("b")
    assert not manager.exists("Var")


def test_find_unknown_raises(manager):
    manager.add_variable(Variable([1], Naming("Bar")))
    with pytest.raises(UnknownVariableError):
        manager.find("Var")


def test_variable_returns_live_object(manager):
    manager.add_variable(Variable([1], Naming("Bar")))
    manager.variable(0).measurements[0] = 7.0
    assert manager.find("Bar").measurements == [7.0]


def test_get_instance_is_shared():
    instance = get_instance()
    before = instance.variables_count()
    title = "shared_instance_check"
    assert get_instance().add_variable(Variable([4.0], Naming(title)))
    try:
        assert instance.variables_count() == before + 1
        assert instance.find(title).measurements[0] == 4.0
    finally:
        get_instance().delete_variable(before)
    assert instance.variables_count() == before