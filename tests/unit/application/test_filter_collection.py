"""Tests for application/filter_collection.py.

Tests:
- registration and lookup by total key
- finish_creation: dependency validation, cycle rejection, baseline
- update_filter: dependency order, apply on every group
- lifecycle errors
"""

import logging

import pytest

from depfilter.application.filter_collection import FilterCollection
from depfilter.domain.exceptions.dependencies import (
    FilterDependencyCycleError,
    InvalidFilterDependenciesError,
)
from depfilter.domain.exceptions.lookup import FilterNotFoundError
from depfilter.domain.exceptions.validation import FilterStateError, InvalidFilterKeyError
from depfilter.domain.model.configuration import CollectionConfig
from depfilter.domain.model.filter_key import FilterKey
from depfilter.domain.model.predicate import match_all
from tests.factories import (
    Node,
    RecordingTarget,
    SharedLog,
    make_collection,
    make_dynamic_filter,
    make_filter,
    make_group,
)


def is_class(element: Node) -> bool:
    return element.type == "class"


class TestRegistrationAndLookup:
    def test_get_filter_by_total_key(self) -> None:
        flt = make_filter("visibility")
        collection = make_collection(make_group("nodes", flt), finish=False)
        assert collection.get_filter("nodes.visibility") is flt

    def test_get_filter_unknown_group_raises(self) -> None:
        collection = make_collection(make_group("nodes", make_filter("a")))
        with pytest.raises(FilterNotFoundError, match="'edges.a'"):
            collection.get_filter("edges.a")

    def test_get_filter_unknown_filter_raises(self) -> None:
        collection = make_collection(make_group("nodes", make_filter("a")))
        with pytest.raises(FilterNotFoundError, match="'nodes.b'"):
            collection.get_filter("nodes.b")

    def test_get_filter_malformed_key_raises_not_found(self) -> None:
        collection = make_collection(make_group("nodes", make_filter("a")))
        with pytest.raises(FilterNotFoundError):
            collection.get_filter("nodes")

    def test_find_filter_returns_none_on_miss(self) -> None:
        collection = make_collection(make_group("nodes", make_filter("a")))
        assert collection.find_filter("nodes.b") is None
        assert collection.find_filter("edges.a") is None

    def test_find_filter_malformed_raises(self) -> None:
        collection = make_collection(make_group("nodes", make_filter("a")))
        with pytest.raises(InvalidFilterKeyError):
            collection.find_filter("a.b.c")

    def test_group_last_write_wins(self, caplog: pytest.LogCaptureFixture) -> None:
        first = make_group("nodes", make_filter("a"))
        second = make_group("nodes", make_filter("b"))
        collection = FilterCollection()
        collection.add_filter_group(first)

        with caplog.at_level(logging.WARNING, logger="depfilter"):
            collection.add_filter_group(second)

        assert collection.groups == (second,)
        assert collection.find_filter("nodes.a") is None
        assert "Filter group 'nodes' replaced" in caplog.text

    def test_add_group_after_finish_raises(self) -> None:
        collection = make_collection(make_group("nodes", make_filter("a")))
        with pytest.raises(FilterStateError, match="after finish_creation"):
            collection.add_filter_group(make_group("edges"))

    def test_default_config(self) -> None:
        assert FilterCollection().config == CollectionConfig()


class TestFinishCreationValidation:
    def test_unknown_dependent_group_raises(self) -> None:
        collection = make_collection(
            make_group("nodes", make_filter("a", dependents=["edges.b"])), finish=False
        )
        with pytest.raises(InvalidFilterDependenciesError, match="invalid filter dependencies"):
            collection.finish_creation()

    def test_unknown_dependent_filter_raises(self) -> None:
        collection = make_collection(
            make_group("nodes", make_filter("a", dependents=["nodes.missing"])), finish=False
        )
        with pytest.raises(InvalidFilterDependenciesError) as exc_info:
            collection.finish_creation()
        assert exc_info.value.filter_key == FilterKey("nodes", "a")
        assert exc_info.value.dependent_key == FilterKey("nodes", "missing")

    def test_failed_validation_does_not_touch_target(self) -> None:
        target = RecordingTarget()
        collection = make_collection(
            make_group("nodes", make_filter("a", dependents=["nodes.x"]), target=target),
            finish=False,
        )
        with pytest.raises(InvalidFilterDependenciesError):
            collection.finish_creation()
        assert target.calls == []
        assert collection.is_finished is False

    def test_dependency_added_after_construction_is_validated(self) -> None:
        flt = make_filter("a")
        collection = make_collection(make_group("nodes", flt), finish=False)
        flt.add_dependent_filter_key("nodes.ghost")
        with pytest.raises(InvalidFilterDependenciesError):
            collection.finish_creation()

    def test_cross_group_dependents_valid(self) -> None:
        collection = make_collection(
            make_group("nodes", make_filter("a", dependents=["edges.b"])),
            make_group("edges", make_filter("b")),
        )
        assert collection.is_finished is True

    def test_cycle_rejected(self) -> None:
        collection = make_collection(
            make_group(
                "nodes",
                make_filter("a", dependents=["nodes.b"]),
                make_filter("b", dependents=["nodes.a"]),
            ),
            finish=False,
        )
        with pytest.raises(FilterDependencyCycleError) as exc_info:
            collection.finish_creation()
        assert set(exc_info.value.cycle) == {FilterKey("nodes", "a"), FilterKey("nodes", "b")}

    def test_self_dependency_rejected(self) -> None:
        collection = make_collection(
            make_group("nodes", make_filter("a", dependents=["nodes.a"])), finish=False
        )
        with pytest.raises(FilterDependencyCycleError):
            collection.finish_creation()

    def test_finish_twice_raises(self) -> None:
        collection = make_collection(make_group("nodes", make_filter("a")))
        with pytest.raises(FilterStateError, match="already called"):
            collection.finish_creation()

    def test_empty_collection_finishes(self) -> None:
        collection = make_collection()
        assert collection.is_finished is True


class TestBaseline:
    def test_every_filter_initialized_with_match_all(self) -> None:
        nodes_target = RecordingTarget()
        edges_target = RecordingTarget()
        make_collection(
            make_group("nodes", make_filter("a", is_class), make_filter("b"), target=nodes_target),
            make_group("edges", make_filter("c", is_class), target=edges_target),
        )

        assert nodes_target.calls == [("run", "a", match_all), ("run", "b", match_all)]
        assert edges_target.calls == [("run", "c", match_all)]

    def test_baseline_does_not_apply(self) -> None:
        target = RecordingTarget()
        make_collection(make_group("nodes", make_filter("a"), target=target))
        assert target.apply_count == 0

    def test_baseline_does_not_read_predicates(self) -> None:
        calls: list[int] = []

        def supplier():
            calls.append(1)
            return is_class

        make_collection(make_group("nodes", make_dynamic_filter("a", supplier)))
        assert calls == []

    def test_baseline_can_be_disabled(self) -> None:
        target = RecordingTarget()
        make_collection(
            make_group("nodes", make_filter("a"), target=target),
            config=CollectionConfig(initialize_baseline=False),
        )
        assert target.calls == []


class TestUpdateFilter:
    def test_before_finish_raises(self) -> None:
        collection = make_collection(make_group("nodes", make_filter("a")), finish=False)
        with pytest.raises(FilterStateError, match="finish_creation"):
            collection.update_filter("nodes.a")

    def test_unknown_key_raises(self) -> None:
        collection = make_collection(make_group("nodes", make_filter("a")))
        with pytest.raises(FilterNotFoundError):
            collection.update_filter("nodes.missing")

    def test_runs_filter_then_applies(self) -> None:
        target = RecordingTarget()
        collection = make_collection(make_group("nodes", make_filter("a", is_class), target=target))
        target.reset()

        collection.update_filter("nodes.a")

        assert target.calls == [("run", "a", is_class), ("apply",)]

    def test_dependent_runs_after_prerequisite(self) -> None:
        target = RecordingTarget()
        collection = make_collection(
            make_group(
                "nodes",
                make_filter("b"),
                make_filter("a", dependents=["nodes.b"]),
                target=target,
            )
        )
        target.reset()

        collection.update_filter("nodes.a")

        assert target.run_keys == ["a", "b"]

    def test_dependents_not_run_when_dependent_changes(self) -> None:
        target = RecordingTarget()
        collection = make_collection(
            make_group(
                "nodes",
                make_filter("a", dependents=["nodes.b"]),
                make_filter("b"),
                target=target,
            )
        )
        target.reset()

        collection.update_filter("nodes.b")

        assert target.run_keys == ["b"]

    def test_transitive_order_across_groups(self) -> None:
        log = SharedLog()
        collection = make_collection(
            make_group(
                "nodes",
                make_filter("a", dependents=["edges.x", "nodes.c"]),
                make_filter("c"),
                target=log.target("nodes"),
            ),
            make_group(
                "edges",
                make_filter("x", dependents=["nodes.c"]),
                target=log.target("edges"),
            ),
        )
        log.entries.clear()

        collection.update_filter("nodes.a")

        assert log.entries == ["nodes.a", "edges.x", "nodes.c", "apply:nodes", "apply:edges"]

    def test_applies_every_group(self) -> None:
        nodes_target = RecordingTarget()
        edges_target = RecordingTarget()
        collection = make_collection(
            make_group("nodes", make_filter("a"), target=nodes_target),
            make_group("edges", make_filter("b"), target=edges_target),
        )

        collection.update_filter("nodes.a")

        assert nodes_target.apply_count == 1
        assert edges_target.apply_count == 1
        assert edges_target.run_keys == ["b"]  # baseline only

    def test_uses_current_precondition(self) -> None:
        toggle = {"on": False}
        target = RecordingTarget()
        collection = make_collection(
            make_group(
                "nodes",
                make_dynamic_filter("a", lambda: is_class, get_enabled=lambda: toggle["on"]),
                target=target,
            )
        )

        collection.update_filter("nodes.a")
        assert target.applied["a"] is match_all

        toggle["on"] = True
        collection.update_filter("nodes.a")
        assert target.applied["a"] is is_class

    def test_disabled_filter_still_propagates(self) -> None:
        target = RecordingTarget()
        collection = make_collection(
            make_group(
                "nodes",
                make_filter("a", is_class, dependents=["nodes.b"], enabled=False),
                make_filter("b", is_class),
                target=target,
            )
        )
        target.reset()

        collection.update_filter("nodes.a")

        assert target.calls == [("run", "a", match_all), ("run", "b", is_class), ("apply",)]

    def test_idempotent_baseline(self) -> None:
        target = RecordingTarget()
        collection = make_collection(make_group("nodes", make_filter("a"), make_filter("b"), target=target))
        baseline = dict(target.staged)

        collection.update_filter("nodes.a")

        assert target.applied == baseline

    def test_filter_added_after_finish_can_be_updated(self) -> None:
        target = RecordingTarget()
        group = make_group("nodes", make_filter("a"), target=target)
        collection = make_collection(group)
        group.add_filter(make_filter("late", is_class))
        target.reset()

        collection.update_filter("nodes.late")

        assert target.calls == [("run", "late", is_class), ("apply",)]

    def test_dependent_declared_after_finish_is_rerun(self) -> None:
        target = RecordingTarget()
        a = make_filter("a")
        collection = make_collection(make_group("nodes", a, make_filter("b"), target=target))
        a.add_dependent_filter_key("nodes.b")
        target.reset()

        collection.update_filter("nodes.a")

        assert "nodes.b" in a.dependent_filter_keys
        assert target.run_keys == ["a", "b"]

    def test_unknown_dependent_declared_after_finish_raises(self) -> None:
        target = RecordingTarget()
        a = make_filter("a")
        collection = make_collection(make_group("nodes", a, target=target))
        a.add_dependent_filter_key("nodes.ghost")
        target.reset()

        with pytest.raises(InvalidFilterDependenciesError) as exc_info:
            collection.update_filter("nodes.a")
        assert exc_info.value.dependent_key == FilterKey("nodes", "ghost")
        assert target.calls == []

    def test_cycle_declared_after_finish_raises(self) -> None:
        a = make_filter("a", dependents=["nodes.b"])
        b = make_filter("b")
        collection = make_collection(make_group("nodes", a, b))
        b.add_dependent_filter_key("nodes.a")

        with pytest.raises(FilterDependencyCycleError):
            collection.update_filter("nodes.a")

    def test_target_error_propagates_without_apply(self) -> None:
        class FailingTarget(RecordingTarget):
            def run_filter(self, predicate, key) -> None:
                if key == "b":
                    raise RuntimeError("target failed")
                super().run_filter(predicate, key)

        target = FailingTarget()
        collection = make_collection(
            make_group(
                "nodes",
                make_filter("a", dependents=["nodes.b"]),
                make_filter("b"),
                target=target,
            ),
            config=CollectionConfig(initialize_baseline=False),
        )

        with pytest.raises(RuntimeError, match="target failed"):
            collection.update_filter("nodes.a")
        assert target.run_keys == ["a"]
        assert target.apply_count == 0

    def test_logs_order(self, caplog: pytest.LogCaptureFixture) -> None:
        collection = make_collection(
            make_group("nodes", make_filter("a", dependents=["nodes.b"]), make_filter("b"))
        )
        with caplog.at_level(logging.DEBUG, logger="depfilter"):
            collection.update_filter("nodes.a")
        assert "Updating 'nodes.a': nodes.a, nodes.b" in caplog.text
        assert "Re-running 'nodes.b'" in caplog.text
        assert "Applying group 'nodes'" in caplog.text


class TestCyclesWithoutRejection:
    def make_cyclic(self) -> FilterCollection:
        return make_collection(
            make_group(
                "nodes",
                make_filter("a", dependents=["nodes.b"]),
                make_filter("b", dependents=["nodes.c"]),
                make_filter("c", dependents=["nodes.b"]),
                make_filter("free"),
            ),
            config=CollectionConfig(reject_cycles=False),
        )

    def test_finish_accepts_cycle(self) -> None:
        assert self.make_cyclic().is_finished is True

    def test_update_reaching_cycle_raises(self) -> None:
        collection = self.make_cyclic()
        with pytest.raises(FilterDependencyCycleError) as exc_info:
            collection.update_filter("nodes.a")
        assert set(exc_info.value.cycle) == {FilterKey("nodes", "b"), FilterKey("nodes", "c")}

    def test_update_outside_cycle_works(self) -> None:
        collection = self.make_cyclic()
        assert [f.key for f in collection.dependency_order("nodes.free")] == ["free"]


class TestDependencyOrder:
    def test_returns_filters_in_run_order(self) -> None:
        collection = make_collection(
            make_group(
                "nodes",
                make_filter("root", dependents=["nodes.zeta", "nodes.alpha"]),
                make_filter("zeta"),
                make_filter("alpha"),
            )
        )
        order = collection.dependency_order("nodes.root")
        assert [f.total_key for f in order] == ["nodes.root", "nodes.alpha", "nodes.zeta"]

    def test_does_not_touch_target(self) -> None:
        target = RecordingTarget()
        collection = make_collection(make_group("nodes", make_filter("a"), target=target))
        target.reset()
        collection.dependency_order("nodes.a")
        assert target.calls == []


class TestDescribe:
    def test_snapshot(self) -> None:
        collection = make_collection(
            make_group(
                "nodes",
                make_filter("b", enabled=False),
                make_dynamic_filter("a", lambda: is_class, dependents=["nodes.b"]),
            ),
            make_group("edges", make_filter("x")),
        )

        snapshot = collection.describe()

        assert snapshot.finished is True
        assert snapshot.group_count == 2
        assert [info.total_key for info in snapshot.filters] == ["edges.x", "nodes.a", "nodes.b"]
        a = snapshot.filters[1]
        assert a.enabled is True
        assert a.is_static is False
        assert a.dependent_keys == ("nodes.b",)
        assert snapshot.filters[2].enabled is False

    def test_unfinished(self) -> None:
        assert make_collection(finish=False).describe().finished is False

    def test_repr(self) -> None:
        assert repr(make_collection(finish=False)) == "FilterCollection(groups=0, building)"
