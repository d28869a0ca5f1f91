"""Tests for work, event, relation and checkpoint operations."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Generator

import pytest

from workgraph.errors import (
    CheckpointNotFound,
    EmptyContent,
    GraphNotFound,
    RelationNotFound,
    WorkNotFound,
)
from workgraph.store import checkpoints, events, relations, works
from workgraph.store.connection import get_connection
from workgraph.store.graphs import GraphRepository, create_graph
from workgraph.store.kv import KVStore
from workgraph.store.migrations import init_db
from workgraph.store.models import Status

NOW = datetime(2024, 5, 10, 12, 0, 0)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def repo() -> Generator[GraphRepository, None, None]:
    connection = get_connection(db_path=":memory:")  # type: ignore[arg-type]
    init_db(connection)
    yield GraphRepository(KVStore(connection))
    connection.close()


@pytest.fixture()
def graph_id(repo: GraphRepository) -> int:
    return create_graph(repo, "demo").id


# ---------------------------------------------------------------------------
# Works
# ---------------------------------------------------------------------------

class TestCreateWork:
    def test_ids_are_contiguous_from_one(self, repo: GraphRepository, graph_id: int) -> None:
        ids = [works.create_work(repo, graph_id, f"w{i}").id for i in range(5)]
        assert ids == [1, 2, 3, 4, 5]

    def test_defaults(self, repo: GraphRepository, graph_id: int) -> None:
        work = works.create_work(repo, graph_id, "w", now=NOW)
        assert work.status is Status.START
        assert work.priority == 0
        assert work.related_people == []
        assert work.events == []
        assert work.updated_at == NOW

    def test_persisted(self, repo: GraphRepository, graph_id: int) -> None:
        work = works.create_work(repo, graph_id, "w", Status.END, 4, "x,y", now=NOW)
        assert repo.get_graph(graph_id).works[work.id] == work

    def test_related_people_split_without_trimming(self, repo: GraphRepository, graph_id: int) -> None:
        work = works.create_work(repo, graph_id, "w", related_people="alice, bob,,carol")
        assert work.related_people == ["alice", " bob", "", "carol"]

    def test_empty_content_rejected(self, repo: GraphRepository, graph_id: int) -> None:
        with pytest.raises(EmptyContent):
            works.create_work(repo, graph_id, "")
        assert repo.get_graph(graph_id).works == {}

    def test_missing_graph(self, repo: GraphRepository) -> None:
        with pytest.raises(GraphNotFound):
            works.create_work(repo, 99, "w")

    def test_freed_max_id_is_reused(self, repo: GraphRepository, graph_id: int) -> None:
        for i in range(3):
            works.create_work(repo, graph_id, f"w{i}")
        works.delete_work(repo, graph_id, 3)
        assert works.create_work(repo, graph_id, "again").id == 3

    def test_freed_inner_id_is_skipped(self, repo: GraphRepository, graph_id: int) -> None:
        for i in range(3):
            works.create_work(repo, graph_id, f"w{i}")
        works.delete_work(repo, graph_id, 2)
        assert works.create_work(repo, graph_id, "again").id == 4


class TestUpdateWork:
    def test_no_fields_only_touches_updated_at(self, repo: GraphRepository, graph_id: int) -> None:
        before = works.create_work(repo, graph_id, "w", Status.DOING, 3, "a,b", now=NOW)
        later = NOW + timedelta(minutes=5)
        after = works.update_work(repo, graph_id, before.id, now=later)
        assert after.updated_at == later
        assert replace(before, updated_at=later) == after
        assert repo.get_graph(graph_id).works[before.id] == after

    def test_empty_strings_leave_fields(self, repo: GraphRepository, graph_id: int) -> None:
        before = works.create_work(repo, graph_id, "w", related_people="a")
        after = works.update_work(repo, graph_id, before.id, content="", related_people="")
        assert after.content == "w"
        assert after.related_people == ["a"]

    def test_replaces_given_fields(self, repo: GraphRepository, graph_id: int) -> None:
        work = works.create_work(repo, graph_id, "w", related_people="a,b")
        updated = works.update_work(
            repo, graph_id, work.id,
            content="new", status=Status.END, priority=9, related_people="c",
        )
        assert updated.content == "new"
        assert updated.status is Status.END
        assert updated.priority == 9
        assert updated.related_people == ["c"]

    def test_explicit_reset_to_start_and_zero(self, repo: GraphRepository, graph_id: int) -> None:
        work = works.create_work(repo, graph_id, "w", Status.DOING, 5)
        updated = works.update_work(repo, graph_id, work.id, status=Status.START, priority=0)
        assert updated.status is Status.START
        assert updated.priority == 0

    def test_events_survive_update(self, repo: GraphRepository, graph_id: int) -> None:
        work = works.create_work(repo, graph_id, "w")
        events.create_event(repo, graph_id, work.id, "e")
        updated = works.update_work(repo, graph_id, work.id, content="x")
        assert [e.content for e in updated.events] == ["e"]

    def test_missing_work(self, repo: GraphRepository, graph_id: int) -> None:
        with pytest.raises(WorkNotFound):
            works.update_work(repo, graph_id, 1, content="x")


class TestDeleteAndListWorks:
    def test_delete_work(self, repo: GraphRepository, graph_id: int) -> None:
        work = works.create_work(repo, graph_id, "w")
        assert works.delete_work(repo, graph_id, work.id) == work
        assert works.list_works(repo, graph_id) == []

    def test_delete_missing_work_fails(self, repo: GraphRepository, graph_id: int) -> None:
        with pytest.raises(WorkNotFound):
            works.delete_work(repo, graph_id, 1)

    def test_list_sorted_by_numeric_id(self, repo: GraphRepository, graph_id: int) -> None:
        for i in range(11):
            works.create_work(repo, graph_id, f"w{i}")
        # Stored keys sort as work-1, work-10, work-11, work-2, ...
        assert [w.id for w in works.list_works(repo, graph_id)] == list(range(1, 12))

    def test_get_work(self, repo: GraphRepository, graph_id: int) -> None:
        work = works.create_work(repo, graph_id, "w")
        assert works.get_work(repo, graph_id, work.id) == work
        with pytest.raises(WorkNotFound):
            works.get_work(repo, graph_id, 2)


def test_demo_scenario(repo: GraphRepository) -> None:
    graph = create_graph(repo, "demo")
    assert graph.id == 1

    work = works.create_work(repo, 1, "task A", Status.DOING, 2, "alice,bob")
    assert work.id == 1
    assert work.related_people == ["alice", "bob"]

    event = events.create_event(repo, 1, 1, "started")
    assert event.id == 1

    rows = works.list_works(repo, 1)
    assert len(rows) == 1
    assert rows[0].id == 1
    assert rows[0].priority == 2
    assert int(rows[0].status) == 1
    assert len(rows[0].events) == 1


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

class TestEvents:
    def test_create_event_ids(self, repo: GraphRepository, graph_id: int) -> None:
        work = works.create_work(repo, graph_id, "w")
        ids = [events.create_event(repo, graph_id, work.id, f"e{i}").id for i in range(3)]
        assert ids == [1, 2, 3]
        assert [e.content for e in events.list_events(repo, graph_id, work.id)] == ["e0", "e1", "e2"]

    def test_create_event_timestamp(self, repo: GraphRepository, graph_id: int) -> None:
        work = works.create_work(repo, graph_id, "w")
        assert events.create_event(repo, graph_id, work.id, "e", now=NOW).created_at == NOW

    def test_create_event_does_not_touch_updated_at(self, repo: GraphRepository, graph_id: int) -> None:
        work = works.create_work(repo, graph_id, "w", now=NOW)
        events.create_event(repo, graph_id, work.id, "e", now=NOW + timedelta(hours=1))
        assert works.get_work(repo, graph_id, work.id).updated_at == NOW

    def test_create_event_empty_content(self, repo: GraphRepository, graph_id: int) -> None:
        work = works.create_work(repo, graph_id, "w")
        with pytest.raises(EmptyContent):
            events.create_event(repo, graph_id, work.id, "")

    def test_create_event_missing_work(self, repo: GraphRepository, graph_id: int) -> None:
        with pytest.raises(WorkNotFound):
            events.create_event(repo, graph_id, 5, "e")

    def test_delete_event(self, repo: GraphRepository, graph_id: int) -> None:
        work = works.create_work(repo, graph_id, "w")
        first = events.create_event(repo, graph_id, work.id, "a")
        events.create_event(repo, graph_id, work.id, "b")
        assert events.delete_event(repo, graph_id, work.id, first.id) == first
        assert [e.id for e in events.list_events(repo, graph_id, work.id)] == [2]

    def test_delete_missing_event_is_lenient(self, repo: GraphRepository, graph_id: int) -> None:
        work = works.create_work(repo, graph_id, "w")
        assert events.delete_event(repo, graph_id, work.id, 7) is None
        assert events.delete_event(repo, graph_id, 42, 1) is None

    def test_delete_event_missing_graph(self, repo: GraphRepository) -> None:
        with pytest.raises(GraphNotFound):
            events.delete_event(repo, 3, 1, 1)

    def test_list_events_missing_work(self, repo: GraphRepository, graph_id: int) -> None:
        with pytest.raises(WorkNotFound):
            events.list_events(repo, graph_id, 1)


class TestListEventsSince:
    def test_only_recent_events(self, repo: GraphRepository, graph_id: int) -> None:
        work = works.create_work(repo, graph_id, "w")
        events.create_event(repo, graph_id, work.id, "old", now=NOW - timedelta(days=2))
        events.create_event(repo, graph_id, work.id, "new", now=NOW - timedelta(hours=1))

        groups = events.list_events_since(repo, graph_id, 1, now=NOW)
        assert len(groups) == 1
        assert groups[0].work_id == work.id
        assert [e.content for e in groups[0].events] == ["new"]

    def test_window_is_strict(self, repo: GraphRepository, graph_id: int) -> None:
        work = works.create_work(repo, graph_id, "w")
        events.create_event(repo, graph_id, work.id, "edge", now=NOW - timedelta(days=1))
        assert events.list_events_since(repo, graph_id, 1, now=NOW) == []

    def test_grouped_by_work_in_id_order(self, repo: GraphRepository, graph_id: int) -> None:
        ids = [works.create_work(repo, graph_id, f"w{i}").id for i in range(11)]
        for wid in reversed(ids):
            events.create_event(repo, graph_id, wid, f"a{wid}", now=NOW)
            events.create_event(repo, graph_id, wid, f"b{wid}", now=NOW)

        groups = events.list_events_since(repo, graph_id, 1, now=NOW)
        assert [g.work_id for g in groups] == ids
        assert [e.content for e in groups[0].events] == ["a1", "b1"]
        assert groups[0].content == "w0"

    def test_works_without_recent_events_omitted(self, repo: GraphRepository, graph_id: int) -> None:
        works.create_work(repo, graph_id, "quiet")
        busy = works.create_work(repo, graph_id, "busy")
        events.create_event(repo, graph_id, busy.id, "e", now=NOW)
        groups = events.list_events_since(repo, graph_id, 3, now=NOW)
        assert [g.work_id for g in groups] == [busy.id]

    def test_zero_days_returns_nothing(self, repo: GraphRepository, graph_id: int) -> None:
        work = works.create_work(repo, graph_id, "w")
        events.create_event(repo, graph_id, work.id, "e", now=NOW)
        assert events.list_events_since(repo, graph_id, 0, now=NOW) == []


# ---------------------------------------------------------------------------
# Relations
# ---------------------------------------------------------------------------

class TestRelations:
    def test_create_and_list(self, repo: GraphRepository, graph_id: int) -> None:
        a = works.create_work(repo, graph_id, "a")
        b = works.create_work(repo, graph_id, "b")
        relation = relations.create_relation(repo, graph_id, a.id, b.id, "blocks")
        assert relation.id == 1
        assert relations.list_relations(repo, graph_id) == [relation]

    def test_endpoints_not_checked(self, repo: GraphRepository, graph_id: int) -> None:
        relation = relations.create_relation(repo, graph_id, 40, 41)
        assert (relation.w1, relation.w2) == (40, 41)

    def test_delete(self, repo: GraphRepository, graph_id: int) -> None:
        relation = relations.create_relation(repo, graph_id, 1, 2)
        assert relations.delete_relation(repo, graph_id, relation.id) == relation
        assert relations.list_relations(repo, graph_id) == []

    def test_delete_missing(self, repo: GraphRepository, graph_id: int) -> None:
        with pytest.raises(RelationNotFound):
            relations.delete_relation(repo, graph_id, 1)


# ---------------------------------------------------------------------------
# Checkpoints
# ---------------------------------------------------------------------------

class TestCheckpoints:
    def test_create_and_restore(self, repo: GraphRepository, graph_id: int) -> None:
        works.create_work(repo, graph_id, "keep", now=NOW)
        snapshot = repo.get_graph(graph_id)
        checkpoint = checkpoints.create_checkpoint(repo, graph_id, now=NOW)
        assert checkpoint.id == 1

        works.create_work(repo, graph_id, "later")
        works.delete_work(repo, graph_id, 1)

        restored = checkpoints.restore_checkpoint(repo, graph_id, checkpoint.id)
        assert restored == snapshot
        assert repo.get_graph(graph_id) == snapshot

    def test_deleting_graph_drops_its_checkpoints(self, repo: GraphRepository, graph_id: int) -> None:
        checkpoints.create_checkpoint(repo, graph_id)
        repo.delete_graph(graph_id)
        assert checkpoints.list_checkpoints(repo, graph_id) == []

    def test_recreated_graph_does_not_inherit_checkpoints(self, repo: GraphRepository) -> None:
        old = create_graph(repo, "old").id
        checkpoints.create_checkpoint(repo, old)
        repo.delete_graph(old)

        new = create_graph(repo, "brand-new").id
        assert new == old
        works.create_work(repo, new, "fresh")

        assert checkpoints.list_checkpoints(repo, new) == []
        with pytest.raises(CheckpointNotFound):
            checkpoints.restore_checkpoint(repo, new, 1)
        graph = repo.get_graph(new)
        assert graph.name == "brand-new"
        assert [w.content for w in graph.works.values()] == ["fresh"]

    def test_other_graphs_checkpoints_survive_delete(self, repo: GraphRepository, graph_id: int) -> None:
        for _ in range(9):
            create_graph(repo, "filler")
        # graph-11 shares the "checkpoint-1" text prefix with graph 1
        eleven = create_graph(repo, "eleven").id
        checkpoints.create_checkpoint(repo, eleven)
        repo.delete_graph(graph_id)
        assert [c.id for c in checkpoints.list_checkpoints(repo, eleven)] == [1]

    def test_list_is_per_graph(self, repo: GraphRepository, graph_id: int) -> None:
        for _ in range(9):
            create_graph(repo, "filler")
        other = create_graph(repo, "ten").id
        assert other == 11

        checkpoints.create_checkpoint(repo, graph_id)
        checkpoints.create_checkpoint(repo, graph_id)
        checkpoints.create_checkpoint(repo, other)

        assert [c.id for c in checkpoints.list_checkpoints(repo, graph_id)] == [1, 2]
        assert [c.id for c in checkpoints.list_checkpoints(repo, other)] == [1]

    def test_checkpoints_are_not_graphs(self, repo: GraphRepository, graph_id: int) -> None:
        checkpoints.create_checkpoint(repo, graph_id)
        assert [g.id for g in repo.list_graphs()] == [graph_id]

    def test_delete(self, repo: GraphRepository, graph_id: int) -> None:
        checkpoints.create_checkpoint(repo, graph_id)
        checkpoints.delete_checkpoint(repo, graph_id, 1)
        assert checkpoints.list_checkpoints(repo, graph_id) == []

    def test_delete_missing(self, repo: GraphRepository, graph_id: int) -> None:
        with pytest.raises(CheckpointNotFound):
            checkpoints.delete_checkpoint(repo, graph_id, 1)

    def test_missing_graph(self, repo: GraphRepository) -> None:
        with pytest.raises(GraphNotFound):
            checkpoints.create_checkpoint(repo, 5)
