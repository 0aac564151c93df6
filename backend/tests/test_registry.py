"""Unit tests for the in-memory session registry."""
import threading

import pytest

from relay.files.registry import SessionRegistry
from relay.files.schemas import FileRecord


def make_record(record_id: str, created_at: int) -> FileRecord:
    return FileRecord(
        id=record_id,
        name=f"{record_id}.txt",
        size=1,
        mime_type="text/plain",
        url=f"http://host:3000/uploads/{record_id}.txt",
        created_at=created_at,
    )


@pytest.fixture
def registry():
    return SessionRegistry()


class TestSessionRegistry:

    def test_unknown_session_lists_empty(self, registry):
        assert registry.list("nope") == []
        assert "nope" not in registry

    def test_append_creates_session(self, registry):
        registry.append("abc", make_record("r1", 1))

        assert "abc" in registry
        assert len(registry) == 1
        assert [r.id for r in registry.list("abc")] == ["r1"]

    def test_list_sorts_newest_first(self, registry):
        registry.append("abc", make_record("old", 100))
        registry.append("abc", make_record("new", 300))
        registry.append("abc", make_record("mid", 200))

        assert [r.id for r in registry.list("abc")] == ["new", "mid", "old"]

    def test_list_does_not_mutate_insertion_order(self, registry):
        registry.append("abc", make_record("first", 1))
        registry.append("abc", make_record("second", 2))

        listed = registry.list("abc")
        listed.clear()

        assert [r.id for r in registry.list("abc")] == ["second", "first"]

    def test_sessions_are_isolated(self, registry):
        registry.append("a", make_record("ra", 1))
        registry.append("b", make_record("rb", 2))

        assert [r.id for r in registry.list("a")] == ["ra"]
        assert [r.id for r in registry.list("b")] == ["rb"]

    def test_empty_session_id_rejected(self, registry):
        with pytest.raises(ValueError):
            registry.append("", make_record("r1", 1))
        assert len(registry) == 0

    def test_concurrent_appends_are_not_lost(self, registry):
        threads_count = 8
        per_thread = 250

        def worker(n):
            for i in range(per_thread):
                registry.append("shared", make_record(f"{n}-{i}", i))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(threads_count)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        records = registry.list("shared")
        assert len(records) == threads_count * per_thread
        assert len({r.id for r in records}) == threads_count * per_thread


class TestFileRecord:

    def test_serializes_with_wire_names(self):
        record = make_record("r1", 42)
        dumped = record.model_dump(by_alias=True)

        assert dumped["type"] == "text/plain"
        assert dumped["createdAt"] == 42
        assert "mime_type" not in dumped

    def test_accepts_wire_names(self):
        record = FileRecord(id="x", name="a", size=0, type="image/png", url="u", createdAt=5)
        assert record.mime_type == "image/png"
        assert record.created_at == 5
