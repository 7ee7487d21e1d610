"""Tests for boundedcache.ordered_index — recency-ordered doubly linked list."""

from boundedcache.ordered_index import Entry, OrderedIndex
from tests.factories import assert_index_consistent, index_keys, make_entry, make_index


class TestEntry:
    def test_starts_unlinked(self):
        entry = Entry("a", 1, 10.0)
        assert entry.next is None
        assert entry.prev is None

    def test_expired_at_exact_deadline(self):
        entry = make_entry("a", expires_at=10.0)
        assert entry.is_expired(10.0) is True

    def test_not_expired_before_deadline(self):
        entry = make_entry("a", expires_at=10.0)
        assert entry.is_expired(9.999) is False

    def test_repr_shows_key(self):
        assert "'a'" in repr(make_entry("a"))


class TestPushFront:
    def test_into_empty_index(self):
        index = OrderedIndex()
        entry = make_entry("a")
        index.push_front(entry)
        assert index.head is entry
        assert index.tail is entry
        assert len(index) == 1
        assert_index_consistent(index)

    def test_becomes_new_head(self):
        index, entries = make_index("a", "b")
        c = make_entry("c")
        index.push_front(c)
        assert index_keys(index) == ["c", "a", "b"]
        assert index.tail is entries["b"]
        assert_index_consistent(index)

    def test_none_is_ignored(self):
        index, _ = make_index("a")
        index.push_front(None)
        assert len(index) == 1

    def test_resets_stale_links(self):
        index = OrderedIndex()
        entry = make_entry("a")
        entry.next = make_entry("stale")
        entry.prev = make_entry("stale")
        index.push_front(entry)
        assert entry.next is None
        assert entry.prev is None
        assert_index_consistent(index)


class TestPushBack:
    def test_into_empty_index(self):
        index = OrderedIndex()
        entry = make_entry("a")
        index.push_back(entry)
        assert index.head is entry
        assert index.tail is entry
        assert_index_consistent(index)

    def test_becomes_new_tail(self):
        index, _ = make_index("a", "b")
        index.push_back(make_entry("c"))
        assert index_keys(index) == ["a", "b", "c"]
        assert_index_consistent(index)

    def test_none_is_ignored(self):
        index = OrderedIndex()
        index.push_back(None)
        assert len(index) == 0


class TestRemove:
    def test_sole_entry(self):
        index, entries = make_index("a")
        index.remove(entries["a"])
        assert index.head is None
        assert index.tail is None
        assert len(index) == 0
        assert_index_consistent(index)

    def test_head(self):
        index, entries = make_index("a", "b", "c")
        index.remove(entries["a"])
        assert index_keys(index) == ["b", "c"]
        assert_index_consistent(index)

    def test_tail(self):
        index, entries = make_index("a", "b", "c")
        index.remove(entries["c"])
        assert index_keys(index) == ["a", "b"]
        assert index.tail is entries["b"]
        assert_index_consistent(index)

    def test_middle(self):
        index, entries = make_index("a", "b", "c")
        index.remove(entries["b"])
        assert index_keys(index) == ["a", "c"]
        assert_index_consistent(index)

    def test_clears_removed_links(self):
        index, entries = make_index("a", "b", "c")
        index.remove(entries["b"])
        assert entries["b"].next is None
        assert entries["b"].prev is None

    def test_none_is_noop(self):
        index, _ = make_index("a", "b")
        index.remove(None)
        assert len(index) == 2
        assert_index_consistent(index)

    def test_removing_twice_is_noop(self):
        index, entries = make_index("a", "b")
        index.remove(entries["b"])
        index.remove(entries["b"])
        assert len(index) == 1
        assert index_keys(index) == ["a"]
        assert_index_consistent(index)

    def test_removing_never_linked_entry_is_noop(self):
        index, _ = make_index("a")
        index.remove(make_entry("stranger"))
        assert len(index) == 1
        assert_index_consistent(index)

    def test_removing_last_entry_twice_keeps_empty_state(self):
        index, entries = make_index("a")
        index.remove(entries["a"])
        index.remove(entries["a"])
        assert len(index) == 0
        assert index.head is None
        assert_index_consistent(index)


class TestMoveToFront:
    def test_tail_to_front(self):
        index, entries = make_index("a", "b", "c")
        index.move_to_front(entries["c"])
        assert index_keys(index) == ["c", "a", "b"]
        assert index.tail is entries["b"]
        assert_index_consistent(index)

    def test_middle_to_front_keeps_other_order(self):
        index, entries = make_index("a", "b", "c", "d")
        index.move_to_front(entries["c"])
        assert index_keys(index) == ["c", "a", "b", "d"]
        assert_index_consistent(index)

    def test_head_is_noop(self):
        index, entries = make_index("a", "b")
        index.move_to_front(entries["a"])
        assert index_keys(index) == ["a", "b"]
        assert len(index) == 2

    def test_none_is_noop(self):
        index, _ = make_index("a", "b")
        index.move_to_front(None)
        assert index_keys(index) == ["a", "b"]


class TestPopBack:
    def test_empty_returns_none(self):
        index = OrderedIndex()
        assert index.pop_back() is None
        assert len(index) == 0

    def test_returns_least_recently_used(self):
        index, entries = make_index("a", "b", "c")
        popped = index.pop_back()
        assert popped is entries["c"]
        assert popped.prev is None
        assert index_keys(index) == ["a", "b"]
        assert_index_consistent(index)

    def test_last_entry_empties_index(self):
        index, entries = make_index("a")
        assert index.pop_back() is entries["a"]
        assert index.head is None
        assert index.tail is None
        assert_index_consistent(index)

    def test_drains_in_lru_order(self):
        index, _ = make_index("a", "b", "c")
        drained = []
        while (entry := index.pop_back()) is not None:
            drained.append(entry.key)
        assert drained == ["c", "b", "a"]
        assert len(index) == 0


class TestHelpers:
    def test_peek_does_not_unlink(self):
        index, entries = make_index("a", "b")
        assert index.peek_front() is entries["a"]
        assert index.peek_back() is entries["b"]
        assert len(index) == 2

    def test_clear_unlinks_everything(self):
        index, entries = make_index("a", "b", "c")
        index.clear()
        assert len(index) == 0
        assert index.head is None
        assert all(e.next is None and e.prev is None for e in entries.values())

    def test_iterates_mru_to_lru(self):
        index, _ = make_index("x", "y", "z")
        assert index_keys(index) == ["x", "y", "z"]

    def test_reinsert_after_remove(self):
        index, entries = make_index("a", "b")
        index.remove(entries["b"])
        index.push_front(entries["b"])
        assert index_keys(index) == ["b", "a"]
        assert_index_consistent(index)
