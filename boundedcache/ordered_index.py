"""Intrusive doubly linked list ordering cache entries by recency.

The head is the most-recently-used end, the tail the least-recently-used
end. Every positional operation takes the entry itself as a handle, so
nothing here ever searches the list. Key lookup is the caller's job.
"""

from collections.abc import Iterator
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class Entry(Generic[K, V]):
    """One cached mapping, linked into an :class:`OrderedIndex`."""

    __slots__ = ("key", "value", "expires_at", "next", "prev")

    def __init__(self, key: K, value: V, expires_at: float) -> None:
        self.key = key
        self.value = value
        self.expires_at = expires_at
        self.next: Entry[K, V] | None = None
        self.prev: Entry[K, V] | None = None

    def is_expired(self, now: float) -> bool:
        return self.expires_at <= now

    def __repr__(self) -> str:
        return f"Entry(key={self.key!r}, expires_at={self.expires_at!r})"


class OrderedIndex(Generic[K, V]):
    """Recency-ordered doubly linked list of :class:`Entry` objects."""

    def __init__(self) -> None:
        self.head: Entry[K, V] | None = None
        self.tail: Entry[K, V] | None = None
        self.length = 0

    def push_front(self, entry: Entry[K, V] | None) -> None:
        """Link *entry* at the most-recently-used end.

        The entry must not be linked into any list.
        """
        if entry is None:
            return

        entry.prev = None
        entry.next = self.head

        if self.head is None:
            self.tail = entry
        else:
            self.head.prev = entry
        self.head = entry
        self.length += 1

    def push_back(self, entry: Entry[K, V] | None) -> None:
        """Link *entry* at the least-recently-used end."""
        if entry is None:
            return

        entry.next = None
        entry.prev = self.tail

        if self.tail is None:
            self.head = entry
        else:
            self.tail.next = entry
        self.tail = entry
        self.length += 1

    def remove(self, entry: Entry[K, V] | None) -> None:
        """Unlink *entry* from wherever it sits. No-op for an unlinked entry."""
        if entry is None:
            return
        if entry.prev is None and entry is not self.head:
            return

        if entry is self.head:
            self.head = entry.next
        if entry is self.tail:
            self.tail = entry.prev

        if entry.prev is not None:
            entry.prev.next = entry.next
        if entry.next is not None:
            entry.next.prev = entry.prev

        entry.prev = None
        entry.next = None
        self.length -= 1

    def move_to_front(self, entry: Entry[K, V] | None) -> None:
        if entry is None or entry is self.head:
            return
        self.remove(entry)
        self.push_front(entry)

    def pop_back(self) -> Entry[K, V] | None:
        """Unlink and return the least-recently-used entry, or ``None`` if empty."""
        entry = self.tail
        if entry is None:
            return None

        self.tail = entry.prev
        if self.tail is None:
            self.head = None
        else:
            self.tail.next = None

        entry.prev = None
        entry.next = None
        self.length -= 1
        return entry

    def peek_front(self) -> Entry[K, V] | None:
        return self.head

    def peek_back(self) -> Entry[K, V] | None:
        return self.tail

    def clear(self) -> None:
        # Break every link so detached entries hold no stale neighbours.
        node = self.head
        while node is not None:
            nxt = node.next
            node.prev = None
            node.next = None
            node = nxt
        self.head = None
        self.tail = None
        self.length = 0

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[Entry[K, V]]:
        """Yield entries from most- to least-recently used."""
        node = self.head
        while node is not None:
            yield node
            node = node.next
