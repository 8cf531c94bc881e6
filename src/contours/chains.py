"""
Sequence store: stitches an unordered stream of segments into point chains.

Chains and their nodes live in index-addressed arenas. A chain record that is
merged away is tombstoned and its slot goes to a free list for reuse, so no
slot is ever both live and merged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from contours.geometry import Point, points_equal
from shared.constants import EPSILON

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass
class _Chain:
    head: int
    tail: int
    closed: bool = False
    prev: int | None = None
    next: int | None = None
    alive: bool = True


class ContourBuilder:
    """Chains of one contour level."""

    def __init__(self, level: float, epsilon: float = EPSILON) -> None:
        self.level = level
        self.epsilon = epsilon
        # Live chains in the list; diagnostic only
        self.count = 0
        self._first: int | None = None
        self._points: list[Point] = []
        self._prev: list[int | None] = []
        self._next: list[int | None] = []
        self._chains: list[_Chain] = []
        self._free: list[int] = []

    # Arena helpers
    def _new_node(
        self, p: Point, prev: int | None = None, nxt: int | None = None
    ) -> int:
        self._points.append(p)
        self._prev.append(prev)
        self._next.append(nxt)
        return len(self._points) - 1

    def _new_chain(self, head: int, tail: int) -> int:
        record = _Chain(head=head, tail=tail, next=self._first)
        if self._free:
            ci = self._free.pop()
            self._chains[ci] = record
        else:
            self._chains.append(record)
            ci = len(self._chains) - 1
        if self._first is not None:
            self._chains[self._first].prev = ci
        self._first = ci
        self.count += 1
        return ci

    def _remove_chain(self, ci: int) -> None:
        chain = self._chains[ci]
        if chain.prev is not None:
            self._chains[chain.prev].next = chain.next
        else:
            self._first = chain.next
        if chain.next is not None:
            self._chains[chain.next].prev = chain.prev
        chain.alive = False
        chain.prev = chain.next = None
        self._free.append(ci)
        self.count -= 1

    def _reverse(self, ci: int) -> None:
        chain = self._chains[ci]
        node = chain.head
        while node is not None:
            nxt = self._next[node]
            self._next[node] = self._prev[node]
            self._prev[node] = nxt
            node = nxt
        chain.head, chain.tail = chain.tail, chain.head

    def _prepend(self, ci: int, p: Point) -> None:
        chain = self._chains[ci]
        node = self._new_node(p, None, chain.head)
        self._prev[chain.head] = node
        chain.head = node

    def _append(self, ci: int, p: Point) -> None:
        chain = self._chains[ci]
        node = self._new_node(p, chain.tail, None)
        self._next[chain.tail] = node
        chain.tail = node

    def _splice(self, first: int, second: int) -> None:
        """Attach ``second`` after the tail of ``first`` and drop ``second``."""
        a = self._chains[first]
        b = self._chains[second]
        self._next[a.tail] = b.head
        self._prev[b.head] = a.tail
        a.tail = b.tail
        self._remove_chain(second)

    def add_segment(self, a: Point, b: Point) -> None:
        """Add one crossing segment, extending, closing or merging chains."""
        eps = self.epsilon
        ma: int | None = None
        mb: int | None = None
        prepend_a = False
        prepend_b = False

        ci = self._first
        while ci is not None:
            chain = self._chains[ci]
            # Closed loops take no further segments
            if not chain.closed:
                head_p = self._points[chain.head]
                tail_p = self._points[chain.tail]
                if ma is None:
                    if points_equal(a, head_p, eps):
                        ma = ci
                        prepend_a = True
                    elif points_equal(a, tail_p, eps):
                        ma = ci
                if mb is None:
                    if points_equal(b, head_p, eps):
                        mb = ci
                        prepend_b = True
                    elif points_equal(b, tail_p, eps):
                        mb = ci
                if ma is not None and mb is not None:
                    break
            ci = chain.next

        if ma is None and mb is None:
            head = self._new_node(Point(*a))
            tail = self._new_node(Point(*b), prev=head)
            self._next[head] = tail
            self._new_chain(head, tail)
        elif mb is None:
            # b extends the chain matched by a
            if prepend_a:
                self._prepend(ma, Point(*b))
            else:
                self._append(ma, Point(*b))
        elif ma is None:
            if prepend_b:
                self._prepend(mb, Point(*a))
            else:
                self._append(mb, Point(*a))
        elif ma == mb:
            chain = self._chains[ma]
            self._prepend(ma, self._points[chain.tail])
            chain.closed = True
        elif not prepend_a and not prepend_b:
            # tail-tail
            self._reverse(ma)
            self._splice(mb, ma)
        elif prepend_a and not prepend_b:
            # head-tail
            self._splice(mb, ma)
        elif prepend_a and prepend_b:
            # head-head
            self._reverse(ma)
            self._splice(ma, mb)
        else:
            # tail-head
            self._splice(ma, mb)

    def _walk(self, chain: _Chain) -> list[Point]:
        points: list[Point] = []
        node = chain.head
        while node is not None:
            points.append(self._points[node])
            node = self._next[node]
        return points

    def chains(self) -> Iterator[tuple[list[Point], bool]]:
        """Yield ``(points, closed)`` for every live chain in list order."""
        ci = self._first
        while ci is not None:
            chain = self._chains[ci]
            yield self._walk(chain), chain.closed
            ci = chain.next

    def closed_polylines(self) -> list[list[Point]]:
        return [pts for pts, closed in self.chains() if closed]

    def open_polylines(self) -> list[list[Point]]:
        return [pts for pts, closed in self.chains() if not closed]
