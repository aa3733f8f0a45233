"""Page replacement policies — who gets evicted when memory is full.

Each policy replays a reference string against a resident set of fixed
capacity and counts page faults.  Every step is either:

- a **hit** — the page is already resident, nothing is loaded; or
- a **miss** (page fault) — the page must be loaded, and if every frame
  is taken, one resident page is evicted first.

The policies differ only in which page they evict:

    - **FIFO** — evict the page loaded earliest.  Hits don't matter.
      Simple, but suffers from Belady's anomaly (more frames can mean
      *more* faults for some strings).
    - **LRU** — evict the page used longest ago.  Hits refresh a page's
      position.  Implemented with an OrderedDict for O(1) move-to-end.
    - **OPT** — Belady's optimal policy: evict the page whose next use
      is furthest in the future (or that is never used again).  It needs
      to see the future, so it only exists in simulation, but no policy
      can fault less, which makes it the yardstick for the others.

Design: Strategy pattern over a closed set
    ``ReplacementPolicy`` is the strategy interface; ``PolicyKind`` names
    the three implementations and ``policy_for`` maps one to the other.
    Each ``replay`` builds its own resident set, so a policy object holds
    no state between runs.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Sequence
from enum import StrEnum
from typing import Protocol


class UnsupportedPolicyError(ValueError):
    """Raise when a policy selector does not name a known policy."""


class PolicyKind(StrEnum):
    """The replacement policies the simulator knows about."""

    FIFO = "FIFO"
    LRU = "LRU"
    OPT = "OPT"

    @classmethod
    def parse(cls, value: str | PolicyKind) -> PolicyKind:
        """Return the kind named by *value* (case-insensitive).

        Raises:
            UnsupportedPolicyError: If *value* names no known policy.

        """
        if isinstance(value, PolicyKind):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        msg = f"Unsupported replacement policy: {value!r}"
        raise UnsupportedPolicyError(msg)


class ReplacementPolicy(Protocol):
    """Interface for page replacement algorithms."""

    def replay(self, reference: Sequence[int], capacity: int) -> int:
        """Replay *reference* with *capacity* frames and return the fault count.

        The reference string is assumed to be sanitized and validated.
        """
        ...  # pragma: no cover


def _check_capacity(capacity: int) -> None:
    """Reject a resident set that could never hold a page."""
    if capacity < 1:
        msg = f"Capacity must be at least 1 frame (got {capacity})"
        raise ValueError(msg)


# ---------------------------------------------------------------------------
# FIFO Policy
# ---------------------------------------------------------------------------


class FIFOPolicy:
    """First In, First Out — evict the oldest loaded page.

    The resident set is a plain list used as a queue: loads append to
    the back, evictions pop the front.  Hits leave the order alone.
    """

    def replay(self, reference: Sequence[int], capacity: int) -> int:
        """Count faults when the oldest loaded page is always evicted."""
        _check_capacity(capacity)
        queue: list[int] = []
        faults = 0
        for page in reference:
            if page in queue:
                continue
            faults += 1
            if len(queue) == capacity:
                queue.pop(0)
            queue.append(page)
        return faults


# ---------------------------------------------------------------------------
# LRU Policy
# ---------------------------------------------------------------------------


class LRUPolicy:
    """Least Recently Used — evict the page accessed longest ago.

    The first key of the OrderedDict is always the least recently used;
    a hit moves its page to the end.
    """

    def replay(self, reference: Sequence[int], capacity: int) -> int:
        """Count faults when the least recently used page is always evicted."""
        _check_capacity(capacity)
        order: OrderedDict[int, None] = OrderedDict()
        faults = 0
        for page in reference:
            if page in order:
                order.move_to_end(page)
                continue
            faults += 1
            if len(order) == capacity:
                order.popitem(last=False)
            order[page] = None
        return faults


# ---------------------------------------------------------------------------
# OPT Policy
# ---------------------------------------------------------------------------


class OPTPolicy:
    """Belady's optimal policy — evict the page needed furthest in the future.

    On every eviction the rest of the string is scanned for the next use
    of each resident page.  A page that is never used again is the ideal
    victim; among several such pages the one resident longest goes
    first.  The choice between them cannot change the fault count.

    Cost is O(n * capacity) per eviction, which is nothing at the string
    lengths a simulator deals with.
    """

    def replay(self, reference: Sequence[int], capacity: int) -> int:
        """Count faults under optimal (clairvoyant) replacement."""
        _check_capacity(capacity)
        resident: list[int] = []
        faults = 0
        for position, page in enumerate(reference):
            if page in resident:
                continue
            faults += 1
            if len(resident) == capacity:
                resident.remove(self.select_victim(resident, reference, position + 1))
            resident.append(page)
        return faults

    @staticmethod
    def select_victim(resident: Sequence[int], reference: Sequence[int], start: int) -> int:
        """Return the resident page whose next use after *start* is furthest away.

        Args:
            resident: Pages currently in memory, oldest first.
            reference: The full reference string.
            start: Index of the first future reference to consider.

        Returns:
            The page to evict.

        Raises:
            IndexError: If *resident* is empty.

        """
        if not resident:
            msg = "No pages to evict"
            raise IndexError(msg)
        never_used = len(reference)
        next_use = dict.fromkeys(resident, never_used)
        pending = set(resident)
        for index in range(start, len(reference)):
            page = reference[index]
            if page in pending:
                next_use[page] = index
                pending.discard(page)
                if not pending:
                    break
        # max() keeps the first of equal keys, i.e. the oldest resident.
        return max(resident, key=next_use.__getitem__)


_POLICIES: dict[PolicyKind, type[FIFOPolicy | LRUPolicy | OPTPolicy]] = {
    PolicyKind.FIFO: FIFOPolicy,
    PolicyKind.LRU: LRUPolicy,
    PolicyKind.OPT: OPTPolicy,
}


def policy_for(kind: str | PolicyKind) -> ReplacementPolicy:
    """Return a fresh policy instance for *kind*.

    Raises:
        UnsupportedPolicyError: If *kind* names no known policy.

    """
    return _POLICIES[PolicyKind.parse(kind)]()
