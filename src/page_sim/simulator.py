"""Simulation driver — pick a policy, clean the string, count the faults.

``run`` is the stateless entry point: it resolves the policy kind,
sanitizes the reference string and replays it with ``num_frames``
frames.  ``num_pages`` (the address-space size) is accepted for the
caller's bookkeeping but never changes the result; ``0`` is fine.

``Simulator`` wraps the same operation with the things a front end
wants around it:

- a ``Logger`` recording every run and every rejected policy;
- a seeded random source for generating reference strings;
- ``compare`` — all three policies on one string;
- ``sweep`` — one policy across every frame count, which is how
  Belady's anomaly shows up (FIFO faulting *more* with more frames).
"""

from __future__ import annotations

from random import Random
from typing import TYPE_CHECKING

from page_sim.config import Limits
from page_sim.logging import Logger, LogLevel
from page_sim.policies import PolicyKind, UnsupportedPolicyError, policy_for
from page_sim.refstring import format_reference_string, generate, sanitize

if TYPE_CHECKING:
    from collections.abc import Iterable

_SOURCE = "simulator"


def run(kind: str | PolicyKind, reference: Iterable[int], num_pages: int, num_frames: int) -> int:
    """Return the number of page faults *kind* incurs on *reference*.

    Args:
        kind: The replacement policy, as a ``PolicyKind`` or its name.
        reference: The raw reference string (sanitized here).
        num_pages: Size of the address space.
        num_frames: Number of resident frames.

    Raises:
        UnsupportedPolicyError: If *kind* names no known policy.

    """
    del num_pages  # the address-space size never limits the resident set
    policy = policy_for(kind)
    return policy.replay(sanitize(reference), num_frames)


def format_result(faults: int) -> str:
    """Describe a fault count for display."""
    return f"This configuration will give {faults} page fault(s)"


class Simulator:
    """Run replacement policies and keep a log of what was run.

    Args:
        logger: Where to record events.  A fresh ``Logger`` if omitted.
        limits: Parameter limits; governs sweeps and generation defaults.
        seed: Seed for the reference-string generator.

    """

    def __init__(
        self,
        *,
        logger: Logger | None = None,
        limits: Limits | None = None,
        seed: int | None = None,
    ) -> None:
        """Create a simulator."""
        self._logger = logger if logger is not None else Logger()
        self._limits = limits if limits is not None else Limits()
        self._rng = Random(seed)  # noqa: S311

    @property
    def logger(self) -> Logger:
        """Return the event log."""
        return self._logger

    @property
    def limits(self) -> Limits:
        """Return the parameter limits."""
        return self._limits

    def _resolve(self, kind: str | PolicyKind) -> PolicyKind:
        try:
            return PolicyKind.parse(kind)
        except UnsupportedPolicyError as exc:
            self._logger.log(LogLevel.ERROR, str(exc), source=_SOURCE)
            raise

    def run(
        self,
        kind: str | PolicyKind,
        reference: Iterable[int],
        num_pages: int,
        num_frames: int,
    ) -> int:
        """Run one policy and log the outcome.  See ``run`` above."""
        policy = self._resolve(kind)
        raw = list(reference)
        cleaned = sanitize(raw)
        if len(cleaned) != len(raw):
            self._logger.log(
                LogLevel.DEBUG,
                f"dropped {len(raw) - len(cleaned)} repeated reference(s)",
                source=_SOURCE,
                policy=policy,
            )
        faults = run(policy, cleaned, num_pages, num_frames)
        self._logger.log(
            LogLevel.INFO,
            f"{faults} fault(s) on [{format_reference_string(cleaned)}] "
            f"with {num_frames} frame(s), {num_pages} page(s)",
            source=_SOURCE,
            policy=policy,
        )
        return faults

    def compare(self, reference: Iterable[int], num_pages: int, num_frames: int) -> dict[PolicyKind, int]:
        """Run every policy on the same string and frame count."""
        raw = list(reference)
        return {kind: self.run(kind, raw, num_pages, num_frames) for kind in PolicyKind}

    def sweep(
        self,
        kind: str | PolicyKind,
        reference: Iterable[int],
        num_pages: int,
        frames: Iterable[int] | None = None,
    ) -> dict[int, int]:
        """Run one policy once per frame count.

        Args:
            kind: The replacement policy.
            reference: The raw reference string.
            num_pages: Size of the address space.
            frames: Frame counts to try.  Defaults to every count the
                limits allow.

        Returns:
            A mapping of frame count to fault count, in the order tried.

        """
        policy = self._resolve(kind)
        raw = list(reference)
        counts = self._limits.frame_range if frames is None else frames
        return {count: self.run(policy, raw, num_pages, count) for count in counts}

    def generate(self, size: int | None = None, upper_bound: int | None = None) -> list[int]:
        """Generate a random reference string from the simulator's seeded source.

        Defaults to ``limits.default_length`` references over
        ``limits.max_pages`` page ids.

        Raises:
            InvalidRangeError: If the request cannot be satisfied.

        """
        length = self._limits.default_length if size is None else size
        bound = self._limits.max_pages if upper_bound is None else upper_bound
        return generate(length, bound, rng=self._rng)
