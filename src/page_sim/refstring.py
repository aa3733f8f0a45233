"""Reference strings — the input every replacement policy replays.

A **reference string** is the ordered list of page ids a program touches.
Page replacement is studied offline on these strings: feed the same
string to several policies and compare how many references fault.

Two preparation steps happen before any policy sees a string:

- **Sanitizing** drops immediate repeats.  Touching the page you just
  touched can never fault, so ``1, 1, 2`` is replayed as ``1, 2``.
- **Generating** produces a random, already-sanitized string for
  experiments.  The random source is passed in explicitly so tests can
  seed it.

The text helpers (``parse_reference_string``, ``format_reference_string``)
convert between lists and the comma-separated form people type.  Page ids
are single digits (0-9), so parsing simply keeps every digit character.
"""

from collections.abc import Iterable, Sequence
from random import Random

DEFAULT_REFERENCE_STRING = "1, 2, 3, 4, 2, 1, 5, 6, 2, 1, 2, 3, 7, 6, 3, 2, 1, 2, 3, 6"

_SEPARATOR = ", "


class InvalidRangeError(ValueError):
    """Raise when a generator request cannot be satisfied."""


def sanitize(reference: Iterable[int]) -> list[int]:
    """Return *reference* with immediately-repeated page ids removed.

    Keeps the first element of every run of equal adjacent values, so
    the result never contains two equal neighbours.  The input is not
    modified.

    Args:
        reference: The raw reference string.

    Returns:
        A new, sanitized list.

    """
    cleaned: list[int] = []
    for page in reference:
        if not cleaned or cleaned[-1] != page:
            cleaned.append(page)
    return cleaned


def generate(size: int, upper_bound: int, *, rng: Random | None = None) -> list[int]:
    """Generate a random reference string with no equal neighbours.

    Each element is drawn uniformly from ``[0, upper_bound)``.  A draw
    equal to the previous element is rejected and drawn again.

    Args:
        size: Length of the string to produce.
        upper_bound: Exclusive upper bound for page ids.
        rng: Random source.  A fresh, unseeded ``Random`` when omitted.

    Returns:
        A list of ``size`` page ids.

    Raises:
        InvalidRangeError: If ``size`` is negative, ``upper_bound`` is not
            positive, or ``upper_bound == 1`` while ``size > 1`` (a single
            page id cannot avoid repeating itself).

    """
    if size == 0:
        return []
    if size < 0:
        msg = f"Reference string size must not be negative (got {size})"
        raise InvalidRangeError(msg)
    if upper_bound <= 0:
        msg = f"Upper bound must be positive (got {upper_bound})"
        raise InvalidRangeError(msg)
    if upper_bound == 1 and size > 1:
        msg = f"Cannot build {size} references from a single page without repeats"
        raise InvalidRangeError(msg)

    source = rng if rng is not None else Random()  # noqa: S311
    reference = [source.randrange(upper_bound)]
    while len(reference) < size:
        page = source.randrange(upper_bound)
        if page != reference[-1]:
            reference.append(page)
    return reference


def parse_reference_string(text: str) -> list[int]:
    """Turn free-form text into a reference string.

    Every decimal digit becomes one page id; everything else (commas,
    spaces, letters) is ignored.  ``"12"`` therefore means pages 1 and 2.
    """
    return [int(char) for char in text if char.isdecimal()]


def format_reference_string(reference: Sequence[int]) -> str:
    """Join page ids with ``", "`` for display."""
    return _SEPARATOR.join(str(page) for page in reference)
