"""Simulation limits and parameter validation.

The simulator works on deliberately tiny problems: up to 7 frames,
page ids 0-9 and strings of about 20 references.  Those bounds live
here as module constants and as a frozen ``Limits`` record that callers
pass around.

Overrides come from environment-style ``KEY=VALUE`` string pairs, as in
a Unix process environment::

    PAGE_SIM_MAX_FRAMES=5
    PAGE_SIM_MAX_PAGES=6
    PAGE_SIM_LENGTH=12

The policies themselves trust their input.  ``validate_parameters`` is
the check a caller (such as the web front end) runs before handing
user-supplied numbers to the simulator.
"""

from collections.abc import Mapping
from dataclasses import dataclass

MIN_FRAMES = 1
MAX_FRAMES = 7
MIN_PAGES = 0
MAX_PAGES = 9
DEFAULT_LENGTH = 20
DEFAULT_FRAMES = MAX_FRAMES
DEFAULT_PAGES = MAX_PAGES

ENV_MAX_FRAMES = "PAGE_SIM_MAX_FRAMES"
ENV_MAX_PAGES = "PAGE_SIM_MAX_PAGES"
ENV_LENGTH = "PAGE_SIM_LENGTH"


class ParameterError(ValueError):
    """Raise when a simulation parameter is outside its allowed range."""


@dataclass(frozen=True)
class Limits:
    """Allowed ranges for simulation parameters.

    Attributes:
        min_frames: Smallest resident-set capacity.
        max_frames: Largest resident-set capacity.
        min_pages: Smallest address-space size.
        max_pages: Largest address-space size.
        default_length: Length of generated reference strings.

    """

    min_frames: int = MIN_FRAMES
    max_frames: int = MAX_FRAMES
    min_pages: int = MIN_PAGES
    max_pages: int = MAX_PAGES
    default_length: int = DEFAULT_LENGTH

    @classmethod
    def from_environment(cls, env: Mapping[str, str]) -> "Limits":
        """Build limits from ``PAGE_SIM_*`` variables, defaulting the rest.

        Args:
            env: String pairs, typically ``os.environ``.

        Raises:
            ParameterError: If a variable is not an integer, or a maximum
                falls below its minimum.

        """
        limits = cls(
            max_frames=_read_int(env, ENV_MAX_FRAMES, MAX_FRAMES),
            max_pages=_read_int(env, ENV_MAX_PAGES, MAX_PAGES),
            default_length=_read_int(env, ENV_LENGTH, DEFAULT_LENGTH),
        )
        if limits.max_frames < limits.min_frames:
            msg = f"{ENV_MAX_FRAMES} must be at least {limits.min_frames}"
            raise ParameterError(msg)
        if limits.max_pages < limits.min_pages:
            msg = f"{ENV_MAX_PAGES} must be at least {limits.min_pages}"
            raise ParameterError(msg)
        if limits.default_length < 0:
            msg = f"{ENV_LENGTH} must not be negative"
            raise ParameterError(msg)
        return limits

    @property
    def frame_range(self) -> range:
        """Return every allowed frame count, smallest first."""
        return range(self.min_frames, self.max_frames + 1)


def _read_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        msg = f"{key} must be an integer (got {raw!r})"
        raise ParameterError(msg) from None


def validate_pages(num_pages: int, limits: Limits | None = None) -> None:
    """Check an address-space size against *limits*.

    Raises:
        ParameterError: If *num_pages* is out of range.

    """
    bounds = limits or Limits()
    if not bounds.min_pages <= num_pages <= bounds.max_pages:
        msg = f"Number of pages must be between {bounds.min_pages} and {bounds.max_pages} (got {num_pages})"
        raise ParameterError(msg)


def validate_parameters(num_pages: int, num_frames: int, limits: Limits | None = None) -> None:
    """Check page and frame counts against *limits*.

    Raises:
        ParameterError: If either value is out of range.

    """
    bounds = limits or Limits()
    validate_pages(num_pages, bounds)
    if not bounds.min_frames <= num_frames <= bounds.max_frames:
        msg = (
            f"Number of frames must be between {bounds.min_frames} and {bounds.max_frames} "
            f"(got {num_frames})"
        )
        raise ParameterError(msg)
