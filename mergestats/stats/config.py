"""Configuration for the stats pipeline.

Usage
-----
Create a configuration with defaults:

>>> config = StatsConfig()
>>> config.pacing_interval_s
0.1

Or load from environment variables:

>>> import os
>>> os.environ["MERGESTATS_PACING_INTERVAL_S"] = "0.25"
>>> StatsConfig.from_env().pacing_interval_s
0.25

"""

from __future__ import annotations

import dataclasses as dc
import os

_DEFAULT_PACING_INTERVAL_S = 0.1


@dc.dataclass(frozen=True, slots=True)
class StatsConfig:
    """Configuration for stats pipeline runs.

    Attributes
    ----------
    pacing_interval_s
        Pause, in seconds, after each successful pull request detail lookup.
        Keeps a run under GitHub's secondary rate limits; ``0`` disables it.

    """

    pacing_interval_s: float = _DEFAULT_PACING_INTERVAL_S

    def __post_init__(self) -> None:
        """Reject negative pacing intervals."""
        if self.pacing_interval_s < 0:
            msg = (
                "pacing_interval_s must be non-negative, "
                f"got: {self.pacing_interval_s}"
            )
            raise ValueError(msg)

    @classmethod
    def from_env(cls) -> StatsConfig:
        """Create configuration from environment variables.

        Reads ``MERGESTATS_PACING_INTERVAL_S``, a non-negative float. Unset or
        blank values fall back to the default.

        Raises
        ------
        ValueError
            If the value is not a non-negative number.

        """
        raw = os.environ.get("MERGESTATS_PACING_INTERVAL_S", "")
        if not raw.strip():
            return cls()
        try:
            pacing = float(raw)
        except ValueError as exc:
            msg = f"MERGESTATS_PACING_INTERVAL_S must be a number, got: {raw!r}"
            raise ValueError(msg) from exc
        return cls(pacing_interval_s=pacing)
