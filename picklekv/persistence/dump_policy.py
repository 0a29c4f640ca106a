# ==============================================
# Dump Policy (Data Classes + Scheduler)
# ==============================================
#
# PURPOSE:
#   Decide, after every mutation, whether the DB should be written
#   to its file.
#
# ENUMS:
# ------
# - DumpMode(Enum): NEVER, AUTO, UPON_REQUEST, PERIODIC
#
# CLASSES:
# --------
# - DumpPolicy (frozen dataclass)
#     mode: DumpMode
#     interval: float   → seconds, only used by PERIODIC
#
# - DumpScheduler
#     Holds the policy and the time of the last dump.
#
#     - on_mutation() -> bool   → should this mutation trigger a dump?
#     - allows_dump() -> bool   → False only for NEVER (read-only DB)
#     - mark_dumped() -> None   → restart the cooldown
#
# HOW PERIODIC WORKS:
#   It is a cooldown gate, not a timer. A dump only happens as a side
#   effect of a mutation that arrives more than `interval` seconds after
#   the last dump. Manual dumps restart the same clock.
#
# ==============================================

import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from picklekv.errors import ConfigError


class DumpMode(Enum):
    """
    When changes are written to the DB file.

    - NEVER: never write, even on dump(); the file stays read-only
    - AUTO: write after every change
    - UPON_REQUEST: write only when dump() is called
    - PERIODIC: write on a change if the last dump is older than the interval
    """
    NEVER = "never"
    AUTO = "auto"
    UPON_REQUEST = "upon_request"
    PERIODIC = "periodic"


@dataclass(frozen=True)
class DumpPolicy:
    """A dump mode plus its interval (PERIODIC only)."""

    mode: DumpMode
    interval: float = 0.0

    def __post_init__(self):
        if not math.isfinite(self.interval) or self.interval < 0:
            raise ValueError(f"Dump interval must be a finite number >= 0, got {self.interval}")

    @classmethod
    def never(cls) -> "DumpPolicy":
        return cls(DumpMode.NEVER)

    @classmethod
    def auto(cls) -> "DumpPolicy":
        return cls(DumpMode.AUTO)

    @classmethod
    def upon_request(cls) -> "DumpPolicy":
        return cls(DumpMode.UPON_REQUEST)

    @classmethod
    def periodic(cls, interval: float) -> "DumpPolicy":
        return cls(DumpMode.PERIODIC, float(interval))

    @classmethod
    def parse(cls, name: str, interval: float = 0.0) -> "DumpPolicy":
        """
        Build a policy from its config name.

        Args:
            name: never / auto / upon_request / periodic (case-insensitive)
            interval: Seconds between dumps, used only for periodic

        Raises:
            ConfigError: for unknown names or a negative interval
        """
        normalized = name.strip().lower().replace("-", "_")
        try:
            mode = DumpMode(normalized)
        except ValueError:
            raise ConfigError(
                f"Unknown dump policy '{name}'",
                details={"available": [m.value for m in DumpMode]},
            ) from None

        if mode is not DumpMode.PERIODIC:
            return cls(mode)
        try:
            return cls.periodic(interval)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    def __str__(self) -> str:
        if self.mode is DumpMode.PERIODIC:
            return f"periodic({self.interval:g}s)"
        return self.mode.value


class DumpScheduler:
    """Applies a DumpPolicy to a stream of mutations."""

    def __init__(self, policy: DumpPolicy, clock: Optional[Callable[[], float]] = None):
        self.policy = policy
        self._clock = clock or time.monotonic
        self.last_dump = self._clock()

    def on_mutation(self) -> bool:
        """
        Check whether the mutation that just happened should be dumped.

        Returns:
            True if the caller should write the DB now
        """
        mode = self.policy.mode
        if mode is DumpMode.AUTO:
            return True
        if mode is DumpMode.PERIODIC:
            return self.seconds_since_dump() > self.policy.interval
        return False

    def allows_dump(self) -> bool:
        return self.policy.mode is not DumpMode.NEVER

    def mark_dumped(self) -> None:
        self.last_dump = self._clock()

    def seconds_since_dump(self) -> float:
        return self._clock() - self.last_dump
