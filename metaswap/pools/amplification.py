"""Amplification ramp scheduler.

The amplification parameter A moves linearly between two values over a
governance-chosen window. Values are stored multiplied by A_PRECISION.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from metaswap.constants import A_PRECISION, MAX_A, MAX_A_CHANGE, MIN_RAMP_TIME, RAMP_COOLDOWN
from metaswap.errors import (
    CurvatureChangeTooLarge,
    CurvatureOutOfRange,
    RampAlreadyStopped,
    RampTooShort,
    RampTooSoon,
)

logger = structlog.get_logger()


@dataclass
class AmplificationRamp:
    """Time-interpolated amplification parameter.

    The ramp is Ramping while now < future_a_time and Stable otherwise.

    Attributes:
        initial_a: A at ramp start (scaled by A_PRECISION)
        future_a: A at ramp end (scaled by A_PRECISION)
        initial_a_time: Ramp start timestamp
        future_a_time: Ramp end timestamp
    """

    initial_a: int
    future_a: int
    initial_a_time: int = 0
    future_a_time: int = 0

    @classmethod
    def constant(cls, a: int) -> AmplificationRamp:
        """Create a stable schedule at A = a (unscaled)."""
        return cls(initial_a=a * A_PRECISION, future_a=a * A_PRECISION)

    def is_ramping(self, now: int) -> bool:
        return now < self.future_a_time

    def a_precise(self, now: int) -> int:
        """Current A, scaled by A_PRECISION."""
        t1 = self.future_a_time
        a1 = self.future_a
        if now >= t1:
            return a1

        t0 = self.initial_a_time
        a0 = self.initial_a
        if a1 > a0:
            return a0 + (a1 - a0) * (now - t0) // (t1 - t0)
        return a0 - (a0 - a1) * (now - t0) // (t1 - t0)

    def a(self, now: int) -> int:
        """Current A without the A_PRECISION scale."""
        return self.a_precise(now) // A_PRECISION

    def begin(self, future_a: int, future_time: int, now: int) -> None:
        """Start ramping A towards future_a, reaching it at future_time.

        Args:
            future_a: Target A (unscaled)
            future_time: Timestamp at which the target is reached
            now: Current timestamp

        Raises:
            RampTooSoon: If the previous ramp started less than a day ago
            RampTooShort: If the ramp lasts less than MIN_RAMP_TIME
            CurvatureOutOfRange: If future_a is not in (0, MAX_A)
            CurvatureChangeTooLarge: If A would change by more than MAX_A_CHANGE
        """
        if now < self.initial_a_time + RAMP_COOLDOWN:
            raise RampTooSoon("Wait 1 day before starting ramp")
        if future_time < now + MIN_RAMP_TIME:
            raise RampTooShort("Insufficient ramp time")
        if not 0 < future_a < MAX_A:
            raise CurvatureOutOfRange("futureA_ must be > 0 and < MAX_A")

        initial_a_precise = self.a_precise(now)
        future_a_precise = future_a * A_PRECISION

        if future_a_precise < initial_a_precise:
            if future_a_precise * MAX_A_CHANGE < initial_a_precise:
                raise CurvatureChangeTooLarge("futureA_ is too small")
        elif future_a_precise > initial_a_precise * MAX_A_CHANGE:
            raise CurvatureChangeTooLarge("futureA_ is too large")

        self.initial_a = initial_a_precise
        self.future_a = future_a_precise
        self.initial_a_time = now
        self.future_a_time = future_time

        logger.info(
            "ramp_a_started",
            old_a=initial_a_precise,
            new_a=future_a_precise,
            initial_time=now,
            future_time=future_time,
        )

    def stop(self, now: int) -> None:
        """Freeze A at its current value.

        Raises:
            RampAlreadyStopped: If no ramp is in progress
        """
        if self.future_a_time <= now:
            raise RampAlreadyStopped("Ramp is already stopped")

        current_a = self.a_precise(now)
        self.initial_a = current_a
        self.future_a = current_a
        self.initial_a_time = now
        self.future_a_time = now

        logger.info("ramp_a_stopped", current_a=current_a, time=now)
