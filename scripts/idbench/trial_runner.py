"""Timed trial execution for identifier sources.

This module provides the BenchmarkRunner class, which times individual
identifier generation calls and averages them per trial.
"""

from __future__ import annotations

import math
import time
from statistics import mean
from typing import TYPE_CHECKING

from .errors import ConfigurationError
from .logger import logger
from .models import TrialResult, require_positive_int

if TYPE_CHECKING:
    from collections.abc import Callable

    from .id_sources import IdentifierSource

MICROSECONDS_PER_SECOND = 1_000_000


class BenchmarkRunner:
    """Drives repeated timed calls against an identifier source.

    Each call to ``source.next()`` is timed on its own with ``perf_counter``;
    a trial's result is the arithmetic mean of its call durations in
    microseconds.
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        """Initialise the runner with the clock used for timing.

        Args:
            clock: Monotonic clock returning fractional seconds.
        """
        self.clock = clock

    def time_trial(self, source: IdentifierSource, ids_per_trial: int) -> float:
        """Time ``ids_per_trial`` calls and average them.

        Returns:
            Mean call duration in microseconds, or NaN when no calls were made.
        """
        if ids_per_trial == 0:
            return math.nan

        clock = self.clock
        durations: list[float] = []
        for _ in range(ids_per_trial):
            start = clock()
            source.next()
            end = clock()
            durations.append((end - start) * MICROSECONDS_PER_SECOND)

        return mean(durations)

    def run(self, source: IdentifierSource, trials: int, ids_per_trial: int) -> list[TrialResult]:
        """Run all trials against one source.

        Args:
            source: Identifier source under test.
            trials: Number of trials, at least 1.
            ids_per_trial: Timed calls per trial; 0 yields undefined means.

        Returns:
            Exactly ``trials`` results in trial order.

        Raises:
            ConfigurationError: If trials is below 1 or ids_per_trial is negative.
            GenerationFailure: If the source fails to produce an identifier.
        """
        require_positive_int("trials", trials)
        if isinstance(ids_per_trial, bool) or not isinstance(ids_per_trial, int):
            msg = f"ids_per_trial must be an integer, got {ids_per_trial!r}"
            raise ConfigurationError(msg)
        if ids_per_trial < 0:
            msg = f"ids_per_trial must not be negative, got {ids_per_trial}"
            raise ConfigurationError(msg)

        results: list[TrialResult] = []
        for trial_number in range(1, trials + 1):
            mean_us = self.time_trial(source, ids_per_trial)
            results.append(
                TrialResult(
                    trial_number=trial_number,
                    source_name=source.name,
                    calls=ids_per_trial,
                    mean_us=mean_us,
                )
            )
            logger.info(
                "  ⏱️ %s trial %s/%s: %.3fµs per id",
                source.name,
                trial_number,
                trials,
                mean_us,
            )

        return results
