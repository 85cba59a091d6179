"""Data models and configuration classes for the identifier benchmark.

This module contains the dataclasses shared across the benchmark: the validated
run configuration, the per-trial result and the comparison table row.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from enum import Enum

from dotenv import dotenv_values

from .errors import ConfigurationError


class RefillPolicy(Enum):
    """How a pooled source behaves when it finds its pool empty."""

    SYNCHRONOUS = "sync"
    ASYNCHRONOUS = "async"

    @classmethod
    def parse(cls, value: str | RefillPolicy) -> RefillPolicy:
        """Resolve a policy from its config spelling.

        Returns:
            The matching RefillPolicy.

        Raises:
            ConfigurationError: If the value names no known policy.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            choices = ", ".join(policy.value for policy in cls)
            msg = f"Unknown refill policy {value!r}, expected one of: {choices}"
            raise ConfigurationError(msg) from e


def require_positive_int(name: str, value: object) -> int:
    """Validate that a count is a positive integer.

    Returns:
        The value unchanged.

    Raises:
        ConfigurationError: If the value is not an int, is a bool, or is below 1.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{name} must be an integer, got {value!r}"
        raise ConfigurationError(msg)
    if value < 1:
        msg = f"{name} must be positive, got {value}"
        raise ConfigurationError(msg)
    return value


DEFAULT_TRIALS = 5
DEFAULT_IDS_PER_TRIAL = 100_000
DEFAULT_POOL_CAPACITY = 1_000_000
DEFAULT_REFILL_POLICY = RefillPolicy.ASYNCHRONOUS


@dataclass
class BenchmarkConfig:
    """Configuration settings for one benchmark run.

    All counts are validated on creation; out-of-range values raise
    ConfigurationError instead of being clamped. Use ``from_dotenv`` to pick up
    overrides from the environment.
    """

    trials: int = DEFAULT_TRIALS
    ids_per_trial: int = DEFAULT_IDS_PER_TRIAL
    pool_capacity: int = DEFAULT_POOL_CAPACITY
    refill_policy: RefillPolicy | str = DEFAULT_REFILL_POLICY

    def __post_init__(self) -> None:
        """Validate counts and normalise the refill policy."""
        require_positive_int("trials", self.trials)
        require_positive_int("ids_per_trial", self.ids_per_trial)
        require_positive_int("pool_capacity", self.pool_capacity)
        self.refill_policy = RefillPolicy.parse(self.refill_policy)

    @classmethod
    def from_dotenv(cls, env_file: str = ".env") -> BenchmarkConfig:
        """Create configuration from an optional .env file.

        Process environment variables take precedence over the file, and any
        key missing from both falls back to the built-in default.

        Returns:
            BenchmarkConfig: A validated configuration.
        """
        file_values = dotenv_values(env_file)

        def get_value(key: str, default: str) -> str:
            value = os.environ.get(key, file_values.get(key))
            return default if value is None else value

        def get_int(key: str, default: int) -> int:
            value = get_value(key, str(default))
            try:
                return int(value)
            except ValueError as e:
                msg = f"Invalid integer value for environment variable {key}: {value}"
                raise ConfigurationError(msg) from e

        return cls(
            trials=get_int("TRIALS", DEFAULT_TRIALS),
            ids_per_trial=get_int("IDS_PER_TRIAL", DEFAULT_IDS_PER_TRIAL),
            pool_capacity=get_int("POOL_CAPACITY", DEFAULT_POOL_CAPACITY),
            refill_policy=get_value("REFILL_POLICY", DEFAULT_REFILL_POLICY.value),
        )


@dataclass
class TrialResult:
    """Mean per-call latency of one trial against one identifier source.

    A trial with no calls has ``mean_us`` set to NaN so it cannot be mistaken for
    a genuine zero-duration trial.
    """

    trial_number: int
    source_name: str
    calls: int
    mean_us: float

    @property
    def is_defined(self) -> bool:
        """Whether the trial produced a real mean."""
        return not math.isnan(self.mean_us)


@dataclass
class ComparisonRow:
    """One line of the comparison table."""

    trial_number: int
    baseline_us: float
    candidate_us: float
    label: str
