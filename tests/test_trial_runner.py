from __future__ import annotations

import itertools
import math

import pytest

from idbench.errors import ConfigurationError, GenerationFailure
from idbench.id_sources import DirectIdentifierSource, PooledIdentifierSource
from idbench.trial_runner import BenchmarkRunner


def fake_clock(step_seconds):
    """Clock that advances by ``step_seconds`` on every reading."""
    ticks = itertools.count()
    return lambda: next(ticks) * step_seconds


def test_direct_source_two_trials_positive_finite():
    results = BenchmarkRunner().run(DirectIdentifierSource(), trials=2, ids_per_trial=100)

    assert len(results) == 2
    assert [r.trial_number for r in results] == [1, 2]
    for result in results:
        assert result.calls == 100
        assert result.source_name == "Direct ID Generation"
        assert result.is_defined
        assert math.isfinite(result.mean_us)
        assert result.mean_us > 0


def test_mean_is_reported_in_microseconds():
    # Each start/end pair is one 2µs step apart
    runner = BenchmarkRunner(clock=fake_clock(0.000002))
    results = runner.run(DirectIdentifierSource(), trials=3, ids_per_trial=10)

    assert len(results) == 3
    for result in results:
        assert result.mean_us == pytest.approx(2.0)


def test_zero_ids_per_trial_yields_undefined_marker():
    results = BenchmarkRunner().run(DirectIdentifierSource(), trials=3, ids_per_trial=0)

    assert len(results) == 3
    for result in results:
        assert not result.is_defined
        assert math.isnan(result.mean_us)
        assert result.calls == 0


def test_pooled_source_results_are_non_negative(counting_generator):
    source = PooledIdentifierSource(capacity=7, policy="sync", generator=counting_generator)
    results = BenchmarkRunner().run(source, trials=4, ids_per_trial=5)

    assert len(results) == 4
    assert all(r.mean_us >= 0 for r in results)
    assert source.refill_count == 2


@pytest.mark.parametrize(("trials", "ids_per_trial"), [(0, 10), (-1, 10), (2, -1), (2, 1.5)])
def test_invalid_counts_are_rejected(trials, ids_per_trial):
    with pytest.raises(ConfigurationError):
        BenchmarkRunner().run(DirectIdentifierSource(), trials=trials, ids_per_trial=ids_per_trial)


def test_generation_failure_aborts_the_run():
    calls = []

    def flaky():
        calls.append(1)
        if len(calls) == 5:
            raise RuntimeError("no entropy")
        return str(len(calls))

    with pytest.raises(GenerationFailure):
        BenchmarkRunner().run(DirectIdentifierSource(generator=flaky), trials=2, ids_per_trial=10)
    assert len(calls) == 5
