#!/usr/bin/env python3
"""Identifier Generation Latency Benchmark.

Compares the per-call latency of generating random UUIDs on demand against
drawing them from a pre-generated pool that is regenerated whenever it runs
dry. Both sources are driven through the same number of timed trials and the
per-trial averages are printed side by side with a relative-speed label.

The pool's refill policy decides what the call that empties the pool pays:
- sync: the caller blocks while the whole pool is regenerated
- async: the pool is regenerated in the background and callers fall back to
  direct generation until the new batch is swapped in
"""

from __future__ import annotations

import argparse

from idbench.errors import ConfigurationError, GenerationFailure
from idbench.id_sources import DirectIdentifierSource, PooledIdentifierSource
from idbench.logger import logger
from idbench.models import (
    DEFAULT_IDS_PER_TRIAL,
    DEFAULT_POOL_CAPACITY,
    DEFAULT_REFILL_POLICY,
    DEFAULT_TRIALS,
    BenchmarkConfig,
)
from idbench.report import ComparisonReport
from idbench.trial_runner import BenchmarkRunner

EXIT_INTERRUPTED = 130


class ExperimentRunner:
    """Main experiment coordinator.

    Builds the direct (baseline) and pooled (candidate) sources, runs the same
    trials against each and prints the comparison table.
    """

    def __init__(self, config: BenchmarkConfig, runner: BenchmarkRunner | None = None) -> None:
        """Initialise the experiment with configuration and a trial runner."""
        self.config = config
        self.runner = runner or BenchmarkRunner()

    def run(self) -> ComparisonReport:
        """Run baseline then candidate trials and print the comparison.

        Returns:
            The printed ComparisonReport.
        """
        baseline = DirectIdentifierSource()

        logger.info(
            "🏗️ Pre-generating pool of %s identifiers (%s refill)...",
            self.config.pool_capacity,
            self.config.refill_policy.value,
        )
        candidate = PooledIdentifierSource(
            capacity=self.config.pool_capacity, policy=self.config.refill_policy
        )

        logger.info("🎭 === %s ===", baseline.name.upper())
        baseline_results = self.runner.run(
            baseline, self.config.trials, self.config.ids_per_trial
        )

        logger.info("🎭 === %s ===", candidate.name.upper())
        candidate_results = self.runner.run(
            candidate, self.config.trials, self.config.ids_per_trial
        )
        logger.info("🔄 Pool refills during run: %s", candidate.refill_count)

        report = ComparisonReport(baseline_results, candidate_results)
        report.print_table()
        return report


def parse_arguments() -> argparse.Namespace:
    """Parse command line arguments for benchmark configuration.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description="Direct vs pooled identifier generation benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Configuration (environment variables or .env file, defaults shown):
  TRIALS:         {DEFAULT_TRIALS}
  IDS_PER_TRIAL:  {DEFAULT_IDS_PER_TRIAL}
  POOL_CAPACITY:  {DEFAULT_POOL_CAPACITY}
  REFILL_POLICY:  {DEFAULT_REFILL_POLICY.value} (sync or async)
  LOG_LEVEL:      INFO
        """,
    )

    return parser.parse_args()


def main() -> None:
    """Main entry point for the benchmark.

    Loads configuration and runs the experiment, mapping known failures to a
    non-zero exit status.

    Raises:
        SystemExit: If configuration is invalid, generation fails or the run is interrupted.
    """
    parse_arguments()  # Parse arguments for help message support

    try:
        config = BenchmarkConfig.from_dotenv()

        logger.info("🚀 Starting identifier generation benchmark")
        logger.info("🔄 Trials: %s", config.trials)
        logger.info("🆔 Identifiers per trial: %s", config.ids_per_trial)
        logger.info("🏊 Pool capacity: %s", config.pool_capacity)
        logger.info("⚙️ Refill policy: %s", config.refill_policy.value)

        ExperimentRunner(config).run()
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        raise SystemExit(1) from e
    except GenerationFailure as e:
        logger.error("💥 Benchmark aborted: %s", e)
        raise SystemExit(1) from e
    except KeyboardInterrupt as e:
        logger.info("⏹️ Benchmark interrupted by user")
        raise SystemExit(EXIT_INTERRUPTED) from e
    except Exception as e:
        logger.exception("💥 Benchmark failed")
        raise SystemExit(1) from e

    logger.info("🎉 Benchmark complete")


if __name__ == "__main__":
    main()
