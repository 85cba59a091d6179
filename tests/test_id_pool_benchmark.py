from __future__ import annotations

import pytest

import id_pool_benchmark
from idbench.errors import GenerationFailure
from idbench.models import BenchmarkConfig, RefillPolicy


@pytest.mark.parametrize("policy", list(RefillPolicy))
def test_experiment_prints_comparison(policy, capsys):
    config = BenchmarkConfig(trials=3, ids_per_trial=40, pool_capacity=25, refill_policy=policy)

    report = id_pool_benchmark.ExperimentRunner(config).run()

    assert len(report.rows) == 3
    assert report.baseline_name == "Direct ID Generation"
    assert report.candidate_name == "Pooled ID Generation"
    out = capsys.readouterr().out
    assert "Pooled ID Generation" in out
    assert all(row.label.endswith(("faster", "slower")) for row in report.rows)


def test_main_runs_to_completion(clean_env, monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["id_pool_benchmark.py"])
    clean_env.setenv("TRIALS", "2")
    clean_env.setenv("IDS_PER_TRIAL", "10")
    clean_env.setenv("POOL_CAPACITY", "5")

    id_pool_benchmark.main()

    out = capsys.readouterr().out
    assert "Difference" in out


def test_main_exits_non_zero_on_configuration_error(clean_env, monkeypatch):
    monkeypatch.setattr("sys.argv", ["id_pool_benchmark.py"])
    clean_env.setenv("POOL_CAPACITY", "0")

    with pytest.raises(SystemExit) as excinfo:
        id_pool_benchmark.main()
    assert excinfo.value.code == 1


def test_main_exits_non_zero_on_generation_failure(clean_env, monkeypatch):
    monkeypatch.setattr("sys.argv", ["id_pool_benchmark.py"])
    clean_env.setenv("POOL_CAPACITY", "5")

    def failing_run(self):
        msg = "Identifier generation failed: no entropy"
        raise GenerationFailure(msg)

    monkeypatch.setattr(id_pool_benchmark.ExperimentRunner, "run", failing_run)

    with pytest.raises(SystemExit) as excinfo:
        id_pool_benchmark.main()
    assert excinfo.value.code == 1
