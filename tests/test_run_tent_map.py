"""Tests for the tent map demo script."""

import importlib.util
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "run_tent_map.py"


def load_script():
    spec = importlib.util.spec_from_file_location("run_tent_map", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_run_without_batches():
    """A run with no batches finishes without a derived record."""
    script = load_script()
    config = dict(script.CONFIG, **script.CONFIG["RUNS"][0])
    config.update(NUM_BATCHES=0, SHOW_PLOTS=False)

    chart = script.run(config)
    assert chart.last_record is None


def test_run_streams_batches():
    script = load_script()
    config = dict(script.CONFIG, **script.CONFIG["RUNS"][0])
    config.update(NUM_BATCHES=5, SHOW_PLOTS=False)

    chart = script.run(config)
    assert chart.last_record is not None
    assert chart.data.series_names() == ["series 1", "series 2"]
