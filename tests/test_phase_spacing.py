# tests/test_phase_spacing.py

import pytest

np = pytest.importorskip("numpy")

from moonphase.diagnostics import phase_spacing
from moonphase.engines.phases import EIGHTH_MONTH


def test_build_gaps_shape_and_bounds():
    years, gaps = phase_spacing.build_gaps(np, 2016.0, 2017.0)
    assert gaps.shape == (13, 8)
    assert years.shape == (13,)
    assert np.all(gaps > 0)
    assert np.all(np.abs(gaps - EIGHTH_MONTH) < 1.5)
    # principal -> intermediate is exactly one eighth of the month
    assert np.allclose(gaps[:, 0::2], EIGHTH_MONTH, atol=1e-8)

def test_build_gaps_rejects_empty_range():
    with pytest.raises(ValueError):
        phase_spacing.build_gaps(np, 2017.0, 2016.0)

def test_summarize():
    _, gaps = phase_spacing.build_gaps(np, 2000.0, 2010.0)
    stats = phase_spacing.summarize(np, gaps)
    assert set(stats) == {"min_gap", "max_gap", "mean_gap", "max_abs_deviation", "rms_deviation"}
    assert stats["min_gap"] <= stats["mean_gap"] <= stats["max_gap"]
    assert stats["mean_gap"] == pytest.approx(EIGHTH_MONTH, abs=0.01)
    assert 0 < stats["rms_deviation"] <= stats["max_abs_deviation"] < 1.5

def test_main_prints_summary(capsys):
    assert phase_spacing.main(["--year-start", "2016", "--year-end", "2017"]) == 0
    out = capsys.readouterr().out
    assert "Lunations: 13" in out
    assert "max_abs_deviation" in out

def test_main_saves_plot(tmp_path):
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")
    out = tmp_path / "spacing.png"
    assert phase_spacing.main(["--year-start", "2016", "--year-end", "2017", "--out-png", str(out)]) == 0
    assert out.exists()

def test_cli_dispatch(capsys):
    from moonphase import cli

    assert cli.main(["diag", "spacing", "--year-start", "2016", "--year-end", "2017"]) == 0
    assert "Lunations: 13" in capsys.readouterr().out
