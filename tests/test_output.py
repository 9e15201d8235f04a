"""Tests for console output, export and plotting."""

import csv
import json
import math

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest
from matplotlib.figure import Figure

from mcint import ConvergenceStudy, RenderSettings, estimate
from mcint.output import ConsoleOutput, Exporter, render_estimate, save_estimate_plot
from mcint.output.plot import estimate_title, padded_domain


@pytest.fixture
def study_results():
    return ConvergenceStudy((0, 1), "x^2", seed=9).run(sample_counts=[100, 1000], replicates=5)


def test_print_estimate(capsys, square_estimate):
    ConsoleOutput.print_estimate(square_estimate)
    out = capsys.readouterr().out
    assert "MONTE CARLO INTEGRATION" in out
    assert "x^2" in out
    assert "[0, 1]" in out
    assert "10,000" in out
    assert f"{square_estimate.I:.6f}" in out
    assert "95% CI" in out


def test_print_convergence_summary(capsys, study_results):
    ConsoleOutput.print_convergence_summary(study_results)
    out = capsys.readouterr().out
    assert "CONVERGENCE STUDY" in out
    assert "base seed 9" in out
    assert "Variance decay slope" in out


def test_exporter_creates_directory(tmp_path):
    Exporter(output_dir=tmp_path / "nested" / "out")
    assert (tmp_path / "nested" / "out").is_dir()


def test_export_estimate_json(tmp_path, square_estimate):
    path = Exporter(output_dir=tmp_path).export_estimate_json(square_estimate)
    data = json.loads(path.read_text())
    assert data["I"] == square_estimate.I
    assert data["var"] == square_estimate.var
    assert data["fun"] == "x^2"
    assert data["x_range"] == [0.0, 1.0]
    lower, upper = data["confidence_interval_95"]
    assert lower < data["I"] < upper


def test_export_convergence_csv(tmp_path, study_results):
    path = Exporter(output_dir=tmp_path).export_convergence_csv(study_results)
    frame = pd.read_csv(path)
    assert frame["sample_count"].tolist() == [100, 1000]
    assert frame["mean_estimate"].tolist() == pytest.approx(
        study_results.to_frame()["mean_estimate"].tolist()
    )


def test_export_replicates_csv(tmp_path, study_results):
    path = Exporter(output_dir=tmp_path).export_replicates_csv(study_results)
    with open(path, newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 10
    assert rows[0]["sample_count"] == "100"
    assert rows[0]["seed"] == "9"
    assert float(rows[0]["estimate"]) == study_results.stats[100].estimates[0]


def test_export_all(tmp_path, study_results):
    files = Exporter(output_dir=tmp_path).export_all(study_results, prefix="run")
    assert set(files) == {"convergence_csv", "replicates_csv"}
    assert files["convergence_csv"].name == "run_convergence.csv"
    assert all(path.exists() for path in files.values())


def test_padded_domain():
    assert padded_domain((0.0, 1.0), 1.15) == pytest.approx((-0.15, 1.15))
    assert padded_domain((2.0, 4.0), 1.0) == pytest.approx((2.0, 4.0))


def test_estimate_title():
    result = estimate(0, 1, "x^2", 1000)
    assert estimate_title(result) == (
        f"Estimated integral: {round(result.I, 4)} ({round(np.sqrt(result.var), 4)})"
    )


def test_render_estimate(close_figures, square_estimate):
    fig = render_estimate(square_estimate)
    assert isinstance(fig, Figure)

    ax = fig.axes[0]
    assert ax.get_title().startswith("Estimated integral: ")
    assert ax.get_xlabel() == "x"
    assert ax.get_ylabel() == "f(x)"
    assert ax.get_xlim() == pytest.approx((-0.15, 1.15))
    # curve plus the two bound markers
    assert len(ax.lines) == 3
    assert len(ax.collections) == 1

    curve = ax.lines[0]
    assert len(curve.get_xdata()) == 1000


def test_render_on_given_axes(close_figures):
    fig, ax = plt.subplots()
    result = estimate(0, 2, np.exp, 500)
    settings = RenderSettings(num_points=50, padding_factor=1.5)
    assert render_estimate(result, ax=ax, settings=settings) is fig
    assert len(ax.lines[0].get_xdata()) == 50
    assert ax.get_xlim() == pytest.approx((-1.0, 3.0))


def test_render_tolerates_undefined_padding(close_figures):
    result = estimate(0, 1, "sqrt(x)", 500)
    fig = render_estimate(result)
    lo, hi = fig.axes[0].get_ylim()
    assert np.isfinite(lo) and np.isfinite(hi)


def test_save_estimate_plot(tmp_path, square_estimate):
    path = save_estimate_plot(square_estimate, tmp_path / "plots" / "estimate.png")
    assert path.exists()
    assert path.stat().st_size > 0


def test_render_scalar_callable_undefined_outside_range(close_figures):
    result = estimate(0, 1, math.sqrt, 1000)
    fig = render_estimate(result)

    ax = fig.axes[0]
    xs = np.asarray(ax.lines[0].get_xdata())
    ys = np.asarray(ax.lines[0].get_ydata())
    assert np.all(np.isnan(ys[xs < 0]))
    np.testing.assert_allclose(ys[xs >= 0], np.sqrt(xs[xs >= 0]))
    lo, hi = ax.get_ylim()
    assert np.isfinite(lo) and np.isfinite(hi)


def test_save_estimate_plot_closes_figure_on_error(tmp_path, square_estimate, monkeypatch):
    def failing_savefig(self, *args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(Figure, "savefig", failing_savefig)
    before = plt.get_fignums()
    with pytest.raises(OSError, match="disk full"):
        save_estimate_plot(square_estimate, tmp_path / "estimate.png")
    assert plt.get_fignums() == before


def test_render_settings_validation():
    with pytest.raises(ValueError):
        RenderSettings(padding_factor=0.5)
    with pytest.raises(ValueError):
        RenderSettings(num_points=1)
