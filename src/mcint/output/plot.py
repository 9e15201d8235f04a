"""Plot of the integrand with the estimated integral."""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from mcint.config import RenderSettings
from mcint.errors import InvalidFunctionError
from mcint.expression import Integrand
from mcint.models import EstimationResult


def padded_domain(x_range: tuple[float, float], padding_factor: float) -> tuple[float, float]:
    """Widen [a, b] to [b - p*(b-a), a + p*(b-a)]."""
    a, b = x_range
    delta = b - a
    return b - padding_factor * delta, a + padding_factor * delta


def _point_or_nan(integrand: Integrand, x: float) -> float:
    try:
        return float(integrand(x))
    except InvalidFunctionError:
        return np.nan


def _evaluate_or_nan(integrand: Integrand, xs: np.ndarray) -> np.ndarray:
    """Evaluate on a grid; points where f fails are NaN."""
    with np.errstate(all="ignore"):
        try:
            return integrand(xs)
        except InvalidFunctionError:
            return np.array([_point_or_nan(integrand, x) for x in xs])


def estimate_title(result: EstimationResult) -> str:
    return f"Estimated integral: {round(result.I, 4)} ({round(result.std_error, 4)})"


def render_estimate(
    result: EstimationResult,
    ax: Axes | None = None,
    settings: RenderSettings | None = None,
) -> Figure:
    """Draw f over a padded domain and shade the integrated area.

    Args:
        result: Estimation result to draw
        ax: Axes to draw on (a new figure is created if None)
        settings: Appearance settings

    Returns:
        Figure containing the plot
    """
    settings = settings or RenderSettings()
    integrand = Integrand.compile(result.fun)

    if ax is None:
        fig, ax = plt.subplots(figsize=settings.figsize)
    else:
        fig = ax.figure

    lo, hi = padded_domain(result.x_range, settings.padding_factor)
    x_graph = np.linspace(lo, hi, settings.num_points)
    x_area = np.linspace(result.a, result.b, settings.num_points)
    f_graph = _evaluate_or_nan(integrand, x_graph)
    f_area = _evaluate_or_nan(integrand, x_area)

    ax.set_xlim(lo, hi)
    finite = f_graph[np.isfinite(f_graph)]
    if finite.size and finite.min() < finite.max():
        ax.set_ylim(finite.min(), finite.max())

    ax.set_xlabel("x")
    ax.set_ylabel("f(x)")
    ax.grid(True)
    ax.set_title(estimate_title(result))

    ax.plot(x_graph, f_graph, color=settings.line_color)
    ax.fill_between(
        x_area,
        0.0,
        f_area,
        color=settings.fill_color,
        alpha=settings.fill_alpha,
        linewidth=0,
    )
    ax.axvline(result.a, linestyle="--", color="black")
    ax.axvline(result.b, linestyle="--", color="black")

    return fig


def save_estimate_plot(
    result: EstimationResult,
    path: str | Path,
    settings: RenderSettings | None = None,
) -> Path:
    """Render the estimate plot and write it to path.

    Returns:
        Path to created file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fig = render_estimate(result, settings=settings)
    try:
        fig.savefig(path)
    finally:
        plt.close(fig)
    return path
