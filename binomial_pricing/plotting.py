"""
Price-vs-steps chart for the convergence series.

`ConvergenceChart` owns its figure and axis. Each `update` drops the previous
line and draws the new series, so one chart object can be reused across
requests or thrown away and rebuilt. Nothing here is imported by the engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

LINE_COLOR = "#667eea"
FILL_COLOR = (102 / 255, 126 / 255, 234 / 255, 0.1)


def get_plt():
    try:
        import matplotlib.pyplot as plt
    except ModuleNotFoundError as e:
        raise ModuleNotFoundError(
            "Plotting requires matplotlib. Install it with: pip install binomial-pricing[plot]"
        ) from e
    return plt


def _pretty_ax(ax: Axes) -> None:
    ax.grid(axis="both", alpha=0.25)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)


class ConvergenceChart:
    def __init__(self, figsize: tuple = (10, 5)):
        plt = get_plt()
        self.fig: Figure
        self.ax: Axes
        self.fig, self.ax = plt.subplots(figsize=figsize)
        self._artists = []

    def clear(self) -> None:
        """Remove the currently drawn series, keeping the figure."""
        for artist in self._artists:
            artist.remove()
        self._artists = []

    def update(self, series, bs_price: Optional[float] = None) -> None:
        """
        Draw a convergence series.

        series : DataFrame with `steps` and `price` columns, or a sequence of
                 (steps, price) pairs
        bs_price : optional closed-form reference drawn as a horizontal line
        """
        if hasattr(series, "columns"):
            steps = np.asarray(series["steps"], dtype=float)
            prices = np.asarray(series["price"], dtype=float)
        else:
            arr = np.asarray(list(series), dtype=float).reshape(-1, 2)
            steps, prices = arr[:, 0], arr[:, 1]

        self.clear()
        (line,) = self.ax.plot(steps, prices, color=LINE_COLOR, linewidth=2, label="Option Price")
        fill = self.ax.fill_between(steps, prices, color=FILL_COLOR)
        self._artists = [line, fill]
        if bs_price is not None:
            ref = self.ax.axhline(float(bs_price), color="0.4", linestyle="--", linewidth=1,
                                  label="Black-Scholes")
            self._artists.append(ref)

        self.ax.set_title("Option Price Convergence (Binomial Tree)", fontsize=16, fontweight="bold")
        self.ax.set_xlabel("Number of Steps", fontsize=14, fontweight="bold")
        self.ax.set_ylabel("Option Price", fontsize=14, fontweight="bold")
        self.ax.legend(loc="upper right")
        self.ax.relim()
        self.ax.autoscale_view()
        _pretty_ax(self.ax)

    def save(self, path, dpi: int = 120) -> None:
        self.fig.savefig(path, dpi=dpi, bbox_inches="tight")

    def close(self) -> None:
        get_plt().close(self.fig)
