import pytest

pytest.importorskip("matplotlib")

from binomial_pricing.convergence import convergence_series
from binomial_pricing.plotting import ConvergenceChart


def _series(n, option_type="call"):
    return convergence_series(100.0, 100.0, 1.0, 0.05, 0.2, max_steps=n, option_type=option_type)


def test_update_replaces_previous_series(tmp_path):
    chart = ConvergenceChart()
    try:
        chart.update(_series(30))
        chart.update(_series(15, "put"))
        assert len(chart.ax.lines) == 1
        xdata = chart.ax.lines[0].get_xdata()
        assert len(xdata) == 15
        assert chart.ax.get_title() == "Option Price Convergence (Binomial Tree)"
        assert chart.ax.get_xlabel() == "Number of Steps"
        assert chart.ax.get_ylabel() == "Option Price"

        out = tmp_path / "convergence.png"
        chart.save(out)
        assert out.exists() and out.stat().st_size > 0
    finally:
        chart.close()


def test_accepts_pairs_and_reference_line():
    chart = ConvergenceChart()
    try:
        chart.update([(1, 12.16), (2, 9.54), (3, 11.0)], bs_price=10.45)
        # series line + Black-Scholes reference
        assert len(chart.ax.lines) == 2
        chart.clear()
        assert len(chart.ax.lines) == 0
    finally:
        chart.close()
