import pandas as pd
import pytest

from binomial_pricing.cli import main


def test_price_command(capsys):
    code = main(["price", "--steps", "10", "--iterations", "3"])
    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("price=10.253409 elapsed_ms=")


def test_price_command_put_code(capsys):
    assert main(["price", "--option-type", "1"]) == 0
    assert capsys.readouterr().out.startswith("price=5.376351")


def test_chart_command_writes_csv(tmp_path, capsys):
    path = tmp_path / "series.csv"
    code = main(["chart", "--steps", "25", "--csv", str(path)])
    assert code == 0
    df = pd.read_csv(path)
    assert len(df) == 25
    assert df["steps"].tolist() == list(range(1, 26))
    assert "price=" in capsys.readouterr().out


def test_chart_command_writes_plot(tmp_path):
    pytest.importorskip("matplotlib")
    path = tmp_path / "chart.png"
    assert main(["chart", "--steps", "20", "--plot", str(path), "--workers", "2"]) == 0
    assert path.exists()


@pytest.mark.parametrize("argv,message", [
    (["price", "--volatility", "abc"], "Please enter valid numbers for all fields"),
    (["chart", "--steps", "2001"], "Number of steps cannot exceed 2000"),
    (["price", "--volatility", "0.05", "--rate", "1.0", "--steps", "1"], "risk-neutral probability"),
    (["price", "--volatility", "1e-17"], "risk-neutral probability"),
    (["price", "--rate", "1000", "--steps", "1"], "risk-neutral probability"),
])
def test_errors_exit_with_status_2(argv, message, capsys):
    code = main(argv)
    captured = capsys.readouterr()
    assert code == 2
    assert message in captured.err
    assert captured.out == ""


def test_chart_without_matplotlib_writes_nothing(tmp_path, monkeypatch, capsys):
    from binomial_pricing import plotting

    def _missing():
        raise ModuleNotFoundError("Plotting requires matplotlib.")

    monkeypatch.setattr(plotting, "get_plt", _missing)
    csv_path = tmp_path / "series.csv"
    code = main(["chart", "--steps", "5", "--csv", str(csv_path), "--plot", str(tmp_path / "c.png")])
    captured = capsys.readouterr()
    assert code == 2
    assert "requires matplotlib" in captured.err
    assert captured.out == ""
    assert not csv_path.exists()
