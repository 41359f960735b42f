#!/usr/bin/env python
"""Command-line front end: single price with timing, or the convergence series."""

from __future__ import annotations

import argparse
import sys
import time

from .benchmark import benchmark_price
from .convergence import convergence_series
from . import plotting
from .black_scholes import black_scholes_price
from .inputs import DEFAULT_FORM, MAX_STEPS, parse_pricing_form

# CLI flag -> form field
_FIELDS = {
    "stock_price": "stockPrice",
    "strike_price": "strikePrice",
    "volatility": "volatility",
    "rate": "riskFreeRate",
    "maturity": "timeToMaturity",
    "steps": "steps",
    "option_type": "optionType",
}


def _add_option_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--stock-price", type=str, default=DEFAULT_FORM["stockPrice"])
    parser.add_argument("--strike-price", type=str, default=DEFAULT_FORM["strikePrice"])
    parser.add_argument("--volatility", type=str, default=DEFAULT_FORM["volatility"])
    parser.add_argument("--rate", type=str, default=DEFAULT_FORM["riskFreeRate"],
                        help="Continuously-compounded risk-free rate.")
    parser.add_argument("--maturity", type=str, default=DEFAULT_FORM["timeToMaturity"],
                        help="Time to maturity in years.")
    parser.add_argument("--steps", type=str, default=DEFAULT_FORM["steps"],
                        help=f"Lattice steps (max {MAX_STEPS}); the series maximum for 'chart'.")
    parser.add_argument("--option-type", type=str, default="call",
                        help="call/put (or 0/1).")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="binomial_pricing",
        description="European option prices on a Cox-Ross-Rubinstein lattice.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_price = sub.add_parser("price", help="Price once (repeated for timing).")
    _add_option_args(p_price)
    p_price.add_argument("--iterations", type=str, default=DEFAULT_FORM["iterations"])

    p_chart = sub.add_parser("chart", help="Price every step count 1..steps.")
    _add_option_args(p_chart)
    p_chart.add_argument("--csv", type=str, default=None, help="Write the series to CSV.")
    p_chart.add_argument("--plot", type=str, default=None, help="Save the chart as an image.")
    p_chart.add_argument("--workers", type=int, default=None)
    p_chart.add_argument("--backend", type=str, default="thread", choices=["thread", "process"])
    p_chart.add_argument("--verbose", action="store_true")

    return parser.parse_args(argv)


def _form_from_args(args: argparse.Namespace) -> dict:
    form = {field: getattr(args, attr) for attr, field in _FIELDS.items()}
    form["iterations"] = getattr(args, "iterations", DEFAULT_FORM["iterations"])
    return form


def _run_price(args: argparse.Namespace) -> None:
    req = parse_pricing_form(_form_from_args(args))
    res = benchmark_price(steps=req.steps, iterations=req.iterations, **req.as_kwargs())
    print(f"price={res.price:.6f} elapsed_ms={res.elapsed_ms:.2f}")


def _run_chart(args: argparse.Namespace) -> None:
    req = parse_pricing_form(_form_from_args(args))
    if args.plot:
        # fail before any output is written if matplotlib is missing
        plotting.get_plt()

    t0 = time.time()
    df = convergence_series(max_steps=req.steps, n_workers=args.workers,
                            parallel_backend=args.backend, verbose=args.verbose,
                            **req.as_kwargs())
    elapsed_ms = (time.time() - t0) * 1000.0
    print(f"price={df['price'].iloc[-1]:.6f} elapsed_ms={elapsed_ms:.2f}")

    if args.csv:
        df.to_csv(args.csv, index=False)
        print(f"[chart] series → {args.csv}")
    if args.plot:
        chart = plotting.ConvergenceChart()
        try:
            chart.update(df, bs_price=float(black_scholes_price(
                req.S, req.K, req.T, req.r, req.sigma, option_type=req.option_type)))
            chart.save(args.plot)
        finally:
            chart.close()
        print(f"[chart] figure → {args.plot}")


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        if args.command == "price":
            _run_price(args)
        else:
            _run_chart(args)
    except (ValueError, ModuleNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
