"""
Convergence of the CRR lattice price as the number of steps grows.

- `convergence_series` prices every step count 1..N (the chart series).
- `convergence_table` samples a doubling grid and compares to Black-Scholes.

Each evaluation is independent, so the outer loop can be spread over a thread
or process pool. `Executor.map` keeps row i tied to step count i.
"""

import time
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor

import numpy as np
import pandas as pd

from .binomial_tree import price_task
from .black_scholes import black_scholes_price

__all__ = [
    "doubling_steps",
    "convergence_series",
    "convergence_table",
]


def _price_many(step_counts, S, K, T, r, sigma, option_type,
                n_workers=None, parallel_backend="thread",
                verbose=False, print_every=100, tag="convergence"):
    if int(print_every) < 1:
        raise ValueError("print_every must be >= 1")
    tasks = [(int(n), option_type, sigma, r, T, S, K) for n in step_counts]
    t0 = time.time()

    if n_workers is None or int(n_workers) <= 1:
        prices = []
        for i, task in enumerate(tasks, 1):
            prices.append(price_task(task))
            if verbose and (i % print_every == 0 or i == len(tasks)):
                print(f"[{tag}] steps={task[0]}  price={prices[-1]:.6f}  {time.time() - t0:.2f}s")
        return prices

    Executor = ThreadPoolExecutor if str(parallel_backend).lower().startswith("thread") else ProcessPoolExecutor
    with Executor(max_workers=int(n_workers)) as ex:
        prices = list(ex.map(price_task, tasks))
    if verbose:
        print(f"[{tag}] {len(tasks)} prices on {int(n_workers)} workers  {time.time() - t0:.2f}s")
    return prices


def doubling_steps(max_steps):
    """Step counts 1, 2, 4, ... not exceeding max_steps."""
    max_steps = int(max_steps)
    if max_steps < 1:
        raise ValueError("max_steps must be >= 1")
    out = []
    n = 1
    while n <= max_steps:
        out.append(n)
        n *= 2
    return out


def convergence_series(S, K, T, r, sigma, max_steps, option_type="call",
                       n_workers=None, parallel_backend="thread",
                       verbose=False, print_every=100):
    """
    Price the option at every step count from 1 to max_steps inclusive.

    Parameters
    ----------
    S, K, T, r, sigma : float
        Spot, strike, maturity (years), risk-free rate, volatility
    max_steps : int
        Largest lattice size; the series has exactly this many rows
    option_type : str
        "call" or "put"
    n_workers : int or None
        Pool size; None or 1 runs serially
    parallel_backend : str
        "thread" or "process"
    verbose : bool
        Print progress every `print_every` step counts

    Returns
    -------
    pd.DataFrame
        Columns `steps` (1..max_steps ascending) and `price`.
    """
    max_steps = int(max_steps)
    if max_steps < 1:
        raise ValueError("max_steps must be >= 1")

    steps = np.arange(1, max_steps + 1, dtype=int)
    prices = _price_many(steps, S, K, T, r, sigma, option_type,
                         n_workers=n_workers, parallel_backend=parallel_backend,
                         verbose=verbose, print_every=print_every)
    return pd.DataFrame({"steps": steps, "price": np.asarray(prices, dtype=float)})


def convergence_table(S, K, T, r, sigma, max_steps=1024, option_type="call",
                      n_workers=None, parallel_backend="thread", verbose=False):
    """
    Lattice prices on the doubling grid 1, 2, 4, ... next to the Black-Scholes limit.

    Columns: steps, price, bs_price, abs_error, diff (price minus previous row,
    NaN on the first row).
    """
    steps = doubling_steps(max_steps)
    prices = _price_many(steps, S, K, T, r, sigma, option_type,
                         n_workers=n_workers, parallel_backend=parallel_backend,
                         verbose=verbose, print_every=1, tag="doubling")
    bs = float(black_scholes_price(S, K, T, r, sigma, option_type=option_type))

    df = pd.DataFrame({"steps": np.asarray(steps, dtype=int),
                       "price": np.asarray(prices, dtype=float)})
    df["bs_price"] = bs
    df["abs_error"] = (df["price"] - bs).abs()
    df["diff"] = df["price"].diff()
    return df
