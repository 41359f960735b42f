# binomial_pricing/benchmark.py

import time
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass

from .binomial_tree import european_binomial_price, price_task


@dataclass
class BenchmarkResult:
    price: float
    elapsed_ms: float
    iterations: int


def benchmark_price(S, K, T, r, sigma, steps, option_type="call", iterations=1,
                    n_workers=None, parallel_backend="thread", verbose=False):
    """
    Price the same option `iterations` times and time the whole loop.

    Returns the last computed price with the elapsed wall-clock time in
    milliseconds. Repetitions are independent, so `n_workers > 1` spreads them
    over a pool; the reported price is still that of the last repetition.
    """
    iterations = int(iterations)
    if iterations < 1:
        raise ValueError("iterations must be >= 1")

    t0 = time.time()
    if n_workers is None or int(n_workers) <= 1:
        for _ in range(iterations):
            price = european_binomial_price(steps, option_type, sigma, r, T, S, K)
    else:
        task = (int(steps), option_type, sigma, r, T, S, K)
        Executor = ThreadPoolExecutor if str(parallel_backend).lower().startswith("thread") else ProcessPoolExecutor
        with Executor(max_workers=int(n_workers)) as ex:
            price = list(ex.map(price_task, [task] * iterations))[-1]
    elapsed_ms = (time.time() - t0) * 1000.0

    if verbose:
        print(f"[benchmark] steps={steps}  iterations={iterations}  price={price:.6f}  {elapsed_ms:.2f}ms")
    return BenchmarkResult(price=float(price), elapsed_ms=elapsed_ms, iterations=iterations)
