# binomial_pricing/binomial_tree.py

import math
from collections import namedtuple

import numpy as np

__all__ = [
    "DegenerateModelError",
    "RiskNeutralParams",
    "risk_neutral_params",
    "terminal_payoffs",
    "european_binomial_price",
    "price_task",
]


class DegenerateModelError(ValueError):
    """Raised when the lattice parameters admit arbitrage (p outside (0, 1))."""


RiskNeutralParams = namedtuple("RiskNeutralParams", ["u", "d", "p"])


def risk_neutral_params(steps, sigma, r, T):
    """
    CRR up/down factors and risk-neutral probability for one lattice step.

    Raises DegenerateModelError when p falls outside the open interval (0, 1),
    including lattices too narrow to separate u from d and growth factors
    beyond floating-point range.
    """
    dt = T / steps
    where = f"(steps={steps}, sigma={sigma}, r={r}, T={T})"
    try:
        u = math.exp(sigma * math.sqrt(dt))
        growth = math.exp(r * dt)
    except OverflowError as e:
        raise DegenerateModelError(
            f"invalid risk-neutral probability: lattice factors overflow {where}"
        ) from e
    d = 1.0 / u
    if not (u - d > 0.0):
        raise DegenerateModelError(
            f"invalid risk-neutral probability: u == d, sigma*sqrt(dt) too small {where}"
        )
    p = (growth - d) / (u - d)

    if not (0.0 < p < 1.0):
        raise DegenerateModelError(
            f"invalid risk-neutral probability p={p:.6g} {where}; need 0 < p < 1"
        )
    return RiskNeutralParams(u, d, p)


def _payoff(ST, K, option_type):
    kind = str(option_type).lower()
    if kind == "call":
        return np.maximum(ST - K, 0.0)
    elif kind == "put":
        return np.maximum(K - ST, 0.0)
    else:
        raise ValueError("option_type must be 'call' or 'put'")


def terminal_payoffs(S, K, u, steps, option_type="call"):
    """
    Payoff at each terminal node j = 0..steps (j up-moves).

    With d = 1/u the node price S u^j d^(steps-j) is S exp((2j - steps) log u).
    Raises DegenerateModelError if the outermost nodes leave floating-point range.
    """
    j = np.arange(steps + 1)
    with np.errstate(over="ignore"):
        ST = S * np.exp((2 * j - steps) * math.log(u))
    if not np.all(np.isfinite(ST)):
        raise DegenerateModelError(
            f"terminal prices overflow floating-point range (steps={steps}, u={u})"
        )
    return _payoff(ST, K, option_type)


def european_binomial_price(steps, option_type, sigma, r, T, S, K):
    """
    Price a European option with the Cox-Ross-Rubinstein (CRR) binomial lattice.

    The terminal distribution is summed directly rather than by backward
    induction. Each node weight C(n, j) p^j (1-p)^(n-j) is built in log-space
    and exponentiated once, which keeps it finite for lattices of thousands of
    steps.

    Parameters
    ----------
    steps : int
        Number of steps in the lattice (0 is the single-node tree)
    option_type : str
        "call" or "put"
    sigma : float
        Volatility of the underlying asset (annualized)
    r : float
        Risk-free interest rate (cont. comp.)
    T : float
        Time to maturity (in years)
    S : float
        Current stock price
    K : float
        Strike price

    Returns
    -------
    float
        Discounted option price

    Notes
    -----
    Cost grows with `steps` (terminal nodes plus the coefficient loop), and no
    upper bound is enforced here; callers pick their own ceiling.
    """
    steps = int(steps)
    if steps < 0:
        raise ValueError("steps must be non-negative")

    try:
        disc = math.exp(-r * T)
    except OverflowError as e:
        raise ValueError(f"discount factor exp(-r*T) overflows (r={r}, T={T})") from e

    # single node: the whole mass sits on today's spot
    if steps == 0:
        return float(_payoff(np.float64(S), K, option_type)) * disc

    u, _, p = risk_neutral_params(steps, sigma, r, T)
    payoffs = terminal_payoffs(S, K, u, steps, option_type)

    log_p = math.log(p)
    log_q = math.log(1.0 - p)
    # log(k) for k = 0..steps, reused by the coefficient loop
    log_k = [0.0] + [math.log(k) for k in range(1, steps + 1)]

    result = 0.0
    for j in range(steps + 1):
        f = float(payoffs[j])
        if f <= 0.0:
            continue

        log_prob = j * log_p + (steps - j) * log_q

        # log C(steps, j), iterating over the shorter side
        m = min(j, steps - j)
        for k in range(1, m + 1):
            log_prob += log_k[steps - m + k] - log_k[k]

        result += math.exp(log_prob) * f

    return result * disc


def price_task(args):
    """Price one (steps, option_type, sigma, r, T, S, K) tuple; used as a pool worker."""
    (n, option_type, sigma, r, T, S, K) = args
    return european_binomial_price(n, option_type, sigma, r, T, S, K)
