# binomial_pricing/black_scholes.py
import numpy as np
from scipy.stats import norm


def black_scholes_price(S, K, T, r, sigma, option_type="call"):
    """
    Black-Scholes price of a European option (no dividends).

    This is the limit the CRR lattice converges to as steps grow.

    Parameters:
        S : float or ndarray - Spot price
        K : float or ndarray - Strike price
        T : float - Time to maturity (in years)
        r : float - Risk-free interest rate
        sigma : float - Volatility
        option_type : str - "call" or "put"
    """
    kind = str(option_type).lower()
    if kind not in ("call", "put"):
        raise ValueError("option_type must be 'call' or 'put'")

    if T <= 0:
        intrinsic = np.subtract(S, K) if kind == "call" else np.subtract(K, S)
        return np.maximum(intrinsic, 0.0)

    sqrtT = np.sqrt(T)
    d1 = (np.log(np.divide(S, K)) + (r + 0.5 * sigma**2) * T) / (sigma * sqrtT)
    d2 = d1 - sigma * sqrtT
    disc = np.exp(-r * T)

    if kind == "call":
        return S * norm.cdf(d1) - K * disc * norm.cdf(d2)
    return K * disc * norm.cdf(-d2) - S * norm.cdf(-d1)
