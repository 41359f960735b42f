"""
Input boundary for the pricing form.

Turns raw form fields (strings) into a validated `PricingRequest` before any
lattice is built. The engine itself only guards against a degenerate
risk-neutral probability; everything a user can mistype is rejected here.

Field names follow the form: stockPrice, strikePrice, volatility,
riskFreeRate, timeToMaturity, steps, iterations, optionType. The option
radio posts "0" for a call and "1" for a put; "call"/"put" are accepted too.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Mapping, Literal

OptionType = Literal["call", "put"]

MAX_STEPS = 2000

DEFAULT_FORM = {
    "stockPrice": "100",
    "strikePrice": "100",
    "volatility": "0.2",
    "riskFreeRate": "0.05",
    "timeToMaturity": "1",
    "steps": "10",
    "iterations": "1",
    "optionType": "0",
}

_OPTION_CODES = {"0": "call", "1": "put", "call": "call", "put": "put"}


class InvalidInputError(ValueError):
    """Form values that must be rejected before the engine is called."""


@dataclass
class PricingRequest:
    S: float
    K: float
    sigma: float
    r: float
    T: float
    steps: int
    option_type: OptionType = "call"
    iterations: int = 1

    def as_kwargs(self) -> dict:
        """Keyword arguments shared by benchmark_price and convergence_series."""
        return dict(S=self.S, K=self.K, T=self.T, r=self.r, sigma=self.sigma,
                    option_type=self.option_type)


def _parse_float(raw) -> float:
    try:
        x = float(str(raw).strip())
    except (TypeError, ValueError):
        raise InvalidInputError("Please enter valid numbers for all fields") from None
    if not math.isfinite(x):
        raise InvalidInputError("Please enter valid numbers for all fields")
    return x


def _parse_int(raw) -> int:
    x = _parse_float(raw)
    if x != int(x):
        raise InvalidInputError("Please enter valid numbers for all fields")
    return int(x)


def parse_option_type(raw) -> OptionType:
    kind = _OPTION_CODES.get(str(raw).strip().lower())
    if kind is None:
        raise InvalidInputError("option type must be call (0) or put (1)")
    return kind


def validate_request(req: PricingRequest, max_steps: int = MAX_STEPS) -> PricingRequest:
    """Check domain constraints; returns the request unchanged when valid."""
    for name in ("S", "K", "sigma", "T"):
        value = getattr(req, name)
        if not math.isfinite(value) or value <= 0:
            raise InvalidInputError(f"{name} must be a positive number")
    if not math.isfinite(req.r):
        raise InvalidInputError("r must be a finite number")
    if req.steps < 1:
        raise InvalidInputError("Number of steps must be at least 1")
    if req.steps > max_steps:
        raise InvalidInputError(f"Number of steps cannot exceed {max_steps}")
    if req.iterations < 1:
        raise InvalidInputError("Number of iterations must be at least 1")
    parse_option_type(req.option_type)
    return req


def parse_pricing_form(fields: Mapping[str, str], max_steps: int = MAX_STEPS) -> PricingRequest:
    """
    Build a validated request from form fields.

    Missing fields fall back to DEFAULT_FORM. Raises InvalidInputError on the
    first bad value, mirroring the form's alert.
    """
    merged = {**DEFAULT_FORM, **{k: v for k, v in fields.items() if v is not None}}
    req = PricingRequest(
        S=_parse_float(merged["stockPrice"]),
        K=_parse_float(merged["strikePrice"]),
        sigma=_parse_float(merged["volatility"]),
        r=_parse_float(merged["riskFreeRate"]),
        T=_parse_float(merged["timeToMaturity"]),
        steps=_parse_int(merged["steps"]),
        option_type=parse_option_type(merged["optionType"]),
        iterations=_parse_int(merged["iterations"]),
    )
    return validate_request(req, max_steps=max_steps)
