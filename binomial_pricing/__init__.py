from .binomial_tree import (
    DegenerateModelError,
    RiskNeutralParams,
    european_binomial_price,
    risk_neutral_params,
)
from .black_scholes import black_scholes_price
from .benchmark import BenchmarkResult, benchmark_price
from .convergence import convergence_series, convergence_table, doubling_steps
from .inputs import (
    DEFAULT_FORM,
    MAX_STEPS,
    InvalidInputError,
    PricingRequest,
    parse_pricing_form,
    validate_request,
)

__all__ = [
    "DegenerateModelError",
    "RiskNeutralParams",
    "european_binomial_price",
    "risk_neutral_params",
    "black_scholes_price",
    "BenchmarkResult",
    "benchmark_price",
    "convergence_series",
    "convergence_table",
    "doubling_steps",
    "DEFAULT_FORM",
    "MAX_STEPS",
    "InvalidInputError",
    "PricingRequest",
    "parse_pricing_form",
    "validate_request",
]
