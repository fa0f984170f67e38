"""Public package surface for the benchmark random numbers generator."""

from .distributions import (
    sample,
    sample_gaussian,
    sample_pareto,
    sample_special,
    sample_uniform,
)
from .models import Distribution, DistributionConfig, RandConfigError, RandOptions
from .prng import Xoroshiro128Plus
from .rand import RandContext, init
from .strings import fill_string
from .uniq import LARGE_PRIME, UniqueCounter

__all__ = [
    "Distribution",
    "DistributionConfig",
    "LARGE_PRIME",
    "RandConfigError",
    "RandContext",
    "RandOptions",
    "UniqueCounter",
    "Xoroshiro128Plus",
    "fill_string",
    "init",
    "sample",
    "sample_gaussian",
    "sample_pareto",
    "sample_special",
    "sample_uniform",
]
