import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

logger = logging.getLogger(__name__)


class RandConfigError(ValueError):
    """Raised when the random number options cannot be turned into a config."""


class Distribution(Enum):
    UNIFORM = "uniform"
    GAUSSIAN = "gaussian"
    SPECIAL = "special"
    PARETO = "pareto"


@dataclass
class RandOptions:
    """Raw option values as registered on the command line."""

    rand_type: str = "special"
    rand_spec_iter: int = 12
    rand_spec_pct: int = 1
    rand_spec_res: int = 75
    rand_seed: int = 0  # 0 seeds the coarse source from the wall clock
    rand_pareto_h: float = 0.2

    @staticmethod
    def describe() -> List[Tuple[str, str, str]]:
        """Option table rows as (name, description, default) for help output."""
        defaults = RandOptions()
        return [
            (
                "rand-type",
                "random numbers distribution {uniform,gaussian,special,pareto}",
                defaults.rand_type,
            ),
            (
                "rand-spec-iter",
                "number of iterations used for numbers generation",
                str(defaults.rand_spec_iter),
            ),
            (
                "rand-spec-pct",
                "percentage of values to be treated as 'special' (for special distribution)",
                str(defaults.rand_spec_pct),
            ),
            (
                "rand-spec-res",
                "percentage of 'special' values to use (for special distribution)",
                str(defaults.rand_spec_res),
            ),
            (
                "rand-seed",
                "seed for random number generator. When 0, the current time is "
                "used as a RNG seed.",
                str(defaults.rand_seed),
            ),
            (
                "rand-pareto-h",
                "parameter h for pareto distribution",
                str(defaults.rand_pareto_h),
            ),
        ]


def _fail(message: str) -> RandConfigError:
    logger.critical(message)
    return RandConfigError(message)


@dataclass(frozen=True)
class DistributionConfig:
    dist: Distribution
    iterations: int
    spec_pct: int
    spec_res: int
    pareto_h: float

    # Pre-computed so sampling never divides
    iter_mult: float
    pct_mult: float
    pct_2_mult: float
    res_mult: float
    pareto_power: float

    @classmethod
    def from_options(cls, options: RandOptions) -> "DistributionConfig":
        """Validate raw options and derive the sampling constants.

        Every failure is logged at CRITICAL before RandConfigError is raised,
        so callers only need to abort startup.
        """
        try:
            dist = Distribution(options.rand_type)
        except ValueError:
            raise _fail(
                f"Invalid random numbers distribution: {options.rand_type}."
            ) from None

        iterations = options.rand_spec_iter
        if iterations < 1:
            raise _fail(f"Invalid rand-spec-iter value: {iterations} (must be >= 1).")

        pct = options.rand_spec_pct
        if not 0 <= pct <= 100:
            raise _fail(f"Invalid rand-spec-pct value: {pct} (must be in 0..100).")

        res = options.rand_spec_res
        if not 0 <= res < 100:
            raise _fail(f"Invalid rand-spec-res value: {res} (must be in 0..99).")

        h = options.rand_pareto_h
        if not 0.0 < h < 1.0:
            raise _fail(f"Invalid rand-pareto-h value: {h} (must be in (0, 1)).")

        return cls(
            dist=dist,
            iterations=iterations,
            spec_pct=pct,
            spec_res=res,
            pareto_h=h,
            iter_mult=1.0 / iterations,
            pct_mult=pct / 100.0,
            pct_2_mult=pct / 200.0,
            res_mult=100.0 / (100.0 - res),
            pareto_power=math.log(h) / math.log(1.0 - h),
        )
