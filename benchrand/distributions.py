"""Integer samplers over an inclusive range [a, b].

Every sampler takes the worker's own generator; callers guarantee a <= b.
Uniform, gaussian and pareto clamp at b: a product that rounds up to the
full width would otherwise yield b + 1.
"""

from .models import Distribution, DistributionConfig
from .prng import Xoroshiro128Plus


def sample_uniform(rng: Xoroshiro128Plus, a: int, b: int) -> int:
    """Flat distribution, every value in [a, b] equally likely."""
    return min(b, a + int(rng.random() * (b - a + 1)))


def sample_gaussian(
    rng: Xoroshiro128Plus, a: int, b: int, cfg: DistributionConfig
) -> int:
    """Bell-shaped values from the mean of N uniform draws (Irwin-Hall)."""
    t = b - a + 1
    total = 0.0
    for _ in range(cfg.iterations):
        total += rng.random() * t

    return min(b, a + int(total * cfg.iter_mult))


def sample_special(
    rng: Xoroshiro128Plus, a: int, b: int, cfg: DistributionConfig
) -> int:
    """Gaussian-like values with a share of them pulled into a central band.

    The range is virtually enlarged by 100 / (100 - R). A draw landing in the
    original width goes through the averaging branch; a draw landing in the
    extension is remapped into a uniform band of width t * P / 100 centred on
    the range. The band is not clamped to [a, b].
    """
    t = b - a

    range_size = t * cfg.res_mult
    rnd = rng.random()
    res = rnd * range_size

    if res < t:
        total = 0.0
        for _ in range(cfg.iterations):
            total += rng.random()
        return a + int(total * t * cfg.iter_mult)

    # Move [0, d] to the centre of [0, t]
    d = t * cfg.pct_mult
    res = rnd * (d + 1)
    res += t / 2 - t * cfg.pct_2_mult

    return a + int(res)


def sample_pareto(
    rng: Xoroshiro128Plus, a: int, b: int, cfg: DistributionConfig
) -> int:
    """Heavy-tailed values skewed towards a; smaller h means stronger skew."""
    return min(b, a + int((b - a + 1) * rng.random() ** cfg.pareto_power))


def sample(
    dist: Distribution,
    rng: Xoroshiro128Plus,
    a: int,
    b: int,
    cfg: DistributionConfig,
) -> int:
    if dist is Distribution.UNIFORM:
        return sample_uniform(rng, a, b)
    if dist is Distribution.GAUSSIAN:
        return sample_gaussian(rng, a, b, cfg)
    if dist is Distribution.SPECIAL:
        return sample_special(rng, a, b, cfg)
    if dist is Distribution.PARETO:
        return sample_pareto(rng, a, b, cfg)
    raise ValueError(f"unknown distribution: {dist!r}")
