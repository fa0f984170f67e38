"""Top-level random numbers context shared by all benchmark workers."""

import logging
import random
import threading
import time
from dataclasses import asdict
from typing import Any, Dict, Optional

from .distributions import (
    sample,
    sample_gaussian,
    sample_pareto,
    sample_special,
    sample_uniform,
)
from .models import DistributionConfig, RandOptions
from .prng import Xoroshiro128Plus
from .strings import fill_string
from .uniq import UniqueCounter

logger = logging.getLogger(__name__)


class RandContext:
    """Owns the frozen config, the coarse seed source and the unique counter.

    Build it once with init() before any worker starts. Each worker then calls
    thread_init() and passes the returned generator into every sampling call.
    """

    def __init__(self, config: DistributionConfig, seed: int) -> None:
        self.config = config
        self.seed = seed
        self.counter = UniqueCounter()
        self._coarse = random.Random(seed)
        self._coarse_lock = threading.Lock()
        # Generator for the initializing thread; workers seed their own
        self.rng = self.thread_init()

    def thread_init(self) -> Xoroshiro128Plus:
        """Create an independent generator for the calling worker."""
        with self._coarse_lock:
            return Xoroshiro128Plus.from_source(self._coarse)

    def sample_default(self, rng: Xoroshiro128Plus, a: int, b: int) -> int:
        """Sample [a, b] with the distribution selected by rand-type."""
        return sample(self.config.dist, rng, a, b, self.config)

    def sample_uniform(self, rng: Xoroshiro128Plus, a: int, b: int) -> int:
        return sample_uniform(rng, a, b)

    def sample_gaussian(self, rng: Xoroshiro128Plus, a: int, b: int) -> int:
        return sample_gaussian(rng, a, b, self.config)

    def sample_special(self, rng: Xoroshiro128Plus, a: int, b: int) -> int:
        return sample_special(rng, a, b, self.config)

    def sample_pareto(self, rng: Xoroshiro128Plus, a: int, b: int) -> int:
        return sample_pareto(rng, a, b, self.config)

    def sample_unique(self, a: int, b: int) -> int:
        return self.counter.next_in_range(a, b)

    def fill_string(
        self,
        rng: Xoroshiro128Plus,
        template: str,
        buf: Optional[bytearray] = None,
    ) -> str:
        return fill_string(rng, template, buf)

    def describe(self) -> Dict[str, Any]:
        cfg = asdict(self.config)
        cfg["dist"] = self.config.dist.value
        cfg["seed"] = self.seed
        return cfg

    def shutdown(self) -> None:
        self.counter.close()
        logger.debug("random numbers context shut down")


def init(options: Optional[RandOptions] = None) -> RandContext:
    """Validate options and build the process-wide context.

    Raises RandConfigError (already logged at CRITICAL) on bad options.
    """
    if options is None:
        options = RandOptions()

    config = DistributionConfig.from_options(options)

    seed = options.rand_seed
    if seed == 0:
        seed = int(time.time())

    logger.debug(
        "random numbers: dist=%s iter=%d pct=%d res=%d pareto_h=%s seed=%d",
        config.dist.value,
        config.iterations,
        config.spec_pct,
        config.spec_res,
        config.pareto_h,
        seed,
    )
    return RandContext(config, seed)
