# xoroshiro128+ generator, one instance per worker (no shared state, no locks)
# Source: public domain reference implementation by Blackman and Vigna
from dataclasses import dataclass

UINT64_MASK = (1 << 64) - 1
UINT32_MAX = (1 << 32) - 1

# libc random() only yields 31 bits per call
_COARSE_BITS = 31


def _rotl(x: int, k: int) -> int:
    return ((x << k) & UINT64_MASK) | (x >> (64 - k))


def _coarse_word(source) -> int:
    high = source.getrandbits(_COARSE_BITS) % UINT32_MAX
    low = source.getrandbits(_COARSE_BITS) % UINT32_MAX
    return (high << 32) | low


@dataclass
class Xoroshiro128Plus:
    s0: int
    s1: int

    @classmethod
    def from_source(cls, source) -> "Xoroshiro128Plus":
        """Seed both state words from a coarse generator such as random.Random.

        Each word packs two 32-bit draws. An all-zero state never leaves the
        zero state, so the draw is repeated until at least one word is set.
        """
        while True:
            s0 = _coarse_word(source)
            s1 = _coarse_word(source)
            if s0 or s1:
                return cls(s0, s1)

    def next_u64(self) -> int:
        s0 = self.s0
        s1 = self.s1
        result = (s0 + s1) & UINT64_MASK

        s1 ^= s0
        self.s0 = _rotl(s0, 55) ^ s1 ^ ((s1 << 14) & UINT64_MASK)
        self.s1 = _rotl(s1, 36)
        return result

    def random(self) -> float:
        # top 53 bits fill the double mantissa, so the result stays below 1.0
        return (self.next_u64() >> 11) * (1.0 / (1 << 53))
