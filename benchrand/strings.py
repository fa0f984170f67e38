from typing import Optional

from .distributions import sample_uniform
from .prng import Xoroshiro128Plus

DIGIT_PLACEHOLDER = "#"
LETTER_PLACEHOLDER = "@"


def fill_string(
    rng: Xoroshiro128Plus, template: str, buf: Optional[bytearray] = None
) -> str:
    """Expand '#' to a random digit and '@' to a random lowercase letter.

    Other characters are copied as-is. Placeholders always use the uniform
    sampler whatever distribution the context was configured with. When a
    caller-allocated buffer is given it receives the UTF-8 encoded result;
    a buffer too short for it raises ValueError and is left untouched.
    """
    chars = []
    for ch in template:
        if ch == DIGIT_PLACEHOLDER:
            ch = chr(sample_uniform(rng, ord("0"), ord("9")))
        elif ch == LETTER_PLACEHOLDER:
            ch = chr(sample_uniform(rng, ord("a"), ord("z")))
        chars.append(ch)

    result = "".join(chars)
    if buf is not None:
        data = result.encode("utf-8")
        if len(data) > len(buf):
            raise ValueError(
                f"buffer of {len(buf)} bytes is too short for {len(data)} encoded bytes"
            )
        buf[: len(data)] = data

    return result
