"""Prompt hashing used as the entry storage key.

The hash is deterministic and non-cryptographic: two different prompts can
collide, in which case the later save replaces the earlier entry. The
similarity scan tolerates that, and a cryptographic digest (e.g.
``hashlib.sha256``) can replace this function without touching callers.
"""

import string

_BASE36_DIGITS = string.digits + string.ascii_lowercase


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def hash_prompt(prompt: str) -> str:
    """Hash a prompt into a short storage key.

    Rolling 32-bit hash (``h = h * 31 + c``) over the UTF-16 code units of
    the prompt, rendered as the base-36 absolute value. Lone surrogates
    are hashed as their raw code unit.

    Args:
        prompt: The prompt text

    Returns:
        Base-36 key, e.g. ``"1b7x0kq"``
    """
    data = prompt.encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + code_unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return _to_base36(abs(h))
