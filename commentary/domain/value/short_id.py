"""Compact short ids for comment paths.

Ids are written in base 26 with the digits ``0-9a-p``, so id 1000
becomes ``"1cc"``. The encoding is a bijection on non-negative integers.
"""

ALPHABET = "0123456789abcdefghijklmnop"
BASE = len(ALPHABET)


def encode_short_id(value: int) -> str:
    """Encode a non-negative integer id as a short id string."""
    if value < 0:
        raise ValueError("Short ids are only defined for non-negative ids")
    if value == 0:
        return ALPHABET[0]

    digits = []
    while value:
        value, remainder = divmod(value, BASE)
        digits.append(ALPHABET[remainder])
    return "".join(reversed(digits))


def decode_short_id(code: str) -> int:
    """Decode a short id string back to its integer id."""
    if not code:
        raise ValueError("Short id must not be empty")
    value = 0
    for char in code.lower():
        digit = ALPHABET.find(char)
        if digit < 0:
            raise ValueError(f"Invalid short id character: {char!r}")
        value = value * BASE + digit
    return value
