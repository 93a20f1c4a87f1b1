"""Base58 encoding with the Bitcoin alphabet, as used for Solana keys and signatures."""

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {char: value for value, char in enumerate(ALPHABET)}


class Base58Error(ValueError):
    """Raised when text is not valid base58."""


def b58encode(data: bytes) -> str:
    """Encode bytes as a base58 string."""
    data = bytes(data)
    stripped = data.lstrip(b"\x00")
    leading_zeros = len(data) - len(stripped)
    number = int.from_bytes(stripped, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(ALPHABET[remainder])
    return ALPHABET[0] * leading_zeros + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """Decode a base58 string into bytes."""
    number = 0
    for position, char in enumerate(text):
        try:
            value = _INDEX[char]
        except KeyError:
            raise Base58Error(
                f"invalid base58 character {char!r} at position {position}"
            ) from None
        number = number * 58 + value
    stripped = text.lstrip(ALPHABET[0])
    leading_ones = len(text) - len(stripped)
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    return b"\x00" * leading_ones + body