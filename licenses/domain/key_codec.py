"""
License key codec.

Converts between raw bytes and the 32-symbol key alphabet (Crockford style,
without I, L, O and U). Each character carries 5 bits, most significant first.
"""
from core.domain.exceptions import InvalidCharacterError, UnalignedPaddingError

ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
SYMBOL_VALUES = {symbol: index for index, symbol in enumerate(ALPHABET)}

BITS_PER_SYMBOL = 5


def encoded_length(byte_count: int) -> int:
    """Number of characters ``encode`` emits for ``byte_count`` bytes."""
    return -(-byte_count * 8 // BITS_PER_SYMBOL)


def encode(data: bytes) -> str:
    """
    Encode bytes into key alphabet characters.

    A trailing partial group is padded with zero bits, so the output is
    ``ceil(len(data) * 8 / 5)`` characters long.

    Args:
        data: Raw bytes

    Returns:
        Encoded string (upper case, no separators)
    """
    symbols = []
    buffer = 0
    bits = 0
    for byte in data:
        buffer = (buffer << 8) | byte
        bits += 8
        while bits >= BITS_PER_SYMBOL:
            bits -= BITS_PER_SYMBOL
            symbols.append(ALPHABET[(buffer >> bits) & 0x1F])
        buffer &= (1 << bits) - 1
    if bits:
        symbols.append(ALPHABET[(buffer << (BITS_PER_SYMBOL - bits)) & 0x1F])
    return "".join(symbols)


def decode(text: str) -> bytes:
    """
    Decode key alphabet characters into bytes.

    Args:
        text: Encoded string (case-insensitive, no separators)

    Returns:
        Decoded bytes

    Raises:
        InvalidCharacterError: If a character is outside the alphabet
        UnalignedPaddingError: If leftover bits after the last full byte are not zero
    """
    output = bytearray()
    buffer = 0
    bits = 0
    for char in text.upper():
        value = SYMBOL_VALUES.get(char)
        if value is None:
            raise InvalidCharacterError()
        buffer = (buffer << BITS_PER_SYMBOL) | value
        bits += BITS_PER_SYMBOL
        if bits >= 8:
            bits -= 8
            output.append((buffer >> bits) & 0xFF)
            buffer &= (1 << bits) - 1
    if bits and buffer & ((1 << bits) - 1):
        raise UnalignedPaddingError()
    return bytes(output)
