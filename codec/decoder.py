from codec.alphabet import Alphabet, DEFAULT_ALPHABET
from codec.errors import InvalidCharacterError, InvalidLengthError, InvalidPairError


def _symbol_index(encoded: str, position: int, alphabet: Alphabet) -> int:
    ch = encoded[position]
    try:
        return alphabet.index_of(ch)
    except KeyError:
        raise InvalidCharacterError(ch, position) from None


def decode(encoded: str, alphabet: Alphabet = DEFAULT_ALPHABET) -> bytes:
    """
    Decode a string produced by `encode` back to the original bytes.

    Raises InvalidLengthError for odd-length input, InvalidCharacterError for a
    symbol outside the alphabet and InvalidPairError for a pair above 255.
    Nothing is returned unless the whole string decodes.
    """
    if len(encoded) % 2 != 0:
        raise InvalidLengthError(len(encoded))

    base = alphabet.base
    result = bytearray()
    for i in range(0, len(encoded), 2):
        high = _symbol_index(encoded, i, alphabet)
        low = _symbol_index(encoded, i + 1, alphabet)
        value = high * base + low
        if value > 255:
            raise InvalidPairError(encoded[i:i + 2], i, value)
        result.append(value)
    return bytes(result)


def decode_text(encoded: str, alphabet: Alphabet = DEFAULT_ALPHABET) -> str:
    """Decode to UTF-8 text."""
    return decode(encoded, alphabet).decode("utf-8")
