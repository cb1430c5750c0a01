from codec.alphabet import Alphabet, DEFAULT_ALPHABET


def encode(data: bytes, alphabet: Alphabet = DEFAULT_ALPHABET) -> str:
    """
    Encode bytes as two alphabet symbols per byte (high = b // 62, low = b % 62).
    Output is always exactly 2 * len(data) characters; zero bytes are kept.
    """
    base = alphabet.base
    result = []
    for byte in data:
        result.append(alphabet[byte // base])
        result.append(alphabet[byte % base])
    return "".join(result)


def encode_text(text: str, alphabet: Alphabet = DEFAULT_ALPHABET) -> str:
    """Encode the UTF-8 bytes of a string."""
    return encode(text.encode("utf-8"), alphabet)
