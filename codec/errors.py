class DecodeError(ValueError):
    """Raised when an encoded string cannot be turned back into bytes."""


class InvalidLengthError(DecodeError):
    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Encoded string has odd length {length}; expected two symbols per byte")


class InvalidCharacterError(DecodeError):
    def __init__(self, character: str, position: int):
        self.character = character
        self.position = position
        super().__init__(f"Invalid character {character!r} at position {position}")


class InvalidPairError(DecodeError):
    # Both symbols are in the alphabet but the pair does not fit in a byte
    def __init__(self, pair: str, position: int, value: int):
        self.pair = pair
        self.position = position
        self.value = value
        super().__init__(f"Symbol pair {pair!r} at position {position} decodes to {value}, outside 0-255")
