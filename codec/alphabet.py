from typing import Dict
from pydantic import BaseModel, ConfigDict, PrivateAttr, field_validator

BASE62_SYMBOLS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


class Alphabet(BaseModel):
    """
    Ordered set of output symbols shared by the encoder and decoder.
    Both sides must use the same ordering or decoding silently yields wrong bytes.
    """
    model_config = ConfigDict(frozen=True)

    symbols: str = BASE62_SYMBOLS
    _index: Dict[str, int] = PrivateAttr(default_factory=dict)

    @field_validator("symbols")
    @classmethod
    def check_symbols(cls, value: str) -> str:
        if len(value) != 62:
            raise ValueError(f"alphabet must have 62 symbols, got {len(value)}")
        if len(set(value)) != len(value):
            raise ValueError("alphabet symbols must be distinct")
        for ch in value:
            if not ch.isprintable() or ch.isspace() or not ch.isascii():
                raise ValueError(f"alphabet symbol {ch!r} is not printable ASCII")
        return value

    def model_post_init(self, __context) -> None:
        self._index = {ch: i for i, ch in enumerate(self.symbols)}

    @property
    def base(self) -> int:
        return len(self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    def __getitem__(self, i: int) -> str:
        return self.symbols[i]

    def __contains__(self, ch: str) -> bool:
        return ch in self._index

    def index_of(self, ch: str) -> int:
        # KeyError for symbols outside the alphabet
        return self._index[ch]


DEFAULT_ALPHABET = Alphabet()
