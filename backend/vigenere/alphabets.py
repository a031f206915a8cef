import string
from dataclasses import dataclass, field
from typing import Dict, List

from .errors import UnsupportedModulus


@dataclass(frozen=True)
class Alphabet:
    """Ordered character set whose length is the cipher modulus."""

    characters: str
    label: str
    _index: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        index = {ch: i for i, ch in enumerate(self.characters)}
        if len(index) != len(self.characters):
            raise ValueError(f"Alphabet has duplicate characters: {self.characters!r}")
        object.__setattr__(self, "_index", index)

    @property
    def modulus(self) -> int:
        return len(self.characters)

    def __len__(self):
        return len(self.characters)

    def __contains__(self, ch):
        return ch in self._index

    def index_of(self, ch: str) -> int:
        return self._index[ch]

    def char_at(self, value: int) -> str:
        return self.characters[value]


ALPHA_26 = Alphabet(string.ascii_uppercase, "A–Z only")
ALPHA_27 = Alphabet(string.ascii_uppercase + " ", "A–Z and space only")
ALPHA_37 = Alphabet(string.ascii_uppercase + string.digits + " ", "A–Z, 0–9, and space only")

ALPHABETS = {a.modulus: a for a in (ALPHA_26, ALPHA_27, ALPHA_37)}


def supported_moduli() -> List[int]:
    return sorted(ALPHABETS)


def resolve(modulus) -> Alphabet:
    # bool is an int subclass; True must not resolve to anything
    if isinstance(modulus, bool) or not isinstance(modulus, int):
        raise UnsupportedModulus(modulus)
    try:
        return ALPHABETS[modulus]
    except KeyError:
        raise UnsupportedModulus(modulus) from None
