import numpy as np
from typing import List, Optional

from .alphabets import Alphabet
from .cipher_engine import normalize, validate


def tabula_recta(alphabet: Alphabet) -> np.ndarray:
    """Vigenère square as values: table[k, p] = (p + k) mod m.

    Row k is the cipher alphabet for key value k; reading row k at the
    column of a ciphertext value gives the decode direction.
    """
    values = np.arange(alphabet.modulus)
    return np.add.outer(values, values) % alphabet.modulus


def tabula_rows(alphabet: Alphabet) -> List[str]:
    chars = np.array(list(alphabet.characters))
    return ["".join(row) for row in chars[tabula_recta(alphabet)]]


def key_values(key: str, alphabet: Alphabet) -> List[int]:
    key = normalize(key)
    validate(key, alphabet, "key")
    return [alphabet.index_of(ch) for ch in key]


def random_key(alphabet: Alphabet, length: int, rng: Optional[np.random.Generator] = None) -> str:
    if length < 1:
        raise ValueError("Key length must be at least 1")
    if rng is None:
        rng = np.random.default_rng()
    values = rng.integers(0, alphabet.modulus, size=length)
    return "".join(alphabet.char_at(int(v)) for v in values)
