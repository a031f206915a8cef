"""
Vigenère transform over the registered alphabets.

Encode: C = (P + K) mod m
Decode: P = (C - K + m) mod m

The key repeats over the characters that are actually transformed.
"""
import string
from typing import List, Union

from .alphabets import Alphabet, resolve
from .errors import EmptyKey, InvalidCharacter
from .schemas import CipherResult, Mode, TraceStep


# ASCII only; str.upper() would map "ß" to "SS" and "ı" to "I"
_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


def normalize(text: str) -> str:
    return (text or "").translate(_UPPER)


def validate(text: str, alphabet: Alphabet, field: str) -> None:
    """Raise InvalidCharacter for the first character of `text` outside `alphabet`."""
    for ch in text:
        if ch not in alphabet:
            raise InvalidCharacter(ch, field, alphabet.label)


def validate_request(text: str, key: str, alphabet: Alphabet) -> None:
    # Key first, then text; only the first problem is reported
    if not key:
        raise EmptyKey()
    validate(key, alphabet, "key")
    validate(text, alphabet, "text")


class VigenereCipher:
    def __init__(self, key: str, alphabet: Alphabet):
        key = normalize(key)
        if not key:
            raise EmptyKey()
        validate(key, alphabet, "key")

        self.key = key
        self.alphabet = alphabet
        self.modulus = alphabet.modulus
        self.key_values = [alphabet.index_of(ch) for ch in key]

    def _shift(self, p: int, k: int, mode: Mode):
        m = self.modulus
        if mode is Mode.ENCODE:
            c = (p + k) % m
            return c, f"({p} + {k}) mod {m} = {c}"
        c = (p - k + m) % m
        return c, f"({p} - {k} + {m}) mod {m} = {c}"

    def transform(self, text: str, mode: Union[Mode, str]) -> CipherResult:
        mode = Mode(mode)
        text = normalize(text)

        output: List[str] = []
        trace: List[TraceStep] = []
        key_index = 0
        key_length = len(self.key)

        for ch in text:
            # Characters outside the alphabet are dropped and do not consume key
            if ch not in self.alphabet:
                continue

            p = self.alphabet.index_of(ch)
            k_char = self.key[key_index % key_length]
            k = self.key_values[key_index % key_length]
            key_index += 1

            c, formula = self._shift(p, k, mode)
            out_char = self.alphabet.char_at(c)
            output.append(out_char)
            trace.append(TraceStep(
                input_char=ch,
                input_value=p,
                key_char=k_char,
                key_value=k,
                formula=formula,
                output_char=out_char,
            ))

        return CipherResult(output_text="".join(output), trace=trace)

    def encode(self, text: str) -> CipherResult:
        return self.transform(text, Mode.ENCODE)

    def decode(self, text: str) -> CipherResult:
        return self.transform(text, Mode.DECODE)


def transform(text: str, key: str, mode: Union[Mode, str], alphabet: Alphabet) -> CipherResult:
    """Run the cipher without validating `text`; non-members are skipped."""
    return VigenereCipher(key, alphabet).transform(text, mode)


def process(text: str, key: str, mode: Union[Mode, str], modulus: int) -> CipherResult:
    """Resolve the alphabet, validate both inputs, then transform.

    Raises a CipherError subclass before any computation if the input is
    rejected.
    """
    alphabet = resolve(modulus)
    text = normalize(text)
    key = normalize(key)
    validate_request(text, key, alphabet)
    return transform(text, key, mode, alphabet)
