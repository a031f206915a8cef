from typing import Dict


class CipherError(Exception):
    """Base exception for all Vigenère calculator errors.

    `field` names the request field the error belongs to, so the caller
    can show the message next to the right input.
    """

    def __init__(self, message: str, field: str):
        self.message = message
        self.field = field
        super().__init__(self.message)

    def as_dict(self) -> Dict[str, str]:
        return {self.field: self.message}


class UnsupportedModulus(CipherError):
    """Raised when no alphabet is registered for the requested modulus."""

    def __init__(self, modulus):
        self.modulus = modulus
        super().__init__(f"Unsupported MOD value: {modulus}", "modulus")


class EmptyKey(CipherError):
    """Raised when the key is empty after normalization."""

    def __init__(self):
        super().__init__("Key must not be empty.", "key")


class InvalidCharacter(CipherError):
    """Raised on the first character that is not part of the alphabet."""

    def __init__(self, char: str, field: str, allowed: str = ""):
        self.char = char
        self.allowed = allowed
        message = f"Invalid character '{char}' in {field}."
        if allowed:
            message += f" Allowed: {allowed}."
        super().__init__(message, field)
