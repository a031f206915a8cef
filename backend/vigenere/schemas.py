from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

# Bounds of the modulus input; only the registered alphabets are accepted
# by the engine itself.
MIN_MOD = 1
MAX_MOD = 200
MAX_KEY_LENGTH = 256


class Mode(str, Enum):
    ENCODE = "encode"
    DECODE = "decode"


class CipherRequest(BaseModel):
    text: Optional[str] = ""
    key: str
    mode: Mode
    modulus: int = Field(..., ge=MIN_MOD, le=MAX_MOD)


class TraceStep(BaseModel):
    input_char: str
    input_value: int
    key_char: str
    key_value: int
    formula: str
    output_char: str


class CipherResult(BaseModel):
    output_text: str
    trace: List[TraceStep] = []


class CipherResponse(CipherResult):
    # Normalized inputs echoed back so the client can re-populate its form
    text: str
    key: str
    mode: Mode
    modulus: int


class AlphabetInfo(BaseModel):
    modulus: int
    characters: str
    label: str


class TabulaResponse(BaseModel):
    modulus: int
    characters: str
    rows: List[str]
    key: str = ""
    key_values: List[int] = []


class RandomKeyResponse(BaseModel):
    modulus: int
    key: str
