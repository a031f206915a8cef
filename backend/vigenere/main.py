from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import RedirectResponse, StreamingResponse
from fastapi.middleware.cors import CORSMiddleware
from .alphabets import ALPHABETS, resolve, supported_moduli
from .cipher_engine import normalize, process
from .errors import CipherError
from .schemas import (
    AlphabetInfo, CipherRequest, CipherResponse, RandomKeyResponse, TabulaResponse,
    MAX_KEY_LENGTH,
)
from .tabula import key_values, random_key, tabula_rows
import pandas as pd
import io
import logging
import traceback
from typing import List

# Configure logging
logger = logging.getLogger("uvicorn")

app = FastAPI(title="Vigenère Calculator")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"]
)


def _cipher_error(e: CipherError) -> HTTPException:
    logger.warning(f"⚠️ Rejected input ({e.field}): {e.message}")
    return HTTPException(status_code=422, detail={"errors": e.as_dict()})


def _run(req: CipherRequest) -> CipherResponse:
    try:
        result = process(req.text, req.key, req.mode, req.modulus)
    except CipherError as e:
        raise _cipher_error(e)
    except Exception as e:
        logger.error(f"❌ FATAL ERROR in process: {e}\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"🔐 {req.mode.value} mod {req.modulus}: {len(result.trace)} characters")
    return CipherResponse(
        output_text=result.output_text,
        trace=result.trace,
        text=normalize(req.text),
        key=normalize(req.key),
        mode=req.mode,
        modulus=req.modulus,
    )


@app.get("/")
def read_root():
    return RedirectResponse(url="/docs")


@app.get("/alphabets", response_model=List[AlphabetInfo])
def list_alphabets():
    return [
        AlphabetInfo(modulus=m, characters=ALPHABETS[m].characters, label=ALPHABETS[m].label)
        for m in supported_moduli()
    ]


@app.post("/vigenere/process", response_model=CipherResponse)
def process_cipher(req: CipherRequest):
    return _run(req)


@app.get("/vigenere/tabula/{modulus}", response_model=TabulaResponse)
def get_tabula(modulus: int, key: str = ""):
    # Optional key: its shift values pick the rows used while enciphering
    try:
        alphabet = resolve(modulus)
        shifts = key_values(key, alphabet)
    except CipherError as e:
        raise _cipher_error(e)
    return TabulaResponse(
        modulus=modulus,
        characters=alphabet.characters,
        rows=tabula_rows(alphabet),
        key=normalize(key),
        key_values=shifts,
    )


@app.get("/vigenere/random-key", response_model=RandomKeyResponse)
def get_random_key(modulus: int = 26, length: int = Query(8, ge=1, le=MAX_KEY_LENGTH)):
    try:
        alphabet = resolve(modulus)
    except CipherError as e:
        raise _cipher_error(e)
    return RandomKeyResponse(modulus=modulus, key=random_key(alphabet, length))


@app.post("/vigenere/export-excel")
def export_excel(req: CipherRequest):
    res = _run(req)

    df_trace = pd.DataFrame([step.model_dump() for step in res.trace],
                            columns=["input_char", "input_value", "key_char", "key_value", "formula", "output_char"])
    df_trace.columns = ["P", "P value", "K", "K value", "Formula", "Result"]
    df_summary = pd.DataFrame([
        ("Mode", res.mode.value),
        ("MOD", res.modulus),
        ("Alphabet", ALPHABETS[res.modulus].label),
        ("Key", res.key),
        ("Input", res.text),
        ("Output", res.output_text),
    ], columns=["Field", "Value"])

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine='openpyxl') as writer:
        df_summary.to_excel(writer, sheet_name='Summary', index=False)
        df_trace.to_excel(writer, sheet_name='Trace', index=False)

    output.seek(0)

    headers = {
        'Content-Disposition': 'attachment; filename="vigenere_trace.xlsx"'
    }
    return StreamingResponse(output, headers=headers, media_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet')
