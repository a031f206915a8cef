import io

import pandas as pd
from fastapi.testclient import TestClient

from vigenere.main import app

client = TestClient(app)


def _process(**body):
    return client.post("/vigenere/process", json=body)


# ── /vigenere/process ─────────────────────────────────────────────────────────
def test_process_encode():
    r = _process(text="hello", key="key", mode="encode", modulus=26)
    assert r.status_code == 200
    data = r.json()
    assert data["output_text"] == "RIJVS"
    assert data["text"] == "HELLO"
    assert data["key"] == "KEY"
    assert data["mode"] == "encode"
    assert data["modulus"] == 26
    assert data["trace"][0] == {
        "input_char": "H",
        "input_value": 7,
        "key_char": "K",
        "key_value": 10,
        "formula": "(7 + 10) mod 26 = 17",
        "output_char": "R",
    }


def test_process_decode():
    r = _process(text="RIJVS", key="KEY", mode="decode", modulus=26)
    assert r.status_code == 200
    assert r.json()["output_text"] == "HELLO"


def test_process_text_defaults_to_empty():
    r = _process(key="KEY", mode="encode", modulus=26)
    assert r.status_code == 200
    assert r.json()["output_text"] == ""
    assert r.json()["trace"] == []


def test_process_unsupported_modulus():
    r = _process(text="HELLO", key="KEY", mode="encode", modulus=50)
    assert r.status_code == 422
    assert r.json()["detail"] == {"errors": {"modulus": "Unsupported MOD value: 50"}}


def test_process_empty_key():
    r = _process(text="TEST", key="", mode="encode", modulus=26)
    assert r.status_code == 422
    assert r.json()["detail"] == {"errors": {"key": "Key must not be empty."}}


def test_process_invalid_text_character():
    r = _process(text="HELLO1", key="KEY", mode="encode", modulus=26)
    assert r.status_code == 422
    assert r.json()["detail"] == {
        "errors": {"text": "Invalid character '1' in text. Allowed: A–Z only."}
    }


def test_process_request_validation():
    assert _process(text="HELLO", key="KEY", mode="encode", modulus=500).status_code == 422
    assert _process(text="HELLO", key="KEY", mode="shift", modulus=26).status_code == 422
    assert _process(text="HELLO", mode="encode", modulus=26).status_code == 422


# ── Alphabets / tabula / keys ─────────────────────────────────────────────────
def test_list_alphabets():
    r = client.get("/alphabets")
    assert r.status_code == 200
    data = r.json()
    assert [a["modulus"] for a in data] == [26, 27, 37]
    assert data[2]["label"] == "A–Z, 0–9, and space only"


def test_tabula():
    r = client.get("/vigenere/tabula/27")
    assert r.status_code == 200
    rows = r.json()["rows"]
    assert len(rows) == 27
    assert rows[1].startswith("BCD")
    assert rows[1].endswith(" A")


def test_tabula_with_key_values():
    r = client.get("/vigenere/tabula/26", params={"key": "key"})
    assert r.status_code == 200
    data = r.json()
    assert data["key"] == "KEY"
    assert data["key_values"] == [10, 4, 24]
    assert data["rows"][10][7] == "R"
    assert client.get("/vigenere/tabula/26").json()["key_values"] == []


def test_tabula_rejects_bad_key():
    r = client.get("/vigenere/tabula/26", params={"key": "KEYı"})
    assert r.status_code == 422
    assert r.json()["detail"]["errors"]["key"] == "Invalid character 'ı' in key. Allowed: A–Z only."


def test_process_rejects_sharp_s():
    r = _process(text="straße", key="KEY", mode="encode", modulus=26)
    assert r.status_code == 422
    assert r.json()["detail"] == {
        "errors": {"text": "Invalid character 'ß' in text. Allowed: A–Z only."}
    }


def test_tabula_unsupported():
    r = client.get("/vigenere/tabula/30")
    assert r.status_code == 422
    assert r.json()["detail"]["errors"]["modulus"] == "Unsupported MOD value: 30"


def test_random_key():
    r = client.get("/vigenere/random-key", params={"modulus": 37, "length": 10})
    assert r.status_code == 200
    key = r.json()["key"]
    assert len(key) == 10
    assert client.get("/vigenere/random-key", params={"length": 0}).status_code == 422
    assert client.get("/vigenere/random-key", params={"modulus": 2}).status_code == 422


def test_root_redirects_to_docs():
    r = client.get("/", follow_redirects=False)
    assert r.status_code in (302, 307)
    assert r.headers["location"] == "/docs"


# ── /vigenere/export-excel ────────────────────────────────────────────────────
def test_export_excel():
    r = client.post("/vigenere/export-excel",
                    json={"text": "HELLO", "key": "KEY", "mode": "encode", "modulus": 26})
    assert r.status_code == 200
    assert "vigenere_trace.xlsx" in r.headers["content-disposition"]

    sheets = pd.read_excel(io.BytesIO(r.content), sheet_name=None)
    trace = sheets["Trace"]
    assert list(trace["Result"]) == list("RIJVS")
    assert list(trace["P value"]) == [7, 4, 11, 11, 14]
    summary = dict(zip(sheets["Summary"]["Field"], sheets["Summary"]["Value"]))
    assert summary["Output"] == "RIJVS"


def test_export_excel_rejects_bad_input():
    r = client.post("/vigenere/export-excel",
                    json={"text": "HELLO1", "key": "KEY", "mode": "encode", "modulus": 26})
    assert r.status_code == 422
    assert "text" in r.json()["detail"]["errors"]
