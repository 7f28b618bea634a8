from __future__ import annotations

import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))


import pytest

from jsonshape.combinators import array_of
from jsonshape.decoder import boolean_decoder, number_decoder, string_decoder
from jsonshape.schema import record


EMPLOYEE_INPUT = {
    "employeeId": 2,
    "name": "n",
    "address": {"city": "c"},
    "phoneNumbers": ["1", "2"],
    "isEmployed": True,
}


@pytest.fixture
def employee_decoder():
    return record(
        {
            "employeeId": number_decoder,
            "name": string_decoder,
            "address": {"city": string_decoder},
            "phoneNumbers": array_of(string_decoder),
            "isEmployed": boolean_decoder,
        }
    )


@pytest.fixture
def employee_input() -> dict[str, object]:
    return json.loads(json.dumps(EMPLOYEE_INPUT))


@pytest.fixture
def write_json():
    def _write(path: Path, payload: object) -> Path:
        path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        return path

    return _write
