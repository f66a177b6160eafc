from __future__ import annotations

from pathlib import Path

import pytest

from huffcode.errors import (
    EXIT_CODES,
    CorruptPayload,
    HuffcodeError,
    IOUnavailable,
    SizeMismatch,
    TruncatedPayload,
    UsageError,
    exit_code_info,
    render_exit_codes_markdown,
)

pytestmark = pytest.mark.p0


def test_exit_codes_are_unique_and_stable() -> None:
    codes = [e.code for e in EXIT_CODES]
    assert len(codes) == len(set(codes))
    assert {e.name: e.code for e in EXIT_CODES} == {
        "OK": 0,
        "USAGE": 2,
        "GENERIC": 10,
        "CORRUPT_PAYLOAD": 11,
        "IO_UNAVAILABLE": 12,
        "SIZE_MISMATCH": 13,
    }


def test_exceptions_carry_exit_codes() -> None:
    assert HuffcodeError().exit_code == 10
    assert UsageError().exit_code == 2
    assert CorruptPayload().exit_code == 11
    assert TruncatedPayload().exit_code == 11
    assert issubclass(TruncatedPayload, CorruptPayload)
    assert IOUnavailable().exit_code == 12
    assert SizeMismatch().exit_code == 13


def test_exit_code_info() -> None:
    info = exit_code_info(12)
    assert info is not None and info.name == "IO_UNAVAILABLE"
    assert exit_code_info(99) is None


def test_generated_doc_is_up_to_date() -> None:
    doc = Path(__file__).resolve().parents[1] / "docs" / "exit_codes.md"
    assert doc.read_text(encoding="utf-8") == render_exit_codes_markdown(), (
        "docs/exit_codes.md is stale: run python scripts/gen_exit_codes_md.py"
    )
