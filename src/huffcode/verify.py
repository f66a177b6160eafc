"""Verification of encoded payloads.

Policy: light by default (header + size consistency), --full decodes the body.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from huffcode.core.codec_huffman import body_bit_count
from huffcode.core.codes import build_code_table
from huffcode.core.decoder import decode_body
from huffcode.core.payload import unpack_payload
from huffcode.core.tree import build_huffman_tree
from huffcode.errors import CorruptPayload, IOUnavailable, SizeMismatch


@dataclass(frozen=True)
class VerifyReport:
    n_symbols: int
    body_bits: int
    body_bytes: int
    padbits: int
    decoded: bool


def verify_payload(blob: bytes, *, full: bool = False) -> VerifyReport:
    payload = unpack_payload(blob)
    root = build_huffman_tree(payload.freq)
    codes = build_code_table(root)

    bits = body_bit_count(payload.freq, codes)
    want_bytes = (bits + 7) // 8
    want_padbits = (-bits) % 8
    if len(payload.body) != want_bytes:
        raise SizeMismatch(
            f"body is {len(payload.body)} bytes, header implies {want_bytes} ({bits} bits)"
        )
    if payload.padbits != want_padbits:
        raise SizeMismatch(f"padbits is {payload.padbits}, header implies {want_padbits}")

    if full:
        out = decode_body(root, payload.body, payload.n_symbols, payload.padbits)
        if len(out) != payload.n_symbols:
            raise CorruptPayload(f"decoded {len(out)} symbols, expected {payload.n_symbols}")

    return VerifyReport(
        n_symbols=payload.n_symbols,
        body_bits=bits,
        body_bytes=len(payload.body),
        padbits=payload.padbits,
        decoded=full,
    )


def verify_file(path: str | Path, *, full: bool = False) -> VerifyReport:
    path = Path(path)
    try:
        blob = path.read_bytes()
    except OSError as err:
        raise IOUnavailable(f"cannot read {path}: {err.strerror or err}") from err
    return verify_payload(blob, full=full)
