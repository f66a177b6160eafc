"""
Encoded payload wire format.

Layout:
  [ FREQ(4) * 256 | PADBITS(1) | BODY(...) ]

  FREQ    : u32 big-endian count per symbol, symbol 0..255 in order
  PADBITS : zero bits appended to complete the last BODY byte (0..7)
  BODY    : Huffman codes of the input symbols, in input order, MSB-first

The header is always 256 counts, so the decoder can rebuild the same tree
even for an empty input (all-zero counts, empty body).
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from huffcode.core.freq import ALPHABET_SIZE, FrequencyTable, validate_freq
from huffcode.errors import CorruptPayload, TruncatedPayload

_FREQ_STRUCT = struct.Struct(f">{ALPHABET_SIZE}I")

HEADER_SIZE = _FREQ_STRUCT.size  # 1024
PREFIX_SIZE = HEADER_SIZE + 1  # header + padbits


@dataclass(frozen=True, slots=True)
class EncodedPayload:
    freq: FrequencyTable
    padbits: int
    body: bytes

    @property
    def n_symbols(self) -> int:
        return sum(self.freq)


def pack_payload(freq: FrequencyTable, padbits: int, body: bytes) -> bytes:
    freq = validate_freq(freq)
    if not (0 <= padbits <= 7):
        raise ValueError(f"padbits must be 0..7, got {padbits}")
    if not body and padbits:
        raise ValueError("padbits set on an empty body")
    return _FREQ_STRUCT.pack(*freq) + bytes([padbits]) + bytes(body)


def pack_prefix(freq: FrequencyTable, padbits: int) -> bytes:
    """Header + padbits only (for writers that stream the body separately)."""
    freq = validate_freq(freq)
    if not (0 <= padbits <= 7):
        raise ValueError(f"padbits must be 0..7, got {padbits}")
    return _FREQ_STRUCT.pack(*freq) + bytes([padbits])


def unpack_prefix(prefix: bytes) -> tuple[FrequencyTable, int]:
    if len(prefix) < PREFIX_SIZE:
        raise TruncatedPayload(
            f"truncated payload: header needs {PREFIX_SIZE} bytes, got {len(prefix)}"
        )
    freq = _FREQ_STRUCT.unpack_from(prefix, 0)
    padbits = prefix[HEADER_SIZE]
    if padbits > 7:
        raise CorruptPayload(f"padbits out of range: {padbits}")
    return tuple(freq), padbits


def unpack_payload(blob: bytes) -> EncodedPayload:
    freq, padbits = unpack_prefix(blob)
    body = bytes(blob[PREFIX_SIZE:])
    if not body and padbits:
        raise CorruptPayload(f"padbits={padbits} but the body is empty")
    return EncodedPayload(freq=freq, padbits=padbits, body=body)
