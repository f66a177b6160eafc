from __future__ import annotations

from collections.abc import Iterable

from huffcode.core.bits import BitWriter
from huffcode.core.codec_base import Codec
from huffcode.core.codes import CodeTable, build_code_table
from huffcode.core.decoder import decode_body
from huffcode.core.freq import FrequencyTable, count_frequencies
from huffcode.core.payload import pack_payload, unpack_payload
from huffcode.core.tree import build_huffman_tree


def encode_body(data: Iterable[int], codes: CodeTable) -> tuple[bytes, int]:
    """
    data -> (body, padbits)
    padbits = zero bits appended to the last byte (0..7); 0 for an empty body.
    """
    writer = BitWriter()
    for b in data:
        writer.extend(codes[b])
    return writer.getvalue()


def body_bit_count(freq: FrequencyTable, codes: CodeTable) -> int:
    """Exact number of code bits the body of an input with ``freq`` holds."""
    return sum(f * len(codes[sym]) for sym, f in enumerate(freq))


def huffman_compress_core(data: bytes) -> tuple[FrequencyTable, int, bytes]:
    """data -> (freq, padbits, body)"""
    freq = count_frequencies(data)
    codes = build_code_table(build_huffman_tree(freq))
    body, padbits = encode_body(data, codes)
    return freq, padbits, body


def huffman_decompress_core(freq: FrequencyTable, body: bytes, padbits: int) -> bytes:
    """(freq, body, padbits) -> data; the symbol count is the sum of ``freq``."""
    root = build_huffman_tree(freq)
    return decode_body(root, body, sum(freq), padbits)


def encode_bytes(data: bytes) -> bytes:
    """Encode ``data`` into a complete payload (header + padbits + body)."""
    freq, padbits, body = huffman_compress_core(bytes(data))
    return pack_payload(freq, padbits, body)


def decode_payload_bytes(blob: bytes) -> bytes:
    """Inverse of encode_bytes(); raises CorruptPayload on malformed input."""
    payload = unpack_payload(blob)
    return huffman_decompress_core(payload.freq, payload.body, payload.padbits)


class CodecHuffman(Codec):
    codec_id = "huffman"

    def compress(self, data: bytes) -> bytes:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("data must be bytes")
        return encode_bytes(bytes(data))

    def decompress(self, comp: bytes) -> bytes:
        if not isinstance(comp, (bytes, bytearray, memoryview)):
            raise TypeError("comp must be bytes")
        return decode_payload_bytes(bytes(comp))
