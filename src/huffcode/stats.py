"""Compression statistics: Huffman payload vs. entropy and byte-codec baselines."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from huffcode.core.codec_base import Codec
from huffcode.core.codec_huffman import CodecHuffman, body_bit_count
from huffcode.core.codec_zlib import CodecZlib
from huffcode.core.codec_zstd import CodecZstd, have_zstd
from huffcode.core.codes import build_code_table
from huffcode.core.freq import count_frequencies, used_symbols
from huffcode.core.payload import PREFIX_SIZE
from huffcode.core.tree import build_huffman_tree
from huffcode.errors import IOUnavailable


@dataclass(frozen=True)
class Stats:
    input_size: int
    payload_size: int
    body_bits: int
    distinct_symbols: int
    entropy_bps: float  # Shannon entropy, bits/symbol
    avg_code_bps: float  # Huffman average code length, bits/symbol
    ratio: float  # payload_size / input_size (1.0 = no compression)
    zlib_size: int
    zstd_size: int | None  # None if zstandard is not installed

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def shannon_entropy(freq: tuple[int, ...]) -> float:
    n = sum(freq)
    if n == 0:
        return 0.0
    h = 0.0
    for _sym, f in used_symbols(freq):
        p = f / n
        h -= p * math.log2(p)
    return h


def compressed_sizes(data: bytes, codecs: list[Codec]) -> dict[str, int]:
    """Compressed size of ``data`` for each codec, keyed by ``codec_id``."""
    return {c.codec_id: len(c.compress(data)) for c in codecs}


def compute_stats(data: bytes, *, zlib_level: int = 9, zstd_level: int = 19) -> Stats:
    freq = count_frequencies(data)
    codes = build_code_table(build_huffman_tree(freq))
    bits = body_bit_count(freq, codes)
    n = len(data)

    codecs: list[Codec] = [CodecHuffman(), CodecZlib(level=zlib_level)]
    if have_zstd():
        codecs.append(CodecZstd(level=zstd_level))
    sizes = compressed_sizes(data, codecs)
    payload_size = sizes["huffman"]

    return Stats(
        input_size=n,
        payload_size=payload_size,
        body_bits=bits,
        distinct_symbols=len(used_symbols(freq)),
        entropy_bps=shannon_entropy(freq),
        avg_code_bps=(bits / n) if n else 0.0,
        ratio=(payload_size / n) if n else 0.0,
        zlib_size=sizes["zlib"],
        zstd_size=sizes.get("zstd"),
    )


def compute_file_stats(path: str | Path) -> Stats:
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as err:
        raise IOUnavailable(f"cannot read {path}: {err.strerror or err}") from err
    return compute_stats(data)


def format_stats(st: Stats, label: str) -> str:
    lines = [f"=== huffcode stats ({label}) ==="]
    lines.append(f"Input size      : {st.input_size} bytes")
    lines.append(f"Payload size    : {st.payload_size} bytes (header {PREFIX_SIZE})")
    lines.append(f"Distinct symbols: {st.distinct_symbols}")
    if st.input_size == 0:
        lines.append("Empty input: no meaningful ratios")
    else:
        lines.append(f"Ratio           : {st.ratio:.3f} (1.0 = no compression)")
        lines.append(f"Entropy         : {st.entropy_bps:.3f} bits/symbol")
        lines.append(f"Huffman         : {st.avg_code_bps:.3f} bits/symbol")
    lines.append(f"zlib baseline   : {st.zlib_size} bytes")
    if st.zstd_size is None:
        lines.append("zstd baseline   : n/a (zstandard not installed)")
    else:
        lines.append(f"zstd baseline   : {st.zstd_size} bytes")
    lines.append("=" * 31)
    return "\n".join(lines)


def print_file_stats(original_path: str | Path, encoded_path: str | Path) -> None:
    original_path = Path(original_path)
    encoded_path = Path(encoded_path)

    size_orig = original_path.stat().st_size
    size_enc = encoded_path.stat().st_size

    print("=== huffcode encode ===")
    print(f"Input  : {original_path} ({size_orig} bytes)")
    print(f"Output : {encoded_path} ({size_enc} bytes)")

    if size_orig == 0:
        print("Empty input: no meaningful ratios")
        print("=" * 23)
        return

    ratio = size_enc / size_orig
    bps = (size_enc * 8) / size_orig

    print(f"Ratio  : {ratio:.3f} (1.0 = no compression)")
    print(f"Bits/symbol: {bps:.3f} (8.0 = uncompressed)")
    print("=" * 23)
