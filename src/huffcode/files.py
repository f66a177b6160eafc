"""File-level two-pass encode / streamed decode.

encode: pass 1 counts byte frequencies, pass 2 writes the codes. The header
(and padbits) are known after pass 1, so the body is streamed straight to the
output file.

decode: the header is read first, then the body is walked bit by bit and the
output is written chunk by chunk. On CorruptPayload the bytes decoded so far
stay in the output file (no rollback).
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from huffcode.core.bits import BitWriter
from huffcode.core.codec_huffman import body_bit_count
from huffcode.core.codes import build_code_table
from huffcode.core.decoder import TreeWalker
from huffcode.core.freq import FrequencyTable, count_frequencies_stream
from huffcode.core.payload import PREFIX_SIZE, pack_prefix, unpack_prefix
from huffcode.core.tree import build_huffman_tree
from huffcode.errors import CorruptPayload, HuffcodeError, IOUnavailable, UsageError

CHUNK_SIZE_DEFAULT = 256 * 1024


def _check_chunk_size(chunk_size: int) -> int:
    if int(chunk_size) <= 0:
        raise UsageError(f"chunk size must be > 0, got {chunk_size}")
    return int(chunk_size)


def _check_distinct(input_path: Path, output_path: Path) -> None:
    try:
        same = input_path.resolve() == output_path.resolve()
    except OSError:
        same = False
    if same:
        raise UsageError(f"input and output are the same file: {input_path}")


def _open_read(path: Path) -> BinaryIO:
    try:
        return path.open("rb")
    except OSError as err:
        raise IOUnavailable(f"cannot open input file {path}: {err.strerror or err}") from err


def _open_write(path: Path) -> BinaryIO:
    try:
        return path.open("wb")
    except OSError as err:
        raise IOUnavailable(f"cannot open output file {path}: {err.strerror or err}") from err


def count_file_frequencies(
    path: str | Path, *, chunk_size: int = CHUNK_SIZE_DEFAULT
) -> FrequencyTable:
    path = Path(path)
    chunk_size = _check_chunk_size(chunk_size)
    with _open_read(path) as fp:
        try:
            return count_frequencies_stream(fp, chunk_size)
        except OSError as err:
            raise IOUnavailable(f"cannot read input file {path}: {err}") from err


def encode_file(
    input_path: str | Path,
    output_path: str | Path,
    *,
    chunk_size: int = CHUNK_SIZE_DEFAULT,
) -> None:
    input_path = Path(input_path)
    output_path = Path(output_path)
    chunk_size = _check_chunk_size(chunk_size)
    _check_distinct(input_path, output_path)

    with _open_read(input_path) as fin:
        # buffered writes may only fail at flush/close: keep the close guarded too
        try:
            with _open_write(output_path) as fout:
                freq = count_frequencies_stream(fin, chunk_size)
                fin.seek(0)

                codes = build_code_table(build_huffman_tree(freq))
                bits = body_bit_count(freq, codes)
                padbits = (-bits) % 8

                fout.write(pack_prefix(freq, padbits))
                writer = BitWriter()
                seen = 0
                while True:
                    chunk = fin.read(chunk_size)
                    if not chunk:
                        break
                    seen += len(chunk)
                    for b in chunk:
                        writer.extend(codes[b])
                    fout.write(writer.take_bytes())
                tail, got_padbits = writer.getvalue()
                fout.write(tail)
        except OSError as err:
            raise IOUnavailable(f"I/O error while encoding {input_path}: {err}") from err

    if seen != sum(freq) or got_padbits != padbits:
        raise HuffcodeError(f"input file changed while encoding: {input_path}")


def _iter_file_bits(fp: BinaryIO, body_len: int, padbits: int, chunk_size: int) -> Iterator[int]:
    remaining = body_len
    while remaining > 0:
        chunk = fp.read(min(chunk_size, remaining))
        if not chunk:
            break
        remaining -= len(chunk)
        last = len(chunk) - 1
        for i, byte in enumerate(chunk):
            n = 8 - padbits if (remaining == 0 and i == last) else 8
            for bit_index in range(n):
                yield (byte >> (7 - bit_index)) & 1


def decode_file(
    input_path: str | Path,
    output_path: str | Path,
    *,
    chunk_size: int = CHUNK_SIZE_DEFAULT,
) -> None:
    input_path = Path(input_path)
    output_path = Path(output_path)
    chunk_size = _check_chunk_size(chunk_size)
    _check_distinct(input_path, output_path)

    with _open_read(input_path) as fin:
        try:
            size = os.fstat(fin.fileno()).st_size
            prefix = fin.read(PREFIX_SIZE)
        except OSError as err:
            raise IOUnavailable(f"cannot read input file {input_path}: {err}") from err

        freq, padbits = unpack_prefix(prefix)
        body_len = size - PREFIX_SIZE
        if body_len == 0 and padbits:
            raise CorruptPayload(f"padbits={padbits} but the body is empty")

        try:
            with _open_write(output_path) as fout:
                walker = TreeWalker(build_huffman_tree(freq), sum(freq))
                buf = bytearray()
                try:
                    if not walker.done:
                        for bit in _iter_file_bits(fin, body_len, padbits, chunk_size):
                            sym = walker.feed(bit)
                            if sym is None:
                                continue
                            buf.append(sym)
                            if walker.done:
                                break
                            if len(buf) >= chunk_size:
                                fout.write(buf)
                                buf.clear()
                    walker.finish()
                except CorruptPayload:
                    # no rollback: keep what was decoded before the error
                    fout.write(buf)
                    raise
                fout.write(buf)
        except OSError as err:
            raise IOUnavailable(f"I/O error while decoding {input_path}: {err}") from err
