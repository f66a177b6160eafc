from __future__ import annotations

import os
import random
from pathlib import Path

import pytest

from huffcode.core.codec_huffman import encode_bytes
from huffcode.core.freq import count_frequencies
from huffcode.errors import CorruptPayload, IOUnavailable, UsageError
from huffcode.files import count_file_frequencies, decode_file, encode_file


def test_file_roundtrip_small_chunks(tmp_path: Path) -> None:
    inp = tmp_path / "in.bin"
    enc = tmp_path / "out.huf"
    back = tmp_path / "back.bin"

    rnd = random.Random(11)
    data = bytes(rnd.randrange(32) for _ in range(4000)) + os.urandom(300)
    inp.write_bytes(data)

    encode_file(inp, enc, chunk_size=7)
    # streamed encode produces the same bytes as the in-memory encoder
    assert enc.read_bytes() == encode_bytes(data)

    decode_file(enc, back, chunk_size=5)
    assert back.read_bytes() == data


def test_file_roundtrip_text(tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    enc = tmp_path / "out.huf"
    back = tmp_path / "back.txt"
    text = "HELLO 123\nthe quick brown fox jumps over the lazy dog\nΩ λ\n" * 20
    inp.write_text(text, encoding="utf-8")

    encode_file(str(inp), str(enc))
    decode_file(str(enc), str(back))
    assert back.read_text(encoding="utf-8") == text


def test_file_empty(tmp_path: Path) -> None:
    inp = tmp_path / "empty.bin"
    enc = tmp_path / "empty.huf"
    back = tmp_path / "empty.back"
    inp.write_bytes(b"")

    encode_file(inp, enc)
    assert enc.read_bytes() == b"\x00" * 1025
    decode_file(enc, back)
    assert back.read_bytes() == b""


def test_missing_input_is_io_unavailable(tmp_path: Path) -> None:
    out = tmp_path / "out.huf"
    with pytest.raises(IOUnavailable, match="input"):
        encode_file(tmp_path / "nope.bin", out)
    assert not out.exists()
    with pytest.raises(IOUnavailable):
        decode_file(tmp_path / "nope.huf", out)


def test_unwritable_output_is_io_unavailable(tmp_path: Path) -> None:
    inp = tmp_path / "in.bin"
    inp.write_bytes(b"abc")
    with pytest.raises(IOUnavailable, match="output"):
        encode_file(inp, tmp_path / "missing_dir" / "out.huf")


_DEV_FULL = Path("/dev/full")


@pytest.mark.skipif(not _DEV_FULL.exists(), reason="needs /dev/full")
def test_write_failure_is_io_unavailable(tmp_path: Path) -> None:
    inp = tmp_path / "in.bin"
    enc = tmp_path / "out.huf"
    inp.write_bytes(b"AAAAABBBCC" * 50)
    encode_file(inp, enc)

    # small writes are buffered and only fail at close
    with pytest.raises(IOUnavailable, match="encoding"):
        encode_file(inp, _DEV_FULL)
    with pytest.raises(IOUnavailable, match="decoding"):
        decode_file(enc, _DEV_FULL)


def test_same_input_and_output_is_rejected(tmp_path: Path) -> None:
    inp = tmp_path / "in.bin"
    inp.write_bytes(b"abc")
    with pytest.raises(UsageError):
        encode_file(inp, inp)
    assert inp.read_bytes() == b"abc"


def test_bad_chunk_size(tmp_path: Path) -> None:
    inp = tmp_path / "in.bin"
    inp.write_bytes(b"abc")
    with pytest.raises(UsageError, match="chunk size"):
        encode_file(inp, tmp_path / "out.huf", chunk_size=0)


def test_truncated_file_keeps_partial_output(tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    enc = tmp_path / "out.huf"
    back = tmp_path / "back.txt"
    inp.write_bytes(b"AAAAABBBCC")
    encode_file(inp, enc)

    blob = enc.read_bytes()
    enc.write_bytes(blob[:-2])  # body f8 09 00 -> f8, padbits still 7 -> one bit left

    with pytest.raises(CorruptPayload):
        decode_file(enc, back)
    # known limitation: what was decoded before the error stays on disk
    assert back.read_bytes() == b"A"


def test_truncated_header(tmp_path: Path) -> None:
    enc = tmp_path / "short.huf"
    enc.write_bytes(b"\x00" * 100)
    with pytest.raises(CorruptPayload, match="truncated"):
        decode_file(enc, tmp_path / "back.bin")


def test_count_file_frequencies(tmp_path: Path) -> None:
    inp = tmp_path / "in.bin"
    inp.write_bytes(b"abracadabra")
    assert count_file_frequencies(inp, chunk_size=3) == count_frequencies(b"abracadabra")
