from __future__ import annotations

import pytest

from huffcode.core.codec_huffman import decode_payload_bytes, encode_bytes
from huffcode.core.decoder import DecodeState, TreeWalker, decode_body, decode_bits
from huffcode.core.freq import count_frequencies
from huffcode.core.tree import HuffmanNode, build_huffman_tree
from huffcode.errors import CorruptPayload


def _root(data: bytes) -> HuffmanNode:
    return build_huffman_tree(count_frequencies(data))


def test_walker_state_transitions() -> None:
    # codes: A=1 B=00 C=010
    w = TreeWalker(_root(b"AAAAABBBCC"), 3)
    assert w.state is DecodeState.AT_ROOT

    assert w.feed(0) is None
    assert w.state is DecodeState.AT_INTERNAL
    assert w.feed(0) == ord("B")
    assert w.state is DecodeState.AT_ROOT

    assert w.feed(1) == ord("A")
    assert w.state is DecodeState.AT_ROOT

    assert w.feed(0) is None
    assert w.feed(1) is None
    assert w.state is DecodeState.AT_INTERNAL
    assert w.feed(0) == ord("C")
    assert w.state is DecodeState.DONE
    assert w.emitted == 3
    assert w.bits_consumed == 6

    w.finish()
    with pytest.raises(RuntimeError):
        w.feed(0)


def test_walker_zero_symbols_is_done_immediately() -> None:
    w = TreeWalker(_root(b""), 0)
    assert w.state is DecodeState.DONE
    w.finish()


def test_walker_invalid_bit_is_corrupt() -> None:
    w = TreeWalker(_root(b"AB"), 2)
    with pytest.raises(CorruptPayload, match="invalid bit"):
        w.feed(2)
    assert w.state is DecodeState.CORRUPT
    with pytest.raises(RuntimeError):
        w.feed(0)


def test_walker_truncated_mid_code_emits_no_partial_symbol() -> None:
    w = TreeWalker(_root(b"AAAAABBBCC"), 10)
    emitted = []
    # 11111 00 0 : five A, one B, then half of the next code
    for bit in [1, 1, 1, 1, 1, 0, 0, 0]:
        sym = w.feed(bit)
        if sym is not None:
            emitted.append(sym)
    assert bytes(emitted) == b"AAAAAB"
    assert w.state is DecodeState.AT_INTERNAL
    with pytest.raises(CorruptPayload, match="middle of a code"):
        w.finish()
    assert w.state is DecodeState.CORRUPT


def test_walker_too_few_codes_is_corrupt() -> None:
    w = TreeWalker(_root(b"AAAAABBBCC"), 10)
    w.feed(1)
    assert w.state is DecodeState.AT_ROOT
    with pytest.raises(CorruptPayload, match="between codes"):
        w.finish()


def test_walker_single_leaf_root() -> None:
    w = TreeWalker(HuffmanNode(weight=2, symbol=7), 2)
    assert w.feed(0) == 7
    assert w.feed(0) == 7
    assert w.done


def test_decode_bits_ignores_bits_after_last_symbol() -> None:
    root = _root(b"AAAAABBBCC")
    assert decode_bits(root, [1, 0, 0, 1, 1, 1, 0], 3) == b"ABA"


def test_decode_body_truncated_raises() -> None:
    root = _root(b"AAAAABBBCC")
    with pytest.raises(CorruptPayload):
        decode_body(root, b"\xf8", 10, 0)


def test_truncated_payload_raises() -> None:
    blob = encode_bytes(b"AAAAABBBCC")
    with pytest.raises(CorruptPayload):
        decode_payload_bytes(blob[:-1])
    with pytest.raises(CorruptPayload):
        decode_payload_bytes(blob[:-2])


def test_trailing_bytes_after_last_symbol_are_ignored() -> None:
    blob = encode_bytes(b"ZZZZZ")
    assert decode_payload_bytes(blob + b"\xff\xff") == b"ZZZZZ"
