from __future__ import annotations

from collections.abc import Iterable
from typing import BinaryIO

ALPHABET_SIZE = 256
MAX_COUNT = 0xFFFFFFFF  # header stores each count as u32

FrequencyTable = tuple[int, ...]


def count_frequencies(data: bytes) -> FrequencyTable:
    """Single pass over ``data``: one count per byte value (always 256 entries)."""
    freq = [0] * ALPHABET_SIZE
    for b in data:
        freq[b] += 1
    return tuple(freq)


def count_frequencies_stream(fp: BinaryIO, chunk_size: int) -> FrequencyTable:
    """Like count_frequencies(), but reads a binary file object chunk by chunk."""
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be > 0, got {chunk_size}")
    freq = [0] * ALPHABET_SIZE
    while True:
        chunk = fp.read(chunk_size)
        if not chunk:
            break
        for b in chunk:
            freq[b] += 1
    return tuple(freq)


def merge_frequencies(*tables: Iterable[int]) -> FrequencyTable:
    """Element-wise sum (counting a partitioned input and merging is exact)."""
    freq = [0] * ALPHABET_SIZE
    for t in tables:
        t = validate_freq(t, limit=None)
        for sym, f in enumerate(t):
            freq[sym] += f
    return tuple(freq)


def validate_freq(freq: Iterable[int], *, limit: int | None = MAX_COUNT) -> FrequencyTable:
    """Return ``freq`` as a FrequencyTable or raise ValueError."""
    t = tuple(freq)
    if len(t) != ALPHABET_SIZE:
        raise ValueError(f"frequency table must have {ALPHABET_SIZE} entries, got {len(t)}")
    for sym, f in enumerate(t):
        if not isinstance(f, int) or isinstance(f, bool):
            raise ValueError(f"count for symbol {sym} is not an integer: {f!r}")
        if f < 0:
            raise ValueError(f"negative count for symbol {sym}: {f}")
        if limit is not None and f > limit:
            raise ValueError(f"count for symbol {sym} does not fit u32: {f}")
    return t


def total_symbols(freq: FrequencyTable) -> int:
    return sum(freq)


def used_symbols(freq: FrequencyTable) -> list[tuple[int, int]]:
    return [(sym, f) for sym, f in enumerate(freq) if f > 0]
