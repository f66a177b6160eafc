from __future__ import annotations

from collections.abc import Iterable, Iterator


class BitWriter:
    """
    Packs bits MSB-first into bytes.

    getvalue() zero-pads the final byte and reports how many padding bits
    were added (0..7).
    """

    def __init__(self) -> None:
        self._out = bytearray()
        self._current = 0
        self._nbits = 0  # bits held in _current (0..7)

    def append(self, bit: int) -> None:
        if bit not in (0, 1):
            raise ValueError(f"bit must be 0 or 1, got {bit!r}")
        self._current = (self._current << 1) | bit
        self._nbits += 1
        if self._nbits == 8:
            self._out.append(self._current)
            self._current = 0
            self._nbits = 0

    def extend(self, bits: Iterable[int]) -> None:
        for bit in bits:
            self.append(bit)

    def take_bytes(self) -> bytes:
        """Remove and return the complete bytes written so far."""
        done = bytes(self._out)
        self._out.clear()
        return done

    def getvalue(self) -> tuple[bytes, int]:
        """Return (packed bytes, padbits) including the partial final byte."""
        out = bytes(self._out)
        if self._nbits == 0:
            return out, 0
        padbits = 8 - self._nbits
        return out + bytes([(self._current << padbits) & 0xFF]), padbits

    def __len__(self) -> int:
        return len(self._out) * 8 + self._nbits


def iter_bits(body: bytes, padbits: int = 0) -> Iterator[int]:
    """Yield the bits of ``body`` MSB-first, skipping the trailing padding bits."""
    if not (0 <= padbits <= 7):
        raise ValueError(f"padbits must be 0..7, got {padbits}")
    total = len(body)
    for i, byte in enumerate(body):
        bits_in_this_byte = 8 - padbits if i == total - 1 else 8
        for bit_index in range(bits_in_this_byte):
            yield (byte >> (7 - bit_index)) & 1


def bit_at(body: bytes, index: int) -> int:
    if index < 0 or index >= len(body) * 8:
        raise IndexError(f"bit index out of range: {index}")
    return (body[index >> 3] >> (7 - (index & 7))) & 1


def bit_length(body: bytes, padbits: int) -> int:
    """Number of meaningful bits in a packed body."""
    if not body:
        return 0
    return len(body) * 8 - padbits
