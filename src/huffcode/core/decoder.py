from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from huffcode.core.bits import iter_bits
from huffcode.core.tree import HuffmanNode
from huffcode.errors import CorruptPayload


class DecodeState(Enum):
    AT_ROOT = "at_root"
    AT_INTERNAL = "at_internal"
    DONE = "done"
    CORRUPT = "corrupt"


class TreeWalker:
    """
    Symbol-at-a-time decoder: walks the tree one bit per feed() call.

      AT_ROOT / AT_INTERNAL --bit--> AT_INTERNAL       (internal node reached)
      AT_ROOT / AT_INTERNAL --bit--> AT_ROOT           (leaf reached, symbol emitted)
      ...                   --n-th symbol--> DONE
      any bit other than 0/1, or finish() before DONE  --> CORRUPT
    """

    def __init__(self, root: HuffmanNode, n_symbols: int):
        if n_symbols < 0:
            raise ValueError(f"n_symbols must be >= 0, got {n_symbols}")
        self._root = root
        self._node = root
        self.n_symbols = n_symbols
        self.emitted = 0
        self.bits_consumed = 0
        self.state = DecodeState.DONE if n_symbols == 0 else DecodeState.AT_ROOT

    @property
    def done(self) -> bool:
        return self.state is DecodeState.DONE

    def feed(self, bit: int) -> int | None:
        """Consume one bit; return the decoded symbol if a leaf was reached."""
        if self.state is DecodeState.DONE:
            raise RuntimeError("feed() after all symbols were decoded")
        if self.state is DecodeState.CORRUPT:
            raise RuntimeError("feed() on a corrupt stream")
        if bit not in (0, 1):
            self.state = DecodeState.CORRUPT
            raise CorruptPayload(f"invalid bit value {bit!r} at bit {self.bits_consumed}")

        node = self._node
        if node.is_leaf:
            # single-leaf tree: the root itself carries the symbol, any bit selects it
            nxt = node
        else:
            nxt = node.left if bit == 0 else node.right
            if nxt is None:
                self.state = DecodeState.CORRUPT
                raise CorruptPayload("tree has an internal node with a missing child")
        self.bits_consumed += 1

        if not nxt.is_leaf:
            self._node = nxt
            self.state = DecodeState.AT_INTERNAL
            return None

        self.emitted += 1
        self._node = self._root
        self.state = DecodeState.DONE if self.emitted == self.n_symbols else DecodeState.AT_ROOT
        return nxt.symbol

    def finish(self) -> None:
        """Signal end of the bit stream; raises CorruptPayload unless DONE."""
        if self.state is DecodeState.DONE:
            return
        was = self.state
        self.state = DecodeState.CORRUPT
        where = "in the middle of a code" if was is DecodeState.AT_INTERNAL else "between codes"
        raise CorruptPayload(
            f"bit stream ended {where}: decoded {self.emitted} of {self.n_symbols} symbols"
        )


def decode_bits(root: HuffmanNode, bits: Iterable[int], n_symbols: int) -> bytes:
    """Decode ``n_symbols`` symbols; bits left over after the last one are ignored."""
    walker = TreeWalker(root, n_symbols)
    out = bytearray()
    if walker.done:
        return b""
    for bit in bits:
        sym = walker.feed(bit)
        if sym is not None:
            out.append(sym)
            if walker.done:
                return bytes(out)
    walker.finish()
    return bytes(out)


def decode_body(root: HuffmanNode, body: bytes, n_symbols: int, padbits: int) -> bytes:
    return decode_bits(root, iter_bits(body, padbits), n_symbols)
