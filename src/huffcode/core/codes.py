from __future__ import annotations

from fractions import Fraction

from huffcode.core.freq import ALPHABET_SIZE, FrequencyTable
from huffcode.core.tree import HuffmanNode

Code = tuple[int, ...]
CodeTable = tuple[Code, ...]


def assign_codes(root: HuffmanNode) -> dict[int, Code]:
    """
    Walk the tree depth-first (pre-order, left before right): a left edge
    appends 0, a right edge appends 1, and the path to a leaf is its
    symbol's code.

    A root that is itself a leaf gets the one-bit code (0,) so it stays
    decodable.
    """
    if root.is_leaf:
        return {_leaf_symbol(root): (0,)}

    codes: dict[int, Code] = {}
    stack: list[tuple[HuffmanNode, Code]] = [(root, ())]
    while stack:
        node, path = stack.pop()
        if node.is_leaf:
            sym = _leaf_symbol(node)
            if sym in codes:
                raise ValueError(f"symbol {sym} appears in more than one leaf")
            codes[sym] = path
            continue
        if node.left is None or node.right is None:
            raise ValueError("internal node with a single child")
        stack.append((node.right, path + (1,)))
        stack.append((node.left, path + (0,)))
    return codes


def build_code_table(root: HuffmanNode) -> CodeTable:
    """Code for every one of the 256 symbols; the tree must have a leaf for each."""
    codes = assign_codes(root)
    missing = [sym for sym in range(ALPHABET_SIZE) if sym not in codes]
    if missing:
        raise ValueError(f"tree has no leaf for symbols {missing[:8]}...")
    return tuple(codes[sym] for sym in range(ALPHABET_SIZE))


def _leaf_symbol(node: HuffmanNode) -> int:
    if node.symbol is None or not (0 <= node.symbol < ALPHABET_SIZE):
        raise ValueError(f"leaf without a valid symbol: {node.symbol!r}")
    return node.symbol


def code_lengths(codes: CodeTable) -> list[int]:
    return [len(c) for c in codes]


def is_prefix_free(codes: CodeTable) -> bool:
    # after sorting, a prefix always sorts right before one of its extensions
    ordered = sorted(codes)
    for a, b in zip(ordered, ordered[1:]):
        if b[: len(a)] == a:
            return False
    return True


def kraft_sum(codes: CodeTable) -> Fraction:
    return sum((Fraction(1, 2 ** len(c)) for c in codes), Fraction(0))


def code_to_str(code: Code) -> str:
    return "".join("1" if bit else "0" for bit in code)


def format_code_table(
    codes: CodeTable, freq: FrequencyTable, *, only_used: bool = True
) -> list[str]:
    """Diagnostic listing, one ``symbol : count : bits`` line per symbol."""
    lines: list[str] = []
    for sym, code in enumerate(codes):
        if only_used and freq[sym] == 0:
            continue
        lines.append(f"{_symbol_label(sym)} : {freq[sym]} : {code_to_str(code)}")
    return lines


def _symbol_label(sym: int) -> str:
    if 0x21 <= sym <= 0x7E:
        return f"{sym:3d} {chr(sym)!r:>6}"
    return f"{sym:3d} {'0x%02x' % sym:>6}"
