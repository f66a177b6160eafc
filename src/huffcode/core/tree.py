from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Optional

from huffcode.core.freq import ALPHABET_SIZE, FrequencyTable, validate_freq
from huffcode.core.pqueue import StablePriorityQueue


# -------------------
# Huffman tree
# -------------------
@dataclass(frozen=True, slots=True)
class HuffmanNode:
    weight: int
    symbol: Optional[int] = None  # 0-255 for leaves, None for internal nodes
    left: Optional["HuffmanNode"] = None
    right: Optional["HuffmanNode"] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


def build_huffman_tree(freq: FrequencyTable) -> HuffmanNode:
    """
    Build the Huffman tree for a 256-entry frequency table.

    Every symbol gets a leaf, zero counts included, so the tree always has
    256 leaves and takes exactly 255 merge steps. Leaves enter the queue in
    symbol order; equal weights leave it in insertion order. Of the two trees
    taken out at each step, the first becomes the right child and the second
    the left child.

    The result depends only on ``freq``: the decoder rebuilds the same tree
    from the payload header.
    """
    freq = validate_freq(freq, limit=None)

    queue: StablePriorityQueue[HuffmanNode] = StablePriorityQueue(key=lambda n: n.weight)
    for sym in range(ALPHABET_SIZE):
        queue.insert(HuffmanNode(weight=freq[sym], symbol=sym))

    while True:
        first = queue.remove_min()
        if queue.is_empty():
            return first
        second = queue.remove_min()
        queue.insert(
            HuffmanNode(weight=first.weight + second.weight, left=second, right=first)
        )


def iter_leaves(root: HuffmanNode) -> Iterator[HuffmanNode]:
    """Leaves in pre-order, left before right."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_leaf:
            yield node
            continue
        # right pushed first so left is visited first
        if node.right is not None:
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)


def tree_depth(root: HuffmanNode) -> int:
    """Longest root-to-leaf path, in edges."""
    best = 0
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if node.is_leaf:
            best = max(best, depth)
            continue
        if node.left is not None:
            stack.append((node.left, depth + 1))
        if node.right is not None:
            stack.append((node.right, depth + 1))
    return best


def count_nodes(root: HuffmanNode) -> int:
    n = 0
    stack = [root]
    while stack:
        node = stack.pop()
        n += 1
        if node.left is not None:
            stack.append(node.left)
        if node.right is not None:
            stack.append(node.right)
    return n
