from __future__ import annotations

from abc import ABC, abstractmethod


class Codec(ABC):
    """
    Minimal interface for whole-buffer byte codecs.

    The Huffman codec is the product; zlib/zstd implement the same interface
    only to serve as size baselines in the statistics report.
    """

    codec_id: str

    @abstractmethod
    def compress(self, data: bytes) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def decompress(self, comp: bytes) -> bytes:
        raise NotImplementedError
