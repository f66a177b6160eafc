"""huffcode: static two-pass Huffman coder over the byte alphabet."""

__version__ = "0.1.0"
