from __future__ import annotations

from huffcode.core.codec_base import Codec

try:
    import zstandard as zstd  # type: ignore
except Exception:  # pragma: no cover
    zstd = None


def have_zstd() -> bool:
    return zstd is not None


class CodecZstd(Codec):
    """
    zstd baseline.

    "tight" drops the optional frame fields (content size, checksum) so the
    size comparison is not penalised by frame overhead.
    """

    codec_id = "zstd"

    def __init__(self, level: int = 19, tight: bool = True):
        self.level = level
        self.tight = tight

    def _require(self) -> None:
        if zstd is None:
            raise RuntimeError(
                "Module 'zstandard' is not available. Install with: python3 -m pip install zstandard"
            )

    def compress(self, data: bytes) -> bytes:
        self._require()
        if self.tight:
            c = zstd.ZstdCompressor(
                level=int(self.level),
                write_content_size=False,
                write_checksum=False,
            )
        else:
            c = zstd.ZstdCompressor(level=int(self.level))
        return c.compress(bytes(data))

    def decompress(self, comp: bytes) -> bytes:
        self._require()
        d = zstd.ZstdDecompressor()
        # tight frames carry no content size: one-shot decompress() would refuse them
        return d.decompressobj().decompress(bytes(comp))
