import gzip
from dataclasses import dataclass

import zstandard as zstd


@dataclass
class SizeReport:
    raw_bytes: int
    gzip_bytes: int
    zstd_bytes: int
    hfm_bytes: int
    code_bits: int

    @property
    def hfm_ratio(self) -> float:
        return self.raw_bytes / max(1, self.hfm_bytes)

    @property
    def gzip_ratio(self) -> float:
        return self.raw_bytes / max(1, self.gzip_bytes)

    @property
    def zstd_ratio(self) -> float:
        return self.raw_bytes / max(1, self.zstd_bytes)

    @property
    def bits_per_symbol(self) -> float:
        return self.code_bits / max(1, self.raw_bytes)


def gzip_compress(data: bytes) -> bytes:
    return gzip.compress(data, compresslevel=9)


def zstd_compress(data: bytes, level: int = 10) -> bytes:
    c = zstd.ZstdCompressor(level=level)
    return c.compress(data)
