from typing import Optional

from hfm.api.hfm_file import HfmDocument
from hfm.bench.datasets import toy_text, toy_text_repeated, toy_text_varied
from hfm.bench.metrics import SizeReport, gzip_compress, zstd_compress


def measure(text: str, zstd_level: int = 10) -> SizeReport:
    raw = text.encode("ascii")
    doc = HfmDocument(text)
    blob = doc.to_bytes()
    return SizeReport(
        raw_bytes=len(raw),
        gzip_bytes=len(gzip_compress(raw)),
        zstd_bytes=len(zstd_compress(raw, level=zstd_level)),
        hfm_bytes=len(blob),
        code_bits=doc.packed.bit_length,
    )


def print_report(name: str, rep: SizeReport) -> None:
    print(f"HFM Bench — {name}")
    print("----------------------------------------")
    print(f"RAW bytes  : {rep.raw_bytes}")
    print(f"GZIP bytes : {rep.gzip_bytes}  (ratio {rep.gzip_ratio:.2f}x)")
    print(f"ZSTD bytes : {rep.zstd_bytes}  (ratio {rep.zstd_ratio:.2f}x)")
    print(f"HFM bytes  : {rep.hfm_bytes}  (ratio {rep.hfm_ratio:.2f}x)")
    print(f"HFM bits   : {rep.code_bits}  ({rep.bits_per_symbol:.3f} bits/symbol)")
    print("----------------------------------------")
    print()


def run_bench(text: Optional[str] = None, name: str = "INPUT", zstd_level: int = 10) -> None:
    if text is not None:
        print_report(name, measure(text, zstd_level=zstd_level))
        return

    print_report("SMALL", measure(toy_text(), zstd_level=zstd_level))
    print_report("REPEAT-HEAVY (gzip showcase)", measure(toy_text_repeated(), zstd_level=zstd_level))
    print_report("VARIED", measure(toy_text_varied(), zstd_level=zstd_level))
