from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from hfm.api.hfm_file import DEFAULT_OUTPUT, HfmDocument, load_text, verify_roundtrip, write_text
from hfm.bench.runner import run_bench
from hfm.core.errors import HuffmanError


log = logging.getLogger(__name__)


def cmd_encode(args: argparse.Namespace) -> int:
    doc = HfmDocument(load_text(args.infile))
    out = doc.write(args.outfile)

    print("HFM encode OK ✅")
    print("------------------------------")
    print("infile     :", args.infile)
    print("outfile    :", out)
    print("symbols    :", len(doc.tree.symbols()))
    print("raw_bytes  :", len(doc.text))
    print("code_bits  :", doc.packed.bit_length)
    print("blob_bytes :", len(doc.to_bytes()))
    print("------------------------------")
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    doc = HfmDocument.from_path(args.infile)
    write_text(args.outfile, doc.text)

    print("HFM decode OK ✅")
    print("------------------------------")
    print("infile  :", args.infile)
    print("outfile :", args.outfile)
    print("chars   :", len(doc.text))
    print("------------------------------")
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    text = load_text(args.infile)
    bad = verify_roundtrip(text)
    if bad is not None:
        print(f"❌ round trip differs at offset {bad}")
        return 1
    print("✅ round trip exact:", args.infile)
    return 0


def cmd_tree(args: argparse.Namespace) -> int:
    doc = HfmDocument.from_path(args.infile)
    print(doc.tree.render())
    if args.codes:
        for sym, code in doc.tree.codes.items():
            print(f"{sym:3d} {chr(sym)!r:6} {code}")
    return 0


def cmd_bench(args: argparse.Namespace) -> int:
    if args.infile:
        run_bench(load_text(args.infile), name=args.infile, zstd_level=args.zstd)
    else:
        run_bench(zstd_level=args.zstd)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="hfm", description="Huffman tree codec for 7-bit text")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    pe = sub.add_parser("encode", help="Encode .txt -> .hfmtree")
    pe.add_argument("--in", dest="infile", required=True, help="Input text file")
    pe.add_argument("--out", dest="outfile", default=DEFAULT_OUTPUT, help="Output .hfmtree file")
    pe.set_defaults(fn=cmd_encode)

    pd = sub.add_parser("decode", help="Decode .hfmtree -> text")
    pd.add_argument("--in", dest="infile", required=True, help="Input .hfmtree file")
    pd.add_argument("--out", dest="outfile", required=True, help="Output text file")
    pd.set_defaults(fn=cmd_decode)

    pv = sub.add_parser("verify", help="Encode and decode a text file in memory, compare")
    pv.add_argument("--in", dest="infile", required=True, help="Input text file")
    pv.set_defaults(fn=cmd_verify)

    pt = sub.add_parser("tree", help="Print the code tree of a .txt or .hfmtree file")
    pt.add_argument("--in", dest="infile", required=True)
    pt.add_argument("--codes", action="store_true", help="Also list every symbol's code")
    pt.set_defaults(fn=cmd_tree)

    pb = sub.add_parser("bench", help="Compare sizes against gzip and zstd")
    pb.add_argument("--in", dest="infile", default=None, help="Text file (default: built-in samples)")
    pb.add_argument("--zstd", type=int, default=10, help="zstd level for the baseline")
    pb.set_defaults(fn=cmd_bench)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    try:
        return int(args.fn(args))
    except (HuffmanError, ValueError, OSError) as e:
        log.debug("command %s failed", args.cmd, exc_info=True)
        print(f"hfm {args.cmd}: {type(e).__name__}: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
