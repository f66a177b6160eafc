"""huffcode CLI.

This is the stable CLI entrypoint (console-script: ``huffcode``).

Exit codes come from huffcode.errors; errors print ``[huffcode] ...`` on stderr.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from huffcode import __version__
from huffcode.errors import EXIT_GENERIC, EXIT_OK, HuffcodeError
from huffcode.files import CHUNK_SIZE_DEFAULT


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _add_chunk_size(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--chunk-size",
        type=int,
        default=CHUNK_SIZE_DEFAULT,
        help=f"I/O chunk size in bytes (default: {CHUNK_SIZE_DEFAULT})",
    )


def _cmd_encode(input_path: Path, output_path: Path, *, chunk_size: int, stats: bool) -> int:
    from huffcode.files import encode_file

    encode_file(input_path, output_path, chunk_size=chunk_size)
    if stats:
        from huffcode.stats import print_file_stats

        print_file_stats(input_path, output_path)
    return EXIT_OK


def _cmd_decode(input_path: Path, output_path: Path, *, chunk_size: int) -> int:
    from huffcode.files import decode_file

    decode_file(input_path, output_path, chunk_size=chunk_size)
    return EXIT_OK


def _cmd_codes(input_path: Path, *, show_all: bool) -> int:
    from huffcode.core.codes import build_code_table, format_code_table
    from huffcode.core.tree import build_huffman_tree
    from huffcode.files import count_file_frequencies

    freq = count_file_frequencies(input_path)
    codes = build_code_table(build_huffman_tree(freq))
    for line in format_code_table(codes, freq, only_used=not show_all):
        print(line)
    return EXIT_OK


def _cmd_verify(input_path: Path, *, full: bool) -> int:
    from huffcode.verify import verify_file

    verify_file(input_path, full=full)
    print("OK")
    return EXIT_OK


def _cmd_stats(input_path: Path, *, as_json: bool) -> int:
    from huffcode.stats import compute_file_stats, format_stats

    st = compute_file_stats(input_path)
    if as_json:
        print(json.dumps(st.to_dict(), sort_keys=True))
    else:
        print(format_stats(st, str(input_path)))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="huffcode", description="Static two-pass Huffman coder for byte files"
    )
    p.add_argument("--version", action="version", version=f"huffcode {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_e = sub.add_parser("encode", help="Encode a file (header + Huffman body)")
    p_e.add_argument("input", type=Path)
    p_e.add_argument("output", type=Path)
    _add_chunk_size(p_e)
    p_e.add_argument("--stats", action="store_true", help="Print size statistics after encoding")
    _add_common_args(p_e)

    p_d = sub.add_parser(
        "decode",
        help="Decode a file produced by 'encode'",
        description=(
            "Decode a file produced by 'encode'. Output is streamed: on a corrupt "
            "payload the bytes decoded so far remain in OUTPUT."
        ),
    )
    p_d.add_argument("input", type=Path)
    p_d.add_argument("output", type=Path)
    _add_chunk_size(p_d)
    _add_common_args(p_d)

    p_c = sub.add_parser("codes", help="Print the code table built for a file")
    p_c.add_argument("input", type=Path)
    p_c.add_argument("--all", action="store_true", help="Include symbols that never occur")
    _add_common_args(p_c)

    p_v = sub.add_parser("verify", help="Verify an encoded file")
    p_v.add_argument("input", type=Path)
    p_v.add_argument("--full", action="store_true", help="Decode the whole body as well")
    _add_common_args(p_v)

    p_s = sub.add_parser("stats", help="Entropy / size statistics with zlib and zstd baselines")
    p_s.add_argument("input", type=Path)
    p_s.add_argument("--json", action="store_true", help="Print a JSON object")
    _add_common_args(p_s)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if ns.cmd == "encode":
            return _cmd_encode(ns.input, ns.output, chunk_size=ns.chunk_size, stats=bool(ns.stats))
        if ns.cmd == "decode":
            return _cmd_decode(ns.input, ns.output, chunk_size=ns.chunk_size)
        if ns.cmd == "codes":
            return _cmd_codes(ns.input, show_all=bool(ns.all))
        if ns.cmd == "verify":
            return _cmd_verify(ns.input, full=bool(ns.full))
        if ns.cmd == "stats":
            return _cmd_stats(ns.input, as_json=bool(ns.json))
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except HuffcodeError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffcode] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffcode] error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
