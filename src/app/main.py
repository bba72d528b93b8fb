import argparse
import logging
import sys

from mpascan.config import ScanConfig, DEFAULT_MAX_HEADERS
from mpascan.exceptions import LoadError
from mpascan.loader import read_mpeg_file
from mpascan.report import format_header_details, format_header_table, format_stats
from mpascan.stream import MPAStream


def _offset(text: str) -> int:
    try:
        value = int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an offset: {text!r}")
    if value < 0:
        raise argparse.ArgumentTypeError("offset must be >= 0")
    return value


def _count(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a count: {text!r}")
    if value < 0:
        raise argparse.ArgumentTypeError("count must be >= 0")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mpa-scan", description="List MPEG audio frame headers in a file.")
    p.add_argument("path", help="MP1/MP2/MP3 file to scan")
    p.add_argument("-n", "--count", type=_count, default=DEFAULT_MAX_HEADERS,
                   help="number of headers to list, 0 for all (default: %(default)s)")
    p.add_argument("--same-format", action="store_true",
                   help="only list frames with the first header's MPEG version and layer")
    p.add_argument("--start", type=_offset, default=None,
                   help="byte offset to start searching at (decimal or 0x-prefixed)")
    p.add_argument("--no-id3", action="store_true", help="do not skip a leading ID3v2 tag")
    p.add_argument("--reject-reserved-emphasis", action="store_true",
                   help="treat emphasis bits 11 as an invalid header")
    p.add_argument("--summary", action="store_true", help="print stream statistics after the table")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def config_from_args(args: argparse.Namespace) -> ScanConfig:
    return ScanConfig(
        max_headers=args.count if args.count > 0 else None,
        same_format_only=args.same_format,
        skip_id3=not args.no_id3,
        start_offset=args.start,
        reject_reserved_emphasis=args.reject_reserved_emphasis,
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    cfg = config_from_args(args)

    try:
        data = read_mpeg_file(args.path)
    except LoadError as e:
        print(f"mpa-scan: {e}", file=sys.stderr)
        return 2

    st = MPAStream(data, cfg)
    print(f"Starting MPEG header search at {st.start_offset:08x}...")
    print(format_header_details(st.first))
    print()
    if not st.first.valid:
        return 1

    count = "all" if cfg.max_headers is None else str(cfg.max_headers)
    if cfg.same_format_only:
        print(f"Printing first {count} MPEG{st.first.version_label} Layer {st.first.layer} headers found.\n")
    else:
        print(f"Printing first {count} MPEG headers found.\n")
    print(format_header_table(st.frames))

    if args.summary:
        print()
        print(format_stats(st.stats()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
