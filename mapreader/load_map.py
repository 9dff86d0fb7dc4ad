"""Loads symbols from a VC/Borland/Watcom/GCC/DeDe MAP file."""

import argparse
import logging
import sys

import map_file
import segment_map
import symbol_importer
from options import Options

logger = logging.getLogger("load_map")

parser = argparse.ArgumentParser(
    description='Load symbols from a VC/Borland/Watcom/GCC/DeDe MAP file.')
parser.add_argument(
    'input', help='Path to the MAP file, or to the binary it belongs to.')
parser.add_argument(
    '--map', default=None,
    help='Path to the MAP file (default: input with .map extension).')
parser.add_argument(
    '--segment', action='append', default=[],
    type=segment_map.parse_segment,
    help='Destination segment as [NAME=]START-END in hex.  Repeat for '
         'each segment, in segment number order.'
)
parser.add_argument(
    '--num_segments', type=int, default=None,
    help='Number of destination segments (default: number of --segment '
         'arguments).'
)
parser.add_argument(
    '--comments', action='store_true',
    help='Apply symbols as comments instead of names.')
parser.add_argument(
    '--replace', action='store_true',
    help='Replace existing names and comments.')
parser.add_argument(
    '--verbose', action='store_true', help='Show detail messages.')
parser.add_argument(
    '--ea32', action='store_true',
    help='MAP file addresses are 32-bit (8 hex digits).')


def map_path(args) -> str:
    if args.map:
        return args.map
    if args.input.lower().endswith(".map"):
        return args.input
    return map_file.switch_extension(args.input, ".map")


def main(args) -> int:
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(name)s: %(message)s")

    segments = segment_map.SegmentMap(args.segment)
    num_segments = args.num_segments
    if num_segments is None:
        num_segments = len(segments)
    if num_segments <= 0:
        logger.warning("Not found any segments")
        return 1

    filename = map_path(args)
    options = Options(
        name_apply=not args.comments, replace=args.replace,
        ea64=not args.ea32)

    target = symbol_importer.MemoryTarget()
    try:
        result = symbol_importer.import_symbols(
            filename, target, num_segments, segments.lookup, options)
    except map_file.MapFileError as e:
        logger.warning("%s", e)
        return 1

    if not result.recognized:
        logger.warning(
            "File '%s' is not a valid Map file; publics section header "
            "wasn't found", filename)
        return 1

    for line in target.listing():
        print(line)
    print(result.summary())
    return 0


def cli():
    sys.exit(main(parser.parse_args()))


if __name__ == "__main__":
    cli()
