#!/usr/bin/env python3
"""
pychef

    Decode symbolic variable assignments reported by the engine into
    the values they stand for, for reporting and replay.

"""
import argparse
import json
import logging
import sys

from elftools.common.exceptions import ELFError

import pychef.utils as utils
from pychef.assignments import AssignmentDecoder, parse_assignment_line
from pychef.errors import DecodeError
from pychef.layout import Layout


def read_assignments(fd):
    """
    yield (name, bytes) pairs from an assignment record file

    :param fd: open text file, one `<name> <hex>` record per line
    """
    for lineno, line in enumerate(fd, 1):
        record = parse_assignment_line(line)
        if record is None:
            continue
        logging.debug(f"Line {lineno}: {record[0]}")
        yield record


def format_tree(tree):
    for key in sorted(tree):
        for field in sorted(tree[key]):
            typed = tree[key][field]
            yield f"{key}.{field} = {typed.value!r} ({typed.kind})"


def to_json(value):
    if isinstance(value, (bytes, bytearray)):
        return value.hex()
    return value


def main():
    parser = argparse.ArgumentParser(prog="pychef")

    # required arg group for help display
    required = parser.add_argument_group("required arguments")
    required.add_argument("-a", "--assignments", dest="assignments", required=True,
                        help="File of `<name> <hex bytes>` records reported by the engine, or - for stdin")

    # target configuration
    parser.add_argument("-b", "--binary", dest="binary", required=False,
                        help="Target ELF binary the assignments were produced for (default is this host)")

    # output options
    parser.add_argument("--json", dest="json", action="store_true", required=False,
                        help="If set, print the decoded tree as JSON, with byte values hex-encoded")
    parser.add_argument("--debug", dest="debug", action="store_true", required=False,
                        help="If set, turns on debugging output for pychef")

    args = parser.parse_args()

    # initialize verbosity
    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    if args.binary:
        try:
            layout = utils.binary_layout(args.binary)
        except (OSError, ELFError) as e:
            logging.error(f"Cannot read target binary {args.binary}: {e}")
            return 1
        logging.debug(f"Decoding for {args.binary}: {layout}")
    else:
        layout = Layout.native()

    decoder = AssignmentDecoder(layout)
    try:
        if args.assignments == "-":
            decoder.decode_all(read_assignments(sys.stdin))
        else:
            with open(args.assignments) as fd:
                decoder.decode_all(read_assignments(fd))
    except DecodeError as e:
        logging.error(f"Cannot decode assignments: {e}")
        return 1

    if args.json:
        tree = {key: {field: to_json(value) for field, value in fields.items()}
                for key, fields in decoder.concrete().items()}
        print(json.dumps(tree, indent=2, sort_keys=True))
    else:
        for line in format_tree(decoder.tree):
            print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
