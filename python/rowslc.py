#!/usr/bin/env python3
"""
Name: rowslc
Description: select rows of a file
Author: Jace Tan, jaceys.tan@gmail.com
License: mit
"""

import sys
import fileinput

import slicer

PROGRAM_NAME = 'rowslc'


def slice_rows(lines, ranges) -> str:
    """
    Returns the selected rows as one string.

    All rows are read first since 'n:' and ':' need the row count. Every
    selected row ends with a newline, except the last input row when the
    input itself did not end with one.
    """
    lines = list(lines)
    if ranges is None:
        return ''.join(lines)

    rows = [line.rstrip('\n') for line in lines]
    selection = slicer.resolve(ranges, len(rows))
    selected = slicer.select(rows, selection)
    if not selected:
        return ''

    output = slicer.join(selected, slicer.ROW_SEPARATOR)
    last_selected = selection[-1][1]
    if last_selected < len(lines) or lines[-1].endswith('\n'):
        output += '\n'
    return output


def main(argv=None):
    """Parses arguments and prints the selected rows."""
    parser = slicer.build_parser(PROGRAM_NAME, "Select rows of a file.")
    args = parser.parse_args(argv)

    try:
        ranges = slicer.parse_filters(args.filters) if args.filters is not None else None
    except slicer.FilterParseError as e:
        print(f"{PROGRAM_NAME}: {e}", file=sys.stderr)
        sys.exit(slicer.EX_FAILURE)

    try:
        with fileinput.input(files=(args.file,)) as f:
            output = slice_rows(f, ranges)
        sys.stdout.write(output)
        sys.stdout.flush()
    except UnicodeDecodeError as e:
        print(f"{PROGRAM_NAME}: {slicer.describe_decode_error(e)}", file=sys.stderr)
        sys.exit(slicer.EX_FAILURE)
    except OSError as e:
        print(f"{PROGRAM_NAME}: {slicer.describe_os_error(e)}", file=sys.stderr)
        if isinstance(e, BrokenPipeError):
            slicer.discard_stdout()
        sys.exit(slicer.EX_FAILURE)

    sys.exit(slicer.EX_SUCCESS)


if __name__ == "__main__":
    main()
