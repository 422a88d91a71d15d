#!/usr/bin/env python3
"""
Name: colslc
Description: select columns from each line of a file
Author: Jace Tan, jaceys.tan@gmail.com
License: mit
"""

import sys
import fileinput

import slicer

PROGRAM_NAME = 'colslc'


def slice_columns(lines, ranges, delimiter=None):
    """
    Yields the output line (newline included) for every input line.

    Each row is resolved against its own column count, so 'n:' follows the
    width of every row. With no ranges at all, lines pass through untouched.
    """
    for line in lines:
        if ranges is None:
            yield line
            continue

        columns = slicer.split_columns(line.rstrip('\r\n'), delimiter)
        selection = slicer.resolve(ranges, len(columns))
        selected = slicer.select(columns, selection)
        yield slicer.join(selected, slicer.COLUMN_SEPARATOR) + '\n'


def main(argv=None):
    """Parses arguments and prints the selected columns of every line."""
    parser = slicer.build_parser(
        PROGRAM_NAME,
        "Select columns from each line of a file.",
        with_delimiter=True
    )
    args = parser.parse_args(argv)

    if args.delimiter == '':
        parser.error("the delimiter must not be empty")

    # Filters are checked before the input is opened.
    try:
        ranges = slicer.parse_filters(args.filters) if args.filters is not None else None
    except slicer.FilterParseError as e:
        print(f"{PROGRAM_NAME}: {e}", file=sys.stderr)
        sys.exit(slicer.EX_FAILURE)

    try:
        with fileinput.input(files=(args.file,)) as f:
            for out in slice_columns(f, ranges, args.delimiter):
                sys.stdout.write(out)
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
