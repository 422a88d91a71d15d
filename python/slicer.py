#!/usr/bin/env python3
"""
Name: slicer
Description: filter parsing and range selection shared by colslc and rowslc
Author: Jace Tan, jaceys.tan@gmail.com
License: mit
"""

import argparse
import io
import os
import re
import sys
from collections import namedtuple
from enum import Enum

__version__ = "1.0.0"

# Exit statuses shared by both tools
EX_SUCCESS = 0
EX_FAILURE = 1

COLUMN_SEPARATOR = ' '
ROW_SEPARATOR = '\n'

# An optional start bound, an optional ':' and an optional end bound.
# Only ASCII digits are accepted, so signs and unicode digits fall through.
FILTER_PATTERN = re.compile(r'^([0-9]*)(:?)([0-9]*)$')


class Kind(Enum):
    EXACT = 'exact'
    BOUNDED = 'bounded'
    FROM_START = 'from_start'
    TO_END = 'to_end'
    ALL = 'all'


class FilterParseError(ValueError):
    """Raised when a filter token does not follow the n, n:m, n:, :n or : grammar."""
    def __init__(self, token, reason):
        super().__init__(f"invalid filter '{token}': {reason}")
        self.token = token
        self.reason = reason


class Range(namedtuple('Range', ['kind', 'start', 'end'])):
    """
    The parsed form of one filter token.

    Bounds that reference the end of the sequence are kept symbolic here;
    they only become positions once resolve() knows the sequence length.
    """
    __slots__ = ()

    @classmethod
    def exact(cls, n):
        return cls(Kind.EXACT, n, n)

    @classmethod
    def bounded(cls, n, m):
        return cls(Kind.BOUNDED, n, m)

    @classmethod
    def from_start(cls, n):
        return cls(Kind.FROM_START, None, n)

    @classmethod
    def to_end(cls, n):
        return cls(Kind.TO_END, n, None)

    @classmethod
    def all(cls):
        return cls(Kind.ALL, None, None)

    def interval(self, length: int):
        """Returns the (lo, hi) pair for a sequence of `length` items, or None if empty."""
        if self.kind is Kind.EXACT:
            lo, hi = self.start, self.start
        elif self.kind is Kind.BOUNDED:
            lo, hi = min(self.start, self.end), max(self.start, self.end)
        elif self.kind is Kind.FROM_START:
            lo, hi = 1, self.end
        elif self.kind is Kind.TO_END:
            lo, hi = self.start, length
        else:
            lo, hi = 1, length

        hi = min(hi, length)
        if lo > hi:
            return None
        return lo, hi


def parse_bound(text: str, token: str) -> int:
    value = int(text)
    if value < 1:
        raise FilterParseError(token, "positions are numbered from 1")
    return value


def parse_filter(token: str) -> Range:
    """
    Parses a single filter token into a Range.

        n    -> exact position n
        n:m  -> positions n through m
        n:   -> position n through the last one
        :n   -> the first position through n
        :    -> every position
    """
    text = token.strip()
    match = FILTER_PATTERN.match(text)
    if not text or not match:
        raise FilterParseError(token, "expected n, n:m, n: or :n")

    start_str, colon, end_str = match.groups()

    if not colon:
        return Range.exact(parse_bound(start_str, token))
    if start_str and end_str:
        return Range.bounded(parse_bound(start_str, token), parse_bound(end_str, token))
    if start_str:
        return Range.to_end(parse_bound(start_str, token))
    if end_str:
        return Range.from_start(parse_bound(end_str, token))
    return Range.all()


def parse_filters(arguments) -> list:
    """
    Parses every filter argument, stopping at the first invalid token.

    An argument may hold several whitespace-separated tokens, so
    `-f "1 4:6"` behaves like `-f 1 4:6`.
    """
    ranges = []
    for argument in arguments:
        tokens = argument.split()
        if not tokens:
            # An empty argument is reported as the (invalid) token itself.
            raise FilterParseError(argument, "empty filter")
        for token in tokens:
            ranges.append(parse_filter(token))
    return ranges


def resolve(ranges, length: int) -> list:
    """
    Resolves ranges against a sequence of `length` items and merges them
    into ascending, disjoint, non-adjacent (lo, hi) intervals.
    """
    intervals = []
    for rng in ranges:
        interval = rng.interval(length)
        if interval is not None:
            intervals.append(interval)

    merged = []
    for lo, hi in sorted(intervals):
        if merged and lo <= merged[-1][1] + 1:
            # Overlapping or adjacent: extend the running interval.
            last = merged[-1]
            merged[-1] = (last[0], max(last[1], hi))
        else:
            merged.append((lo, hi))
    return merged


def select(items, selection) -> list:
    """Returns the items covered by a merged selection, in their original order."""
    selected = []
    for lo, hi in selection:
        # 1-based inclusive bounds to a 0-based slice.
        selected.extend(items[lo - 1:hi])
    return selected


def split_columns(line: str, delimiter=None) -> list:
    """
    Splits one line into columns.

    Without a delimiter, runs of whitespace separate columns and leading or
    trailing whitespace is ignored. With one, every occurrence separates two
    columns, so consecutive delimiters produce empty columns.
    """
    if delimiter is None:
        return line.split()
    return line.split(delimiter)


def join(items, separator: str) -> str:
    return separator.join(items)


def build_parser(prog: str, description: str, with_delimiter: bool = False):
    """Builds the argument parser common to both tools."""
    usage = "%(prog)s [-h] [-V]"
    if with_delimiter:
        usage += " [-d delimiter]"
    usage += " [file] [-f filter ...]"

    parser = argparse.ArgumentParser(prog=prog, description=description, usage=usage)
    parser.add_argument(
        '-V', '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    if with_delimiter:
        parser.add_argument(
            '-d', '--delimiter',
            help='Split columns on every occurrence of DELIMITER instead of on runs of whitespace.'
        )
    parser.add_argument(
        '-f', '--filters',
        nargs='+',
        action='extend',
        metavar='FILTER',
        help="Positions to keep: n, n:m, n:, :n or ':'. Everything is kept if omitted."
    )
    parser.add_argument(
        'file',
        nargs='?',
        default='-',
        help="Input file (default: stdin, also selected by '-')."
    )
    return parser


def describe_os_error(err: OSError) -> str:
    """Formats an I/O failure the same way for both tools."""
    if err.filename is not None:
        return f"'{err.filename}': {err.strerror}"
    return err.strerror or str(err)


def describe_decode_error(err: UnicodeDecodeError) -> str:
    return f"input is not valid {err.encoding}: {err.reason} at byte {err.start}"


def discard_stdout():
    """
    Points the stdout descriptor at os.devnull after a broken pipe, so the
    interpreter's final flush of the buffered output cannot fail again.
    """
    try:
        fd = sys.stdout.fileno()
    except (AttributeError, io.UnsupportedOperation):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)
    os.close(devnull)
