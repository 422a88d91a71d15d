import itertools

import pytest

from slicer import (
    FilterParseError,
    Kind,
    Range,
    join,
    parse_filter,
    parse_filters,
    resolve,
    select,
    split_columns,
)


def test_parse_filter_grammar():
    assert parse_filter("3") == Range(Kind.EXACT, 3, 3)
    assert parse_filter("2:5") == Range(Kind.BOUNDED, 2, 5)
    assert parse_filter("4:") == Range(Kind.TO_END, 4, None)
    assert parse_filter(":7") == Range(Kind.FROM_START, None, 7)
    assert parse_filter(":") == Range(Kind.ALL, None, None)


def test_parse_filter_trims_whitespace_and_accepts_leading_zeros():
    assert parse_filter("  12 ") == Range.exact(12)
    assert parse_filter("01:003") == Range.bounded(1, 3)


def test_parse_filter_keeps_inverted_range():
    assert parse_filter("6:4") == Range.bounded(6, 4)


@pytest.mark.parametrize("token", ["a:b", "x", "1:2:3", "-1", "+2", "1.5", "1-3", "", "::", "1 :2"])
def test_parse_filter_rejects_malformed_tokens(token):
    with pytest.raises(FilterParseError) as exc:
        parse_filter(token)
    assert exc.value.token == token
    assert repr(token) in str(exc.value)


@pytest.mark.parametrize("token", ["0", "0:3", "2:0", ":0", "0:"])
def test_parse_filter_rejects_zero(token):
    with pytest.raises(FilterParseError) as exc:
        parse_filter(token)
    assert "numbered from 1" in str(exc.value)


def test_parse_filters_splits_whitespace_separated_tokens():
    assert parse_filters(["1 4:6", "9:"]) == [
        Range.exact(1),
        Range.bounded(4, 6),
        Range.to_end(9),
    ]


def test_parse_filters_stops_at_first_invalid_token():
    with pytest.raises(FilterParseError) as exc:
        parse_filters(["1", "2:x", "nope"])
    assert exc.value.token == "2:x"


def test_parse_filters_rejects_empty_argument():
    with pytest.raises(FilterParseError):
        parse_filters(["1", "  "])


def test_resolve_each_kind():
    assert resolve([Range.exact(2)], 5) == [(2, 2)]
    assert resolve([Range.bounded(2, 4)], 5) == [(2, 4)]
    assert resolve([Range.from_start(3)], 5) == [(1, 3)]
    assert resolve([Range.to_end(3)], 5) == [(3, 5)]
    assert resolve([Range.all()], 5) == [(1, 5)]


def test_resolve_swaps_inverted_range():
    assert resolve([Range.bounded(6, 4)], 10) == resolve([Range.bounded(4, 6)], 10)


def test_resolve_clamps_out_of_range_positions():
    assert resolve([Range.exact(100)], 5) == []
    assert resolve([Range.bounded(4, 100)], 5) == [(4, 5)]
    assert resolve([Range.from_start(100)], 5) == [(1, 5)]
    assert resolve([Range.to_end(6)], 5) == []


def test_resolve_against_empty_sequence():
    ranges = [Range.all(), Range.exact(1), Range.to_end(1), Range.from_start(2)]
    assert resolve(ranges, 0) == []


def test_resolve_merges_overlapping_and_adjacent_intervals():
    assert resolve(parse_filters(["1:3", "2:5"]), 10) == [(1, 5)]
    assert resolve(parse_filters(["1:3", "4"]), 10) == [(1, 4)]
    assert resolve(parse_filters(["1:3", "5"]), 10) == [(1, 3), (5, 5)]
    assert resolve(parse_filters(["2", "2", "2"]), 10) == [(2, 2)]
    assert resolve(parse_filters(["2:8", "3:4"]), 10) == [(2, 8)]


def test_resolve_orders_intervals_ascending():
    assert resolve(parse_filters(["4:6", "1"]), 10) == [(1, 1), (4, 6)]


def test_merging_keeps_the_same_positions():
    tokens = ["1", "3:4", "2:", ":2", "7:5", "9", ":", "12"]
    for length in range(0, 12):
        for count in range(1, 4):
            for combo in itertools.combinations(tokens, count):
                ranges = parse_filters(combo)
                naive = set()
                for rng in ranges:
                    interval = rng.interval(length)
                    if interval is not None:
                        naive.update(range(interval[0], interval[1] + 1))
                positions = select(list(range(1, length + 1)), resolve(ranges, length))
                assert positions == sorted(naive)


def test_select_preserves_order_without_duplicates():
    items = ["a", "b", "c", "d", "e", "f"]
    selection = resolve(parse_filters(["4:6", "1", "5"]), len(items))
    assert select(items, selection) == ["a", "d", "e", "f"]


def test_select_is_idempotent():
    items = list("abcdefgh")
    selection = resolve(parse_filters(["2:3", "6:"]), len(items))
    assert select(items, selection) == select(items, selection)


def test_select_empty_inputs():
    assert select([], []) == []
    assert select(["a", "b"], []) == []


def test_split_columns_on_whitespace():
    assert split_columns("  a \t b   c  ") == ["a", "b", "c"]
    assert split_columns("") == []


def test_split_columns_on_delimiter_keeps_empty_columns():
    assert split_columns("a,,b,", ",") == ["a", "", "b", ""]
    assert split_columns("a::b", "::") == ["a", "b"]
    assert split_columns("a b", ",") == ["a b"]


def test_join():
    assert join(["vault", "2", "days"], " ") == "vault 2 days"
    assert join([], "\n") == ""
