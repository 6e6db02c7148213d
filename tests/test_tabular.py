"""Tests for tab-delimited output decoding."""
from zfskit.core.tabular import parse_tabular


def test_parse_four_column_output(pool_get_output):
    """Each line becomes one record, plus the trailing empty record."""
    records = parse_tabular(pool_get_output)

    assert len(records) == 7
    assert records[0] == ["zfs-local-test", "size", "336M", "-"]
    assert records[2] == ["zfs-local-test", "altroot", "-", "default"]
    assert records[-1] == [""]


def test_parse_single_value():
    """Single value queries yield one single-field record."""
    assert parse_tabular(b"on\n") == [["on"], [""]]


def test_parse_without_trailing_newline():
    assert parse_tabular(b"tank\ntank2") == [["tank"], ["tank2"]]


def test_parse_empty_input():
    assert parse_tabular(b"") == [[""]]


def test_malformed_lines_pass_through():
    """Wrong field counts are kept for the consumer to reject."""
    records = parse_tabular(b"a\tb\nc\td\te\tf\tg\n")

    assert records[0] == ["a", "b"]
    assert records[1] == ["c", "d", "e", "f", "g"]


def test_empty_fields_are_kept():
    assert parse_tabular(b"tank\tcomment\t\tlocal") == [["tank", "comment", "", "local"]]


def test_accepts_str_input():
    assert parse_tabular("tank\tsize\t1G\t-") == [["tank", "size", "1G", "-"]]


def test_non_utf8_bytes_do_not_raise():
    records = parse_tabular(b"tank\tcomment\t\xff\tlocal")

    assert records[0][0] == "tank"
    assert records[0][2].encode("utf-8", errors="surrogateescape") == b"\xff"
