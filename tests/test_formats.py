"""
Tests for the line-oriented input and output formats
"""

import io

import pytest

from facets.census import Histogram, compute_histogram
from facets.formats import (
    parse_set_line,
    read_store,
    load_store,
    format_histogram,
    write_histogram,
)
from facets.set_store import CapacityExceeded, InvalidElement


WORKED_INPUT = "1,3,5,6\n2,4,5,16,20\n0,2,5\n"
WORKED_OUTPUT = "1\n9\n18\n15\n6\n1\n"


class TestParseSetLine:
    def test_simple(self):
        assert parse_set_line("1,3,5,6") == [1, 3, 5, 6]

    def test_keeps_declared_order(self):
        assert parse_set_line("20,4,16") == [20, 4, 16]

    def test_whitespace(self):
        assert parse_set_line("  1, 2 ,3 \n") == [1, 2, 3]

    def test_blank(self):
        assert parse_set_line("") == []
        assert parse_set_line("   \n") == []

    @pytest.mark.parametrize("line", ["1,,2", "1,x", "1.5", "3,", "1;2"])
    def test_malformed(self, line):
        with pytest.raises(InvalidElement):
            parse_set_line(line)

    def test_malformed_reports_line(self):
        with pytest.raises(InvalidElement) as excinfo:
            parse_set_line("4,a", line_number=7)
        assert excinfo.value.line == 7
        assert excinfo.value.value == "a"
        assert "line 7" in str(excinfo.value)


class TestReadStore:
    def test_worked_example(self):
        store = read_store(io.StringIO(WORKED_INPUT))
        assert len(store) == 3
        assert store[1].elements == (2, 4, 5, 16, 20)
        assert compute_histogram(store).to_list() == [1, 9, 18, 15, 6, 1]

    def test_windows_line_endings(self):
        store = read_store(["1,2\r\n", "3\r\n"])
        assert [r.elements for r in store] == [(1, 2), (3,)]

    def test_out_of_range_reports_line(self):
        with pytest.raises(InvalidElement) as excinfo:
            read_store(["1,2", "5,64", "3"])
        assert excinfo.value.line == 2
        assert excinfo.value.value == 64

    def test_malformed_reports_line(self):
        with pytest.raises(InvalidElement) as excinfo:
            read_store(["1,2", "3", "x"])
        assert excinfo.value.line == 3

    def test_duplicate_reports_line(self):
        with pytest.raises(InvalidElement) as excinfo:
            read_store(["1,1"])
        assert excinfo.value.line == 1

    def test_blank_line_rejected(self):
        with pytest.raises(InvalidElement) as excinfo:
            read_store(["1", "", "2"])
        assert excinfo.value.line == 2

    def test_blank_line_allowed(self):
        store = read_store(["1", "", "2"], allow_empty=True)
        assert len(store) == 3
        assert store[1].mask == 0

    def test_capacity(self):
        with pytest.raises(CapacityExceeded) as excinfo:
            read_store(["1", "2", "3"], capacity=2)
        assert excinfo.value.line == 3
        assert str(excinfo.value).startswith("line 3:")

    def test_bytes_lines(self):
        store = read_store([b"1,2\r\n", b"3\n"])
        assert [r.elements for r in store] == [(1, 2), (3,)]

    def test_undecodable_bytes_report_line(self):
        with pytest.raises(InvalidElement) as excinfo:
            read_store([b"1,2\n", b"\xff\xfe,3\n"])
        assert excinfo.value.line == 2
        assert "undecodable" in str(excinfo.value)

    def test_load_undecodable_file(self, tmp_path):
        path = tmp_path / "latin.txt"
        path.write_bytes(b"1,2\n4\n\xe9,3\n")
        with pytest.raises(InvalidElement) as excinfo:
            load_store(path)
        assert excinfo.value.line == 3

    def test_load_store(self, tmp_path):
        path = tmp_path / "sets.txt"
        path.write_text(WORKED_INPUT)
        store = load_store(path)
        assert len(store) == 3
        assert load_store(str(path))[2].elements == (0, 2, 5)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_store(tmp_path / "missing.txt")


class TestWriteHistogram:
    def test_format(self):
        assert format_histogram(Histogram([1, 9, 18, 15, 6, 1])) == WORKED_OUTPUT

    def test_stops_at_first_zero(self):
        assert format_histogram(Histogram([1, 2, 0, 4])) == "1\n2\n"

    def test_nothing_when_first_count_zero(self):
        assert format_histogram(Histogram([0, 5])) == ""
        assert format_histogram(Histogram()) == ""

    def test_write_stream(self):
        out = io.StringIO()
        write_histogram(Histogram([1, 1]), out)
        assert out.getvalue() == "1\n1\n"

    def test_write_path(self, tmp_path):
        path = tmp_path / "out.txt"
        write_histogram(Histogram([1, 2, 1]), path)
        assert path.read_text() == "1\n2\n1\n"

    def test_round_trip_through_files(self, tmp_path):
        source = tmp_path / "in.txt"
        target = tmp_path / "out.txt"
        source.write_text(WORKED_INPUT)
        write_histogram(compute_histogram(load_store(source)), str(target))
        assert target.read_text() == WORKED_OUTPUT


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
