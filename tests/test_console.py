"""
Tests for console.py - report lines and log output.
"""

import io
import re

from console import format_rating, log, show_rating
from ratings import RatingRecord


class TestShowRating:

    def test_line_contents(self, capsys):
        show_rating(RatingRecord('Loxonin S', 128, 4.2))
        out = capsys.readouterr().out

        assert out == 'Drug: Loxonin S | Ratings: 128 | Average: 4.2\n'

    def test_same_record_twice_prints_twice(self, capsys):
        record = RatingRecord('Loxonin S', 128, 4.2)
        show_rating(record)
        show_rating(record)

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert lines[0] == lines[1]

    def test_custom_stream(self):
        out = io.StringIO()
        show_rating(RatingRecord('EVE A', 0, 0), out=out)
        assert out.getvalue() == format_rating(RatingRecord('EVE A', 0, 0)) + '\n'


class TestLog:

    def test_timestamp_and_level(self, capsys):
        log('hello', 'WARNING')
        out = capsys.readouterr().out
        assert re.match(r'^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] WARNING: hello$', out.strip())

    def test_default_level(self, capsys):
        log('hello')
        assert 'INFO: hello' in capsys.readouterr().out
