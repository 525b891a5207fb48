"""Unit tests for CSV rendering."""

import csv
import io
import unittest

from djexport.export.encoder import HEADERS, build_filename, encode, field_value
from djexport.models import TrackRecord


def _record(**overrides):
    values = {
        "title": "Song",
        "artist": "Artist",
        "album": "Album",
        "isrc": "USRC11700356",
        "spotify_id": "4uLU6hMCjMI75M1A2tKUQC",
        "bpm": 124.5,
        "key": 9,
        "mode": 0,
        "energy": 0.81,
        "genres": ["house", "deep house"],
    }
    values.update(overrides)
    return TrackRecord(**values)


class TestFieldQuoting(unittest.TestCase):
    def _title_field(self, title):
        line = encode([_record(title=title)]).split("\r\n", 1)[1]
        return line[: -len(",Artist,Album,USRC11700356,4uLU6hMCjMI75M1A2tKUQC,124.5,8A,0.81,house; deep house")]

    def test_plain_field_untouched(self):
        self.assertEqual(self._title_field("Strobe"), "Strobe")

    def test_none_is_unknown(self):
        self.assertEqual(field_value(None), "N/A")
        self.assertEqual(field_value(0.5), "0.5")

    def test_comma_is_quoted(self):
        self.assertEqual(self._title_field("Sun, Moon"), '"Sun, Moon"')

    def test_quotes_are_doubled(self):
        self.assertEqual(self._title_field('The "Remix"'), '"The ""Remix"""')

    def test_line_breaks_are_quoted(self):
        self.assertEqual(self._title_field("a\nb"), '"a\nb"')
        self.assertEqual(self._title_field("a\rb"), '"a\rb"')

    def test_other_punctuation_untouched(self):
        self.assertEqual(self._title_field("Above & Beyond; Live (Edit)"), "Above & Beyond; Live (Edit)")


class TestEncode(unittest.TestCase):
    def test_header_only_for_no_records(self):
        self.assertEqual(encode([]), ",".join(HEADERS))

    def test_header_order(self):
        header = encode([]).split("\r\n")[0]
        self.assertEqual(
            header,
            "Title,Artist,Album,ISRC,Spotify ID,BPM,Key (Camelot),Energy,Genres",
        )

    def test_rows_joined_with_crlf(self):
        output = encode([_record(), _record(title="Other")])
        lines = output.split("\r\n")
        self.assertEqual(len(lines), 3)
        self.assertFalse(output.endswith("\r\n"))
        self.assertEqual(
            lines[1],
            "Song,Artist,Album,USRC11700356,4uLU6hMCjMI75M1A2tKUQC,124.5,8A,0.81,house; deep house",
        )

    def test_unknown_values(self):
        record = _record(bpm=None, key=-1, mode=-1, energy=float("nan"), genres=[], isrc="N/A")
        row = encode([record]).split("\r\n")[1].split(",")
        self.assertEqual(row[3:], ["N/A", "4uLU6hMCjMI75M1A2tKUQC", "N/A", "N/A", "N/A", "N/A"])

    def test_whole_number_tempo(self):
        row = encode([_record(bpm=128.0)]).split("\r\n")[1].split(",")
        self.assertEqual(row[5], "128")

    def test_round_trip_with_csv_reader(self):
        tricky = _record(
            title='Say "Hello", Goodbye',
            artist="A, B",
            album="Line\nBreak",
            genres=["drum and bass", "liquid funk"],
        )
        output = encode([tricky, _record()])
        rows = list(csv.reader(io.StringIO(output, newline="")))

        self.assertEqual(rows[0], HEADERS)
        self.assertEqual(len(rows), 3)
        self.assertEqual(rows[1][0], 'Say "Hello", Goodbye')
        self.assertEqual(rows[1][1], "A, B")
        self.assertEqual(rows[1][2], "Line\nBreak")
        self.assertEqual(rows[1][8], "drum and bass; liquid funk")
        self.assertEqual(rows[2][0], "Song")


class TestBuildFilename(unittest.TestCase):
    def test_strips_unsafe_characters(self):
        self.assertEqual(build_filename("Peak Time / 2024!", "abc"), "dj-export-Peak Time  2024.csv")

    def test_keeps_dash_and_underscore(self):
        self.assertEqual(build_filename("  warm-up_set  ", "abc"), "dj-export-warm-up_set.csv")

    def test_falls_back_to_identifier(self):
        self.assertEqual(build_filename(None, "37i9dQZF1DXcBWIGoYBM5M"), "dj-export-37i9dQZF1DXcBWIGoYBM5M.csv")

    def test_falls_back_when_name_is_all_unsafe(self):
        self.assertEqual(build_filename("🔥🔥", "xyz"), "dj-export-xyz.csv")


if __name__ == "__main__":
    unittest.main()
