import math
from datetime import datetime
from types import MappingProxyType

import pytest

from sheet_notes.errors import InvalidDocumentNameError, MissingFieldError
from sheet_notes.translate import (
    MAX_FILE_NAME_BYTES,
    FieldTranslator,
    note_file_name,
    parse_release,
    split_authors,
    translate_genre,
    truncate_utf8,
)

CLEAN_CODE_ROW = {
    "Name": "Clean Code",
    "Type": "Engineering",
    "Year": "2008",
    "Author": "Robert C. Martin",
    "Publisher": "Prentice Hall",
    "Link": "https://example.com",
}


def _translator(**kwargs):
    kwargs.setdefault("clock", lambda: datetime(2023, 10, 5, 16, 18))
    return FieldTranslator(**kwargs)


def test_translate_clean_code_row():
    fields = _translator().translate(CLEAN_CODE_ROW)

    assert fields.name == "Clean Code.md"
    assert fields.body == "https://example.com"
    assert fields.metadata == {
        "title": "Clean Code",
        "created": "2023-10-05 16:18",
        "genre": ["엔지니어링"],
        "release": 2008,
        "authors": ["Robert C. Martin"],
        "publishers": ["Prentice Hall"],
        "rating": "",
        "status": "todo",
    }


def test_translate_splits_and_trims_authors():
    row = dict(CLEAN_CODE_ROW, Author="A, B, C")

    assert _translator().translate(row).metadata["authors"] == ["A", "B", "C"]


@pytest.mark.parametrize(
    "author",
    ["Kent Beck", "Erich Gamma, Richard Helm", " Gamma ,  Helm, Johnson , Vlissides "],
)
def test_author_count_matches_segments(author):
    authors = split_authors(author)

    assert len(authors) == len(author.split(", "))
    assert all(a == a.strip() for a in authors)


def test_genre_lookup_falls_back_to_label():
    row = dict(CLEAN_CODE_ROW, Type="Cooking")

    assert _translator().translate(row).metadata["genre"] == ["Cooking"]
    assert translate_genre("Cooking", {}) == "Cooking"


def test_injected_translation_table_is_used():
    translator = _translator(translation_table=MappingProxyType({"Engineering": "Eng"}))

    assert translator.translate(CLEAN_CODE_ROW).metadata["genre"] == ["Eng"]


def test_created_override_wins_over_clock():
    translator = _translator(created_override="2020-01-01 00:00")

    assert translator.translate(CLEAN_CODE_ROW).metadata["created"] == "2020-01-01 00:00"


def test_default_status_is_configurable():
    translator = _translator(default_status="reading")

    assert translator.translate(CLEAN_CODE_ROW).metadata["status"] == "reading"


@pytest.mark.parametrize(
    "value, expected",
    [(2008, 2008), ("2008", 2008), (" 1999 ", 1999), (2008.0, 2008), ("2008 (2nd ed.)", 2008), ("-5", -5)],
)
def test_parse_release_reads_leading_digits(value, expected):
    assert parse_release(value) == expected


@pytest.mark.parametrize("value", ["unknown", "", "MMVIII", True])
def test_parse_release_invalid_is_nan(value):
    assert math.isnan(parse_release(value))


def test_translate_invalid_year_keeps_row_with_nan():
    row = dict(CLEAN_CODE_ROW, Year="n/a")

    assert math.isnan(_translator().translate(row).metadata["release"])


def test_missing_author_raises():
    row = {k: v for k, v in CLEAN_CODE_ROW.items() if k != "Author"}

    with pytest.raises(MissingFieldError) as excinfo:
        _translator().translate(row)
    assert excinfo.value.fields == ["Author"]


def test_missing_columns_are_all_reported():
    with pytest.raises(MissingFieldError) as excinfo:
        _translator().translate({"Name": "Only a name"})
    assert excinfo.value.fields == ["Type", "Year", "Author", "Publisher", "Link"]


def test_numeric_cells_become_strings():
    row = dict(CLEAN_CODE_ROW, Name=1984, Publisher=42)
    fields = _translator().translate(row)

    assert fields.metadata["title"] == "1984"
    assert fields.metadata["publishers"] == ["42"]
    assert fields.name == "1984.md"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Clean Code", "Clean Code.md"),
        ("AC/DC: Live?", "ACDC Live.md"),
        ("  Spaced   out  ", "Spaced out.md"),
        ("../escape", "escape.md"),
        ('Tab\there "quoted" <b>', "Tab here quoted b.md"),
    ],
)
def test_note_file_name_strips_unsafe_characters(name, expected):
    assert note_file_name(name) == expected


@pytest.mark.parametrize("name", ["", "   ", "...", "/\\:"])
def test_note_file_name_rejects_empty_names(name):
    with pytest.raises(InvalidDocumentNameError):
        note_file_name(name)


def test_note_file_name_uses_extension():
    assert note_file_name("Clean Code", ".markdown") == "Clean Code.markdown"


def test_long_multibyte_name_fits_file_name_limit():
    name = note_file_name("가" * 90)

    assert name == "가" * 84 + ".md"
    assert len(name.encode("utf-8")) <= MAX_FILE_NAME_BYTES


def test_truncated_name_is_stripped_again():
    # The 252-byte cut ends on the space, which must not survive.
    name = note_file_name("a" * 251 + " tail")

    assert name == "a" * 251 + ".md"
    assert len(name.encode("utf-8")) == 254


def test_truncate_utf8_never_splits_a_character():
    assert truncate_utf8("가나다", 7) == "가나"
    assert truncate_utf8("short", 255) == "short"


def test_note_name_needs_only_the_name_column():
    assert _translator().note_name({"Name": "Clean Code"}) == "Clean Code.md"
    with pytest.raises(MissingFieldError) as excinfo:
        _translator().note_name({"Type": "Essay"})
    assert excinfo.value.fields == ["Name"]
