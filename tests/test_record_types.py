from __future__ import annotations

from datetime import date

import pytest

from domain.record_types import (
    LETTERS,
    PHRASES,
    RECORD_TYPE_KEYS,
    SONGS,
    WORDS,
    build_payload,
    format_date,
    get_record_type,
    initial_form_data,
    summarize_record,
    validate_form,
)


def test_record_types_are_listed_in_display_order() -> None:
    assert RECORD_TYPE_KEYS == ("words", "phrases", "songs", "letters")


@pytest.mark.parametrize(
    ("type_key", "required_field"),
    [("words", "word"), ("phrases", "phrase"), ("songs", "songTitle"), ("letters", "letters")],
)
def test_each_type_has_exactly_one_required_field(type_key, required_field) -> None:
    record_type = get_record_type(type_key)

    required = [field_spec.name for field_spec in record_type.required_fields]
    assert required == [required_field]
    assert validate_form(record_type, initial_form_data(record_type)) == [
        f"{record_type.field(required_field).label} is required."
    ]


def test_whitespace_only_required_field_is_missing() -> None:
    assert validate_form(SONGS, {"songTitle": "   "}) == ["Song Title is required."]


def test_rating_outside_range_is_rejected() -> None:
    errors = validate_form(PHRASES, {"phrase": "uh oh", "funnyRating": 11, "cuteRating": "x"})

    assert errors == [
        "Funny Rating (1-10) must be between 1 and 10.",
        "Cute Rating (1-10) must be a whole number.",
    ]


def test_tristate_accepts_only_yes_no_or_unset() -> None:
    assert validate_form(LETTERS, {"letters": "A", "recognized": "yes"}) == []
    assert validate_form(LETTERS, {"letters": "A", "soundItOut": "maybe"}) == [
        "Can Sound It Out must be yes, no or unset."
    ]


def test_word_payload_drops_dates_of_unchecked_flags() -> None:
    payload = build_payload(
        WORDS,
        {
            "word": " ball ",
            "signed": True,
            "signedDate": date(2024, 3, 1),
            "verbal": False,
            "verbalDate": date(2024, 4, 1),
            "actualPronunciation": "ba",
        },
    )

    assert payload == {
        "word": "ball",
        "signed": True,
        "signedDate": "2024-03-01",
        "verbal": False,
        "verbalDate": None,
        "actualPronunciation": "ba",
        "learningSource": "",
        "notes": "",
    }


def test_phrase_payload_sends_ratings_as_strings() -> None:
    payload = build_payload(
        PHRASES, {"phrase": "more please", "funnyRating": 7, "cuteRating": None}
    )

    assert payload["funnyRating"] == "7"
    assert payload["cuteRating"] is None
    assert payload["dateSaid"] is None


def test_letter_payload_maps_unset_to_none() -> None:
    payload = build_payload(LETTERS, {"letters": "B", "recognized": "", "soundItOut": "no"})

    assert payload["recognized"] is None
    assert payload["soundItOut"] == "no"


def test_word_summary_shows_flags_and_optional_fields() -> None:
    summary = summarize_record(
        WORDS,
        {
            "wordId": 4,
            "word": "dog",
            "signed": True,
            "signedDate": "2024-01-05",
            "verbal": False,
            "verbalDate": "2024-02-01",
            "actualPronunciation": "da",
            "learningSource": "",
            "notes": None,
        },
    )

    assert summary.record_id == 4
    assert summary.title == "dog"
    assert summary.details == (
        ("Signed", "Yes"),
        ("Date", "Jan 5, 2024"),
        ("Verbal", "No"),
        ("Pronunciation", "da"),
    )


def test_phrase_summary_quotes_title_and_formats_ratings() -> None:
    summary = summarize_record(
        PHRASES, {"phraseId": 9, "phrase": "uh oh", "funnyRating": "8"}
    )

    assert summary.title == '"uh oh"'
    assert summary.details == (("Funny", "8/10"),)


def test_letter_summary_reports_unset_states() -> None:
    summary = summarize_record(LETTERS, {"letterId": 2, "letters": "Q"})

    assert summary.title == "Letter: Q"
    assert summary.details == (("Recognized", "Not set"), ("Can Sound Out", "Not set"))


def test_format_date_handles_empty_and_unparseable_values() -> None:
    assert format_date(None) == ""
    assert format_date("2023-12-24") == "Dec 24, 2023"
    assert format_date("2023-12-24T10:00:00") == "Dec 24, 2023"
    assert format_date("spring 2023") == "spring 2023"


def test_unknown_record_type_lists_allowed_keys() -> None:
    with pytest.raises(KeyError, match="words, phrases, songs, letters"):
        get_record_type("drawings")
