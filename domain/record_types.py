"""Declarative table of the four milestone record types.

Forms, lists, the data entry flow, the API client and the sheets preview all
read their per-type behaviour from ``RECORD_TYPES`` instead of branching on
the type name.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Literal

FieldKind = Literal["text", "textarea", "date", "checkbox", "rating", "tristate"]

RATING_MIN = 1
RATING_MAX = 10
TRISTATE_OPTIONS: tuple[str, ...] = ("", "yes", "no")
TRISTATE_LABELS = {"": "Select...", "yes": "Yes", "no": "No"}


@dataclass(frozen=True, slots=True)
class FieldSpec:
    name: str
    label: str
    kind: FieldKind = "text"
    required: bool = False
    depends_on: str | None = None
    placeholder: str = ""
    summary_label: str | None = None


@dataclass(frozen=True, slots=True)
class RecordType:
    key: str
    singular: str
    plural: str
    resource: str
    id_key: str
    title_field: str
    title_template: str
    fields: tuple[FieldSpec, ...]
    sheet_columns: tuple[str, ...]

    @property
    def required_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(field_spec for field_spec in self.fields if field_spec.required)

    def field(self, name: str) -> FieldSpec:
        for field_spec in self.fields:
            if field_spec.name == name:
                return field_spec
        raise KeyError(f"Record type '{self.key}' has no field '{name}'.")


@dataclass(frozen=True, slots=True)
class RecordSummary:
    record_id: Any
    title: str
    details: tuple[tuple[str, str], ...]


_LEARNING_SOURCE = FieldSpec(
    "learningSource",
    "Learning Source",
    placeholder="Book, TV show, parent, etc.",
    summary_label="Source",
)
_NOTES = FieldSpec(
    "notes", "Notes", kind="textarea", placeholder="Any additional notes"
)

WORDS = RecordType(
    key="words",
    singular="Word",
    plural="Words",
    resource="words",
    id_key="wordId",
    title_field="word",
    title_template="{}",
    fields=(
        FieldSpec("word", "Word", required=True, placeholder="Enter word"),
        FieldSpec("signed", "Signed", kind="checkbox"),
        FieldSpec(
            "signedDate",
            "Signed Date",
            kind="date",
            depends_on="signed",
            summary_label="Date",
        ),
        FieldSpec("verbal", "Verbal", kind="checkbox"),
        FieldSpec(
            "verbalDate",
            "Verbal Date",
            kind="date",
            depends_on="verbal",
            summary_label="Date",
        ),
        FieldSpec(
            "actualPronunciation",
            "Actual Pronunciation",
            placeholder="How child actually says it",
            summary_label="Pronunciation",
        ),
        _LEARNING_SOURCE,
        _NOTES,
    ),
    sheet_columns=(
        "word",
        "signed",
        "signedDate",
        "verbal",
        "verbalDate",
        "actualPronunciation",
        "notes",
        "learningSource",
    ),
)

PHRASES = RecordType(
    key="phrases",
    singular="Phrase",
    plural="Phrases",
    resource="phrases",
    id_key="phraseId",
    title_field="phrase",
    title_template='"{}"',
    fields=(
        FieldSpec("phrase", "Phrase", required=True, placeholder="Enter phrase"),
        FieldSpec("dateSaid", "Date Said", kind="date"),
        FieldSpec(
            "funnyRating", "Funny Rating (1-10)", kind="rating", summary_label="Funny"
        ),
        FieldSpec(
            "cuteRating", "Cute Rating (1-10)", kind="rating", summary_label="Cute"
        ),
        _LEARNING_SOURCE,
        _NOTES,
    ),
    sheet_columns=(
        "phrase",
        "dateSaid",
        "funnyRating",
        "cuteRating",
        "learningSource",
        "notes",
    ),
)

SONGS = RecordType(
    key="songs",
    singular="Song",
    plural="Songs",
    resource="songs",
    id_key="songId",
    title_field="songTitle",
    title_template="{}",
    fields=(
        FieldSpec(
            "songTitle", "Song Title", required=True, placeholder="Enter song title"
        ),
        FieldSpec(
            "dateFirstSang", "Date First Sang", kind="date", summary_label="First Sang"
        ),
        FieldSpec("source", "Source", placeholder="Where they learned it"),
        _NOTES,
    ),
    sheet_columns=("songTitle", "dateFirstSang", "source", "notes"),
)

LETTERS = RecordType(
    key="letters",
    singular="Letter",
    plural="Letters",
    resource="letters",
    id_key="letterId",
    title_field="letters",
    title_template="Letter: {}",
    fields=(
        FieldSpec("letters", "Letter(s)", required=True, placeholder="A, B, C, etc."),
        FieldSpec("recognized", "Recognized", kind="tristate"),
        FieldSpec(
            "recognizedDate", "Recognized Date", kind="date", summary_label="Date"
        ),
        FieldSpec(
            "soundItOut",
            "Can Sound It Out",
            kind="tristate",
            summary_label="Can Sound Out",
        ),
        FieldSpec(
            "soundItOutDate", "Sound It Out Date", kind="date", summary_label="Date"
        ),
    ),
    sheet_columns=(
        "letters",
        "recognized",
        "recognizedDate",
        "soundItOut",
        "soundItOutDate",
    ),
)

RECORD_TYPES: dict[str, RecordType] = {
    record_type.key: record_type for record_type in (WORDS, PHRASES, SONGS, LETTERS)
}
RECORD_TYPE_KEYS: tuple[str, ...] = tuple(RECORD_TYPES)
DEFAULT_RECORD_TYPE = WORDS.key


def get_record_type(key: str) -> RecordType:
    try:
        return RECORD_TYPES[key]
    except KeyError:
        allowed = ", ".join(RECORD_TYPE_KEYS)
        raise KeyError(f"Unknown record type '{key}'. Allowed: {allowed}.") from None


def _default_value(field_spec: FieldSpec) -> Any:
    if field_spec.kind == "checkbox":
        return False
    if field_spec.kind == "date":
        return None
    return ""


def initial_form_data(record_type: RecordType) -> dict[str, Any]:
    return {
        field_spec.name: _default_value(field_spec)
        for field_spec in record_type.fields
    }


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_rating(value: Any) -> int | None:
    if _is_blank(value):
        return None
    if isinstance(value, bool):
        raise ValueError(value)
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(value)
    return int(str(value).strip()) if isinstance(value, str) else int(value)


def validate_form(record_type: RecordType, data: Mapping[str, Any]) -> list[str]:
    """Return human readable problems; an empty list means the form can be sent."""
    errors: list[str] = []
    for field_spec in record_type.fields:
        value = data.get(field_spec.name)
        if field_spec.required and _is_blank(value):
            errors.append(f"{field_spec.label} is required.")
            continue

        if field_spec.kind == "rating":
            try:
                rating = _parse_rating(value)
            except (TypeError, ValueError):
                errors.append(f"{field_spec.label} must be a whole number.")
                continue
            if rating is not None and not RATING_MIN <= rating <= RATING_MAX:
                errors.append(
                    f"{field_spec.label} must be between {RATING_MIN} and {RATING_MAX}."
                )
        elif field_spec.kind == "tristate":
            normalized = "" if value is None else str(value).strip().lower()
            if normalized not in TRISTATE_OPTIONS:
                errors.append(f"{field_spec.label} must be yes, no or unset.")
    return errors


def _date_to_iso(value: Any) -> str | None:
    if _is_blank(value):
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def build_payload(record_type: RecordType, data: Mapping[str, Any]) -> dict[str, Any]:
    """Normalize validated form data into the JSON body the backend expects."""
    payload: dict[str, Any] = {}
    for field_spec in record_type.fields:
        value = data.get(field_spec.name)
        if field_spec.kind == "checkbox":
            payload[field_spec.name] = bool(value)
        elif field_spec.kind == "date":
            payload[field_spec.name] = _date_to_iso(value)
        elif field_spec.kind == "rating":
            rating = _parse_rating(value)
            payload[field_spec.name] = None if rating is None else str(rating)
        elif field_spec.kind == "tristate":
            normalized = "" if value is None else str(value).strip().lower()
            payload[field_spec.name] = normalized or None
        else:
            payload[field_spec.name] = "" if value is None else str(value).strip()

    for field_spec in record_type.fields:
        if field_spec.depends_on and not payload.get(field_spec.depends_on):
            payload[field_spec.name] = None
    return payload


def record_id(record_type: RecordType, record: Mapping[str, Any]) -> Any:
    return record.get(record_type.id_key)


def format_date(value: Any) -> str:
    """Render an ISO date (or datetime) string for display; empty stays empty."""
    if _is_blank(value):
        return ""
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        parsed = value
    else:
        text = str(value).strip()
        try:
            parsed = date.fromisoformat(text[:10])
        except ValueError:
            return text
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def _yes_no(value: Any) -> str:
    return "Yes" if value else "No"


def summarize_record(
    record_type: RecordType, record: Mapping[str, Any]
) -> RecordSummary:
    """Build the card content for one record: title plus label/value rows."""
    title_value = str(record.get(record_type.title_field) or "").strip()
    details: list[tuple[str, str]] = []

    for field_spec in record_type.fields:
        if field_spec.name == record_type.title_field:
            continue
        label = field_spec.summary_label or field_spec.label
        value = record.get(field_spec.name)

        if field_spec.kind == "checkbox":
            details.append((label, _yes_no(value)))
        elif field_spec.kind == "tristate":
            normalized = "" if value is None else str(value).strip()
            details.append((label, normalized or "Not set"))
        elif field_spec.depends_on is not None:
            if record.get(field_spec.depends_on) and not _is_blank(value):
                details.append((label, format_date(value)))
        elif _is_blank(value):
            continue
        elif field_spec.kind == "date":
            details.append((label, format_date(value)))
        elif field_spec.kind == "rating":
            details.append((label, f"{str(value).strip()}/{RATING_MAX}"))
        else:
            details.append((label, str(value).strip()))

    return RecordSummary(
        record_id=record_id(record_type, record),
        title=record_type.title_template.format(title_value),
        details=tuple(details),
    )
