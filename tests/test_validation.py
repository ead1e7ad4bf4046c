from datetime import date

from controllers.author import AUTHOR_RULES
from controllers.book import BOOK_RULES, normalize_book_form
from controllers.book_instance import BOOK_INSTANCE_RULES
from controllers.genre import GENRE_CREATE_RULES, GENRE_UPDATE_RULES
from validation import (
    Escape,
    FieldError,
    FieldRules,
    ISODate,
    Length,
    OptionalIfEmpty,
    Required,
    Trim,
    as_list,
    validate,
)


def test_values_are_trimmed_and_escaped():
    rules = (FieldRules("name", (Trim(), Required("required"), Escape())),)
    result = validate({"name": "  <b>Tom & Jerry</b>  "}, rules)
    assert result.ok
    assert result.values["name"] == "&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;"


def test_required_reports_field_and_message():
    rules = (FieldRules("name", (Trim(), Required("Name is required"), Escape())),)
    result = validate({"name": "   "}, rules)
    assert result.errors == [FieldError("name", "Name is required")]
    assert result.values["name"] == ""


def test_missing_field_counts_as_empty():
    rules = (FieldRules("name", (Trim(), Required("Name is required"))),)
    assert not validate({}, rules).ok


def test_only_first_failing_rule_is_reported():
    rules = (FieldRules("name", (Trim(), Required("required"), Length(min=3, message="too short"))),)
    assert validate({"name": ""}, rules).messages_for("name") == ["required"]
    assert validate({"name": "ab"}, rules).messages_for("name") == ["too short"]


def test_length_bounds():
    rules = (FieldRules("name", (Length(min=1, max=3, message="bad length"),)),)
    assert validate({"name": "abc"}, rules).ok
    assert not validate({"name": "abcd"}, rules).ok


def test_optional_date_is_none_when_empty_and_parsed_otherwise():
    rules = (FieldRules("born", (Trim(), OptionalIfEmpty(), ISODate("bad date"))),)
    assert validate({"born": ""}, rules).values["born"] is None
    assert validate({}, rules).values["born"] is None
    assert validate({"born": " 1775-12-16 "}, rules).values["born"] == date(1775, 12, 16)


def test_date_accepts_iso_datetime():
    rules = (FieldRules("due", (Trim(), OptionalIfEmpty(), ISODate("bad date"))),)
    assert validate({"due": "2020-01-01T00:00:00Z"}, rules).values["due"] == date(2020, 1, 1)
    assert validate({"due": "2020-01-01T23:30:00+02:00"}, rules).values["due"] == date(2020, 1, 1)
    assert not validate({"due": "2020-01-01Tnoon"}, rules).ok


def test_invalid_date_is_reported_and_raw_value_kept():
    rules = (FieldRules("born", (Trim(), OptionalIfEmpty(), ISODate("bad date"))),)
    result = validate({"born": "16/12/1775"}, rules)
    assert result.errors == [FieldError("born", "bad date")]
    assert result.values["born"] == "16/12/1775"


def test_errors_follow_rule_table_order():
    result = validate({}, AUTHOR_RULES)
    assert [e.field for e in result.errors] == ["first_name", "family_name"]


def test_as_list():
    assert as_list(None) == []
    assert as_list("abc") == ["abc"]
    assert as_list(["a", "b"]) == ["a", "b"]


def test_many_field_items_are_sanitized():
    result = validate({"tags": ["<x>", "y"]}, (FieldRules("tags", (Escape(),), many=True),))
    assert result.values["tags"] == ["&lt;x&gt;", "y"]


def test_book_form_single_genre_becomes_list():
    form = normalize_book_form({"title": "Emma", "genre": "abc123"})
    assert form["genre"] == ["abc123"]
    assert normalize_book_form({"title": "Emma"})["genre"] == []
    result = validate(form, BOOK_RULES)
    assert result.values["genre"] == ["abc123"]


def test_book_rules_require_every_scalar_field():
    result = validate(normalize_book_form({}), BOOK_RULES)
    assert [e.field for e in result.errors] == ["title", "author", "summary", "isbn"]
    assert result.messages_for("title") == ["Title must not be empty"]


def test_genre_name_minimum_differs_between_create_and_update():
    assert not validate({"name": "SF"}, GENRE_CREATE_RULES).ok
    assert validate({"name": "SF"}, GENRE_UPDATE_RULES).ok
    assert not validate({"name": " "}, GENRE_UPDATE_RULES).ok


def test_book_instance_status_defaults_and_choices():
    form = {"book": "b1", "imprint": "Penguin, 2003"}
    assert validate(form, BOOK_INSTANCE_RULES).values["status"] == "Maintenance"

    result = validate({**form, "status": "Lost"}, BOOK_INSTANCE_RULES)
    assert [e.field for e in result.errors] == ["status"]
