"""
Declarative form validation.

Each entity describes its form as a static table of FieldRules. validate()
walks that table once: values are trimmed and escaped, rules are checked in
order, and the first failing rule of a field records one FieldError.
Nothing here touches the store.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from markupsafe import escape


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class Rule:
    message: str = "Invalid value"

    def check(self, value: Any) -> bool:
        return True

    def convert(self, value: Any) -> Any:
        return value


@dataclass(frozen=True)
class Trim(Rule):
    def convert(self, value):
        return value.strip() if isinstance(value, str) else value


@dataclass(frozen=True)
class Escape(Rule):
    def convert(self, value):
        return str(escape(value)) if isinstance(value, str) else value


@dataclass(frozen=True)
class OptionalIfEmpty(Rule):
    """Skips the remaining rules when the value is missing or empty."""


@dataclass(frozen=True)
class Required(Rule):
    message: str = "This field is required"

    def check(self, value):
        return value is not None and value != ""


@dataclass(frozen=True)
class Length(Rule):
    min: int = 0
    max: Optional[int] = None
    message: str = "Invalid length"

    def check(self, value):
        size = len(value or "")
        return size >= self.min and (self.max is None or size <= self.max)


def parse_iso_date(value: str) -> date:
    """Reads an ISO 8601 date, or the date part of an ISO 8601 datetime."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        if value[-1:] in ("Z", "z"):
            value = value[:-1] + "+00:00"
        return datetime.fromisoformat(value).date()


@dataclass(frozen=True)
class ISODate(Rule):
    message: str = "Invalid date"

    def check(self, value):
        try:
            parse_iso_date(value)
        except (TypeError, ValueError):
            return False
        return True

    def convert(self, value):
        return parse_iso_date(value)


@dataclass(frozen=True)
class OneOf(Rule):
    choices: Tuple[str, ...] = ()

    def check(self, value):
        return value in self.choices


@dataclass(frozen=True)
class FieldRules:
    name: str
    rules: Tuple[Rule, ...] = ()
    many: bool = False
    default: Any = None


@dataclass
class ValidationResult:
    values: Dict[str, Any] = field(default_factory=dict)
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def messages_for(self, name: str) -> List[str]:
        return [e.message for e in self.errors if e.field == name]


def as_list(value: Any) -> list:
    """Normalizes a multi-valued form field: absent -> [], scalar -> [scalar]."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _run(name: str, value: Any, rules: Sequence[Rule], errors: List[FieldError]) -> Any:
    failed = False
    for rule in rules:
        if isinstance(rule, OptionalIfEmpty):
            if value is None or value == "":
                return None
            continue
        if isinstance(rule, (Trim, Escape)):
            value = rule.convert(value)
            continue
        if failed:
            continue
        if rule.check(value):
            value = rule.convert(value)
        else:
            errors.append(FieldError(name, rule.message))
            failed = True
    return value


def validate(form: Mapping[str, Any], rules: Sequence[FieldRules]) -> ValidationResult:
    """Sanitizes and checks `form` against a rule table."""
    result = ValidationResult()
    for field_rules in rules:
        raw = form.get(field_rules.name)
        if field_rules.many:
            result.values[field_rules.name] = [
                _run(field_rules.name, item, field_rules.rules, result.errors) for item in as_list(raw)
            ]
            continue
        if isinstance(raw, (list, tuple)):
            raw = raw[-1] if raw else None
        if raw is None and field_rules.default is not None:
            raw = field_rules.default
        result.values[field_rules.name] = _run(field_rules.name, raw if raw is not None else "", field_rules.rules, result.errors)
    return result
