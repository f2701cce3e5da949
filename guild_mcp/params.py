"""
Parameter Parsing Module.
Declarative parameter rules for tool arguments, which the agent always sends as strings.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, cast

from .errors import InvalidArgument, ValidationFailure

PARAM_KINDS = ("string", "snowflake", "int", "bool", "timestamp", "enum")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")
_SNOWFLAKE = re.compile(r"^\d{1,20}$")
_INTEGER = re.compile(r"^[+-]?\d+$")


def snake_case(name: str) -> str:
    """Convert a camelCase wire name to the executor's keyword name."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


@dataclass(frozen=True)
class Param:
    """One named tool parameter and its validation rule."""

    name: str
    description: str
    kind: str = "string"
    required: bool = False
    default: Any = None
    minimum: int | None = None
    maximum: int | None = None
    bound_hint: str | None = None
    choices: Mapping[int, str] | None = None
    max_length: int | None = None

    def __post_init__(self) -> None:
        if self.kind not in PARAM_KINDS:
            raise ValueError(f"Unknown parameter kind '{self.kind}' for {self.name}")
        if self.kind == "enum" and not self.choices:
            raise ValueError(f"Enum parameter {self.name} needs choices")

    @property
    def arg_name(self) -> str:
        return snake_case(self.name)

    def required_copy(self) -> Param:
        """The same parameter, marked required."""
        return replace(self, required=True)

    def parse(self, raw: Any) -> Any:
        """Parse a raw value, applying the default when it is absent.

        Raises:
            InvalidArgument: Required value missing, or not parseable as its kind
            ValidationFailure: Parsed value breaks the rule's range, enum or format
        """
        if is_blank(raw):
            if self.required:
                raise InvalidArgument(f"{self.name} cannot be null")
            return self.default

        text = str(raw).strip()
        if self.kind == "string":
            return self._check_length(str(raw))
        if self.kind == "snowflake":
            if not _SNOWFLAKE.match(text):
                raise InvalidArgument(f"{self.name} must be a numeric Discord ID")
            return int(text)
        if self.kind == "bool":
            return parse_bool(self.name, text)
        if self.kind == "timestamp":
            return parse_timestamp(self.name, text)

        value = parse_int(self.name, text)
        if self.kind == "enum":
            return self._check_choice(value)
        return self._check_range(value)

    def _check_length(self, value: str) -> str:
        if self.max_length is not None and len(value) > self.max_length:
            raise ValidationFailure(
                f"{self.name} must be at most {self.max_length} characters (got {len(value)})"
            )
        return value

    def _check_choice(self, value: int) -> int:
        choices = cast(Mapping[int, str], self.choices)
        if value not in choices:
            raise ValidationFailure(f"{self.name} must be {describe_choices(choices)}")
        return value

    def _check_range(self, value: int) -> int:
        low, high = self.minimum, self.maximum
        if (low is None or value >= low) and (high is None or value <= high):
            return value

        hint = f" ({self.bound_hint})" if self.bound_hint else ""
        if low is not None and high is not None:
            raise ValidationFailure(f"{self.name} must be between {low} and {high}{hint}")
        if low == 1:
            raise ValidationFailure(f"{self.name} must be a positive integer")
        if low is not None:
            raise ValidationFailure(f"{self.name} must be at least {low}{hint}")
        raise ValidationFailure(f"{self.name} must be at most {high}{hint}")


@dataclass(frozen=True)
class Requires:
    """Field ``name`` is required whenever field ``when`` takes one of ``values``."""

    name: str
    when: str
    values: frozenset[Any]
    condition: str

    def check(self, values: Mapping[str, Any]) -> None:
        trigger = values.get(snake_case(self.when))
        if trigger in self.values and values.get(snake_case(self.name)) is None:
            raise ValidationFailure(
                f"{self.name} is required for {self.condition} ({self.when}={trigger})"
            )


@dataclass(frozen=True)
class AnyOf:
    """At least one of ``names`` must be supplied."""

    names: tuple[str, ...]

    def check(self, values: Mapping[str, Any]) -> None:
        if all(values.get(snake_case(n)) is None for n in self.names):
            quoted = " or ".join(f"'{n}'" for n in self.names)
            raise InvalidArgument(f"At least one of {quoted} must be provided")


@dataclass(frozen=True)
class ParamSchema:
    """Ordered parameters plus the cross-field rules that apply to them."""

    params: tuple[Param, ...]
    rules: tuple[Requires | AnyOf, ...] = field(default_factory=tuple)

    def parse(self, raw: Mapping[str, Any] | None) -> dict[str, Any]:
        """Parse raw arguments into executor keyword arguments.

        Single-field failures are reported before cross-field ones, and
        InvalidArgument before ValidationFailure.
        """
        raw = raw or {}
        known = {p.name for p in self.params}
        unknown = sorted(set(raw) - known)
        if unknown:
            logging.debug("Ignoring unknown arguments: %s", ", ".join(unknown))

        values: dict[str, Any] = {}
        deferred: ValidationFailure | None = None
        for param in self.params:
            try:
                values[param.arg_name] = param.parse(raw.get(param.name))
            except ValidationFailure as err:
                values[param.arg_name] = None
                deferred = deferred or err

        for rule in self.rules:
            if isinstance(rule, AnyOf):
                rule.check(values)
        if deferred:
            raise deferred
        for rule in self.rules:
            if isinstance(rule, Requires):
                rule.check(values)
        return values


def is_blank(raw: Any) -> bool:
    """True for values the agent uses to mean "not supplied"."""
    return raw is None or (isinstance(raw, str) and not raw.strip())


def parse_int(name: str, text: str) -> int:
    if not _INTEGER.match(text):
        raise InvalidArgument(f"{name} must be an integer, got '{text}'")
    return int(text)


def parse_bool(name: str, text: str) -> bool:
    """Accept only the literals 'true' and 'false' (any case)."""
    lowered = text.lower()
    if lowered not in ("true", "false"):
        raise InvalidArgument(f"{name} must be 'true' or 'false', got '{text}'")
    return lowered == "true"


def parse_timestamp(name: str, text: str) -> datetime:
    """Parse an ISO-8601 timestamp that carries a UTC offset."""
    candidate = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError:
        raise ValidationFailure(f"Invalid ISO8601 timestamp for {name}: {text}") from None
    if "T" not in candidate.upper() or parsed.tzinfo is None:
        raise ValidationFailure(
            f"Invalid ISO8601 timestamp for {name}: {text} "
            "(expected date, time and offset, e.g. 2025-01-31T18:00:00+00:00)"
        )
    return parsed


def describe_choices(choices: Mapping[int, str]) -> str:
    """Render {1: 'Stage', 2: 'Voice'} as "1 (Stage) or 2 (Voice)"."""
    parts = [f"{code} ({label})" for code, label in sorted(choices.items())]
    if len(parts) == 1:
        return parts[0]
    head = ", ".join(parts[:-1])
    return f"{head}, or {parts[-1]}" if len(parts) > 2 else f"{head} or {parts[-1]}"


__all__ = [
    "AnyOf",
    "Param",
    "ParamSchema",
    "Requires",
    "describe_choices",
    "is_blank",
    "parse_bool",
    "parse_int",
    "parse_timestamp",
    "snake_case",
]
