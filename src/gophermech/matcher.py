"""Selecting one item out of a menu listing by template."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Sequence, Union

from .errors import NoMatchError
from .types import Item

# Template fields compared against the attribute of the same name on Item
MATCH_FIELDS = ("item_type", "display", "selector", "host", "port", "extension")


def _as_text(value: Any) -> str:
    """Comparable text form of an item attribute or template literal."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


@dataclass(frozen=True)
class Literal:
    """Matches when the attribute equals ``value``."""

    value: Any

    def matches(self, attribute: Any) -> bool:
        return _as_text(attribute) == _as_text(self.value)


@dataclass(frozen=True)
class Pattern:
    """Matches when the regex is found anywhere in the attribute."""

    regex: re.Pattern

    def __init__(self, regex: str | re.Pattern, flags: int = 0) -> None:
        if isinstance(regex, str):
            regex = re.compile(regex, flags)
        object.__setattr__(self, "regex", regex)

    def matches(self, attribute: Any) -> bool:
        return self.regex.search(_as_text(attribute)) is not None


FieldMatcher = Union[Literal, Pattern]


def as_field_matcher(value: Any) -> FieldMatcher | None:
    """Wrap a raw template value: compiled regexes become patterns."""
    if value is None or isinstance(value, (Literal, Pattern)):
        return value
    if isinstance(value, re.Pattern):
        return Pattern(value)
    return Literal(value)


@dataclass(frozen=True)
class SelectionTemplate:
    """Field constraints for picking an item. Absent fields match anything.

    ``index`` is 1-based. Every other field takes a literal (compared by
    equality) or a compiled regex (searched for).
    """

    index: int | None = None
    item_type: FieldMatcher | None = None
    display: FieldMatcher | None = None
    selector: FieldMatcher | None = None
    host: FieldMatcher | None = None
    port: FieldMatcher | None = None
    extension: FieldMatcher | None = None

    def __post_init__(self) -> None:
        if self.index is not None:
            if isinstance(self.index, bool) or not isinstance(self.index, int):
                raise ValueError(f"index must be an integer, not {self.index!r}")
            if self.index < 1:
                raise ValueError(f"index is 1-based, got {self.index}")
        for name in MATCH_FIELDS:
            object.__setattr__(self, name, as_field_matcher(getattr(self, name)))

    def constraints(self) -> list[tuple[str, FieldMatcher]]:
        """(field, matcher) pairs for the fields that are set."""
        return [
            (name, getattr(self, name))
            for name in MATCH_FIELDS
            if getattr(self, name) is not None
        ]

    def is_empty(self) -> bool:
        return self.index is None and not self.constraints()

    def __repr__(self) -> str:
        parts = [
            f"{f.name}={getattr(self, f.name)!r}"
            for f in fields(self)
            if getattr(self, f.name) is not None
        ]
        return f"SelectionTemplate({', '.join(parts)})"


def template_from_args(*args: Any, **kwargs: Any) -> SelectionTemplate:
    """Build a template from call arguments.

    A single positional argument is the display string (or regex); a
    SelectionTemplate is passed through; otherwise keyword fields are used.
    """
    if len(args) > 1:
        raise TypeError("select takes at most one positional argument")
    if args:
        if kwargs:
            raise TypeError("pass either a display value or keyword fields, not both")
        if isinstance(args[0], SelectionTemplate):
            return args[0]
        return SelectionTemplate(display=args[0])
    return SelectionTemplate(**kwargs)


def matches(item: Item, template: SelectionTemplate) -> bool:
    """Check every set field of ``template`` against ``item``."""
    return all(
        matcher.matches(getattr(item, name))
        for name, matcher in template.constraints()
    )


def select(items: Sequence[Item], template: SelectionTemplate) -> Item:
    """Return the first item satisfying ``template``.

    Raises:
        NoMatchError: if no candidate matches, or ``index`` is out of range.
    """
    if template.index is not None:
        if template.index > len(items):
            raise NoMatchError(template)
        candidates: Sequence[Item] = [items[template.index - 1]]
    else:
        candidates = items

    for item in candidates:
        if matches(item, template):
            return item

    raise NoMatchError(template)
