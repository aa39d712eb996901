from __future__ import annotations

import re
from typing import Iterable, Iterator

# Attribute names only count as whole names: `data-testid="x"` is not an `id`.
_ATTR_BOUNDARY = r"(?<![\w:-])"
_QUOTED_VALUE = r"\s*=\s*(?P<quote>[\"'])(?P<value>.*?)(?P=quote)"

ID_ATTR_PATTERN = re.compile(_ATTR_BOUNDARY + r"id" + _QUOTED_VALUE, re.IGNORECASE | re.DOTALL)
CLASS_ATTR_PATTERN = re.compile(_ATTR_BOUNDARY + r"class" + _QUOTED_VALUE, re.IGNORECASE | re.DOTALL)
DATA_ATTR_PATTERN = re.compile(
    _ATTR_BOUNDARY + r"(?P<name>data-[\w.:-]+)" + _QUOTED_VALUE,
    re.IGNORECASE | re.DOTALL,
)
NAME_ATTR_PATTERN = re.compile(_ATTR_BOUNDARY + r"(?P<name>name)" + _QUOTED_VALUE, re.IGNORECASE | re.DOTALL)
TYPE_ATTR_PATTERN = re.compile(_ATTR_BOUNDARY + r"(?P<name>type)" + _QUOTED_VALUE, re.IGNORECASE | re.DOTALL)

INNER_TEXT_PATTERN = re.compile(r">([^<]+)<")
FIRST_TAG_PATTERN = re.compile(r"<([A-Za-z][A-Za-z0-9-]*)")

POSITIONAL_INDEX_PATTERN = re.compile(r"\[\s*[1-9]\d*\s*\]")

MAX_CLASS_TOKENS = 3
MIN_TEXT_LENGTH = 2
MAX_TEXT_LENGTH = 50


def xpath_literal(value: str) -> str:
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    pieces = value.split("'")
    quoted = [f"'{piece}'" for piece in pieces]
    return "concat(" + ", \"'\", ".join(quoted) + ")"


def attribute_xpath(attribute: str, value: str) -> str:
    return f"//*[@{attribute}={xpath_literal(value)}]"


def iter_attribute_values(pattern: re.Pattern[str], markup: str) -> Iterator[str]:
    for match in pattern.finditer(markup):
        value = match.group("value").strip()
        if value:
            yield value


def iter_named_attributes(patterns: Iterable[re.Pattern[str]], markup: str) -> Iterator[tuple[str, str]]:
    for pattern in patterns:
        for match in pattern.finditer(markup):
            value = match.group("value").strip()
            if value:
                yield match.group("name").lower(), value


def iter_inner_text(markup: str) -> Iterator[str]:
    for match in INNER_TEXT_PATTERN.finditer(markup):
        text = match.group(1).strip()
        if MIN_TEXT_LENGTH < len(text) < MAX_TEXT_LENGTH:
            yield text


def first_tag_name(markup: str) -> str | None:
    match = FIRST_TAG_PATTERN.search(markup)
    if not match:
        return None
    return match.group(1)


def has_positional_index(xpath: str) -> bool:
    return POSITIONAL_INDEX_PATTERN.search(xpath) is not None


def unique_in_order(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        ordered.append(value)
    return ordered
