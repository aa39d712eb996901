from __future__ import annotations

from .markup_rules import (
    CLASS_ATTR_PATTERN,
    DATA_ATTR_PATTERN,
    ID_ATTR_PATTERN,
    MAX_CLASS_TOKENS,
    NAME_ATTR_PATTERN,
    TYPE_ATTR_PATTERN,
    attribute_xpath,
    first_tag_name,
    iter_attribute_values,
    iter_inner_text,
    iter_named_attributes,
    xpath_literal,
)
from .models import Strategy

STRUCTURAL_TEMPLATES = (
    "//{tag}[1]",
    "//div[contains(@class, 'container')]//{tag}",
    "//main//{tag}",
    "//section//{tag}",
)


def generate_id_xpaths(markup: str, context: str | None = None) -> list[str]:
    return [attribute_xpath("id", value) for value in iter_attribute_values(ID_ATTR_PATTERN, markup)]


def generate_class_xpaths(markup: str, context: str | None = None) -> list[str]:
    xpaths: list[str] = []
    for value in iter_attribute_values(CLASS_ATTR_PATTERN, markup):
        # Exact @class equality per token; multi-class elements will not match in a live DOM.
        for token in value.split()[:MAX_CLASS_TOKENS]:
            xpaths.append(attribute_xpath("class", token))
    return xpaths


def generate_attribute_xpaths(markup: str, context: str | None = None) -> list[str]:
    patterns = (DATA_ATTR_PATTERN, NAME_ATTR_PATTERN, TYPE_ATTR_PATTERN)
    return [attribute_xpath(name, value) for name, value in iter_named_attributes(patterns, markup)]


def generate_text_xpaths(markup: str, context: str | None = None) -> list[str]:
    xpaths: list[str] = []
    for text in iter_inner_text(markup):
        literal = xpath_literal(text)
        xpaths.append(f"//*[text()={literal}]")
        xpaths.append(f"//*[contains(text(),{literal})]")
        xpaths.append(f"//*[normalize-space(text())={literal}]")
    return xpaths


def generate_structural_xpaths(markup: str, context: str | None = None) -> list[str]:
    tag = first_tag_name(markup)
    if not tag:
        return []
    return [template.format(tag=tag) for template in STRUCTURAL_TEMPLATES]


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (
    Strategy(
        name="ID-based",
        description="Most reliable - uses element ID",
        priority=1,
        generate=generate_id_xpaths,
    ),
    Strategy(
        name="Class-based",
        description="Good reliability - uses CSS classes",
        priority=2,
        generate=generate_class_xpaths,
    ),
    Strategy(
        name="Attribute-based",
        description="Moderate reliability - uses data attributes",
        priority=3,
        generate=generate_attribute_xpaths,
    ),
    Strategy(
        name="Text-based",
        description="Use with caution - based on visible text",
        priority=4,
        generate=generate_text_xpaths,
    ),
    Strategy(
        name="Structural",
        description="Hierarchical positioning - less reliable",
        priority=5,
        generate=generate_structural_xpaths,
    ),
)


def strategy_by_name(name: str, strategies: tuple[Strategy, ...] = DEFAULT_STRATEGIES) -> Strategy | None:
    for strategy in strategies:
        if strategy.name == name:
            return strategy
    return None
