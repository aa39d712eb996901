from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .markup_rules import has_positional_index, unique_in_order
from .models import Strategy, StrategyResult, ValidationReport
from .strategies import DEFAULT_STRATEGIES

logger = logging.getLogger(__name__)

SYNTAX_ISSUE = "XPath should start with // or /"
INVALID_SYNTAX_ISSUE = "Invalid XPath syntax"

LOW_ROBUSTNESS_SUGGESTION = "Consider using ID or data attributes for more robust selection"
POSITIONAL_SUGGESTION = "Avoid position-based selectors as they break easily when DOM changes"
LONG_PATH_SUGGESTION = "Simplify XPath - shorter paths are more maintainable"
TEXT_MATCH_SUGGESTION = "Consider using contains() for text matching to handle whitespace variations"

SPECIFICITY_WEIGHTS: tuple[tuple[str, int], ...] = (
    ("@id=", 10),
    ("@class=", 7),
    ("@data-", 5),
    ("text()=", 3),
)
ROBUSTNESS_WEIGHTS: tuple[tuple[str, int], ...] = (
    ("@id=", 10),
    ("@data-testid=", 9),
    ("@role=", 7),
    ("contains(", 5),
    ("normalize-space(", 4),
)
POSITION_SPECIFICITY = 2
POSITION_PENALTY = 3
MAX_MAINTAINABILITY = 10
LOW_ROBUSTNESS_THRESHOLD = 5
LONG_PATH_THRESHOLD = 5


class XPathGenerator:
    """Proposes ranked XPath candidates from raw markup and scores XPath strings.

    Markup is scanned with regular expressions only; nothing here builds a DOM
    or evaluates an expression, so generated locators are advisory.
    """

    def __init__(self, strategies: Sequence[Strategy] = DEFAULT_STRATEGIES) -> None:
        self._strategies: tuple[Strategy, ...] = tuple(sorted(strategies, key=lambda item: item.priority))

    @property
    def strategies(self) -> tuple[Strategy, ...]:
        return self._strategies

    def generate_xpaths(self, markup: str) -> list[StrategyResult]:
        if not isinstance(markup, str) or not markup:
            return []

        results: list[StrategyResult] = []
        for strategy in self._strategies:
            # The markup doubles as context; no separate document context is tracked.
            xpaths = unique_in_order(strategy.run(markup, markup))
            if not xpaths:
                continue
            results.append(StrategyResult(strategy=strategy.name, xpaths=xpaths))

        logger.debug(
            "Generated %d locator(s) across %d strategies.",
            sum(len(item.xpaths) for item in results),
            len(results),
        )
        return results

    def validate_xpath(self, xpath: str, markup: str = "") -> ValidationReport:
        issues: list[str] = []
        suggestions: list[str] = []
        is_valid = True

        try:
            if not xpath.startswith("/"):
                issues.append(SYNTAX_ISSUE)
                is_valid = False

            positional = has_positional_index(xpath)

            specificity = sum(weight for token, weight in SPECIFICITY_WEIGHTS if token in xpath)
            if "[position()=" in xpath or "[1]" in xpath:
                specificity += POSITION_SPECIFICITY

            robustness = sum(weight for token, weight in ROBUSTNESS_WEIGHTS if token in xpath)
            if positional:
                robustness -= POSITION_PENALTY

            separators = xpath.count("/")
            maintainability = max(0, MAX_MAINTAINABILITY - separators)
        except (AttributeError, TypeError) as exc:
            logger.debug("XPath scoring failed for %r: %s", xpath, exc)
            return ValidationReport(
                xpath=str(xpath),
                is_valid=False,
                specificity=0,
                robustness=0,
                maintainability=0,
                issues=[INVALID_SYNTAX_ISSUE],
                suggestions=[],
            )

        if robustness < LOW_ROBUSTNESS_THRESHOLD:
            suggestions.append(LOW_ROBUSTNESS_SUGGESTION)
        if positional:
            suggestions.append(POSITIONAL_SUGGESTION)
        if separators > LONG_PATH_THRESHOLD:
            suggestions.append(LONG_PATH_SUGGESTION)
        if "text()=" in xpath and "contains(" not in xpath:
            suggestions.append(TEXT_MATCH_SUGGESTION)

        return ValidationReport(
            xpath=xpath,
            is_valid=is_valid,
            specificity=specificity,
            robustness=robustness,
            maintainability=maintainability,
            issues=issues,
            suggestions=suggestions,
        )

    def validate_results(self, results: Iterable[StrategyResult], markup: str = "") -> list[ValidationReport]:
        return [self.validate_xpath(xpath, markup) for result in results for xpath in result.xpaths]


_DEFAULT_GENERATOR = XPathGenerator()


def generate_xpaths(markup: str) -> list[StrategyResult]:
    return _DEFAULT_GENERATOR.generate_xpaths(markup)


def validate_xpath(xpath: str, markup: str = "") -> ValidationReport:
    return _DEFAULT_GENERATOR.validate_xpath(xpath, markup)
