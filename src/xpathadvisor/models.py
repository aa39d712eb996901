from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Sequence

Verdict = Literal["good", "warning", "poor"]
GenerateFn = Callable[[str, str | None], Sequence[str]]


@dataclass(frozen=True, slots=True)
class Strategy:
    name: str
    description: str
    priority: int
    generate: GenerateFn

    def run(self, markup: str, context: str | None = None) -> list[str]:
        return list(self.generate(markup, context))


@dataclass(slots=True)
class StrategyResult:
    strategy: str
    xpaths: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"strategy": self.strategy, "xpaths": list(self.xpaths)}


@dataclass(slots=True)
class ValidationReport:
    xpath: str
    is_valid: bool
    specificity: int
    robustness: int
    maintainability: int
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    @property
    def overall_score(self) -> float:
        return (self.specificity + self.robustness + self.maintainability) / 3

    @property
    def verdict(self) -> Verdict:
        score = self.overall_score
        if score >= 7:
            return "good"
        if score >= 4:
            return "warning"
        return "poor"

    def to_dict(self) -> dict[str, Any]:
        return {
            "xpath": self.xpath,
            "isValid": self.is_valid,
            "specificity": self.specificity,
            "robustness": self.robustness,
            "maintainability": self.maintainability,
            "issues": list(self.issues),
            "suggestions": list(self.suggestions),
        }
