from __future__ import annotations

import csv
from datetime import datetime, timezone
import io
import json
from pathlib import Path
from typing import Any, Iterable, Literal, Sequence

from .best_practices import XPATH_BEST_PRACTICES
from .models import StrategyResult, ValidationReport

ExportFormat = Literal["txt", "json", "csv"]
EXPORT_FORMATS: tuple[ExportFormat, ...] = ("txt", "json", "csv")

CSV_HEADER = (
    "Strategy",
    "XPath",
    "Specificity",
    "Robustness",
    "Maintainability",
    "Issues",
    "Suggestions",
)


def filter_selected(
    results: Sequence[StrategyResult],
    selected: Iterable[str] | None = None,
) -> list[StrategyResult]:
    """Keep only selected locators; an empty selection exports everything."""
    chosen = set(selected or ())
    if not chosen:
        return list(results)

    filtered: list[StrategyResult] = []
    for result in results:
        xpaths = [xpath for xpath in result.xpaths if xpath in chosen]
        if xpaths:
            filtered.append(StrategyResult(strategy=result.strategy, xpaths=xpaths))
    return filtered


def _index_validations(validations: Iterable[ValidationReport]) -> dict[str, ValidationReport]:
    indexed: dict[str, ValidationReport] = {}
    for report in validations:
        indexed.setdefault(report.xpath, report)
    return indexed


def render_json(
    markup: str,
    results: Sequence[StrategyResult],
    validations: Sequence[ValidationReport],
    *,
    now: datetime,
) -> str:
    payload: dict[str, Any] = {
        "timestamp": now.isoformat(),
        "htmlContent": markup,
        "results": [result.to_dict() for result in results],
        "validations": [report.to_dict() for report in validations],
        "bestPractices": list(XPATH_BEST_PRACTICES),
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


def render_csv(
    results: Sequence[StrategyResult],
    validations: Sequence[ValidationReport],
) -> str:
    indexed = _index_validations(validations)
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    buffer.write(",".join(CSV_HEADER) + "\n")
    for result in results:
        for xpath in result.xpaths:
            report = indexed.get(xpath)
            writer.writerow(
                [
                    result.strategy,
                    xpath,
                    report.specificity if report else 0,
                    report.robustness if report else 0,
                    report.maintainability if report else 0,
                    "; ".join(report.issues) if report else "",
                    "; ".join(report.suggestions) if report else "",
                ]
            )
    return buffer.getvalue()


def render_text(
    markup: str,
    results: Sequence[StrategyResult],
    validations: Sequence[ValidationReport],
    *,
    now: datetime,
) -> str:
    indexed = _index_validations(validations)
    lines = [
        f"XPath Selectors Generated on: {now.strftime('%Y-%m-%d %H:%M:%S')}",
        "",
        "HTML Content:",
        markup,
        "",
        "Generated XPath Selectors:",
        "",
    ]
    for result in results:
        lines.append("")
        lines.append(f"=== {result.strategy} Strategy ===")
        for index, xpath in enumerate(result.xpaths, start=1):
            lines.append(f"{index}. {xpath}")
            report = indexed.get(xpath)
            if report is None:
                continue
            lines.append(f"   Specificity: {report.specificity}/10, Robustness: {report.robustness}/10")
            if report.issues:
                lines.append(f"   Issues: {', '.join(report.issues)}")
            if report.suggestions:
                lines.append(f"   Suggestions: {', '.join(report.suggestions)}")

    lines.append("")
    lines.append("")
    lines.append("Best Practices:")
    for index, practice in enumerate(XPATH_BEST_PRACTICES, start=1):
        lines.append(f"{index}. {practice}")
    return "\n".join(lines) + "\n"


def render_export(
    fmt: str,
    markup: str,
    results: Sequence[StrategyResult],
    validations: Sequence[ValidationReport],
    *,
    now: datetime | None = None,
) -> str:
    stamp = now or datetime.now(timezone.utc)
    if fmt == "json":
        return render_json(markup, results, validations, now=stamp)
    if fmt == "csv":
        return render_csv(results, validations)
    if fmt == "txt":
        return render_text(markup, results, validations, now=stamp)
    raise ValueError(f"Unsupported export format: {fmt!r}. Expected one of {', '.join(EXPORT_FORMATS)}.")


def export_filename(fmt: str, now: datetime) -> str:
    return f"xpath-selectors-{int(now.timestamp() * 1000)}.{fmt}"


def write_export(
    directory: Path,
    fmt: str,
    markup: str,
    results: Sequence[StrategyResult],
    validations: Sequence[ValidationReport],
    *,
    selected: Iterable[str] | None = None,
    now: datetime | None = None,
) -> tuple[Path | None, str | None]:
    stamp = now or datetime.now(timezone.utc)
    chosen = filter_selected(results, selected)
    if not chosen:
        return None, "Please generate XPath first."

    content = render_export(fmt, markup, chosen, validations, now=stamp)

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return None, f"Could not create export folder: {exc}"

    target = directory / export_filename(fmt, stamp)
    try:
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        return None, f"Could not write export file: {exc}"
    return target, None
