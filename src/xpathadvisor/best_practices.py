from __future__ import annotations

XPATH_BEST_PRACTICES: tuple[str, ...] = (
    "Prefer ID attributes when available - they're unique and reliable",
    "Use data-testid attributes for test automation selectors",
    "Avoid position-based selectors like [1], [2] as they break easily",
    "Use contains() for partial text matching to handle dynamic content",
    "Keep XPath expressions as short as possible for better performance",
    "Use normalize-space() to handle whitespace variations in text",
    "Prefer attribute-based selection over complex hierarchical paths",
    "Test XPaths against different browser environments",
    "Document complex XPath expressions with comments",
    "Consider CSS selectors as alternatives for simpler cases",
)
