from __future__ import annotations

from .best_practices import XPATH_BEST_PRACTICES
from .models import Strategy, StrategyResult, ValidationReport
from .strategies import DEFAULT_STRATEGIES
from .xpath_generator import XPathGenerator, generate_xpaths, validate_xpath

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_STRATEGIES",
    "Strategy",
    "StrategyResult",
    "ValidationReport",
    "XPATH_BEST_PRACTICES",
    "XPathGenerator",
    "generate_xpaths",
    "validate_xpath",
]
