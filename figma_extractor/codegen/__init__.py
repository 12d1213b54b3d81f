"""Frontend code generation: prompts, response parsing, per-framework runs."""

from .generator import (
    CodeGenerator,
    DesignAnalyzer,
    simplify_components,
    succeeded_frameworks,
    validate_framework,
    validate_frameworks,
)
from .parser import ParseOutcome, parse_response
from .prompt import FRAMEWORKS, build_prompt

__all__ = [
    "FRAMEWORKS",
    "CodeGenerator",
    "DesignAnalyzer",
    "ParseOutcome",
    "build_prompt",
    "parse_response",
    "simplify_components",
    "succeeded_frameworks",
    "validate_framework",
    "validate_frameworks",
]
