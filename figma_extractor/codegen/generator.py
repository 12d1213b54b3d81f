"""Per-framework code generation from extracted components.

DesignAnalyzer turns one component list into one CodeArtifact for one
framework. CodeGenerator runs the analyzer for each requested framework in
turn; a failure in one framework is recorded in its slot and the remaining
frameworks still run.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from figma_extractor.errors import AppError, ExternalAPIError, ValidationError
from figma_extractor.extraction.tree import Component
from figma_extractor.integrations.completion_client import CompletionClient

from .parser import ParseOutcome, parse_response
from .prompt import FRAMEWORKS, build_prompt

logger = logging.getLogger("figma_extractor.codegen")


def validate_framework(framework: str) -> None:
    if framework not in FRAMEWORKS:
        raise ValidationError(
            f"Invalid framework. Must be one of: {', '.join(FRAMEWORKS)}"
        )


def validate_frameworks(frameworks: Sequence[str]) -> None:
    if not isinstance(frameworks, (list, tuple)):
        raise ValidationError("Frameworks must be an array")
    for framework in frameworks:
        validate_framework(framework)


def simplify_components(components: List[Component]) -> List[Dict[str, Any]]:
    """Drop nested children so only the root components go into the prompt."""
    return [
        {"id": c.id, "name": c.name, "type": c.type, "properties": dict(c.properties)}
        for c in components
    ]


class DesignAnalyzer:
    """Generates code for one framework through a completion client."""

    def __init__(self, completion_client: CompletionClient):
        self.client = completion_client

    @property
    def provider(self) -> str:
        return self.client.provider

    async def analyze_and_generate_code(
        self,
        components: List[Component],
        framework: str,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Build the prompt, call the model, and parse its reply.

        Raises:
            ValidationError: unknown framework
            ExternalAPIError: completion call failed
        """
        validate_framework(framework)
        prompt = build_prompt(simplify_components(components), framework, options)
        try:
            text = await self.client.complete(prompt)
        except AppError:
            raise
        except Exception as e:
            raise ExternalAPIError(f"Failed to generate code: {e}") from e

        artifact, outcome = parse_response(text, framework)
        if outcome is not ParseOutcome.PARSED:
            logger.info(
                f"analyze_and_generate_code: framework={framework}, outcome={outcome.value}"
            )
        return artifact


class CodeGenerator:
    """Sequential multi-framework generation with per-framework isolation.

    Args:
        analyzer_factory: Builds a DesignAnalyzer; called once per framework so a
            provider misconfiguration surfaces as that framework's failure.
    """

    def __init__(self, analyzer_factory: Callable[[], DesignAnalyzer]):
        self._analyzer_factory = analyzer_factory

    async def generate(
        self,
        components: List[Component],
        frameworks: Sequence[str],
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Dict[str, Any]]:
        """Return framework → CodeArtifact or ``{error, status: "failed"}``."""
        generated: Dict[str, Dict[str, Any]] = {}
        for framework in frameworks:
            try:
                analyzer = self._analyzer_factory()
                generated[framework] = await analyzer.analyze_and_generate_code(
                    components, framework, options
                )
            except Exception as e:
                logger.error(f"Failed to generate {framework} code: {e}")
                generated[framework] = {"error": str(e), "status": "failed"}
        return generated


def succeeded_frameworks(generated: Dict[str, Dict[str, Any]], frameworks: Sequence[str]) -> List[str]:
    """Frameworks whose artifact is not a failure marker."""
    return [f for f in frameworks if not (generated.get(f) or {}).get("error")]
