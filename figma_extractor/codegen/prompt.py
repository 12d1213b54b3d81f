"""Code Generation Prompt Templates

Prompt for turning a list of extracted Figma components into frontend code.
The framework block is picked from a fixed table; option flags add or drop
individual instruction lines.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

FRAMEWORKS = ("react", "vue", "angular", "html")

CODEGEN_PROMPT = """\
You are an expert frontend developer. Analyze the following Figma design \
components and generate clean, production-ready {framework} code.

FIGMA COMPONENTS:
{components_json}

INSTRUCTIONS:
{framework_instructions}
{extra_instructions}

Generate the code with:
1. Component structure following {framework} conventions
2. Proper component hierarchy
3. Accessible HTML elements
4. Clean, readable code with comments
5. Reusable component patterns

Return the response in the following JSON format:
{{
  "components": [
    {{
      "name": "ComponentName",
      "code": "component code here",
      "styles": "styles code here (if applicable)",
      "dependencies": ["list", "of", "dependencies"]
    }}
  ],
  "globalStyles": "global styles if any",
  "notes": "implementation notes and suggestions"
}}"""


def _language_line(options: Dict[str, Any]) -> str:
    if options.get("typescript"):
        return "Use TypeScript with proper type definitions."
    return "Use JavaScript."


def _react_instructions(options: Dict[str, Any]) -> List[str]:
    return [
        "Generate React functional components using hooks.",
        _language_line(options),
        "Include inline styles or CSS modules." if options.get("includeStyles") else "",
        "Use modern React best practices (React 18+).",
    ]


def _vue_instructions(options: Dict[str, Any]) -> List[str]:
    return [
        "Generate Vue 3 components using Composition API.",
        _language_line(options),
        "Include scoped styles in the <style> section." if options.get("includeStyles") else "",
        "Use modern Vue 3 best practices.",
    ]


def _angular_instructions(options: Dict[str, Any]) -> List[str]:
    return [
        "Generate Angular components (Angular 15+).",
        "Use TypeScript with proper type definitions and decorators.",
        "Include component styles." if options.get("includeStyles") else "",
        "Follow Angular style guide and best practices.",
    ]


def _html_instructions(options: Dict[str, Any]) -> List[str]:
    return [
        "Generate semantic HTML5 markup.",
        "Include CSS styles in a separate section." if options.get("includeStyles") else "",
        "Use modern HTML5 and CSS3 features.",
    ]


FRAMEWORK_INSTRUCTIONS = {
    "react": _react_instructions,
    "vue": _vue_instructions,
    "angular": _angular_instructions,
    "html": _html_instructions,
}

CSS_FRAMEWORK_LINES = {
    "tailwind": "- Use Tailwind CSS classes.",
    "styled-components": "- Use styled-components for styling.",
}


def build_prompt(
    components: List[Dict[str, Any]],
    framework: str,
    options: Optional[Dict[str, Any]] = None,
) -> str:
    """Build the code-generation prompt for one framework.

    Args:
        components: Simplified component dicts (id, name, type, properties)
        framework: One of FRAMEWORKS
        options: typescript, includeStyles, responsive, cssFramework, componentName

    Raises:
        ValueError: framework is not in FRAMEWORKS
    """
    options = options or {}
    if framework not in FRAMEWORK_INSTRUCTIONS:
        raise ValueError(f"No prompt instructions for framework: {framework}")

    framework_lines = [line for line in FRAMEWORK_INSTRUCTIONS[framework](options) if line]

    extra: List[str] = []
    if options.get("responsive"):
        extra.append("- Make the design responsive with proper breakpoints.")
    css_line = CSS_FRAMEWORK_LINES.get(options.get("cssFramework") or "")
    if css_line:
        extra.append(css_line)
    if options.get("componentName"):
        extra.append(f"- Name the top-level component {options['componentName']}.")

    return CODEGEN_PROMPT.format(
        framework=framework,
        components_json=json.dumps(components, indent=2, ensure_ascii=False),
        framework_instructions="\n".join(framework_lines),
        extra_instructions="\n".join(extra),
    )
