"""Design extraction + single-framework code generation endpoints.

Both endpoints fetch a Figma file, extract its root components (optionally
below one node), generate code for one framework, and store the result in
the generated-code record store.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Header

from app.dependencies import (
    AnalyzerFactory,
    FigmaClientFactory,
    get_analyzer_factory,
    get_figma_client_factory,
    get_repository,
)
from app.repositories import GeneratedCodeRepository
from figma_extractor import config
from figma_extractor.extraction import (
    collect_styles,
    extract_components,
    extract_node_components,
    limit_components,
)
from figma_extractor.integrations import validate_provider

from .schemas import ExtractDesignRequest, GenerateCodeRequest

logger = logging.getLogger("api.routes.design")

router = APIRouter(prefix="/api/v1", tags=["design"])


async def _extract_and_generate(
    *,
    file_key: str,
    framework: str,
    node_id: Optional[str],
    node_field: str,
    prompt_options: Dict[str, Any],
    limit: int,
    provider: str,
    make_figma: FigmaClientFactory,
    make_analyzer: AnalyzerFactory,
    repository: GeneratedCodeRepository,
) -> Dict[str, Any]:
    figma = make_figma(None)
    try:
        logger.info(f"Fetching Figma file: {file_key}")
        file_data = await figma.get_file(file_key)
        if node_id:
            design = extract_node_components(await figma.get_file_nodes(file_key, [node_id]))
        else:
            design = extract_components(file_data)
    finally:
        await figma.close()

    components = limit_components(design.components, limit)
    styles = collect_styles(file_data.get("styles"))

    analyzer = make_analyzer(provider)
    logger.info(
        f"Generating {framework} code using {provider} with {len(components)} components"
    )
    artifact = await analyzer.analyze_and_generate_code(components, framework, prompt_options)

    result = {
        "success": True,
        "id": str(uuid.uuid4()),
        "data": {
            "framework": framework,
            "fileKey": file_key,
            "fileName": file_data.get("name"),
            node_field: node_id,
            "components": artifact.get("components") or [],
            "globalStyles": artifact.get("globalStyles") or "",
            "notes": artifact.get("notes") or "",
            "extractedComponents": [c.to_dict() for c in components],
            "styles": styles,
        },
        "metadata": {
            "figmaFile": file_key,
            "figmaVersion": file_data.get("version"),
            "lastModified": file_data.get("lastModified"),
            "provider": provider,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    }
    await repository.save(result)
    return result


@router.post("/extract-design")
async def extract_design(
    body: ExtractDesignRequest,
    x_ai_provider: Optional[str] = Header(default=None),
    make_figma: FigmaClientFactory = Depends(get_figma_client_factory),
    make_analyzer: AnalyzerFactory = Depends(get_analyzer_factory),
    repository: GeneratedCodeRepository = Depends(get_repository),
):
    """Extract a Figma design (optionally one node) and generate code for it.

    Root components are capped at ``options.maxComponents`` (default 10).
    """
    provider = validate_provider(x_ai_provider or config.AI_PROVIDER)
    prompt_options = {
        **body.options.prompt_options(),
        "componentName": body.component_name or "GeneratedComponent",
    }
    return await _extract_and_generate(
        file_key=body.file_key,
        framework=body.framework,
        node_id=body.node_id,
        node_field="nodeId",
        prompt_options=prompt_options,
        limit=body.options.max_components,
        provider=provider,
        make_figma=make_figma,
        make_analyzer=make_analyzer,
        repository=repository,
    )


@router.post("/generate-code")
async def generate_code(
    body: GenerateCodeRequest,
    x_ai_provider: Optional[str] = Header(default=None),
    make_figma: FigmaClientFactory = Depends(get_figma_client_factory),
    make_analyzer: AnalyzerFactory = Depends(get_analyzer_factory),
    repository: GeneratedCodeRepository = Depends(get_repository),
):
    """Generate code for a whole Figma file (or one page) in one framework.

    Root components are capped at ``options.maxComponents`` (default 10).
    """
    provider = validate_provider(x_ai_provider or config.AI_PROVIDER)
    return await _extract_and_generate(
        file_key=body.file_key,
        framework=body.framework,
        node_id=body.page_id,
        node_field="pageId",
        prompt_options=body.options.prompt_options(),
        limit=body.options.max_components,
        provider=provider,
        make_figma=make_figma,
        make_analyzer=make_analyzer,
        repository=repository,
    )
