"""Project extraction endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from app.dependencies import (
    AnalyzerFactory,
    FigmaClientFactory,
    get_analyzer_factory,
    get_figma_client_factory,
)
from figma_extractor import config, settings
from figma_extractor.codegen import CodeGenerator
from figma_extractor.errors import ValidationError
from figma_extractor.project import ProjectExtractionRequest, ProjectExtractionService
from figma_extractor.validators import (
    require_file_or_project,
    validate_boolean,
    validate_positive_integer,
)

from .schemas import ExtractProjectRequest

logger = logging.getLogger("api.routes.project")

router = APIRouter(prefix="/api/v1", tags=["project"])


@router.post("/extract-project")
async def extract_project(
    body: ExtractProjectRequest,
    make_figma: FigmaClientFactory = Depends(get_figma_client_factory),
    make_analyzer: AnalyzerFactory = Depends(get_analyzer_factory),
):
    """Extract every file of a project (or one file) into JSON specs + index."""
    if not body.figma_token or not body.github_token:
        raise ValidationError("figmaToken and githubToken are required")
    require_file_or_project(body.file_key, body.team_id, body.project_id)

    options = body.options
    request = ProjectExtractionRequest(
        file_key=body.file_key,
        team_id=body.team_id,
        project_id=body.project_id,
        frameworks=list(options.frameworks),
        max_components_per_file=validate_positive_integer(
            options.max_components_per_file,
            "maxComponentsPerFile",
            settings.DEFAULT_MAX_COMPONENTS,
        ),
        include_styles=validate_boolean(options.include_styles, True),
        generate_docs=validate_boolean(options.generate_docs, True),
    )

    github_token = body.github_token
    code_generator = CodeGenerator(lambda: make_analyzer("github", api_key=github_token))

    figma = make_figma(body.figma_token)
    try:
        service = ProjectExtractionService(figma, code_generator, output_root=config.OUTPUT_DIR)
        logger.info("Starting project extraction")
        result = await service.extract_project(request)
    finally:
        await figma.close()

    logger.info(
        f"Project extraction completed: {result['filesProcessed']} files, "
        f"{result['totalComponentsExtracted']} components"
    )
    return {"success": True, **result}
