"""Pydantic schemas for the v1 extraction API endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from figma_extractor import settings

Framework = Literal["react", "vue", "angular", "html"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CodeGenOptions(_CamelModel):
    """Prompt options forwarded to the code generator."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    typescript: bool = False
    include_styles: bool = Field(default=False, alias="includeStyles")
    responsive: bool = False
    css_framework: Optional[str] = Field(default=None, alias="cssFramework")
    max_components: int = Field(default=settings.DEFAULT_MAX_COMPONENTS, ge=1, alias="maxComponents")

    def prompt_options(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude={"max_components"})


class ExtractDesignRequest(_CamelModel):
    """Request for POST /api/v1/extract-design."""

    file_key: str = Field(..., min_length=1, alias="fileKey")
    framework: Framework
    node_id: Optional[str] = Field(default=None, alias="nodeId")
    component_name: Optional[str] = Field(default=None, alias="componentName")
    options: CodeGenOptions = Field(default_factory=CodeGenOptions)


class GenerateCodeRequest(_CamelModel):
    """Request for POST /api/v1/generate-code."""

    file_key: str = Field(..., min_length=1, alias="fileKey")
    framework: Framework
    page_id: Optional[str] = Field(default=None, alias="pageId")
    options: CodeGenOptions = Field(default_factory=CodeGenOptions)


class ListFilesRequest(_CamelModel):
    """Body for POST /api/v1/list-files (snake_case or camelCase ids)."""

    team_id: Optional[str] = None
    project_id: Optional[str] = None
    teamId: Optional[str] = None
    projectId: Optional[str] = None
    figma_token: Optional[str] = Field(default=None, alias="figmaToken")


class ProjectOptions(_CamelModel):
    frameworks: List[Framework] = Field(default_factory=lambda: [settings.DEFAULT_FRAMEWORK])
    max_components_per_file: Optional[int] = Field(default=None, alias="maxComponentsPerFile")
    include_styles: Optional[bool] = Field(default=None, alias="includeStyles")
    generate_docs: Optional[bool] = Field(default=None, alias="generateDocs")


class ExtractProjectRequest(_CamelModel):
    """Request for POST /api/v1/extract-project.

    Either ``fileKey`` or both ``teamId`` and ``projectId`` must be set.
    """

    file_key: Optional[str] = Field(default=None, alias="fileKey")
    team_id: Optional[str] = Field(default=None, alias="teamId")
    project_id: Optional[str] = Field(default=None, alias="projectId")
    figma_token: Optional[str] = Field(default=None, alias="figmaToken")
    github_token: Optional[str] = Field(default=None, alias="githubToken")
    options: ProjectOptions = Field(default_factory=ProjectOptions)
