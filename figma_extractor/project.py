"""Project extraction: Figma file(s) → per-file JSON specs + project index.

Flow for one request:
    validate → resolve files → per file (fetch → flatten → styles → limit →
    generate code → write JSON) → write project-index.json

Files are processed one at a time. A failing file is recorded as a failed
entry in the index and does not stop the remaining files.
"""

from __future__ import annotations

import json
import logging
import os
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from figma_extractor import config, settings
from figma_extractor.codegen import CodeGenerator, succeeded_frameworks, validate_frameworks
from figma_extractor.errors import ValidationError
from figma_extractor.extraction import collect_styles, extract_components, limit_components
from figma_extractor.integrations.figma_client import FigmaClient
from figma_extractor.validators import require_file_or_project, sanitize_file_name

logger = logging.getLogger("figma_extractor.project")

INDEX_FILE_NAME = "project-index.json"


def _utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class ProjectExtractionRequest:
    """Parameters of one extraction run."""

    file_key: Optional[str] = None
    team_id: Optional[str] = None
    project_id: Optional[str] = None
    frameworks: List[str] = field(default_factory=lambda: [settings.DEFAULT_FRAMEWORK])
    max_components_per_file: int = settings.DEFAULT_MAX_COMPONENTS
    include_styles: bool = True
    generate_docs: bool = True

    def validate(self) -> None:
        require_file_or_project(self.file_key, self.team_id, self.project_id)
        validate_frameworks(self.frameworks)
        if self.max_components_per_file < 1:
            raise ValidationError("maxComponentsPerFile must be a positive integer")


@dataclass
class FileEntry:
    """A file to process, normalized from either resolution mode."""

    key: Optional[str]
    name: str
    last_modified: Optional[str] = None
    thumbnail_url: Optional[str] = None


class ProjectExtractionService:
    """Runs project extractions against one Figma account.

    Args:
        figma_client: Client bound to the caller's Figma token.
        code_generator: Multi-framework generator.
        output_root: Parent directory for per-run output directories.
        clock: Returns "now" for output directory naming (local time).
    """

    def __init__(
        self,
        figma_client: FigmaClient,
        code_generator: CodeGenerator,
        output_root: Optional[str] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.figma = figma_client
        self.code_generator = code_generator
        self.output_root = output_root or config.OUTPUT_DIR
        self._clock = clock

    # ------------------------------------------------------------------
    # File resolution
    # ------------------------------------------------------------------

    async def fetch_files(
        self,
        file_key: Optional[str],
        project_id: Optional[str],
    ) -> tuple:
        """Return (files, project_name) for single-file or project mode."""
        if file_key:
            file_data = await self.figma.get_file(file_key)
            name = file_data.get("name") or file_key
            entry = FileEntry(
                key=file_key,
                name=name,
                last_modified=file_data.get("lastModified"),
                thumbnail_url=file_data.get("thumbnailUrl"),
            )
            return [entry], name

        data = await self.figma.get_project_files(project_id)
        files = [
            FileEntry(
                key=f.get("key"),
                name=f.get("name") or f.get("key") or "unknown",
                last_modified=f.get("last_modified"),
                thumbnail_url=f.get("thumbnail_url"),
            )
            for f in data.get("files") or []
            if f
        ]
        project_name = data.get("name") or (files[0].name if files else "Unknown Project")
        return files, project_name

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def create_output_directory(
        self,
        file_key: Optional[str],
        project_id: Optional[str],
        file_name: str,
    ) -> str:
        stamp = self._clock().strftime("%d-%m-%Y-%H-%M-%S")
        if file_key:
            dir_name = f"file-{sanitize_file_name(file_name)}-{stamp}"
        else:
            dir_name = f"project-{project_id}-{stamp}"
        output_dir = os.path.join(self.output_root, dir_name)
        os.makedirs(output_dir, exist_ok=True)
        logger.info(f"create_output_directory: {output_dir}")
        return output_dir

    @staticmethod
    def save_file_spec(output_dir: str, file: FileEntry, file_spec: Dict[str, Any]) -> str:
        json_name = f"{sanitize_file_name(file.name)}.json"
        with open(os.path.join(output_dir, json_name), "w", encoding="utf-8") as f:
            json.dump(file_spec, f, ensure_ascii=False, indent=2)
        return json_name

    @staticmethod
    def save_project_index(output_dir: str, index: Dict[str, Any]) -> str:
        index_path = os.path.join(output_dir, INDEX_FILE_NAME)
        with open(index_path, "w", encoding="utf-8") as f:
            json.dump(index, f, ensure_ascii=False, indent=2)
        logger.info(f"save_project_index: wrote {index_path}")
        return index_path

    # ------------------------------------------------------------------
    # Per-file processing
    # ------------------------------------------------------------------

    async def process_file(
        self,
        file: FileEntry,
        request: ProjectExtractionRequest,
    ) -> Dict[str, Any]:
        """Extract and generate code for one file; returns its FileSpec."""
        logger.info(f"Processing file: {file.name} ({file.key})")
        if not file.key:
            raise ValidationError(f"File {file.name!r} has no file key")

        file_data = await self.figma.get_file(file.key)
        design = extract_components(file_data)
        components = limit_components(design.components, request.max_components_per_file)
        styles = collect_styles(file_data.get("styles"))

        generated = await self.code_generator.generate(
            components,
            request.frameworks,
            {"includeStyles": request.include_styles},
        )

        return {
            "id": str(uuid.uuid4()),
            "fileName": file.name,
            "fileKey": file.key,
            "lastModified": file.last_modified,
            "thumbnailUrl": file.thumbnail_url,
            "extractedAt": _utc_iso(),
            "components": [c.to_dict() for c in components],
            "styles": styles,
            "generatedCode": generated,
            "metadata": {"totalComponents": len(components)},
        }

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    async def extract_project(self, request: ProjectExtractionRequest) -> Dict[str, Any]:
        """Run a full extraction and return the project index.

        Raises:
            ValidationError: bad parameters, or no files to process
            ExternalAPIError: the file list itself could not be fetched
        """
        request.validate()

        files, project_name = await self.fetch_files(request.file_key, request.project_id)
        if not files:
            raise ValidationError("No files found in the specified project or file")

        output_dir = self.create_output_directory(
            request.file_key, request.project_id, files[0].name
        )

        entries: List[Dict[str, Any]] = []
        total_components = 0

        for file in files:
            try:
                file_spec = await self.process_file(file, request)
                json_name = self.save_file_spec(output_dir, file, file_spec)
            except Exception as e:
                logger.error(f"Failed to process file {file.name} ({file.key}): {e}")
                entries.append({
                    "fileName": file.name,
                    "fileKey": file.key,
                    "error": str(e),
                    "status": "failed",
                })
                continue

            extracted = file_spec["metadata"]["totalComponents"]
            entries.append({
                "fileName": file.name,
                "fileKey": file.key,
                "frameworks": succeeded_frameworks(file_spec["generatedCode"], request.frameworks),
                "componentsExtracted": extracted,
                "jsonPath": json_name,
            })
            total_components += extracted

        index = {
            "projectId": request.project_id,
            "fileKey": request.file_key,
            "projectName": project_name,
            "teamId": request.team_id,
            "extractedAt": _utc_iso(),
            "filesProcessed": len(files),
            "totalComponentsExtracted": total_components,
            "frameworks": list(request.frameworks),
            "files": entries,
            "outputDirectory": output_dir,
        }

        if request.generate_docs:
            self.save_project_index(output_dir, index)

        logger.info(
            f"extract_project: {len(files)} files, {total_components} components, "
            f"output={output_dir}"
        )
        return {**index, "outputDirectory": os.path.basename(output_dir)}
