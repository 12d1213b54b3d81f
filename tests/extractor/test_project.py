"""Tests for figma_extractor.project (ProjectExtractionService)."""

import json
import os
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from figma_extractor.codegen import CodeGenerator
from figma_extractor.errors import ExternalAPIError, ValidationError
from figma_extractor.project import (
    INDEX_FILE_NAME,
    ProjectExtractionRequest,
    ProjectExtractionService,
)

from figma_payloads import make_file

FIXED_NOW = datetime(2024, 5, 1, 13, 4, 5)


def _frame(node_id, name):
    return {
        "id": node_id,
        "name": name,
        "type": "FRAME",
        "absoluteBoundingBox": {"x": 0, "y": 0, "width": 100, "height": 100},
        "children": [{"id": f"{node_id}-t", "name": "Label", "type": "TEXT", "characters": name}],
    }


@pytest.fixture
def figma():
    client = MagicMock()
    files = {
        "KEY_A": make_file(*[_frame(f"a{i}", f"A{i}") for i in range(3)], name="Home Page"),
        "KEY_B": make_file(_frame("b0", "B0"), name="Settings",
                           styles={"S:1": {"name": "Primary", "styleType": "FILL"}}),
    }

    async def get_file(key):
        if key not in files:
            raise ExternalAPIError(f"Figma resource not found: /v1/files/{key}", status_code=404)
        return files[key]

    client.get_file = AsyncMock(side_effect=get_file)
    client.get_project_files = AsyncMock(return_value={
        "name": "Website",
        "files": [
            {"key": "KEY_A", "name": "Home Page", "last_modified": "2024-04-01T00:00:00Z"},
            {"key": "KEY_MISSING", "name": "Broken"},
            {"key": "KEY_B", "name": "Settings", "thumbnail_url": "https://thumb/b.png"},
        ],
    })
    return client


@pytest.fixture
def analyzer():
    analyzer = MagicMock()

    async def generate(components, framework, options):
        return {
            "framework": framework,
            "components": [{"name": c.name, "code": "", "styles": "", "dependencies": []}
                           for c in components],
            "globalStyles": "",
            "notes": "",
        }

    analyzer.analyze_and_generate_code = AsyncMock(side_effect=generate)
    return analyzer


@pytest.fixture
def service(figma, analyzer, tmp_path):
    return ProjectExtractionService(
        figma,
        CodeGenerator(lambda: analyzer),
        output_root=str(tmp_path),
        clock=lambda: FIXED_NOW,
    )


# ---------------------------------------------------------------------------
# Request validation
# ---------------------------------------------------------------------------


class TestRequestValidation:
    def test_defaults(self):
        request = ProjectExtractionRequest(file_key="KEY_A")
        assert request.frameworks == ["react"]
        assert request.max_components_per_file == 10
        request.validate()

    def test_needs_file_or_project_pair(self):
        with pytest.raises(ValidationError):
            ProjectExtractionRequest(team_id="T1").validate()

    def test_unknown_framework(self):
        with pytest.raises(ValidationError):
            ProjectExtractionRequest(file_key="K", frameworks=["svelte"]).validate()

    def test_non_positive_max(self):
        with pytest.raises(ValidationError):
            ProjectExtractionRequest(file_key="K", max_components_per_file=0).validate()


# ---------------------------------------------------------------------------
# extract_project
# ---------------------------------------------------------------------------


class TestExtractProject:
    @pytest.mark.asyncio
    async def test_single_file(self, service, figma, tmp_path):
        request = ProjectExtractionRequest(file_key="KEY_A", frameworks=["react", "vue"])
        index = await service.extract_project(request)

        assert index["outputDirectory"] == "file-home-page-01-05-2024-13-04-05"
        output_dir = tmp_path / index["outputDirectory"]
        assert index["projectName"] == "Home Page"
        assert index["filesProcessed"] == 1
        assert index["totalComponentsExtracted"] == 3
        assert index["files"] == [{
            "fileName": "Home Page",
            "fileKey": "KEY_A",
            "frameworks": ["react", "vue"],
            "componentsExtracted": 3,
            "jsonPath": "home-page.json",
        }]

        spec = json.loads((output_dir / "home-page.json").read_text())
        assert spec["fileKey"] == "KEY_A"
        assert [c["id"] for c in spec["components"]] == ["a0", "a1", "a2"]
        assert spec["components"][0]["children"][0]["properties"]["content"] == "A0"
        assert set(spec["generatedCode"]) == {"react", "vue"}
        assert spec["metadata"] == {"totalComponents": 3}

        written_index = json.loads((output_dir / INDEX_FILE_NAME).read_text())
        assert written_index["files"] == index["files"]
        assert written_index["outputDirectory"] == str(output_dir)

    @pytest.mark.asyncio
    async def test_limit_applies_to_codegen_and_saved_spec(self, service, analyzer, tmp_path):
        request = ProjectExtractionRequest(file_key="KEY_A", max_components_per_file=2)
        index = await service.extract_project(request)

        sent = analyzer.analyze_and_generate_code.await_args.args[0]
        assert [c.id for c in sent] == ["a0", "a1"]
        spec = json.loads((tmp_path / index["outputDirectory"] / "home-page.json").read_text())
        assert [c["id"] for c in spec["components"]] == ["a0", "a1"]
        assert index["totalComponentsExtracted"] == 2

    @pytest.mark.asyncio
    async def test_project_with_failing_file(self, service, tmp_path):
        request = ProjectExtractionRequest(team_id="T1", project_id="P1")
        index = await service.extract_project(request)

        assert index["outputDirectory"] == "project-P1-01-05-2024-13-04-05"
        assert index["projectName"] == "Website"
        assert index["filesProcessed"] == 3
        assert index["totalComponentsExtracted"] == 4

        entries = {e["fileKey"]: e for e in index["files"]}
        assert entries["KEY_MISSING"]["status"] == "failed"
        assert "not found" in entries["KEY_MISSING"]["error"]
        assert entries["KEY_B"]["componentsExtracted"] == 1

        output_dir = tmp_path / index["outputDirectory"]
        assert sorted(os.listdir(output_dir)) == ["home-page.json", INDEX_FILE_NAME, "settings.json"]
        spec_b = json.loads((output_dir / "settings.json").read_text())
        assert spec_b["styles"]["colors"] == {"Primary": {"name": "Primary", "styleType": "FILL"}}
        assert spec_b["thumbnailUrl"] == "https://thumb/b.png"

    @pytest.mark.asyncio
    async def test_keyless_project_file_recorded_as_failed(self, service, figma):
        figma.get_project_files = AsyncMock(return_value={
            "name": "Website",
            "files": [{"name": "Orphan"}, {"key": "KEY_B", "name": "Settings"}],
        })
        index = await service.extract_project(ProjectExtractionRequest(team_id="T1", project_id="P1"))

        assert index["filesProcessed"] == 2
        orphan, settings_entry = index["files"]
        assert orphan["fileName"] == "Orphan"
        assert orphan["status"] == "failed"
        assert "no file key" in orphan["error"]
        assert settings_entry["componentsExtracted"] == 1
        assert [c.args[0] for c in figma.get_file.await_args_list] == ["KEY_B"]

    @pytest.mark.asyncio
    async def test_failed_framework_excluded_from_entry(self, figma, tmp_path):
        analyzer = MagicMock()

        async def generate(components, framework, options):
            if framework == "angular":
                raise ExternalAPIError("angular failed")
            return {"framework": framework, "components": []}

        analyzer.analyze_and_generate_code = AsyncMock(side_effect=generate)
        service = ProjectExtractionService(
            figma, CodeGenerator(lambda: analyzer), output_root=str(tmp_path),
            clock=lambda: FIXED_NOW,
        )
        index = await service.extract_project(
            ProjectExtractionRequest(file_key="KEY_A", frameworks=["react", "angular"])
        )
        assert index["files"][0]["frameworks"] == ["react"]
        spec = json.loads(
            (tmp_path / index["outputDirectory"] / "home-page.json").read_text()
        )
        assert spec["generatedCode"]["angular"] == {"error": "angular failed", "status": "failed"}

    @pytest.mark.asyncio
    async def test_no_files_creates_nothing(self, service, figma, tmp_path):
        figma.get_project_files = AsyncMock(return_value={"name": "Empty", "files": []})
        with pytest.raises(ValidationError, match="No files found"):
            await service.extract_project(ProjectExtractionRequest(team_id="T1", project_id="P1"))
        assert os.listdir(tmp_path) == []

    @pytest.mark.asyncio
    async def test_invalid_request_fetches_nothing(self, service, figma):
        with pytest.raises(ValidationError):
            await service.extract_project(ProjectExtractionRequest(project_id="P1"))
        figma.get_project_files.assert_not_called()

    @pytest.mark.asyncio
    async def test_generate_docs_false_skips_index(self, service, tmp_path):
        index = await service.extract_project(
            ProjectExtractionRequest(file_key="KEY_B", generate_docs=False)
        )
        assert os.listdir(tmp_path / index["outputDirectory"]) == ["settings.json"]

    @pytest.mark.asyncio
    async def test_include_styles_forwarded(self, service, analyzer):
        await service.extract_project(
            ProjectExtractionRequest(file_key="KEY_B", include_styles=False)
        )
        assert analyzer.analyze_and_generate_code.await_args.args[2] == {"includeStyles": False}
