"""Repository layer for generated-code records.

Records live in a single JSON array file, created on first access. Every
operation reads the whole file and mutations rewrite it.
"""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from figma_extractor import config
from figma_extractor.errors import NotFoundError


def _utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class GeneratedCodeRepository:
    """Data access layer for generated-code records."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or config.DATABASE_PATH

    async def initialize(self) -> None:
        """Create the store file (and its directory) if missing."""
        if os.path.exists(self.db_path):
            return
        os.makedirs(os.path.dirname(self.db_path) or ".", exist_ok=True)
        self._write([])

    def _write(self, records: List[Dict[str, Any]]) -> None:
        with open(self.db_path, "w", encoding="utf-8") as f:
            json.dump(records, f, ensure_ascii=False, indent=2)

    async def find_all(self) -> List[Dict[str, Any]]:
        await self.initialize()
        with open(self.db_path, "r", encoding="utf-8") as f:
            return json.load(f)

    async def find_by_id(self, record_id: str) -> Optional[Dict[str, Any]]:
        for record in await self.find_all():
            if record.get("id") == record_id:
                return record
        return None

    async def save(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Append a record stamped with ``createdAt``; returns the input data."""
        records = await self.find_all()
        records.append({**data, "createdAt": _utc_iso()})
        self._write(records)
        return data

    async def update(self, record_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Merge ``data`` into a record and stamp ``updatedAt``.

        Raises:
            NotFoundError: no record with this id
        """
        records = await self.find_all()
        for index, record in enumerate(records):
            if record.get("id") == record_id:
                records[index] = {**record, **data, "updatedAt": _utc_iso()}
                self._write(records)
                return records[index]
        raise NotFoundError(f"Record with id {record_id} not found")

    async def delete(self, record_id: str) -> bool:
        """Remove a record.

        Raises:
            NotFoundError: no record with this id
        """
        records = await self.find_all()
        remaining = [r for r in records if r.get("id") != record_id]
        if len(remaining) == len(records):
            raise NotFoundError(f"Record with id {record_id} not found")
        self._write(remaining)
        return True

    async def find_by_file_key(self, file_key: str) -> List[Dict[str, Any]]:
        return [
            r for r in await self.find_all()
            if (r.get("data") or {}).get("fileKey") == file_key
        ]

    async def find_by_framework(self, framework: str) -> List[Dict[str, Any]]:
        return [
            r for r in await self.find_all()
            if (r.get("data") or {}).get("framework") == framework
        ]
