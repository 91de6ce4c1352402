"""Persistence sinks — best-effort history of analyses and redesigns."""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

from restyle.schemas.website import DesignStyle, WebsiteData
from restyle.shared.errors import PersistenceError

logger = logging.getLogger(__name__)


class PersistenceSink(Protocol):
    async def save_analysis(self, data: WebsiteData) -> str: ...

    async def save_redesign(
        self,
        analysis_id: str,
        style: DesignStyle,
        html: str,
        css: str,
        preview: str,
    ) -> str: ...


class JsonFilePersistence:
    """Stores each record as one JSON file.

    Layout::

        <directory>/analyses/<id>.json
        <directory>/redesigns/<id>.json
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    @property
    def analyses_dir(self) -> Path:
        return self.directory / "analyses"

    @property
    def redesigns_dir(self) -> Path:
        return self.directory / "redesigns"

    def _write(self, folder: Path, record: dict[str, Any]) -> str:
        try:
            folder.mkdir(parents=True, exist_ok=True)
            (folder / f"{record['id']}.json").write_text(json.dumps(record, indent=2))
        except OSError as exc:
            raise PersistenceError(f"Could not write {folder.name} record: {exc}") from exc
        return record["id"]

    def _read(self, folder: Path, record_id: str) -> dict[str, Any]:
        path = folder / f"{record_id}.json"
        if not path.exists():
            raise PersistenceError(f"No {folder.name} record with id {record_id!r}")
        try:
            return json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Could not read {path}: {exc}") from exc

    def _list(self, folder: Path) -> list[dict[str, Any]]:
        if not folder.exists():
            return []
        records = []
        for path in folder.glob("*.json"):
            try:
                records.append(json.loads(path.read_text()))
            except (OSError, json.JSONDecodeError) as exc:
                logger.warning("Skipping unreadable record %s: %s", path, exc)
        records.sort(key=lambda r: r.get("created_at", ""), reverse=True)
        return records

    @staticmethod
    def _new_record(**fields: Any) -> dict[str, Any]:
        return {"id": uuid.uuid4().hex, "created_at": datetime.now().isoformat(), **fields}

    # ------------------------------------------------------------------
    # Sink
    # ------------------------------------------------------------------

    async def save_analysis(self, data: WebsiteData) -> str:
        record = self._new_record(**data.model_dump(mode="json", by_alias=True))
        return await asyncio.to_thread(self._write, self.analyses_dir, record)

    async def save_redesign(
        self,
        analysis_id: str,
        style: DesignStyle,
        html: str,
        css: str,
        preview: str,
    ) -> str:
        record = self._new_record(
            analysis_id=analysis_id,
            design_style=DesignStyle(style).value,
            html=html,
            css=css,
            preview=preview,
        )
        return await asyncio.to_thread(self._write, self.redesigns_dir, record)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    async def list_analyses(self) -> list[dict[str, Any]]:
        """All saved analyses, newest first."""
        return await asyncio.to_thread(self._list, self.analyses_dir)

    async def get_analysis(self, analysis_id: str) -> dict[str, Any]:
        return await asyncio.to_thread(self._read, self.analyses_dir, analysis_id)

    async def list_redesigns(self, analysis_id: str | None = None) -> list[dict[str, Any]]:
        """Saved redesigns, newest first, optionally for one analysis."""
        records = await asyncio.to_thread(self._list, self.redesigns_dir)
        if analysis_id is not None:
            records = [r for r in records if r.get("analysis_id") == analysis_id]
        return records

    async def get_redesign(self, redesign_id: str) -> dict[str, Any]:
        return await asyncio.to_thread(self._read, self.redesigns_dir, redesign_id)
