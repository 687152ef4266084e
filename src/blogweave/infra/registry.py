"""Filesystem-backed route registry.

Data blobs are written as JSON files under the data directory. Routes are
collected in memory and written to ``routes.json`` only on :meth:`publish`,
so a failed emission phase leaves no route manifest behind.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from blogweave.core.types import RouteConfig

logger = logging.getLogger(__name__)

ROUTES_MANIFEST = "routes.json"
DATA_ALIAS = "~blog"


class FileSystemRouteRegistry:
    """Implements the RouteRegistry port on a local directory."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)
        self.routes: list[RouteConfig] = []

    async def create_data(self, name: str, data: Any) -> Path:
        """Write ``data`` as pretty-printed JSON and return its path."""
        path = self.data_dir / name
        payload = json.dumps(data, indent=2, ensure_ascii=False)
        await asyncio.to_thread(self._write, path, payload)
        return path

    @staticmethod
    def _write(path: Path, payload: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding="utf-8")

    def aliased_source(self, data_path: Path) -> str:
        return f"{DATA_ALIAS}/{Path(data_path).relative_to(self.data_dir).as_posix()}"

    def add_route(self, route: RouteConfig) -> None:
        self.routes.append(route)

    async def publish(self) -> Path:
        """Write the route manifest, sorted by path for stable output."""
        manifest = self.data_dir / ROUTES_MANIFEST
        routes = sorted(self.routes, key=lambda route: route.path)
        payload = json.dumps([route.model_dump(mode="json") for route in routes], indent=2)
        await asyncio.to_thread(self._write, manifest, payload)
        logger.info("Published %d routes to %s", len(routes), manifest)
        return manifest
