"""Feed file sink."""

import asyncio
from pathlib import Path


class FileFeedSink:
    """Writes feed byte streams under an output root.

    Creates parent directories if they don't exist and overwrites existing
    files.
    """

    def __init__(self, output_root: Path) -> None:
        self.output_root = Path(output_root)

    async def write(self, relative_path: Path, content: bytes) -> Path:
        path = self.output_root / relative_path
        await asyncio.to_thread(self._write, path, content)
        return path

    @staticmethod
    def _write(path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
