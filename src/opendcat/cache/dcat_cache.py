"""DCAT Cache — File-based store for the fully harvested catalog.

Building the catalog for a whole index is slow, so it is written once (see
``DcatEngine.build_cache``) and served from disk afterwards. Each write goes
to a ``.temp`` file that is renamed to ``.dcat`` only when complete; older
``.dcat`` files are then purged so the folder holds a single snapshot.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_CACHE_NAME = re.compile(r"cache[^.]*\.dcat", re.IGNORECASE)


class CacheNotFoundError(FileNotFoundError):
    """Raised when no complete cache snapshot is available."""


def default_cache_root() -> Path:
    """``~/dcat/cache``."""
    return Path.home() / "dcat" / "cache"


class DcatCache:
    """Cache of harvested DCAT catalog documents.

    Attributes:
        root: Folder holding the cache files.
    """

    def __init__(self, root: str | Path | None = None) -> None:
        self.root = Path(root) if root and str(root).strip() else default_cache_root()

    def init(self) -> None:
        """Create the cache folder if needed."""
        self.root.mkdir(parents=True, exist_ok=True)

    def write(self, document: dict[str, Any]) -> Path:
        """Store ``document`` as the newest snapshot and purge the older ones.

        Returns:
            Path of the completed ``.dcat`` file.
        """
        self.init()
        stamp = datetime.now().strftime("%Y-%m-%d %H-%M")
        temp = self.root / f"cache-{stamp}.temp"
        with open(temp, "w", encoding="utf-8") as f:
            json.dump(document, f, ensure_ascii=False)

        final = temp.with_suffix(".dcat")
        temp.replace(final)
        logger.info("Wrote DCAT cache %s", final)

        files = self._list_cache_files()
        self._purge_outdated(files, self._find_latest(files))
        return final

    def read(self) -> dict[str, Any]:
        """Load the latest snapshot.

        Raises:
            CacheNotFoundError: If no ``.dcat`` snapshot exists.
        """
        latest = self._find_latest(self._list_cache_files())
        if latest is None:
            raise CacheNotFoundError(f"No recent cache found in {self.root}")
        with open(latest, encoding="utf-8") as f:
            return json.load(f)

    # ── Helpers ──────────────────────────────────────────────────────────

    def _list_cache_files(self) -> list[Path]:
        if not self.root.is_dir():
            return []
        return [p for p in self.root.iterdir() if p.is_file() and _CACHE_NAME.fullmatch(p.name)]

    @staticmethod
    def _find_latest(files: list[Path]) -> Path | None:
        return max(files, key=lambda p: p.stat().st_mtime, default=None)

    @staticmethod
    def _purge_outdated(files: list[Path], latest: Path | None) -> None:
        for f in files:
            if f != latest:
                try:
                    f.unlink()
                except OSError:
                    logger.warning("Could not remove outdated cache file %s", f, exc_info=True)
