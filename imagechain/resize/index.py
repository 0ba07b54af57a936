"""SQLite index of generated image variants."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from pydantic import BaseModel, Field


class VariantStats(BaseModel):
    """Totals over all recorded variants."""

    total_count: int = 0
    total_size_bytes: int = 0
    sizes: dict[str, int] = Field(default_factory=dict, description="Variant count per size prefix")


class VariantIndex:
    """Ledger of the variant files ResizeCache has written.

    One row per variant path, so rewriting a variant updates its row. The
    index only backs statistics and clearing; whether a variant is reused
    is decided by the file on disk.
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self.db_path))
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS variants ("
                "path TEXT PRIMARY KEY, size_prefix TEXT NOT NULL, file_size INTEGER NOT NULL)"
            )

    def record(self, path: Path, size_prefix: str) -> None:
        """Remember a variant just written to ``path``."""
        with self._conn:
            self._conn.execute(
                "INSERT INTO variants (path, size_prefix, file_size) VALUES (?, ?, ?) "
                "ON CONFLICT(path) DO UPDATE SET file_size = excluded.file_size",
                (str(path), size_prefix, path.stat().st_size),
            )

    def drain(self) -> list[Path]:
        """Forget all variants and return the paths that were recorded."""
        with self._conn:
            rows = self._conn.execute("SELECT path FROM variants").fetchall()
            self._conn.execute("DELETE FROM variants")
        return [Path(path) for (path,) in rows]

    def get_stats(self) -> VariantStats:
        rows = self._conn.execute(
            "SELECT size_prefix, COUNT(*), SUM(file_size) FROM variants GROUP BY size_prefix"
        ).fetchall()
        return VariantStats(
            total_count=sum(count for _, count, _ in rows),
            total_size_bytes=sum(size for _, _, size in rows),
            sizes={prefix: count for prefix, count, _ in rows},
        )

    def close(self) -> None:
        self._conn.close()
