"""Configuration loading for the literary clock."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


DEFAULT_BOOKSHELVES = [
    "Romantic Fiction",
    "Astounding Stories",
    "Mystery Fiction",
    "Erotic Fiction",
    "Mythology",
    "Adventure",
    "Humor",
    "Bestsellers, American, 1895-1923",
    "Short Stories",
    "Harvard Classics",
    "Science Fiction",
    "Gothic Fiction",
    "Fantasy",
]


def _resolve_path(raw_path: str, base_dir: Path) -> str:
    path = Path(raw_path).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)


@dataclass
class PathsConfig:
    """Filesystem locations of the three persisted artifacts."""

    catalog_path: str = "data/gutenbergindex.db"
    fts_path: str = "data/fts.db"
    clock_path: str = "data/lit_clock.db"


@dataclass
class CorpusConfig:
    """Which books are indexed and which paragraphs survive."""

    language: str = "en"
    bookshelves: List[str] = field(default_factory=lambda: list(DEFAULT_BOOKSHELVES))
    min_paragraph_chars: int = 64
    max_books: Optional[int] = None


@dataclass
class FetchConfig:
    """HTTP settings for book text downloads."""

    timeout_seconds: float = 30.0
    user_agent: str = "lit-clock/0.1"


@dataclass
class IndexConfig:
    """FTS5 snippet settings."""

    snippet_tokens: int = 64
    highlight_open: str = "<b>"
    highlight_close: str = "</b>"
    snippet_ellipsis: str = ""


@dataclass
class AppConfig:
    """Top-level app configuration."""

    paths: PathsConfig = field(default_factory=PathsConfig)
    corpus: CorpusConfig = field(default_factory=CorpusConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    index: IndexConfig = field(default_factory=IndexConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> "AppConfig":
        """Build config from a dictionary."""
        base = Path.cwd() if base_dir is None else base_dir

        defaults = PathsConfig()
        paths_data = data.get("paths", {})
        paths = PathsConfig(
            catalog_path=_resolve_path(paths_data.get("catalog_path", defaults.catalog_path), base),
            fts_path=_resolve_path(paths_data.get("fts_path", defaults.fts_path), base),
            clock_path=_resolve_path(paths_data.get("clock_path", defaults.clock_path), base),
        )

        corpus = CorpusConfig(**data.get("corpus", {}))
        fetch = FetchConfig(**data.get("fetch", {}))
        index = IndexConfig(**data.get("index", {}))
        if not 1 <= index.snippet_tokens <= 64:
            raise ValueError("index.snippet_tokens must be between 1 and 64")

        return cls(paths=paths, corpus=corpus, fetch=fetch, index=index)

    @classmethod
    def from_yaml(cls, path: str) -> "AppConfig":
        """Load config from YAML."""
        config_path = Path(path).resolve()
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        return cls.from_dict(data, base_dir=config_path.parent)
