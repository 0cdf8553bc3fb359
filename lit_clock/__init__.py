"""Literary clock: spoken times found in public-domain books."""

from .config import AppConfig
from .pipeline import LiteraryClockPipeline

__all__ = ["AppConfig", "LiteraryClockPipeline"]
