"""Progress observers for the long-running build phases."""

from __future__ import annotations

from typing import Optional

from tqdm import tqdm


class ProgressReporter:
    """No-op observer; subclasses render progress somewhere."""

    def start(self, label: str, total: int) -> None:
        pass

    def advance(self, n: int = 1) -> None:
        pass

    def finish(self) -> None:
        pass


class TqdmProgress(ProgressReporter):
    """Terminal progress bar."""

    def __init__(self, **tqdm_kwargs):
        self.tqdm_kwargs = tqdm_kwargs
        self.bar: Optional[tqdm] = None

    def start(self, label: str, total: int) -> None:
        self.finish()
        self.bar = tqdm(total=total, desc=label, unit="step", **self.tqdm_kwargs)

    def advance(self, n: int = 1) -> None:
        if self.bar is not None:
            self.bar.update(n)

    def finish(self) -> None:
        if self.bar is not None:
            self.bar.close()
            self.bar = None
