"""Progress tracking context for imgsort phases."""

from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.progress import Progress, TaskID


class ProgressContext:
    """Progress bar handle that is safe to use when no bar is shown."""

    def __init__(self, progress: Optional[Progress] = None, task: Optional[TaskID] = None):
        self.progress = progress
        self.task = task

    @property
    def is_active(self) -> bool:
        return self.progress is not None and self.task is not None

    def update(self, description: str) -> None:
        if self.is_active:
            self.progress.update(self.task, description=description)

    def advance(self, steps: int = 1) -> None:
        if self.is_active:
            self.progress.advance(self.task, steps)


@contextmanager
def track(console: Console, description: str, total: int,
          enabled: bool = True) -> Iterator[ProgressContext]:
    """Show a transient progress bar for the duration of the block."""
    if not enabled or total == 0:
        yield ProgressContext()
        return

    with Progress(console=console, transient=True) as progress:
        task = progress.add_task(description, total=total)
        yield ProgressContext(progress, task)
