from pathlib import Path


class ScorerError(Exception):
    """Base class for errors that abort a scoring run."""


class ProjectNotFoundError(ScorerError):
    """The directory to score does not exist or is not a directory."""

    def __init__(self, path: Path):
        super().__init__(f"Project directory not found: {path}")
        self.path = path
