"""Process and filesystem access for the scored project."""

from .files import ProjectFiles
from .shell import CommandExecutor

__all__ = ["CommandExecutor", "ProjectFiles"]
