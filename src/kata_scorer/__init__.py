"""
kata-scorer computes a composite quality score for a refactoring kata
submission from external analysis tools, normalized against fixed baselines.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
