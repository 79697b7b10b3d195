"""
Main entry point for the kata scorer CLI.

This module serves as the entry point when running the package as a module:
    python -m kata_scorer

or after installation:
    kata-score
"""

from .cli import main

if __name__ == "__main__":
    main()
