"""
Parser strategies for external tool output.

Each collector tries an ordered chain of strategies; the first success wins and
exhausting the chain triggers the collector's documented fallback value.
"""

from .parsers import JsonPathParser, Parser, RegexParser, dig, first_success

__all__ = ["JsonPathParser", "Parser", "RegexParser", "dig", "first_success"]
