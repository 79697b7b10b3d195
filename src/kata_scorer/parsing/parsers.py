import json
import re
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Generic, Protocol, TypeVar

from returns.result import Failure, Result, Success

T = TypeVar("T")


class Parser(Protocol[T]):
    """Protocol for all tool-output parsers."""

    def parse(self, raw_output: str) -> Result[T, str]:
        """Parse raw tool output into type T."""
        ...


def _to_number(cast: Callable[[Any], T], raw: Any, what: str) -> Result[T, str]:
    if isinstance(raw, bool) or raw is None:
        return Failure(f"Expected a number for {what}, got {raw!r}")
    try:
        return Success(cast(raw))
    except (TypeError, ValueError) as e:
        return Failure(f"Could not convert {what}: {e}")


def dig(data: Any, path: Sequence[str]) -> Result[Any, str]:
    """Follows `path` through nested JSON objects."""
    current = data
    for i, key in enumerate(path):
        if not isinstance(current, dict):
            where = ".".join(path[:i]) or "<root>"
            return Failure(f"Expected object at {where}, got {type(current).__name__}")
        if key not in current:
            return Failure(f"Missing key: {'.'.join(path[: i + 1])}")
        current = current[key]
    return Success(current)


class JsonPathParser(Generic[T]):
    """Decodes JSON output and extracts the number found at a key path."""

    def __init__(self, path: Sequence[str], cast: Callable[[Any], T]):
        self.path = tuple(path)
        self.cast = cast

    def parse(self, raw_output: str) -> Result[T, str]:
        try:
            data = json.loads(raw_output)
        except json.JSONDecodeError as e:
            return Failure(f"Invalid JSON: {e}")
        what = ".".join(self.path)
        return dig(data, self.path).bind(lambda raw: _to_number(self.cast, raw, what))


class RegexParser(Generic[T]):
    """Extracts the first capture group of the first match in text output."""

    def __init__(self, pattern: str, cast: Callable[[Any], T]):
        self.pattern = re.compile(pattern)
        self.cast = cast

    def parse(self, raw_output: str) -> Result[T, str]:
        match = self.pattern.search(raw_output)
        if match is None:
            return Failure(f"No match for /{self.pattern.pattern}/")
        return _to_number(self.cast, match.group(1), self.pattern.pattern)


def first_success(attempts: Iterable[Callable[[], Result[T, str]]]) -> Result[T, str]:
    """Runs attempts in order and returns the first `Success`.

    Attempts are evaluated lazily so a later strategy (for instance a second
    tool invocation) only happens when every earlier one failed. When all
    fail, the `Failure` joins every reason.
    """
    reasons: list[str] = []
    for attempt in attempts:
        result = attempt()
        if isinstance(result, Success):
            return result
        reasons.append(str(result.failure()))
    return Failure("; ".join(reasons) or "no parse strategy configured")


__all__ = ["JsonPathParser", "Parser", "RegexParser", "dig", "first_success"]
