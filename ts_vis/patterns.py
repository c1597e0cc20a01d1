"""Glob patterns used to exclude files from traversal and to filter exported graphs."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ts_vis.errors import PatternError

_SEPARATORS = ("/", "\\")


@dataclass(frozen=True)
class Pattern:
    """A compiled glob tested against a path's string form.

    ``*`` and ``?`` also match path separators, so ``*node_modules/*`` matches
    any file below any ``node_modules`` directory. A ``**`` component matches
    zero or more directories: ``src/**/*.ts`` matches ``src/a.ts``.
    Matching is case-sensitive.
    """
    glob: str
    _regex: re.Pattern = field(repr=False, compare=False)

    @classmethod
    def compile(cls, glob: str) -> Pattern:
        _validate(glob)
        return cls(glob=glob, _regex=re.compile(_translate(glob)))

    def matches(self, path: Path | str) -> bool:
        return self._regex.match(str(path)) is not None

    def __str__(self) -> str:
        return self.glob


def compile_patterns(globs: Iterable[str]) -> list[Pattern]:
    """Compile every glob, failing on the first invalid one."""
    return [Pattern.compile(g) for g in globs]


def matches_any(patterns: Iterable[Pattern], path: Path | str) -> bool:
    text = str(path)
    return any(p.matches(text) for p in patterns)


def _validate(glob: str) -> None:
    """Reject globs that a strict glob engine would refuse.

    - character classes must be closed: ``[abc`` is an error
    - ``**`` must be a whole path component: ``a**`` or ``***`` are errors
    """
    i = 0
    n = len(glob)
    while i < n:
        c = glob[i]
        if c == "[":
            j = i + 1
            if j < n and glob[j] == "!":
                j += 1
            # A leading ']' is a literal member of the class
            if j < n and glob[j] == "]":
                j += 1
            while j < n and glob[j] != "]":
                j += 1
            if j >= n:
                raise PatternError(glob, f"unclosed character class at index {i}")
            i = j + 1
            continue
        if c == "*":
            j = i
            while j < n and glob[j] == "*":
                j += 1
            run = j - i
            if run > 2:
                raise PatternError(glob, f"too many consecutive wildcards at index {i}")
            if run == 2:
                before_ok = i == 0 or glob[i - 1] in _SEPARATORS
                after_ok = j == n or glob[j] in _SEPARATORS
                if not (before_ok and after_ok):
                    raise PatternError(
                        glob, f"recursive wildcard must form a single path component at index {i}",
                    )
            i = j
            continue
        i += 1


def _translate(glob: str) -> str:
    """Translate a validated glob into an anchored regular expression."""
    out: list[str] = []
    i = 0
    n = len(glob)
    while i < n:
        c = glob[i]
        if c == "*":
            if glob.startswith("**", i):
                i += 2
                if i < n:
                    # `**/` may stand for no directory at all
                    out.append(r"(?:.*[/\\])?")
                    i += 1
                else:
                    out.append(".*")
                continue
            out.append(".*")
        elif c == "?":
            out.append(".")
        elif c == "[":
            j = i + 1
            if j < n and glob[j] == "!":
                j += 1
            if j < n and glob[j] == "]":
                j += 1
            end = glob.index("]", j)
            stuff = glob[i + 1:end].replace("\\", r"\\").replace("[", r"\[")
            if stuff.startswith("!"):
                stuff = "^" + stuff[1:]
            elif stuff.startswith("^"):
                stuff = "\\" + stuff
            out.append(f"[{stuff}]")
            i = end
        else:
            out.append(re.escape(c))
        i += 1
    return "(?s:" + "".join(out) + r")\Z"
