"""tsconfig.json loading: JSONC parsing, relative `extends` chains, path aliases."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")
_MAX_EXTENDS_DEPTH = 8


@dataclass
class TsconfigPaths:
    """Merged ``baseUrl`` and ``paths`` of a tsconfig and its parents."""
    config_file: Path
    base_url: Path | None = None
    paths: dict[str, list[str]] = field(default_factory=dict)
    paths_base: Path | None = None

    def candidates(self, specifier: str) -> list[Path]:
        """Substituted targets for the longest ``paths`` key matching ``specifier``."""
        best_key: str | None = None
        best_capture = ""
        best_prefix = -1
        for key in self.paths:
            if "*" not in key:
                if key == specifier:
                    best_key, best_capture = key, ""
                    break
                continue
            prefix, _, suffix = key.partition("*")
            if (
                specifier.startswith(prefix)
                and specifier.endswith(suffix)
                and len(specifier) >= len(prefix) + len(suffix)
                and len(prefix) > best_prefix
            ):
                best_key = key
                best_prefix = len(prefix)
                best_capture = specifier[len(prefix):len(specifier) - len(suffix)]

        if best_key is None:
            return []
        base = self.paths_base or self.config_file.parent
        return [base / target.replace("*", best_capture) for target in self.paths[best_key]]


def strip_jsonc(text: str) -> str:
    """Remove // and /* */ comments outside of strings, then trailing commas."""
    out: list[str] = []
    i = 0
    n = len(text)
    in_string = False
    while i < n:
        c = text[i]
        nxt = text[i + 1] if i + 1 < n else ""
        if in_string:
            out.append(c)
            if c == "\\" and nxt:
                out.append(nxt)
                i += 2
                continue
            if c == '"':
                in_string = False
            i += 1
            continue
        if c == '"':
            in_string = True
            out.append(c)
            i += 1
        elif c == "/" and nxt == "/":
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif c == "/" and nxt == "*":
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
        else:
            out.append(c)
            i += 1
    return _TRAILING_COMMA_RE.sub(r"\1", "".join(out))


def load_jsonc(path: Path) -> dict | None:
    try:
        raw = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
    cleaned = strip_jsonc(raw).strip()
    if not cleaned:
        return None
    try:
        obj = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning("Ignoring malformed %s: %s", path, e)
        return None
    return obj if isinstance(obj, dict) else None


def load_tsconfig(config_file: Path) -> TsconfigPaths | None:
    """Load path-mapping options, following relative ``extends`` parents.

    Package-based ``extends`` (``@tsconfig/node18``) are not followed.
    Options from the child override those of its parents.
    """
    chain: list[tuple[Path, dict]] = []
    visited: set[Path] = set()
    current: Path | None = config_file
    while current is not None and len(chain) < _MAX_EXTENDS_DEPTH:
        current = current.resolve()
        if current in visited:
            break
        visited.add(current)
        obj = load_jsonc(current)
        if obj is None:
            break
        chain.append((current, obj))
        current = _extends_path(current, obj.get("extends"))

    if not chain:
        return None

    result = TsconfigPaths(config_file=chain[0][0])
    for cfg_path, obj in reversed(chain):
        options = obj.get("compilerOptions")
        if not isinstance(options, dict):
            continue
        base_url = options.get("baseUrl")
        if isinstance(base_url, str) and base_url.strip():
            result.base_url = (cfg_path.parent / base_url.strip()).resolve()
        paths = options.get("paths")
        if isinstance(paths, dict):
            result.paths = {
                k: [t for t in v if isinstance(t, str)]
                for k, v in paths.items()
                if isinstance(k, str) and isinstance(v, list)
            }
            result.paths_base = cfg_path.parent

    if result.base_url is not None:
        result.paths_base = result.base_url
    return result


def _extends_path(current: Path, value) -> Path | None:
    if not isinstance(value, str) or not value.startswith(("./", "../", "/")):
        return None
    target = Path(value)
    if not target.suffix:
        target = target.with_suffix(".json")
    target = target if target.is_absolute() else current.parent / target
    return target if target.is_file() else None
