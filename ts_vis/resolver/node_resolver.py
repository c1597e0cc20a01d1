"""Node-style module resolution with tsconfig path aliases."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from ts_vis.errors import ResolveError
from ts_vis.models import ResolverOptions
from ts_vis.resolver.tsconfig import TsconfigPaths, load_tsconfig

logger = logging.getLogger(__name__)

_CONDITIONS = ("import", "require", "node", "default")


class ModuleResolver:
    """Resolves a specifier seen in ``directory`` to an absolute file path.

    Lookup order: tsconfig ``paths``, then relative/absolute paths, then (for
    bare specifiers) a relative attempt when ``prefer_relative`` is set,
    ``baseUrl``, and finally ``node_modules`` directories up the tree.
    """

    def __init__(self, options: ResolverOptions | None = None):
        self.options = options or ResolverOptions()
        self.tsconfig: TsconfigPaths | None = None
        if self.options.tsconfig is not None and self.options.tsconfig.is_file():
            self.tsconfig = load_tsconfig(self.options.tsconfig)
        self._package_cache: dict[Path, dict | None] = {}

    def resolve(self, directory: Path, specifier: str) -> Path:
        if not specifier:
            raise ResolveError(specifier, directory, "empty specifier")
        if specifier.startswith("node:"):
            raise ResolveError(specifier, directory, "built-in module")

        # Query strings never name part of a file
        request = specifier.split("?", 1)[0]
        try:
            if _is_relative(request) or Path(request).is_absolute():
                found = self._load_as_file_or_directory(Path(os.path.normpath(directory / request)))
            else:
                found = self._resolve_bare(directory, request)
        except OSError as e:
            raise ResolveError(specifier, directory, e.strerror or str(e)) from e

        if found is None:
            raise ResolveError(specifier, directory)
        return found.resolve()

    def _resolve_bare(self, directory: Path, request: str) -> Path | None:
        if self.tsconfig is not None:
            for candidate in self.tsconfig.candidates(request):
                found = self._load_as_file_or_directory(candidate)
                if found is not None:
                    return found

        if self.options.prefer_relative:
            found = self._load_as_file_or_directory(directory / request)
            if found is not None:
                return found

        if self.tsconfig is not None and self.tsconfig.base_url is not None:
            found = self._load_as_file_or_directory(self.tsconfig.base_url / request)
            if found is not None:
                return found

        return self._load_node_modules(directory, request)

    def _load_as_file_or_directory(self, path: Path) -> Path | None:
        return self._load_as_file(path) or self._load_as_directory(path)

    def _load_as_file(self, path: Path) -> Path | None:
        if path.is_file():
            return path
        if not path.name:
            return None
        for ext in self.options.extensions:
            candidate = path.with_name(path.name + ext)
            if candidate.is_file():
                return candidate
        return None

    def _load_as_directory(self, path: Path) -> Path | None:
        if not path.is_dir():
            return None
        package = self._read_package(path)
        if package is not None:
            main = package.get("main")
            if isinstance(main, str) and main:
                target = path / main
                found = self._load_as_file(target) or self._load_index(target)
                if found is not None:
                    return found
        return self._load_index(path)

    def _load_index(self, path: Path) -> Path | None:
        if not path.is_dir():
            return None
        for ext in self.options.extensions:
            candidate = path / f"index{ext}"
            if candidate.is_file():
                return candidate
        return None

    def _load_node_modules(self, directory: Path, request: str) -> Path | None:
        name, subpath = _split_package(request)
        for base in (directory, *directory.parents):
            if base.name == "node_modules":
                continue
            package_dir = base / "node_modules" / name
            if not package_dir.is_dir():
                continue
            package = self._read_package(package_dir)
            if package is not None and "exports" in package:
                found = self._load_exports(package_dir, package["exports"], subpath)
                if found is not None:
                    return found
                logger.debug("%s does not export %r", package_dir, subpath or ".")
                continue
            target = package_dir / subpath if subpath else package_dir
            found = self._load_as_file_or_directory(target)
            if found is not None:
                return found
        return None

    def _load_exports(self, package_dir: Path, exports, subpath: str) -> Path | None:
        key = f"./{subpath}" if subpath else "."
        if isinstance(exports, (str, list)) or (
            isinstance(exports, dict) and exports and not any(k.startswith(".") for k in exports)
        ):
            # Sugar for {".": exports}
            exports = {".": exports}
        if not isinstance(exports, dict):
            return None

        if key in exports:
            target = _pick_target(exports[key])
            return self._exported_file(package_dir, target)

        best: tuple[str, str] | None = None
        for pattern in exports:
            if "*" not in pattern:
                continue
            prefix, _, suffix = pattern.partition("*")
            if key.startswith(prefix) and key.endswith(suffix) and len(key) >= len(prefix) + len(suffix):
                if best is None or len(prefix) > len(best[0].partition("*")[0]):
                    best = (pattern, key[len(prefix):len(key) - len(suffix)])
        if best is None:
            return None
        target = _pick_target(exports[best[0]])
        if target is None:
            return None
        return self._exported_file(package_dir, target.replace("*", best[1]))

    def _exported_file(self, package_dir: Path, target: str | None) -> Path | None:
        if not target:
            return None
        candidate = package_dir / target
        return candidate if candidate.is_file() else None

    def _read_package(self, directory: Path) -> dict | None:
        if directory in self._package_cache:
            return self._package_cache[directory]
        manifest = directory / "package.json"
        package = None
        if manifest.is_file():
            try:
                obj = json.loads(manifest.read_text(encoding="utf-8"))
                package = obj if isinstance(obj, dict) else None
            except (OSError, ValueError) as e:
                logger.warning("Ignoring unreadable %s: %s", manifest, e)
        self._package_cache[directory] = package
        return package


def _is_relative(request: str) -> bool:
    return request in (".", "..") or request.startswith(("./", "../"))


def _split_package(request: str) -> tuple[str, str]:
    """``@scope/pkg/a/b`` -> (``@scope/pkg``, ``a/b``)."""
    parts = request.split("/")
    if request.startswith("@") and len(parts) > 1:
        return "/".join(parts[:2]), "/".join(parts[2:])
    return parts[0], "/".join(parts[1:])


def _pick_target(value) -> str | None:
    """Select a target from an exports value using the supported conditions."""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        for item in value:
            target = _pick_target(item)
            if target is not None:
                return target
        return None
    if isinstance(value, dict):
        for condition, nested in value.items():
            if condition in _CONDITIONS:
                target = _pick_target(nested)
                if target is not None:
                    return target
    return None
