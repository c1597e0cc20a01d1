"""Extension-to-grammar mapping for the source parser."""

from __future__ import annotations

# Maps file extension -> tree-sitter grammar name
EXT_TO_GRAMMAR: dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}
