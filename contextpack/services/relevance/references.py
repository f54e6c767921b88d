"""
Import and reference extraction.

Finds the lines of a source file that declare imports/includes, and the
module identifiers they reference, across common languages.
"""

import re

# Patterns for common import statements; group 1 is the referenced module
IMPORT_PATTERNS = [
    # Python: from x import y / import x
    re.compile(r"^\s*from\s+([.\w]+)\s+import\b"),
    re.compile(r"^\s*import\s+([.\w]+)(?:\s+as\s+\w+)?\s*(?:,|$)"),
    # JS/TS: import x from 'y' / import 'y' / export ... from 'y'
    re.compile(r"^\s*(?:import|export)\s+(?:.*?\s+from\s+)?[\"']([^\"']+)[\"']"),
    # CommonJS / dynamic import
    re.compile(r"\brequire\s*\(\s*[\"']([^\"']+)[\"']\s*\)"),
    re.compile(r"\bimport\s*\(\s*[\"']([^\"']+)[\"']\s*\)"),
    # Go single-line: import "x" / import alias "x"
    re.compile(r"^\s*import\s+(?:\w+\s+)?\"([^\"]+)\""),
    # Rust: use a::b / mod x
    re.compile(r"^\s*(?:pub\s+)?use\s+([:\w]+)"),
    re.compile(r"^\s*(?:pub\s+)?mod\s+(\w+)\s*;"),
    # Java / Kotlin / Scala
    re.compile(r"^\s*import\s+(?:static\s+)?([\w.]+\*?)\s*;?\s*$"),
    # C / C++
    re.compile(r"^\s*#\s*include\s+[<\"]([^>\"]+)[>\"]"),
    # Ruby
    re.compile(r"^\s*require(?:_relative)?\s+[\"']([^\"']+)[\"']"),
    # PHP
    re.compile(r"^\s*use\s+([\w\\]+)\s*;"),
    # CSS / SCSS
    re.compile(r"^\s*@(?:import|use)\s+[\"']([^\"']+)[\"']"),
]

# Go import block: import ( ... )
_GO_BLOCK_START = re.compile(r"^\s*import\s*\(\s*$")
_GO_BLOCK_ENTRY = re.compile(r"^\s*(?:[\w.]+\s+)?\"([^\"]+)\"")


def extract_import_lines(content: str) -> list[str]:
    """
    Return the import/reference lines of a file, stripped.

    Lines inside a Go `import ( ... )` block count individually.
    """
    lines: list[str] = []
    in_block = False

    for raw in content.splitlines():
        line = raw.strip()
        if in_block:
            if line.startswith(")"):
                in_block = False
            elif line and not line.startswith("//"):
                lines.append(line)
            continue

        if _GO_BLOCK_START.match(raw):
            in_block = True
            continue

        if any(pattern.search(raw) for pattern in IMPORT_PATTERNS):
            lines.append(line)

    return lines


def extract_references(content: str) -> list[str]:
    """
    Return the module identifiers referenced by import statements.

    Order follows first appearance; duplicates are dropped.
    """
    refs: list[str] = []
    in_block = False

    for raw in content.splitlines():
        if in_block:
            if raw.strip().startswith(")"):
                in_block = False
                continue
            match = _GO_BLOCK_ENTRY.match(raw)
            if match:
                refs.append(match.group(1))
            continue

        if _GO_BLOCK_START.match(raw):
            in_block = True
            continue

        for pattern in IMPORT_PATTERNS:
            match = pattern.search(raw)
            if match:
                refs.append(match.group(1))
                break

    return list(dict.fromkeys(refs))
