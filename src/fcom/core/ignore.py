# src/fcom/core/ignore.py
import sys
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional

import pathspec

from fcom.models import FilterConfig


def normalize_extensions(extensions: Iterable[str]) -> FrozenSet[str]:
    """
    Lower-cases extensions and strips a leading dot, so 'PY', '.py' and 'py'
    are the same entry. '*' anywhere means "no restriction" (empty set).
    """
    cleaned = set()
    for ext in extensions:
        ext = ext.strip()
        if not ext:
            continue
        if ext == "*":
            return frozenset()
        cleaned.add(ext.lstrip(".").lower())
    return frozenset(cleaned)


def split_csv(raw: Optional[str]) -> List[str]:
    """Splits a comma-separated CLI value, dropping blanks."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def load_ignore_spec(root_dir: Path) -> Optional[pathspec.GitIgnoreSpec]:
    """
    Loads rules from the root .gitignore and creates a PathSpec object.
    Returns None when there is nothing to match against.
    """
    lines: List[str] = []
    gitignore_file = root_dir / ".gitignore"

    if gitignore_file.is_file():
        try:
            with open(gitignore_file, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            print(f"  > [Warning] Could not read {gitignore_file.name}: {e}", file=sys.stderr)

    if not any(line.strip() and not line.lstrip().startswith("#") for line in lines):
        return None

    return pathspec.GitIgnoreSpec.from_lines(lines)


class PathFilter:
    """Decides whether a path discovered under ``root_dir`` is kept."""

    def __init__(self, root_dir: Path, config: FilterConfig, ignore_spec: Optional[pathspec.GitIgnoreSpec] = None):
        self.root_dir = root_dir
        self.config = config
        self.ignore_spec = ignore_spec

    def _matches_extension(self, name: str) -> bool:
        lowered = name.lower()
        return any(
            lowered == ext or lowered.endswith("." + ext)
            for ext in self.config.allowed_extensions
        )

    def _matches_ignore_spec(self, path: Path, is_directory: bool) -> bool:
        if self.ignore_spec is None:
            return False
        try:
            rel = path.relative_to(self.root_dir).as_posix()
        except ValueError:
            return False
        # Trailing slash lets "build/" style rules hit directories only
        if is_directory:
            rel += "/"
        return self.ignore_spec.match_file(rel)

    def should_include(self, path: Path, is_directory: bool) -> bool:
        if path in self.config.excluded_paths:
            return False

        if is_directory:
            if path.name in self.config.ignored_folder_names:
                return False
            return not self._matches_ignore_spec(path, is_directory=True)

        if self._matches_ignore_spec(path, is_directory=False):
            return False

        if self.config.allowed_extensions and not self._matches_extension(path.name):
            return False

        return True
