# src/fcom/core/tree.py
from pathlib import Path
from typing import Iterable, List, Sequence

from fcom.models import FileEntry


def _last_sibling_flags(entries: Sequence[FileEntry]) -> List[bool]:
    """For each pre-order entry, whether no later sibling follows it."""
    flags = [False] * len(entries)
    open_depths: set = set()
    for i in range(len(entries) - 1, -1, -1):
        depth = entries[i].depth
        flags[i] = depth not in open_depths
        open_depths = {d for d in open_depths if d < depth}
        open_depths.add(depth)
    return flags


def root_label(root: Path) -> str:
    """Display name of the root; a filesystem root such as '/' has no base name."""
    return root.name or str(root)


def render_tree(entries: Iterable[FileEntry], root_name: str) -> str:
    """Generates a string representation of the folder tree."""
    entries = list(entries)
    lines = [root_name if root_name.endswith("/") else f"{root_name}/"]
    # ancestors[k] is True when the ancestor at depth k+1 was the last of its siblings
    ancestors: List[bool] = []

    for entry, is_last in zip(entries, _last_sibling_flags(entries)):
        del ancestors[entry.depth - 1:]
        prefix = "".join("    " if done else "│   " for done in ancestors)
        connector = "└── " if is_last else "├── "
        name = f"{entry.name}/" if entry.is_directory else entry.name
        lines.append(f"{prefix}{connector}{name}")
        ancestors.append(is_last)

    return "\n".join(lines) + "\n"


def render_list(entries: Iterable[FileEntry]) -> str:
    """One root-relative path per line, files only, in traversal order."""
    paths = [e.rel_path for e in entries if not e.is_directory]
    if not paths:
        return ""
    return "\n".join(paths) + "\n"
