# src/fcom/core/scanner.py
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from fcom.config import BINARY_SNIFF_SIZE, TIMESTAMP_FORMAT
from fcom.core.ignore import PathFilter
from fcom.models import FileContext, FileEntry
from fcom.utils.tokenizer import estimate_tokens


def _warn(message: str) -> None:
    print(f"  > [Warning] {message}", file=sys.stderr)


def _sort_key(item: Tuple[Path, bool]):
    path, is_directory = item
    # Directories first, then case-insensitive name, exact name as tie-breaker
    return (not is_directory, path.name.casefold(), path.name)


class ProjectScanner:
    def __init__(self, root_dir: Path, path_filter: PathFilter):
        self.root_dir = root_dir
        self.path_filter = path_filter

    def _validate_root(self) -> None:
        if not self.root_dir.exists():
            raise FileNotFoundError(f"Folder '{self.root_dir}' does not exist")
        if not self.root_dir.is_dir():
            raise NotADirectoryError(f"'{self.root_dir}' is not a directory")

    def _list_children(self, directory: Path) -> List[Tuple[Path, bool]]:
        """
        Returns the immediate children of ``directory`` that pass the filter,
        in traversal order. An unreadable directory yields nothing.
        """
        children = []
        try:
            with os.scandir(directory) as it:
                for entry in it:
                    try:
                        is_directory = entry.is_dir()
                    except OSError:
                        is_directory = False
                    children.append((Path(entry.path), is_directory))
        except OSError as e:
            _warn(f"Skipping directory {directory} ({e.strerror or e})")
            return []

        children = [c for c in children if self.path_filter.should_include(c[0], c[1])]
        children.sort(key=_sort_key)
        return children

    def walk(self) -> Iterator[FileEntry]:
        """
        Pre-order, depth-first traversal of the root directory.

        Raises immediately when the root is missing or not a directory; the
        returned iterator can be consumed once, call walk() again to restart.
        """
        self._validate_root()
        return self._iter_entries()

    def _iter_entries(self) -> Iterator[FileEntry]:
        # Explicit work stack, pushed in reverse so pops come out in order
        stack: List[Tuple[Path, bool, int]] = [
            (path, is_dir, 1) for path, is_dir in reversed(self._list_children(self.root_dir))
        ]

        while stack:
            path, is_directory, depth = stack.pop()
            yield FileEntry(
                path=path,
                rel_path=path.relative_to(self.root_dir).as_posix(),
                depth=depth,
                is_directory=is_directory,
            )

            # Symlinked directories are listed but never followed
            if is_directory and not path.is_symlink():
                children = self._list_children(path)
                stack.extend((p, d, depth + 1) for p, d in reversed(children))


def is_binary_file(path: Path) -> bool:
    """
    Reads the first bytes to check for null bytes.
    Returns True if likely binary, False if likely text.
    """
    with path.open("rb") as f:
        chunk = f.read(BINARY_SNIFF_SIZE)
    return b"\0" in chunk


def split_lines(content: str) -> List[str]:
    """Splits on "\n" only; a trailing newline ends the last line rather than starting a new one."""
    if not content:
        return []
    lines = content.split("\n")
    if content.endswith("\n"):
        lines.pop()
    return lines


def count_lines(content: str) -> int:
    return len(split_lines(content))


def load_file(entry: FileEntry) -> Optional[FileContext]:
    """Reads a text file into a FileContext, or returns None if it has to be skipped."""
    path = entry.path
    try:
        if is_binary_file(path):
            _warn(f"Skipping {entry.rel_path} (binary file)")
            return None
        # newline="" keeps CRLF and lone CR exactly as stored
        with open(path, "r", encoding="utf-8", newline="") as f:
            content = f.read()
        modified = datetime.fromtimestamp(path.stat().st_mtime).strftime(TIMESTAMP_FORMAT)
    except UnicodeDecodeError:
        _warn(f"Skipping {entry.rel_path} (not valid UTF-8 text)")
        return None
    except OSError as e:
        _warn(f"Skipping {entry.rel_path} (read error: {e})")
        return None

    return FileContext(
        path=path,
        rel_path=entry.rel_path,
        content=content,
        line_count=count_lines(content),
        modified=modified,
        token_count=estimate_tokens(content),
    )


def load_files(entries: Iterable[FileEntry]) -> List[FileContext]:
    """Loads every file entry in order, dropping the ones that cannot be read as text."""
    loaded = []
    for entry in entries:
        if entry.is_directory:
            continue
        fc = load_file(entry)
        if fc is not None:
            loaded.append(fc)
    return loaded
