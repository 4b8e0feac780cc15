# src/fcom/models.py
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Optional, Tuple

from fcom.config import DEFAULT_IGNORED_FOLDERS


@dataclass(frozen=True)
class FilterConfig:
    """Inclusion rules shared read-only by the walker."""
    allowed_extensions: FrozenSet[str] = frozenset()
    ignored_folder_names: FrozenSet[str] = frozenset(DEFAULT_IGNORED_FOLDERS)
    # Absolute paths never emitted (e.g. the output file itself)
    excluded_paths: FrozenSet[Path] = frozenset()


@dataclass(frozen=True)
class FileEntry:
    path: Path
    rel_path: str
    depth: int
    is_directory: bool

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class FileContext:
    """Immutable data class holding a loaded text file."""
    path: Path
    rel_path: str
    content: str
    line_count: int
    modified: str
    token_count: int


@dataclass(frozen=True)
class TemplatePair:
    output_template: str
    file_template: str


@dataclass(frozen=True)
class RenderOptions:
    add_line_numbers: bool = False
    mode: str = "xml"
    templates: Optional[TemplatePair] = None


@dataclass(frozen=True)
class RenderContext:
    root_path: Path
    entries: Tuple[FileEntry, ...]
    options: RenderOptions = field(default_factory=RenderOptions)

    @property
    def files(self) -> Tuple[FileEntry, ...]:
        return tuple(e for e in self.entries if not e.is_directory)
