# src/fcom/core/template.py
import re
import sys
from pathlib import Path
from typing import Iterable, Mapping

from fcom.config import ConfigError

PLACEHOLDER_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


class Template:
    """
    Literal ``{name}`` substitution.

    All placeholders are replaced in a single pass, so text coming from a
    substituted value is never expanded again. Placeholders without a value
    are left in place.
    """

    def __init__(self, text: str, source: str = "<string>"):
        self.text = text
        self.source = source

    @classmethod
    def from_file(cls, template_file: Path) -> "Template":
        try:
            text = Path(template_file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Unable to read template file '{template_file}': {e}") from e
        return cls(text, source=str(template_file))

    @property
    def placeholders(self) -> set:
        return set(PLACEHOLDER_RE.findall(self.text))

    def check_placeholders(self, required: Iterable[str]) -> bool:
        """Warns about required placeholders the template never mentions."""
        missing = sorted(set(required) - self.placeholders)
        for name in missing:
            print(f"  > [Warning] Template {self.source} has no {{{name}}} placeholder", file=sys.stderr)
        return not missing

    def render(self, fields: Mapping[str, str]) -> str:
        return PLACEHOLDER_RE.sub(lambda m: fields.get(m.group(1), m.group(0)), self.text)
