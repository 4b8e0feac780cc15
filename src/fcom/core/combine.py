# src/fcom/core/combine.py
"""
Combine renderer: embeds the contents of every included file into one
document, either as XML, as Markdown, or through a user-supplied pair of
templates.
"""
import re
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence
from xml.sax.saxutils import escape

from fcom.config import FENCE_LANGUAGES, MODES, ConfigError
from fcom.core.scanner import load_files, split_lines
from fcom.core.template import Template
from fcom.core.tree import render_tree, root_label
from fcom.models import FileContext, RenderContext, TemplatePair

XML_OUTPUT_TEMPLATE = """<files>
<file_overview>
Total files: {total_files}
Folder Structure:
{tree}
Files included:
{file_list}
</file_overview>
{files}</files>
"""

XML_FILE_TEMPLATE = """<file path="{path}" lines="{lines}" modified="{modified}">
{content}
</file>
"""

MARKDOWN_OUTPUT_TEMPLATE = """# File Overview

- **Total files:** {total_files}

## Folder Structure

{tree}

## Files Included

{file_list}

## Files Contents

---

{files}"""

MARKDOWN_FILE_TEMPLATE = """### {name}

- **Path:** `{path}`
- **Lines:** {lines}
- **Modified:** {modified}

{fence}{language}
{content}
{fence}

---

"""

OUTPUT_REQUIRED = ("files",)
FILE_REQUIRED = ("path", "content")

LINE_NUMBER_SEPARATOR = "| "

_BACKTICK_RUN = re.compile(r"`{3,}")

# Control characters XML 1.0 does not allow, even as character references
_XML_FORBIDDEN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def number_lines(content: str) -> str:
    """Prefixes every line with its 1-based number, keeping the line count unchanged."""
    return "\n".join(
        f"{i:<6}{LINE_NUMBER_SEPARATOR}{line}"
        for i, line in enumerate(split_lines(content), start=1)
    )


def load_template_pair(output_template: Optional[Path], file_template: Optional[Path]) -> TemplatePair:
    """Reads the custom template files; both are required."""
    if output_template is None or file_template is None:
        raise ConfigError("Custom mode requires both --custom-output-template and --custom-file-template.")

    output_tpl = Template.from_file(output_template)
    file_tpl = Template.from_file(file_template)
    output_tpl.check_placeholders(OUTPUT_REQUIRED)
    file_tpl.check_placeholders(FILE_REQUIRED)
    return TemplatePair(output_template=output_tpl.text, file_template=file_tpl.text)


def _fence_for(content: str) -> str:
    longest = max((len(m) for m in _BACKTICK_RUN.findall(content)), default=0)
    return "`" * max(3, longest + 1)


def _xml_escape(value: str) -> str:
    # A literal CR would be folded into LF by the parser
    return escape(value, {'"': "&quot;", "\r": "&#13;"})


def _file_fields(fc: FileContext, add_line_numbers: bool) -> Dict[str, str]:
    content = number_lines(fc.content) if add_line_numbers else fc.content
    return {
        "path": fc.rel_path,
        "name": fc.path.name,
        "lines": str(fc.line_count),
        "modified": fc.modified,
        "content": content,
    }


def _xml_safe(files: Sequence[FileContext]) -> List[FileContext]:
    kept = []
    for fc in files:
        if _XML_FORBIDDEN.search(fc.content) or _XML_FORBIDDEN.search(fc.rel_path):
            print(f"  > [Warning] Skipping {fc.rel_path} (control characters not allowed in XML)", file=sys.stderr)
            continue
        kept.append(fc)
    return kept


def _render_xml(context: RenderContext, files: Sequence[FileContext]) -> str:
    files = _xml_safe(files)
    file_tpl = Template(XML_FILE_TEMPLATE)
    rendered = []
    for fc in files:
        fields = _file_fields(fc, context.options.add_line_numbers)
        rendered.append(file_tpl.render({k: _xml_escape(v) for k, v in fields.items()}))

    tree = render_tree(context.entries, root_label(context.root_path)).rstrip("\n")
    return Template(XML_OUTPUT_TEMPLATE).render({
        "total_files": str(len(files)),
        "tree": _xml_escape(tree),
        "file_list": _xml_escape("\n".join(f"- {fc.rel_path}" for fc in files)),
        "files": "".join(rendered),
    })


def _render_markdown(context: RenderContext, files: Sequence[FileContext]) -> str:
    file_tpl = Template(MARKDOWN_FILE_TEMPLATE)
    rendered = []
    for fc in files:
        fields = _file_fields(fc, context.options.add_line_numbers)
        content = fields["content"]
        if content.endswith("\n"):
            content = content[:-1]
        fields["content"] = content
        fields["fence"] = _fence_for(content)
        fields["language"] = FENCE_LANGUAGES.get(fc.path.suffix.lower(), "")
        rendered.append(file_tpl.render(fields))

    tree = render_tree(context.entries, root_label(context.root_path)).rstrip("\n")
    # Indented rather than fenced, so every fence in the document belongs to a file
    indented_tree = "\n".join("    " + line for line in tree.splitlines())
    return Template(MARKDOWN_OUTPUT_TEMPLATE).render({
        "total_files": str(len(files)),
        "tree": indented_tree,
        "file_list": "\n".join(f"- `{fc.rel_path}`" for fc in files),
        "files": "".join(rendered),
    })


def _render_custom(context: RenderContext, files: Sequence[FileContext]) -> str:
    templates = context.options.templates
    if templates is None:
        raise ConfigError("Custom mode requires both an output template and a file template.")

    file_tpl = Template(templates.file_template)
    rendered = [file_tpl.render(_file_fields(fc, context.options.add_line_numbers)) for fc in files]

    return Template(templates.output_template).render({
        "files": "".join(rendered),
        "total_files": str(len(files)),
        "tree": render_tree(context.entries, root_label(context.root_path)).rstrip("\n"),
        "file_list": "\n".join(fc.rel_path for fc in files),
    })


RENDERERS = {
    "xml": _render_xml,
    "markdown": _render_markdown,
    "custom": _render_custom,
}


def render_combined(context: RenderContext, files: Optional[List[FileContext]] = None) -> str:
    """
    Renders the combined document for ``context``.

    ``files`` may carry already-loaded file contents; otherwise every file
    entry is read here, skipping binary or unreadable ones.
    """
    mode = context.options.mode.lower()
    if mode not in MODES:
        raise ConfigError(f"Invalid mode: {context.options.mode}. Choose 'xml', 'markdown', or 'custom'.")

    if files is None:
        files = load_files(context.files)
    return RENDERERS[mode](context, files)
