# tests/conftest.py
import pytest

from fcom.utils import tokenizer


class _WordEncoding:
    """Stand-in encoding so tests never download tiktoken data."""

    def encode(self, text, disallowed_special=()):
        return text.split()


@pytest.fixture(autouse=True)
def offline_tokenizer(monkeypatch):
    monkeypatch.setattr(tokenizer, "get_encoding", lambda name=tokenizer.ENCODING_NAME: _WordEncoding())


@pytest.fixture
def make_file():
    def _make_file(p, content="x"):
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
        return p
    return _make_file


@pytest.fixture
def sample_project(tmp_path, make_file):
    """
    proj/
      .git/config
      node_modules/lib/index.js
      src/main.py
      src/utils/helper.py
      docs/Guide.MD
      README.md
      notes.txt
    """
    root = tmp_path / "proj"
    make_file(root / ".git" / "config", "[core]")
    make_file(root / "node_modules" / "lib" / "index.js", "module.exports = 1;")
    make_file(root / "src" / "main.py", "def hello():\n    print('hello')\n")
    make_file(root / "src" / "utils" / "helper.py", "# helper\n")
    make_file(root / "docs" / "Guide.MD", "# Guide\n")
    make_file(root / "README.md", "# Project\n")
    make_file(root / "notes.txt", "todo")
    return root
