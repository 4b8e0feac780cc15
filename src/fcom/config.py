# src/fcom/config.py

DEFAULT_IGNORED_FOLDERS = (
    ".git",
    "node_modules",
    "__pycache__",
)

DEFAULT_OUTPUTS = {
    "combine": "output.txt",
    "tree": "folder_tree.txt",
    "list": "file_list.txt",
}

MODES = ("xml", "markdown", "custom")

# Bytes sampled from the head of a file when sniffing for binary content
BINARY_SNIFF_SIZE = 1024

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Fence language hints for markdown mode, keyed by lower-cased suffix
FENCE_LANGUAGES = {
    ".py": "python",
    ".rs": "rust",
    ".js": "javascript",
    ".jsx": "jsx",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".go": "go",
    ".java": "java",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".hpp": "cpp",
    ".cs": "csharp",
    ".rb": "ruby",
    ".sh": "bash",
    ".json": "json",
    ".toml": "toml",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".xml": "xml",
    ".html": "html",
    ".css": "css",
    ".sql": "sql",
    ".md": "markdown",
}


class ConfigError(ValueError):
    """Raised when the requested rendering configuration cannot be honoured."""
