# src/fcom/utils/tokenizer.py
from functools import lru_cache

import tiktoken

ENCODING_NAME = "cl100k_base"


@lru_cache(maxsize=None)
def get_encoding(name: str = ENCODING_NAME):
    """Loads a tiktoken encoding once per process; tiktoken fetches the BPE data on first use."""
    return tiktoken.get_encoding(name)


def estimate_tokens(text: str) -> int:
    """Token count of ``text`` for the combine summary, or len/4 when no encoding can be loaded."""
    try:
        encoding = get_encoding()
    except Exception:
        return len(text) // 4
    # Special-token markers inside source files are counted as plain text
    return len(encoding.encode(text, disallowed_special=()))
