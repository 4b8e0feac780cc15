# tests/test_tokenizer.py
import tiktoken

from fcom.utils import tokenizer
# Bound before the autouse fixture swaps the module attribute
from fcom.utils.tokenizer import get_encoding as cached_get_encoding


def test_estimate_uses_encoding():
    # conftest installs a whitespace-splitting encoding
    assert tokenizer.estimate_tokens("one two three") == 3


def test_estimate_falls_back_when_encoding_unavailable(monkeypatch):
    def unavailable(name=tokenizer.ENCODING_NAME):
        raise ValueError(f"no data for {name}")

    monkeypatch.setattr(tokenizer, "get_encoding", unavailable)

    assert tokenizer.estimate_tokens("x" * 40) == 10


def test_get_encoding_loads_once(monkeypatch):
    calls = []

    def fake_get_encoding(name):
        calls.append(name)
        return object()

    monkeypatch.setattr(tiktoken, "get_encoding", fake_get_encoding)
    cached_get_encoding.cache_clear()
    try:
        first = cached_get_encoding("fcom-test")
        assert cached_get_encoding("fcom-test") is first
        assert calls == ["fcom-test"]
    finally:
        cached_get_encoding.cache_clear()
