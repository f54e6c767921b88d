"""
Token cost estimation.

The allocator only needs a deterministic per-file cost; any object with a
`count(text) -> int` method can be plugged in.

- TiktokenCounter: the default. Prices text with a tiktoken BPE encoding
  (cl100k_base unless configured otherwise).
- ApproximateTokenCounter: regex estimate with no encoding files to load,
  for callers that pass it in explicitly (offline runs, tests).
"""

import re
import threading
from typing import Protocol

import tiktoken

DEFAULT_ENCODING = "cl100k_base"

_WORD_RE = re.compile(r"[a-zA-Z_]\w*", re.ASCII)
_NUMBER_RE = re.compile(r"\d+")
_SYMBOL_RE = re.compile(r"[!@#$%^&*()_+\-=\[\]{};:'\",.<>/?\\|`~]")
_STRING_RE = re.compile(r'"[^"]*"')
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_EMPHASIS_RE = re.compile(r"(\*\*[^*]+\*\*|\*[^*]+\*)")

CODE_FENCE = "```"
LINE_COMMENT = "//"


class TokenCounter(Protocol):
    """Anything that prices a piece of text in tokens."""

    def count(self, text: str) -> int: ...


class TiktokenCounter:
    """
    Token counts from a tiktoken encoding.

    The encoding is loaded on first use (tiktoken may fetch and cache the BPE
    ranks then), so constructing the counter is free. Special-token text such
    as "<|endoftext|>" inside a file is priced as ordinary text.
    """

    def __init__(self, encoding_name: str = DEFAULT_ENCODING, encoding: tiktoken.Encoding | None = None) -> None:
        self.encoding_name = encoding.name if encoding is not None else encoding_name
        self._encoding = encoding
        self._lock = threading.Lock()

    @property
    def encoding(self) -> tiktoken.Encoding:
        if self._encoding is None:
            # Workers share one counter
            with self._lock:
                if self._encoding is None:
                    self._encoding = tiktoken.get_encoding(self.encoding_name)
        return self._encoding

    def count(self, text: str) -> int:
        if not text:
            return 0
        return len(self.encoding.encode(text, disallowed_special=()))


class ApproximateTokenCounter:
    """
    Regex-based token estimate for language-model input.

    Text outside ``` fences is counted as prose (words and symbols, with
    markdown links and emphasis collapsed); text inside fences is counted as
    code (identifiers, numbers, symbols, one token per string literal and per
    line comment).
    """

    def count(self, text: str) -> int:
        if not text:
            return 0

        total = 0
        in_code_block = False
        for line in text.split("\n"):
            if line.startswith(CODE_FENCE):
                in_code_block = not in_code_block
                continue
            total += self.count_code_line(line) if in_code_block else self.count_text_line(line)
        return total

    def count_text_line(self, line: str) -> int:
        count = 0

        # Link text and URL count once each
        links = len(_LINK_RE.findall(line))
        count += 2 * links
        line = _LINK_RE.sub("", line)

        count += len(_EMPHASIS_RE.findall(line))
        line = _EMPHASIS_RE.sub("", line)

        for token in line.split():
            count += len(_WORD_RE.findall(token))
            count += len(_SYMBOL_RE.findall(token))
        return count

    def count_code_line(self, line: str) -> int:
        idx = line.find(LINE_COMMENT)
        if idx >= 0:
            # Whole comment is one token
            return self._count_code_part(line[:idx]) + 1
        return self._count_code_part(line)

    def _count_code_part(self, code: str) -> int:
        count = len(_STRING_RE.findall(code))
        code = _STRING_RE.sub("", code)

        for token in code.split():
            count += len(_WORD_RE.findall(token)) + len(_NUMBER_RE.findall(token))
            count += len(_SYMBOL_RE.findall(token))
        return count
