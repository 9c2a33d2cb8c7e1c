"""
intraline.tokens - Split lines into alignment tokens.

The aligner does not work on characters.  It works on TOKENS: maximal
runs of separator characters, and the content runs between them.

    "d.iteritems()"  →  ["d", ".", "iteritems", "()"]
    "aaa bbb"        →  ["aaa", " ", "bbb"]

Every tokenization is a PARTITION of its line:

    "".join(tokenize(line)) == line

which is what lets the annotator turn token counts back into slices
of the original line.
"""

import re
from typing import Iterable

import regex


# ═══════════════════════════════════════════════════════════════════
#  SEPARATORS
# ═══════════════════════════════════════════════════════════════════

SEPARATORS = " ,;.:()[]<>"

# A code point with one of these break properties never joins its
# neighbours into a cluster.  Emoji are excluded since a ZWJ can join
# them to whatever precedes.
_FREESTANDING = regex.compile(
    r"[\p{Grapheme_Cluster_Break=Other}\p{Grapheme_Cluster_Break=Control}]"
)
_PICTOGRAPHIC = regex.compile(r"\p{Extended_Pictographic}")


def _validate_separators(separators: Iterable[str]) -> str:
    """
    Check that a separator set can never split a grapheme cluster.

    A match boundary inside a multi-code-point grapheme would cut the
    cluster across two tokens, so every separator must be a single code
    point that never extends, joins or prefixes a cluster: no combining
    marks, ZWJ, emoji modifiers, regional indicators, Hangul jamo or
    Prepend characters.
    """
    chars = []
    for sep in separators:
        if len(sep) != 1:
            raise ValueError(f"Separator {sep!r} is not a single code point")
        if not _FREESTANDING.fullmatch(sep) or _PICTOGRAPHIC.fullmatch(sep):
            raise ValueError(f"Separator {sep!r} can join a grapheme cluster")
        if sep not in chars:
            chars.append(sep)
    if not chars:
        raise ValueError("Separator set is empty")
    return "".join(chars)


# ═══════════════════════════════════════════════════════════════════
#  TOKENIZER
# ═══════════════════════════════════════════════════════════════════

class Tokenizer:
    """
    Splits lines into alternating content and separator runs.

    The separator set is fixed at construction and validated once, so
    tokenizing itself cannot fail.

    Examples:
        Tokenizer().tokenize("a, b")      → ["a", ", ", "b"]
        Tokenizer("-").tokenize("a-b c")  → ["a", "-", "b c"]
    """

    def __init__(self, separators: Iterable[str] = SEPARATORS):
        self.separators = _validate_separators(separators)
        self._pattern = re.compile(
            "[" + "".join(re.escape(c) for c in self.separators) + "]+"
        )

    def tokenize(self, line: str) -> list[str]:
        """Split `line` into tokens whose concatenation is `line`."""
        tokens: list[str] = []
        offset = 0
        for m in self._pattern.finditer(line):
            if m.start() > offset:
                tokens.append(line[offset:m.start()])
            tokens.append(m.group())
            offset = m.end()
        if offset < len(line):
            tokens.append(line[offset:])
        return tokens

    def is_separator(self, token: str) -> bool:
        """True if `token` is made only of separator characters."""
        return bool(token) and self._pattern.fullmatch(token) is not None

    def __repr__(self) -> str:
        return f"Tokenizer({self.separators!r})"


DEFAULT_TOKENIZER = Tokenizer()


def tokenize(line: str) -> list[str]:
    """Tokenize `line` with the default separator set."""
    return DEFAULT_TOKENIZER.tokenize(line)


# ═══════════════════════════════════════════════════════════════════
#  GRAPHEME COUNTING
# ═══════════════════════════════════════════════════════════════════

_GRAPHEME = regex.compile(r"\X")


def grapheme_count(text: str) -> int:
    """
    Number of user-perceived characters in `text`.

    "é" written as e + U+0301 is one grapheme, as is a flag emoji made
    of two regional indicators.
    """
    return len(_GRAPHEME.findall(text))


def distance_contribution(section: str) -> int:
    """Grapheme count of `section` with surrounding whitespace removed."""
    return grapheme_count(section.strip())
