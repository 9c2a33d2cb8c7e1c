"""
intraline.edits - Pair up minus and plus lines, and annotate them.

Input is one hunk's worth of deleted ("minus") and added ("plus")
lines.  Output is the same lines in ANNOTATED form: each line becomes
a list of (label, substring) pairs whose substrings concatenate back
to the line.

ALGORITHM:
    1. For each minus line, in order, scan the plus lines not yet
       emitted, in order.
    2. Tokenize both lines, align the tokens, and annotate the pair.
       Annotation also yields a distance in [0, 1].
    3. The first plus line within `max_line_distance` is the minus
       line's homolog.  Plus lines skipped on the way are emitted
       unpaired; the pair is emitted annotated.
    4. A minus line with no homolog is emitted unpaired.  Leftover plus
       lines are emitted unpaired at the end.

The matching is greedy and order-preserving: once a plus line is
passed over it is never paired with a later minus line.

Labels are supplied by the caller and only ever compared for
equality, so any four values will do.  `EditOperation` is a ready-made
set.
"""

from enum import Enum, auto
from typing import Callable, Optional, Sequence, TypeVar

from loguru import logger

from .core import Aligner, Alignment, Operation
from .tokens import DEFAULT_TOKENIZER, Tokenizer, distance_contribution


L = TypeVar("L")

AnnotatedLine = list[tuple[L, str]]

# What the surrounding highlighter passes by default.
DEFAULT_MAX_LINE_DISTANCE = 0.6


class EditOperation(Enum):
    """The four annotation labels."""
    NOOP_DELETION = auto()
    DELETION = auto()
    NOOP_INSERTION = auto()
    INSERTION = auto()


# ═══════════════════════════════════════════════════════════════════
#  ANNOTATION
# ═══════════════════════════════════════════════════════════════════

class _Cursor:
    """Walks a line in whole tokens, handing back the covered slice."""

    def __init__(self, line: str, tokens: Sequence[str]):
        self.line = line
        self.tokens = tokens
        self.token_offset = 0
        self.line_offset = 0

    def take(self, n: int) -> str:
        end = self.token_offset + n
        if end > len(self.tokens):
            raise IndexError(
                f"Edit script consumes {end} tokens but the line has "
                f"{len(self.tokens)}: {self.line!r}"
            )
        length = sum(len(t) for t in self.tokens[self.token_offset:end])
        start = self.line_offset
        self.token_offset = end
        self.line_offset += length
        return self.line[start:self.line_offset]

    def exhausted(self) -> bool:
        return self.token_offset == len(self.tokens)


def annotate(
    alignment: Aligner,
    minus_line: str,
    plus_line: str,
    noop_deletion: L,
    deletion: L,
    noop_insertion: L,
    insertion: L,
) -> tuple[AnnotatedLine, AnnotatedLine, float]:
    """
    Turn a token alignment into two annotated lines and a distance.

    `alignment.x` and `alignment.y` must be tokenizations of
    `minus_line` and `plus_line`.  Each coalesced operation covers a
    section of one or both lines:

        Deletion      minus section    → deletion
        Insertion     plus section     → insertion
        NoOp          both sections    → noop_deletion / noop_insertion
        Substitution  both sections    → deletion / insertion

    The distance is (changed graphemes) / (changed + unchanged
    graphemes), counting each section with surrounding whitespace
    trimmed.  Deletions, substitutions and insertions add to both
    numerator and denominator; NoOp adds the minus section to the
    denominator only.  Two empty lines are at distance 0.

    Raises IndexError if the script runs past the end of either token
    sequence, and ValueError if it leaves tokens unconsumed.
    """
    annotated_minus_line: AnnotatedLine = []
    annotated_plus_line: AnnotatedLine = []

    minus = _Cursor(minus_line, alignment.x)
    plus = _Cursor(plus_line, alignment.y)
    d_numer = 0
    d_denom = 0

    for op, n in alignment.coalesced_operations():
        if op == Operation.DELETION:
            minus_section = minus.take(n)
            n_d = distance_contribution(minus_section)
            d_numer += n_d
            d_denom += n_d
            annotated_minus_line.append((deletion, minus_section))
        elif op == Operation.NOOP:
            minus_section = minus.take(n)
            # Denominator only, and from the minus section alone.
            d_denom += distance_contribution(minus_section)
            annotated_minus_line.append((noop_deletion, minus_section))
            annotated_plus_line.append((noop_insertion, plus.take(n)))
        elif op == Operation.SUBSTITUTION:
            minus_section = minus.take(n)
            n_d = distance_contribution(minus_section)
            d_numer += n_d
            d_denom += n_d
            annotated_minus_line.append((deletion, minus_section))
            annotated_plus_line.append((insertion, plus.take(n)))
        elif op == Operation.INSERTION:
            plus_section = plus.take(n)
            n_d = distance_contribution(plus_section)
            d_numer += n_d
            d_denom += n_d
            annotated_plus_line.append((insertion, plus_section))
        else:
            raise ValueError(f"Unknown edit operation: {op!r}")

    if not (minus.exhausted() and plus.exhausted()):
        raise ValueError(
            f"Edit script left tokens unconsumed: "
            f"minus {minus.token_offset}/{len(alignment.x)}, "
            f"plus {plus.token_offset}/{len(alignment.y)}"
        )

    if d_denom == 0:
        return annotated_minus_line, annotated_plus_line, 0.0
    return annotated_minus_line, annotated_plus_line, d_numer / d_denom


# ═══════════════════════════════════════════════════════════════════
#  HOMOLOGY DETECTION
# ═══════════════════════════════════════════════════════════════════

def infer_edits(
    minus_lines: Sequence[str],
    plus_lines: Sequence[str],
    noop_deletion: L,
    deletion: L,
    noop_insertion: L,
    insertion: L,
    max_line_distance: float = DEFAULT_MAX_LINE_DISTANCE,
    *,
    aligner: Callable[[Sequence[str], Sequence[str]], Aligner] = Alignment,
    tokenizer: Optional[Tokenizer] = None,
) -> tuple[list[AnnotatedLine], list[AnnotatedLine]]:
    """
    Infer which minus lines were edited into which plus lines.

    Returns (annotated_minus_lines, annotated_plus_lines), one entry
    per input line on each side, in input order.  Paired lines carry
    their intra-line annotation; unpaired lines are a single section
    labelled noop_deletion (minus) or noop_insertion (plus).

    Example:
        infer_edits(["d.iteritems()"], ["d.items()"], *EditOperation, 1.0)
            → ([[(NOOP_DELETION, "d."), (DELETION, "iteritems"), (NOOP_DELETION, "()")]],
               [[(NOOP_INSERTION, "d."), (INSERTION, "items"), (NOOP_INSERTION, "()")]])
    """
    tokenizer = tokenizer or DEFAULT_TOKENIZER
    plus_tokens = [tokenizer.tokenize(line) for line in plus_lines]

    annotated_minus_lines: list[AnnotatedLine] = []
    annotated_plus_lines: list[AnnotatedLine] = []

    emitted = 0  # index of the first plus line not yet output

    for minus_index, minus_line in enumerate(minus_lines):
        minus_tokens = tokenizer.tokenize(minus_line)

        for plus_index in range(emitted, len(plus_lines)):
            plus_line = plus_lines[plus_index]
            annotated_minus_line, annotated_plus_line, distance = annotate(
                aligner(minus_tokens, plus_tokens[plus_index]),
                minus_line,
                plus_line,
                noop_deletion,
                deletion,
                noop_insertion,
                insertion,
            )
            if distance > max_line_distance:
                logger.trace(
                    "Rejected plus line {} for minus line {} (distance={:.3f} > {})",
                    plus_index, minus_index, distance, max_line_distance,
                )
                continue

            logger.debug(
                "Paired minus line {} with plus line {} (distance={:.3f}, skipped={})",
                minus_index, plus_index, distance, plus_index - emitted,
            )
            # Rejected candidates go out unpaired, ahead of the pair
            for skipped in plus_lines[emitted:plus_index]:
                annotated_plus_lines.append([(noop_insertion, skipped)])
            annotated_minus_lines.append(annotated_minus_line)
            annotated_plus_lines.append(annotated_plus_line)
            emitted = plus_index + 1
            break
        else:
            annotated_minus_lines.append([(noop_deletion, minus_line)])

    for plus_line in plus_lines[emitted:]:
        annotated_plus_lines.append([(noop_insertion, plus_line)])

    return annotated_minus_lines, annotated_plus_lines
