"""
Intra-line edit inference
=========================

Given a block of deleted ("minus") and added ("plus") lines, decide
which minus line was edited into which plus line, and split each such
pair into the parts that stayed and the parts that changed:

    infer_edits(["d.iteritems()"], ["d.items()"], *EditOperation, 1.0)

    minus:  d.  [iteritems]  ()
    plus:   d.  [items]      ()

The pieces:
  • tokens  - split a line into content and separator runs
  • core    - align two token sequences into a run-length edit script
  • edits   - annotate aligned pairs, and pair lines greedily by distance

Logging goes through loguru and is disabled for this package until the
caller runs `logger.enable("intraline")`.
"""

from loguru import logger

from intraline.core import (
    Operation,
    Aligner,
    Alignment,
    SequenceMatcherAlignment,
    run_length_encode,
)
from intraline.edits import (
    DEFAULT_MAX_LINE_DISTANCE,
    EditOperation,
    annotate,
    infer_edits,
)
from intraline.tokens import (
    SEPARATORS,
    Tokenizer,
    tokenize,
    grapheme_count,
)

logger.disable("intraline")

__version__ = "0.1.0"
__all__ = [
    "Operation", "Aligner", "Alignment", "SequenceMatcherAlignment",
    "run_length_encode",
    "DEFAULT_MAX_LINE_DISTANCE", "EditOperation", "annotate", "infer_edits",
    "SEPARATORS", "Tokenizer", "tokenize", "grapheme_count",
]
