"""
intraline.core - Token alignment engine
========================================

Given two token sequences x (from a minus line) and y (from a plus
line), compute an EDIT SCRIPT: the per-token operations that turn x
into y, run-length encoded.

§1  OPERATIONS
──────────────

    NoOp           x[i] == y[j]        consumes one token from each side
    Substitution   x[i] != y[j]        consumes one token from each side
    Deletion       x[i] dropped        consumes one token from x
    Insertion      y[j] added          consumes one token from y

A script is TOTAL: applied in order it consumes every token of both
sequences exactly once.  Everything downstream (the annotator) relies
on this.

§2  THE TABLE
─────────────

    D[0][0] = 0
    D[i][0] = i · DELETION_COST
    D[0][j] = j · INSERTION_COST
    D[i][j] = min(
        D[i-1][j-1] + (0 if x[i-1] == y[j-1] else SUBSTITUTION_COST),
        D[i-1][j]   + DELETION_COST,
        D[i][j-1]   + INSERTION_COST,
    )

With unit costs this is Levenshtein distance over tokens.

§3  TRACE-BACK
──────────────

Walk back from D[m][n].  When several moves reproduce the cell's cost,
prefer NoOp, then Substitution, then Deletion, then Insertion.  The
order matters: it decides where an inserted run lands when the same
token appears on both sides of it, and that is visible in the output.

§4  STRATEGIES
──────────────

`Alignment` is the DP above.  `SequenceMatcherAlignment` produces a
script from difflib's matching blocks instead (no minimality
guarantee, but fast on long, mostly-equal sequences).  Anything that
subclasses `Aligner` and implements `operations()` can be passed to
`intraline.edits.infer_edits`.
"""

from difflib import SequenceMatcher
from enum import Enum, auto
from typing import Optional, Sequence


# ═══════════════════════════════════════════════════════════════════
#  EDIT OPERATIONS
# ═══════════════════════════════════════════════════════════════════

class Operation(Enum):
    """Per-token edit operations."""
    NOOP = auto()
    SUBSTITUTION = auto()
    DELETION = auto()
    INSERTION = auto()


INSERTION_COST = 1
DELETION_COST = 1
SUBSTITUTION_COST = 1


def run_length_encode(operations: Sequence[Operation]) -> list[tuple[Operation, int]]:
    """
    Coalesce runs of the same operation.

        [NOOP, NOOP, DELETION, NOOP]  →  [(NOOP, 2), (DELETION, 1), (NOOP, 1)]
    """
    encoded: list[tuple[Operation, int]] = []
    for op in operations:
        if encoded and encoded[-1][0] == op:
            encoded[-1] = (op, encoded[-1][1] + 1)
        else:
            encoded.append((op, 1))
    return encoded


# ═══════════════════════════════════════════════════════════════════
#  ALIGNER BASE
# ═══════════════════════════════════════════════════════════════════

class Aligner:
    """
    Base class for alignment strategies.  Not instantiated directly.

    Subclasses receive the two token sequences and implement
    `operations()`, returning a total per-token script.
    """

    def __init__(self, x: Sequence[str], y: Sequence[str]):
        self.x = list(x)
        self.y = list(y)

    def operations(self) -> list[Operation]:
        """Per-token edit script from x to y."""
        raise NotImplementedError

    def coalesced_operations(self) -> list[tuple[Operation, int]]:
        """The edit script as (operation, run length) pairs."""
        return run_length_encode(self.operations())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(x={len(self.x)} tokens, y={len(self.y)} tokens)"


# ═══════════════════════════════════════════════════════════════════
#  DP ALIGNMENT
# ═══════════════════════════════════════════════════════════════════

class Alignment(Aligner):
    """
    Minimum-cost token alignment by dynamic programming.

    Examples:
        Alignment(["a", " ", "b"], ["a", " ", "c"]).coalesced_operations()
            → [(NOOP, 2), (SUBSTITUTION, 1)]

        Alignment(["a"], []).coalesced_operations()
            → [(DELETION, 1)]
    """

    def __init__(self, x: Sequence[str], y: Sequence[str]):
        super().__init__(x, y)
        self._table = self._fill()
        self._operations: Optional[list[Operation]] = None

    def _fill(self) -> list[list[int]]:
        m = len(self.x)
        n = len(self.y)

        # Full table (needed for trace-back)
        dp = [[0] * (n + 1) for _ in range(m + 1)]
        for i in range(1, m + 1):
            dp[i][0] = dp[i - 1][0] + DELETION_COST
        for j in range(1, n + 1):
            dp[0][j] = dp[0][j - 1] + INSERTION_COST

        for i in range(1, m + 1):
            x_i = self.x[i - 1]
            row, prev_row = dp[i], dp[i - 1]
            for j in range(1, n + 1):
                sub_cost = prev_row[j - 1] + (0 if x_i == self.y[j - 1] else SUBSTITUTION_COST)
                del_cost = prev_row[j] + DELETION_COST
                ins_cost = row[j - 1] + INSERTION_COST
                row[j] = min(sub_cost, del_cost, ins_cost)

        return dp

    def operations(self) -> list[Operation]:
        if self._operations is not None:
            return list(self._operations)

        dp = self._table
        ops: list[Operation] = []
        i, j = len(self.x), len(self.y)
        while i > 0 or j > 0:
            if i > 0 and j > 0:
                if self.x[i - 1] == self.y[j - 1] and dp[i][j] == dp[i - 1][j - 1]:
                    ops.append(Operation.NOOP)
                    i -= 1
                    j -= 1
                    continue
                if dp[i][j] == dp[i - 1][j - 1] + SUBSTITUTION_COST:
                    ops.append(Operation.SUBSTITUTION)
                    i -= 1
                    j -= 1
                    continue

            if i > 0 and dp[i][j] == dp[i - 1][j] + DELETION_COST:
                ops.append(Operation.DELETION)
                i -= 1
                continue

            if j > 0:
                ops.append(Operation.INSERTION)
                j -= 1
                continue

            raise AssertionError(f"Trace-back stuck at cell ({i}, {j})")

        ops.reverse()
        self._operations = ops
        return list(ops)

    def distance(self) -> int:
        """Minimum edit cost from x to y, in tokens."""
        return self._table[len(self.x)][len(self.y)]

    def distance_parts(self) -> tuple[int, int]:
        """Numerator and denominator of `normalized_distance`."""
        return self.distance(), max(len(self.x), len(self.y))

    def normalized_distance(self) -> float:
        """
        Token edit distance scaled to [0, 1].

        Normalized by the longer sequence; two empty sequences are at
        distance 0.
        """
        numer, denom = self.distance_parts()
        if denom == 0:
            return 0.0
        return numer / denom


# ═══════════════════════════════════════════════════════════════════
#  DIFFLIB ALIGNMENT
# ═══════════════════════════════════════════════════════════════════

class SequenceMatcherAlignment(Aligner):
    """
    Alignment built from difflib's opcodes.

    A `replace` block of unequal width pairs tokens 1:1 as
    substitutions over the shorter side; the leftover tokens of the
    longer side become deletions or insertions.
    """

    def operations(self) -> list[Operation]:
        matcher = SequenceMatcher(None, self.x, self.y, autojunk=False)
        ops: list[Operation] = []
        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            width_x, width_y = i2 - i1, j2 - j1
            if tag == "equal":
                ops.extend([Operation.NOOP] * width_x)
            elif tag == "delete":
                ops.extend([Operation.DELETION] * width_x)
            elif tag == "insert":
                ops.extend([Operation.INSERTION] * width_y)
            elif tag == "replace":
                paired = min(width_x, width_y)
                ops.extend([Operation.SUBSTITUTION] * paired)
                ops.extend([Operation.DELETION] * (width_x - paired))
                ops.extend([Operation.INSERTION] * (width_y - paired))
        return ops
