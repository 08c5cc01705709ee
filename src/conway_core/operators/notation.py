"""
Conway Notation
===============

GRAMMAR:
    expression := operators [seed]
    operators  := { "a" | "d" | "k" [digits] }
    seed       := "T" | "C" | "O" | "D" | "I"

    Whitespace between tokens is ignored.
    "k"  = kis on every face, "k4" = kis on 4-sided faces only.

ORDER:
    Conway notation reads right to left: "dkD" is the dual of the kis of
    the dodecahedron. parse_notation() returns operators in TEXT order;
    apply_notation() applies them right to left.

FAILURE:
    Any malformed token raises NotationError (a ValueError) with the offending
    position. Parsing completes before anything is applied, so a bad string
    never produces a partially transformed mesh.
"""

from typing import Iterable, List, Optional, Tuple

from ..builders.seeds import Platonic
from ..spec.constants import DEFAULT_APEX_SCALE, DEFAULT_EDGE_LENGTH
from ..spec.errors import NotationError
from ..spec.structures import Polyhedron
from .conway import Ambo, Dual, Kis, Operator, apply_iter

SEED_SYMBOLS = {p.symbol: p for p in Platonic}


def _parse(text: str, allow_seed: bool,
           apex_scale: float) -> Tuple[List[Operator], Optional[Platonic]]:
    ops: List[Operator] = []
    seed = None
    pos = 0
    n = len(text)
    while pos < n:
        ch = text[pos]
        if ch.isspace():
            pos += 1
            continue
        if seed is not None:
            raise NotationError("Unexpected token after seed", text, pos)
        if ch == "a":
            ops.append(Ambo())
            pos += 1
        elif ch == "d":
            ops.append(Dual())
            pos += 1
        elif ch == "k":
            start = pos + 1
            end = start
            while end < n and text[end] in "0123456789":
                end += 1
            side_count = int(text[start:end]) if end > start else 0
            if side_count in (1, 2):
                raise NotationError(f"kis restricted to {side_count}-sided faces", text, pos)
            ops.append(Kis(side_count, apex_scale))
            pos = end
        elif allow_seed and ch in SEED_SYMBOLS:
            seed = SEED_SYMBOLS[ch]
            pos += 1
        else:
            raise NotationError(f"Unknown token {ch!r}", text, pos)
    return ops, seed


def parse_notation(text: str, apex_scale: float = DEFAULT_APEX_SCALE) -> List[Operator]:
    """
    Parse an operator string such as "dkdk" or "k5a".

    Returns:
        operators in text order (leftmost first)

    Raises:
        NotationError: on any unknown or malformed token
    """
    ops, _ = _parse(text, allow_seed=False, apex_scale=apex_scale)
    return ops


def parse_expression(text: str,
                     apex_scale: float = DEFAULT_APEX_SCALE) -> Tuple[Platonic, List[Operator]]:
    """
    Parse a full expression such as "dkD" into (seed, operators in text order).

    Raises:
        NotationError: if the expression is malformed or has no seed symbol
    """
    ops, seed = _parse(text, allow_seed=True, apex_scale=apex_scale)
    if seed is None:
        raise NotationError("Missing seed symbol", text, len(text))
    return seed, ops


def format_notation(operators: Iterable[Operator]) -> str:
    """Inverse of parse_notation (up to whitespace and apex scale)."""
    return "".join(op.notation for op in operators)


def apply_notation(poly: Polyhedron, text: str,
                   apex_scale: float = DEFAULT_APEX_SCALE) -> Polyhedron:
    """Apply the operators of `text` to `poly`, rightmost first."""
    ops = parse_notation(text, apex_scale=apex_scale)
    return apply_iter(poly, reversed(ops))


def build_expression(text: str,
                     edge_length: float = DEFAULT_EDGE_LENGTH,
                     apex_scale: float = DEFAULT_APEX_SCALE) -> Polyhedron:
    """Build the polyhedron named by a full expression, e.g. "dkD"."""
    seed, ops = parse_expression(text, apex_scale=apex_scale)
    return apply_iter(seed.polyhedron(edge_length), reversed(ops))
