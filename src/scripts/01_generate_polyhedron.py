#!/usr/bin/env python3
"""
Generate a Conway Polyhedron
============================

QUESTION: What does `<notation><seed>` look like - how many vertices, edges
and faces, how many congruence classes of faces, and is it a well-formed
closed surface?

INPUTS
------
  - expression: operators followed by a seed symbol, e.g. "dkD"
    (or --seed plus --notation)
  - --edge-length: seed edge length (default 2.0)
  - --apex-scale: kis apex height factor (default 0.1)

OUTPUTS
-------
  - V, E, F, χ
  - face valence histogram and number of face classes
  - closed / manifold / consistently wound verdict, signed volume
  - optional OFF file (--off PATH)

EXPECTED OUTPUT (dkD):
    V=60  E=90  F=32  χ=2
    faces: 12 × 5-gon, 20 × 6-gon
    ✓ closed, manifold, consistently wound

Usage:
    python3 src/scripts/01_generate_polyhedron.py dkD
    python3 src/scripts/01_generate_polyhedron.py --seed C --notation k4a --off out.off
    python3 src/scripts/01_generate_polyhedron.py --test
"""

import sys
from pathlib import Path

# Find src directory robustly (works from any location)
def _find_src():
    """Find src/ by looking for conway_core/ subdirectory."""
    current = Path(__file__).resolve().parent
    for _ in range(10):  # max 10 levels up
        candidate = current / 'src'
        if (candidate / 'conway_core').is_dir():
            return candidate
        current = current.parent
    raise RuntimeError("Cannot find src/conway_core directory")

sys.path.insert(0, str(_find_src()))

from conway_core.analysis import (
    classify_faces,
    face_class_count,
    face_valence_histogram,
    signed_volume,
    summarize,
    verify_closed_manifold,
    write_off,
)
from conway_core.builders import Platonic, build_seed
from conway_core.operators import (
    Ambo,
    Dual,
    Kis,
    apply_iter,
    apply_notation,
    build_expression,
)
from conway_core.spec import DEFAULT_APEX_SCALE, DEFAULT_EDGE_LENGTH, NotationError


def generate(expression=None, seed=None, notation="",
             edge_length=DEFAULT_EDGE_LENGTH, apex_scale=DEFAULT_APEX_SCALE):
    """Build from a full expression, or from a seed plus an operator string."""
    if expression is not None:
        return build_expression(expression, edge_length=edge_length, apex_scale=apex_scale)
    return apply_notation(build_seed(seed, edge_length), notation, apex_scale=apex_scale)


def report(poly, label):
    """Print stats for one mesh and return the verification dict."""
    V, E, F, chi = summarize(poly)
    classes = classify_faces(poly)
    result = verify_closed_manifold(poly)

    print("=" * 60)
    print(f"POLYHEDRON: {label}")
    print("=" * 60)
    print(f"  V={V}  E={E}  F={F}  χ={chi}")
    hist = face_valence_histogram(poly)
    print("  faces: " + ", ".join(f"{count} × {n}-gon" for n, count in hist.items()))
    print(f"  face classes: {face_class_count(classes)}")
    print(f"  signed volume: {signed_volume(poly):.6f}")

    if result['valid']:
        print("  ✓ closed, manifold, consistently wound")
    else:
        print(f"  ✗ invalid: faces_per_edge {result['faces_per_edge']['histogram']}, "
              f"{len(result['bad_winding_edges'])} bad edges, "
              f"{len(result['unused_vertices'])} unused vertices")
    return result


# (label, operators in application order)
SELF_CHECK_CHAINS = [
    ("a", [Ambo()]),
    ("d", [Dual()]),
    ("k", [Kis()]),
    ("k@0", [Kis(apex_scale=0.0)]),
    ("dk", [Kis(), Dual()]),
]


def test_all_seeds():
    """Every operator on every seed keeps χ = 2 and the closed-manifold contract."""
    print("=" * 60)
    print("SELF-CHECK: a, d, k, k(apex 0), dk on every seed")
    print("=" * 60)
    for seed in Platonic:
        base = seed.polyhedron()
        print(f"\n{seed} ({seed.symbol}): {base}")
        for name, ops in SELF_CHECK_CHAINS:
            out = apply_iter(base, ops)
            result = verify_closed_manifold(out)
            assert result['valid'], f"{name}{seed.symbol}: {result}"
            assert result['euler'] == 2, f"{name}{seed.symbol}: χ={result['euler']}"
            print(f"  {name:<4} V={result['V']:4d} E={result['E']:4d} "
                  f"F={result['F']:4d}  χ={result['euler']} ✓")
    print("\n✓ TEST PASSED: all seeds, all operators")


def main(argv=None):
    """Parse arguments, build, report. Returns the process exit status."""
    import argparse

    parser = argparse.ArgumentParser(description="Build a Conway polyhedron and report its stats")
    parser.add_argument("expression", nargs="?", help="Full expression, e.g. dkD")
    parser.add_argument("--seed", default="D", help="Seed symbol or name (used without expression)")
    parser.add_argument("--notation", default="", help="Operators applied to --seed, e.g. dk")
    parser.add_argument("--edge-length", type=float, default=DEFAULT_EDGE_LENGTH, help="Seed edge length")
    parser.add_argument("--apex-scale", type=float, default=DEFAULT_APEX_SCALE, help="Kis apex height factor")
    parser.add_argument("--off", type=Path, help="Write the mesh as an OFF file")
    parser.add_argument("--test", action="store_true", help="Run self-check over all seeds")
    args = parser.parse_args(argv)

    if args.test:
        test_all_seeds()
        return 0

    try:
        poly = generate(args.expression, args.seed, args.notation,
                        edge_length=args.edge_length, apex_scale=args.apex_scale)
    except NotationError as e:
        print(f"✗ {e}")
        print(f"  {e.text}")
        print(f"  {' ' * e.position}^")
        return 2
    except ValueError as e:
        # Unknown seed, bad edge length or apex scale
        print(f"✗ {e}")
        return 2

    label = args.expression or f"{args.notation}{Platonic.lookup(args.seed).symbol}"
    result = report(poly, label)

    if args.off is not None:
        write_off(poly, args.off)
        print(f"  wrote {args.off}")

    return 0 if result['valid'] else 1


if __name__ == "__main__":
    sys.exit(main())
