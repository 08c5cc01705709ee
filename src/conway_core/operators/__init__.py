"""Conway operators, notation grammar, incidence matrices."""

from .conway import (
    Ambo,
    Dual,
    Kis,
    Operator,
    ambo,
    dual,
    kis,
    apply,
    apply_iter,
    face_centroid,
    face_normal,
    mean_distance,
)

from .notation import (
    parse_notation,
    parse_expression,
    format_notation,
    apply_notation,
    build_expression,
)

from .incidence import (
    build_d0,
    build_d1,
    build_incidence_matrices,
    build_incidence_from_mesh,
    verify_faces_per_edge,
    assert_faces_per_edge,
    verify_consistent_winding,
)
