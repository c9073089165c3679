# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2024 dairin0d https://github.com/dairin0d

import logging

from .utils import *
from .edge_matcher import match_edges
from .merge_resolver import resolve_merges
from .index_rewriter import rewrite_indices

logger = logging.getLogger(__name__)

def weld_mesh(positions, indices, threshold_angle=DEFAULT_THRESHOLD_ANGLE,
              precision=DEFAULT_PRECISION, tolerance=DEFAULT_MERGE_TOLERANCE):
    """
    Merges together vertices along the edges between triangles
    whose angle is at most the given threshold (in degrees).

    Returns a dict with:
        indices: new flat index array (same length as the input)
        aliases: flattened alias table (deleted vertex -> representative)
        merge_pairs: number of matched smooth edges
        welded: number of vertices that were replaced
    """

    positions = as_positions(positions)
    triangles = as_indices(indices)

    merge_pairs = match_edges(positions, triangles, threshold_angle, precision)
    aliases = resolve_merges(positions, triangles, merge_pairs, tolerance=tolerance)
    alias_table = aliases.flatten()
    new_indices = rewrite_indices(triangles, alias_table)

    logger.info("Welded %d vertices along %d smooth edges (%d triangles)",
                len(alias_table), len(merge_pairs), len(triangles))

    return dict(
        indices=new_indices,
        aliases=alias_table,
        merge_pairs=len(merge_pairs),
        welded=len(alias_table),
    )

def weld_vertices(positions, indices, threshold_angle=DEFAULT_THRESHOLD_ANGLE,
                  precision=DEFAULT_PRECISION, tolerance=DEFAULT_MERGE_TOLERANCE):
    """
    positions: flat (x, y, z, ...) sequence or an (N, 3) array
    indices: flat triangle index sequence or an (M, 3) array
    threshold_angle: in degrees

    Returns a new flat index buffer without the extra vertices
    """

    return weld_mesh(positions, indices, threshold_angle, precision, tolerance)["indices"]
