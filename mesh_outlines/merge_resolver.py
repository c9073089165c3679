# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2024 dairin0d https://github.com/dairin0d

import logging

from .utils import *
from .vertex_aliases import VertexAliases

logger = logging.getLogger(__name__)

def resolve_merges(positions, indices, merge_pairs, aliases=None, tolerance=DEFAULT_MERGE_TOLERANCE):
    """
    positions: flat (x, y, z, ...) sequence or an (N, 3) array
    indices: flat triangle index sequence or an (M, 3) array
    merge_pairs: collection of ((a, b), (c, d)) edges to weld, as
        returned by match_edges()
    aliases: an optional VertexAliases to update (a new one is
        created if not specified)
    tolerance: max distance between the vertices that are welded
        together; if the first endpoints of the two edges are farther
        apart than this, the sibling edge is welded in reverse

    Returns the updated VertexAliases
    """

    verts = as_positions(positions).tolist()
    triangles = as_indices(indices).tolist()

    if aliases is None: aliases = VertexAliases()
    find = aliases.find
    union = aliases.union

    # index edge -> merge pair it belongs to
    lookup = {}
    for pair in merge_pairs:
        edge0, edge1 = pair
        lookup[(edge0[0], edge0[1])] = pair
        lookup[(edge1[0], edge1[1])] = pair
    lookup_get = lookup.get

    skipped = 0
    welded = 0

    # The same geometric edge may be referenced by different vertex
    # indices, so the index buffer has to be scanned again
    for tri in triangles:
        for j in range(3):
            vi0 = tri[j]
            vi1 = tri[j-2]

            pair = lookup_get((vi0, vi1))
            if pair is None:
                pair = lookup_get((vi1, vi0))
                if pair is None: continue

            edge0, edge1 = pair
            if (edge0[0] == vi0 and edge0[1] == vi1) or (edge0[0] == vi1 and edge0[1] == vi0):
                edge, sibling = edge0, edge1
            else:
                edge, sibling = edge1, edge0

            index0, index1 = edge
            index2, index3 = sibling

            if {index0, index1} == {index2, index3}:
                # Edge is paired with itself (in either direction)
                skipped += 1
                continue

            # Endpoints are paired by proximity, not by winding
            p0 = verts[index0]
            d02 = distance(p0, verts[index2])
            if (d02 > tolerance) or (distance(p0, verts[index3]) < d02):
                index2, index3 = index3, index2

            lookup.pop((edge0[0], edge0[1]), None)
            lookup.pop((edge1[0], edge1[1]), None)

            index0 = find(index0)
            index1 = find(index1)
            index2 = find(index2)
            index3 = find(index3)

            if {index0, index1} == {index2, index3}:
                skipped += 1
                continue

            if union(index0, index2): welded += 1
            if union(index1, index3): welded += 1

    if skipped:
        logger.debug("Skipped %d self-paired edges", skipped)
    logger.debug("Welded %d vertex pairs from %d merge pairs", welded, len(merge_pairs))

    return aliases
