# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2024 dairin0d https://github.com/dairin0d

import logging

from .utils import *

logger = logging.getLogger(__name__)

# Edge matching is adapted from three.js EdgesGeometry: a directed edge
# is keyed by the rounded positions of its endpoints, and its sibling in
# the adjacent triangle (with consistent winding) has the reversed key

def match_edges(positions, indices, threshold_angle=DEFAULT_THRESHOLD_ANGLE, precision=DEFAULT_PRECISION):
    """
    positions: flat (x, y, z, ...) sequence or an (N, 3) array
    indices: flat triangle index sequence or an (M, 3) array
    threshold_angle: in degrees; edges between triangles whose normals
        differ by at most this angle are considered weldable
    precision: number of decimal digits used for position hashing

    Returns a list of merge pairs ((a, b), (c, d)), where (a, b) is the
    edge seen first and (c, d) is its sibling from another triangle.
    Both are expressed as original vertex indices.
    """

    positions = as_positions(positions)
    tris = as_indices(indices)
    triangles = tris.tolist()

    min_dot = threshold_dot(threshold_angle)
    hashes = hash_positions(positions, precision)
    normals = triangle_normals(positions, tris)

    # key -> [index0, index1, normal], or None once the edge was matched
    edge_data = {}
    edge_data_get = edge_data.get
    merge_pairs = []
    degenerate_count = 0

    for t, tri in enumerate(triangles):
        h0 = hashes[tri[0]]
        h1 = hashes[tri[1]]
        h2 = hashes[tri[2]]

        if (h0 == h1) or (h1 == h2) or (h2 == h0):
            degenerate_count += 1
            continue

        tri_hashes = (h0, h1, h2)
        nx, ny, nz = normals[t]

        for j in range(3):
            j_next = (j + 1) % 3
            key = (tri_hashes[j], tri_hashes[j_next])
            reverse_key = (key[1], key[0])

            if reverse_key in edge_data:
                record = edge_data_get(reverse_key)
                if record is None: continue # already matched (non-manifold edge)

                sx, sy, sz = record[2]
                if dot_product(nx, ny, nz, sx, sy, sz) >= min_dot:
                    edge0 = (record[0], record[1])
                    edge1 = (tri[j], tri[j_next])
                    merge_pairs.append((edge0, edge1))

                edge_data[reverse_key] = None
            elif key not in edge_data:
                edge_data[key] = [tri[j], tri[j_next], (nx, ny, nz)]

    if degenerate_count:
        logger.debug("Skipped %d degenerate triangles", degenerate_count)
    logger.debug("Found %d merge pairs in %d triangles", len(merge_pairs), len(triangles))

    return merge_pairs
