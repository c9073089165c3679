# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2024 dairin0d https://github.com/dairin0d

import logging

import numpy as np

from .utils import *

logger = logging.getLogger(__name__)

# A "surface" is a maximal group of triangles connected through smooth
# edges. Each surface gets a unique id, which the outline shader uses to
# detect boundaries between surfaces that depth/normals alone would miss.

def SurfaceFinder(start_id=0):
    """
    start_id: the identifier assigned to the first surface found.
    Identifiers keep increasing across all meshes processed by
    the same finder, so each mesh gets a disjoint range of ids.
    A finder must not be used from several threads at once.
    """

    if start_id < 0:
        raise ValueError(f"start_id must be non-negative, got {start_id}")

    progress = 0
    progress_max = 1
    progress_text = ""

    surface_id = start_id # next id to assign

    def begin(text, count=1):
        nonlocal progress, progress_max, progress_text
        progress = 0
        progress_max = count
        progress_text = text

    def get_task_name():
        return progress_text

    def get_progress():
        return progress

    def get_progress_relative():
        return (progress / progress_max if progress_max > 0 else 1.0)

    def get_surface_id():
        return surface_id

    def build_adjacency(triangles, hashes, normals, min_dot):
        nonlocal progress

        # Triangles are linked through geometric (position-based) edges,
        # so vertices split along a seam don't break the surface apart
        edges = {}
        edges_setdefault = edges.setdefault

        begin("Surface Edges", len(triangles))
        for t, tri in enumerate(triangles):
            progress = progress + 1

            h0 = hashes[tri[0]]
            h1 = hashes[tri[1]]
            h2 = hashes[tri[2]]
            if (h0 == h1) or (h1 == h2) or (h2 == h0): continue # degenerate

            edges_setdefault((h0, h1) if h0 < h1 else (h1, h0), []).append(t)
            edges_setdefault((h1, h2) if h1 < h2 else (h2, h1), []).append(t)
            edges_setdefault((h2, h0) if h2 < h0 else (h0, h2), []).append(t)

        neighbors = [[] for tri in triangles]

        begin("Surface Links", len(edges))
        for edge_tris in edges.values():
            progress = progress + 1

            count = len(edge_tris)
            if count < 2: continue # boundary edge

            for i in range(count - 1):
                t0 = edge_tris[i]
                n0x, n0y, n0z = normals[t0]
                for k in range(i + 1, count):
                    t1 = edge_tris[k]
                    n1x, n1y, n1z = normals[t1]
                    if dot_product(n0x, n0y, n0z, n1x, n1y, n1z) > min_dot:
                        neighbors[t0].append(t1)
                        neighbors[t1].append(t0)

        return neighbors

    def find_surfaces(positions, indices, threshold_angle=DEFAULT_THRESHOLD_ANGLE, precision=DEFAULT_PRECISION):
        """
        positions: flat (x, y, z, ...) sequence or an (N, 3) array
        indices: flat triangle index sequence or an (M, 3) array
        threshold_angle: in degrees; edges between triangles whose normals
            differ by this angle or more are treated as surface boundaries
        precision: number of decimal digits used for position hashing

        Returns a dict with:
            triangle_ids: surface id of each triangle
            vertex_ids: surface id of each vertex (-1 for unreferenced
                vertices); a vertex shared by several surfaces keeps
                the id of the first one that reached it
            first_id, last_id: the range of ids assigned to this mesh
                (last_id < first_id if the mesh has no triangles)
        """

        nonlocal surface_id, progress

        positions = as_positions(positions)
        tris = as_indices(indices)
        triangles = tris.tolist()

        hashes = hash_positions(positions, precision)
        normals = triangle_normals(positions, tris)
        neighbors = build_adjacency(triangles, hashes, normals, threshold_dot(threshold_angle))

        triangle_ids = [-1] * len(triangles)
        vertex_ids = [-1] * len(positions)
        first_id = surface_id

        begin("Surface Flood Fill", len(triangles))
        for t_seed in range(len(triangles)):
            if triangle_ids[t_seed] >= 0: continue

            sid = surface_id
            surface_id = surface_id + 1

            triangle_ids[t_seed] = sid
            stack = [t_seed]

            while stack:
                t = stack.pop()
                progress = progress + 1

                for vi in triangles[t]:
                    if vertex_ids[vi] < 0: vertex_ids[vi] = sid

                for t_adj in neighbors[t]:
                    if triangle_ids[t_adj] >= 0: continue
                    triangle_ids[t_adj] = sid
                    stack.append(t_adj)

        logger.info("Found %d surfaces in %d triangles", surface_id - first_id, len(triangles))

        return dict(
            triangle_ids=np.array(triangle_ids, dtype=np.int64),
            vertex_ids=np.array(vertex_ids, dtype=np.int64),
            first_id=first_id,
            last_id=surface_id - 1,
        )

    def get_surface_id_attribute(positions, indices, **options):
        """
        Returns a flat float32 array with 4 components per vertex,
        (surface id, 0, 0, 1), suitable for a color attribute
        """

        vertex_ids = find_surfaces(positions, indices, **options)["vertex_ids"]
        colors = np.zeros((len(vertex_ids), 4), dtype=np.float32)
        colors[:, 0] = vertex_ids
        colors[:, 3] = 1.0
        return colors.reshape(-1)

    finder_type = type("SurfaceFinder", (), {
        "task_name": property(lambda self: get_task_name()),
        "progress": property(lambda self: get_progress()),
        "progress_relative": property(lambda self: get_progress_relative()),
        "surface_id": property(lambda self: get_surface_id()),
        "max_surface_id": property(lambda self: get_surface_id() - 1),
        # Divisor that maps all ids assigned so far into [0, 1)
        "normalization": property(lambda self: get_surface_id()),
        "find_surfaces": staticmethod(find_surfaces),
        "get_surface_id_attribute": staticmethod(get_surface_id_attribute),
    })

    return finder_type()

def assign_surface_ids(meshes, finder=None, **options):
    """
    meshes: iterable of (positions, indices) pairs
    finder: an optional SurfaceFinder shared with other calls

    Returns (attributes, normalization): a surface id attribute for
    each mesh, and the value that ids should be divided by
    """

    if finder is None: finder = SurfaceFinder()

    attributes = [finder.get_surface_id_attribute(positions, indices, **options)
                  for positions, indices in meshes]

    return attributes, finder.normalization
