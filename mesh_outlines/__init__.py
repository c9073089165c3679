# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2024 dairin0d https://github.com/dairin0d

import logging

from .utils import DEFAULT_THRESHOLD_ANGLE, DEFAULT_PRECISION, DEFAULT_MERGE_TOLERANCE
from .vertex_aliases import VertexAliases
from .edge_matcher import match_edges
from .merge_resolver import resolve_merges
from .index_rewriter import rewrite_indices
from .welding import weld_mesh, weld_vertices
from .surfaces import SurfaceFinder, assign_surface_ids

# Note: per-triangle work is done on plain python lists and tuples;
# numpy is only used for whole-buffer operations (coercion, hashing,
# remapping), since for operations on individual vectors numpy has
# a significant overhead compared to unpacked local variables

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_THRESHOLD_ANGLE",
    "DEFAULT_PRECISION",
    "DEFAULT_MERGE_TOLERANCE",
    "VertexAliases",
    "match_edges",
    "resolve_merges",
    "rewrite_indices",
    "weld_mesh",
    "weld_vertices",
    "SurfaceFinder",
    "assign_surface_ids",
]
