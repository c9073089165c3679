# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2024 dairin0d https://github.com/dairin0d

import numpy as np

from .vertex_aliases import VertexAliases

def rewrite_indices(indices, alias_table):
    """
    indices: flat index sequence (or an array of any shape)
    alias_table: dict of deleted vertex -> representative, or a VertexAliases

    Returns a new flat index array of the same length, where every
    aliased index is replaced by its representative
    """

    if isinstance(alias_table, VertexAliases):
        alias_table = alias_table.flatten()

    indices = np.asarray(indices)
    if indices.size == 0:
        indices = indices.astype(np.int64)
    flat = indices.reshape(-1)

    if not alias_table or flat.size == 0: return flat.copy()

    size = max(int(flat.max()), max(alias_table)) + 1
    remap = np.arange(size, dtype=flat.dtype)
    for deleted, kept in alias_table.items():
        remap[deleted] = kept

    return remap[flat]
