# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2024 dairin0d https://github.com/dairin0d

class VertexAliases:
    """
    Disjoint sets of vertex indices that were welded together.
    Only vertices that took part in a merge are stored; any other
    index is implicitly its own representative.
    """

    def __init__(self):
        self.parents = {}
        self.ranks = {}

    def __len__(self):
        return len(self.parents)

    def __contains__(self, vi):
        return vi in self.parents

    def find(self, vi):
        parents = self.parents
        parent = parents.get(vi)
        if parent is None: return vi

        # Path splitting
        while parent != vi:
            grandparent = parents[parent]
            parents[vi] = grandparent
            vi = parent
            parent = grandparent

        return vi

    def union(self, kept, deleted):
        """
        Merges the sets of both vertices. On rank ties, the representative
        of the kept vertex stays the representative of the merged set.
        Returns False if the vertices were already in the same set.
        """

        root_kept = self.find(kept)
        root_deleted = self.find(deleted)
        if root_kept == root_deleted: return False

        parents = self.parents
        ranks = self.ranks

        rank_kept = ranks.get(root_kept, 0)
        rank_deleted = ranks.get(root_deleted, 0)

        if rank_kept < rank_deleted:
            root_kept, root_deleted = root_deleted, root_kept
        elif rank_kept == rank_deleted:
            ranks[root_kept] = rank_kept + 1

        parents.setdefault(root_kept, root_kept)
        parents[root_deleted] = root_kept
        return True

    def flatten(self):
        """
        Returns a dict mapping every deleted vertex index directly
        to its final representative (representatives are not included)
        """

        find = self.find
        table = {}
        for vi in self.parents:
            root = find(vi)
            if root != vi: table[vi] = root
        return table
