"""
simulation/union_find.py

Disjoint-set (union-find) structure used to merge wire-connected terminals
into electrical nets.
"""

from typing import Hashable


class DisjointSet:
    """
    Union-find with path compression and union by rank.

    Elements are registered on first use, so any hashable id is valid.
    Registration order is remembered and drives the order of get_roots()
    and get_groups().
    """

    def __init__(self):
        self._parent: dict[Hashable, Hashable] = {}
        self._rank: dict[Hashable, int] = {}

    def __contains__(self, x: Hashable) -> bool:
        return x in self._parent

    def __len__(self) -> int:
        return len(self._parent)

    def make_set(self, x: Hashable) -> None:
        """Register x as its own singleton set (no-op if already present)."""
        if x not in self._parent:
            self._parent[x] = x
            self._rank[x] = 0

    def find(self, x: Hashable) -> Hashable:
        """Return the root of x's set, compressing the path on the way."""
        self.make_set(x)

        root = x
        while self._parent[root] != root:
            root = self._parent[root]

        # Path compression: point every visited element directly at the root
        while self._parent[x] != root:
            self._parent[x], x = root, self._parent[x]

        return root

    def union(self, a: Hashable, b: Hashable) -> None:
        """
        Merge the sets containing a and b.

        The root with the smaller rank goes under the other; on a tie the
        root of a's set becomes the new root and its rank grows by one.
        """
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return

        rank_a = self._rank[root_a]
        rank_b = self._rank[root_b]
        if rank_a < rank_b:
            self._parent[root_a] = root_b
        elif rank_a > rank_b:
            self._parent[root_b] = root_a
        else:
            self._parent[root_b] = root_a
            self._rank[root_a] = rank_a + 1

    def connected(self, a: Hashable, b: Hashable) -> bool:
        """True if a and b are in the same set."""
        return self.find(a) == self.find(b)

    def rank(self, x: Hashable) -> int:
        """Current rank of x's entry (meaningful for roots)."""
        self.make_set(x)
        return self._rank[x]

    def get_roots(self) -> list[Hashable]:
        """Distinct roots, in the order their first member was registered."""
        roots = {}
        for element in list(self._parent):
            roots.setdefault(self.find(element), None)
        return list(roots)

    def get_groups(self) -> dict[Hashable, list[Hashable]]:
        """Map each root to its members, in registration order."""
        groups: dict[Hashable, list[Hashable]] = {}
        for element in list(self._parent):
            groups.setdefault(self.find(element), []).append(element)
        return groups
