"""Tests for simulation.union_find."""

import itertools

from breadboard.simulation.union_find import DisjointSet


class TestMakeSet:
    def test_make_set_registers_singleton(self):
        ds = DisjointSet()
        ds.make_set("a")
        assert "a" in ds
        assert ds.find("a") == "a"
        assert ds.rank("a") == 0

    def test_make_set_is_idempotent(self):
        ds = DisjointSet()
        ds.make_set("a")
        ds.union("a", "b")
        ds.make_set("a")
        ds.make_set("b")
        assert ds.connected("a", "b")
        assert len(ds) == 2

    def test_find_registers_unseen_id(self):
        ds = DisjointSet()
        assert ds.find("x") == "x"
        assert "x" in ds

    def test_any_hashable_id(self):
        ds = DisjointSet()
        ds.union(("B1", 0), 42)
        assert ds.connected(42, ("B1", 0))


class TestUnion:
    def test_union_joins_sets(self):
        ds = DisjointSet()
        ds.union("a", "b")
        assert ds.connected("a", "b")
        assert not ds.connected("a", "c")

    def test_tie_makes_root_of_a_the_root(self):
        ds = DisjointSet()
        ds.union("a", "b")
        assert ds.find("b") == "a"
        assert ds.rank("a") == 1

    def test_smaller_rank_goes_under_larger(self):
        ds = DisjointSet()
        ds.union("a", "b")  # rank(a) = 1
        ds.union("c", "a")  # rank(c) = 0 < 1
        assert ds.find("c") == "a"
        assert ds.rank("a") == 1

    def test_union_already_joined_is_noop(self):
        ds = DisjointSet()
        ds.union("a", "b")
        ds.union("b", "a")
        assert ds.find("a") == "a"
        assert ds.rank("a") == 1

    def test_union_self_is_noop(self):
        ds = DisjointSet()
        ds.union("a", "a")
        assert ds.rank("a") == 0

    def test_transitive_closure(self):
        ds = DisjointSet()
        pairs = [("a", "b"), ("c", "d"), ("b", "c"), ("e", "f")]
        for a, b in pairs:
            ds.union(a, b)
        for x, y in itertools.combinations("abcd", 2):
            assert ds.connected(x, y)
        assert ds.connected("e", "f")
        assert not ds.connected("a", "e")

    def test_root_rank_never_decreases(self):
        ds = DisjointSet()
        elements = [f"n{i}" for i in range(16)]
        for x in elements:
            ds.make_set(x)
        for step in (1, 2, 4, 8):
            for i in range(0, 16, step * 2):
                before = ds.rank(ds.find(elements[i]))
                ds.union(elements[i], elements[i + step])
                assert ds.rank(ds.find(elements[i])) >= before
        assert len(ds.get_roots()) == 1
        assert ds.rank(ds.find("n0")) == 4


class TestPathCompression:
    def test_find_points_every_visited_element_at_root(self):
        ds = DisjointSet()
        ds.union("b", "c")  # c -> b
        ds.union("a", "b")  # b -> a (a rank 0 < b rank 1 -> a goes under b)
        ds.union("d", "e")
        ds.union("d", "f")
        ds.union("d", "a")  # chain depth grows
        root = ds.find("c")
        for x in "abcdef":
            assert ds.find(x) == root
        assert all(ds._parent[x] in (root, x) for x in "abcdef")


class TestRootsAndGroups:
    def test_get_roots_in_registration_order(self):
        ds = DisjointSet()
        for x in ("p", "q", "r", "s"):
            ds.make_set(x)
        ds.union("s", "q")
        assert ds.get_roots() == ["p", "s", "r"]

    def test_get_groups(self):
        ds = DisjointSet()
        for x in ("p", "q", "r", "s"):
            ds.make_set(x)
        ds.union("p", "r")
        groups = ds.get_groups()
        assert groups == {"p": ["p", "r"], "q": ["q"], "s": ["s"]}

    def test_empty(self):
        ds = DisjointSet()
        assert ds.get_roots() == []
        assert ds.get_groups() == {}
        assert len(ds) == 0
