import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gridmaze.core.disjoint_set import DisjointSet


class TestDisjointSet(unittest.TestCase):
    def test_singletons(self):
        ds = DisjointSet(5)
        self.assertEqual(len(ds), 5)
        self.assertEqual(ds.component_count, 5)
        for i in range(5):
            self.assertEqual(ds.find(i), i)

    def test_union(self):
        ds = DisjointSet(4)
        self.assertTrue(ds.union(0, 1))
        self.assertEqual(ds.component_count, 3)
        self.assertTrue(ds.connected(0, 1))
        self.assertFalse(ds.connected(0, 2))

    def test_union_same_set_is_noop(self):
        ds = DisjointSet(3)
        ds.union(0, 1)
        parents = list(ds.parent)
        ranks = list(ds.rank)

        self.assertFalse(ds.union(1, 0))
        self.assertEqual(ds.component_count, 2)
        self.assertEqual(list(ds.parent), parents)
        self.assertEqual(list(ds.rank), ranks)

    def test_union_by_rank(self):
        ds = DisjointSet(4)
        # Equal ranks: first root becomes the parent and its rank grows
        ds.union(0, 1)
        self.assertEqual(ds.parent[1], 0)
        self.assertEqual(ds.rank[0], 1)

        # Lower rank root goes under the higher one, whatever the argument order
        ds.union(2, 0)
        self.assertEqual(ds.parent[2], 0)
        self.assertEqual(ds.rank[0], 1)

    def test_path_compression(self):
        ds = DisjointSet(4)
        # Build a chain 3 -> 2 -> 0 by hand
        ds.parent[3] = 2
        ds.parent[2] = 0
        self.assertEqual(ds.find(3), 0)
        self.assertEqual(ds.parent[3], 0)
        self.assertEqual(ds.parent[2], 0)

    def test_full_merge(self):
        n = 50
        ds = DisjointSet(n)
        for i in range(n - 1):
            self.assertTrue(ds.union(i, i + 1))
        self.assertEqual(ds.component_count, 1)
        root = ds.find(0)
        self.assertTrue(all(ds.find(i) == root for i in range(n)))

    def test_reset(self):
        ds = DisjointSet(3)
        ds.union(0, 1)
        ds.union(1, 2)
        ds.reset()
        self.assertEqual(ds.component_count, 3)
        self.assertFalse(ds.connected(0, 2))

    def test_negative_size(self):
        with self.assertRaises(ValueError):
            DisjointSet(-1)


if __name__ == '__main__':
    unittest.main()
