from array import array


class DisjointSet:
    """
    Union-Find over integer ids 0..n-1.
    find() compresses paths, union() links by rank, so both are ~O(1) amortized.
    """

    __slots__ = ('parent', 'rank', 'component_count')

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"DisjointSet size must be non-negative, got {size}")
        # 'l' (signed long) ids, 'B' ranks: rank never exceeds log2(n)
        self.parent = array('l', range(size))
        self.rank = array('B', [0] * size)
        self.component_count = size

    def __len__(self):
        return len(self.parent)

    def find(self, x: int) -> int:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]

        # Path compression: point every node on the way directly at the root
        while self.parent[x] != root:
            nxt = self.parent[x]
            self.parent[x] = root
            x = nxt
        return root

    def union(self, x: int, y: int) -> bool:
        root_x = self.find(x)
        root_y = self.find(y)

        if root_x == root_y:
            return False

        if self.rank[root_x] < self.rank[root_y]:
            self.parent[root_x] = root_y
        elif self.rank[root_x] > self.rank[root_y]:
            self.parent[root_y] = root_x
        else:
            self.parent[root_y] = root_x
            self.rank[root_x] += 1

        self.component_count -= 1
        return True

    def connected(self, x: int, y: int) -> bool:
        return self.find(x) == self.find(y)

    def reset(self):
        for i in range(len(self.parent)):
            self.parent[i] = i
            self.rank[i] = 0
        self.component_count = len(self.parent)

    def __repr__(self):
        return f"DisjointSet(size={len(self.parent)}, components={self.component_count})"
