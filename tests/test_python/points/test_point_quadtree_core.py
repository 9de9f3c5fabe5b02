from intquadtree import QuadTree


def test_insert_query_len_contains_and_iter(bounds, dtype):
    qt = QuadTree(bounds, capacity=4, dtype=dtype)
    coords = [(1, 1), (2, 2), (3, 3)]
    for pt in coords:
        qt.insert(pt)

    assert len(qt) == 3
    assert coords[0] in qt
    assert (4, 4) not in qt
    assert qt.query(bounds) == coords

    got = qt.query((0, 0, 2, 2))
    assert got == [(1, 1), (2, 2)]

    assert sorted(qt) == sorted(coords)


def test_query_empty_region_and_outside_bounds(bounds, dtype):
    qt = QuadTree(bounds, capacity=4, dtype=dtype)
    assert qt.query(bounds) == []
    qt.insert((50, 50))
    outside = (bounds[2] + 1, bounds[3] + 1, 5, 5)
    assert qt.query(outside) == []


def test_nearest_neighbor_variants(bounds, dtype):
    qt = QuadTree(bounds, capacity=4, dtype=dtype)
    for pt in [(10, 10), (20, 20), (35, 35)]:
        qt.insert(pt)

    assert qt.nearest_neighbor((22, 22)) == (20, 20)
    assert qt.nearest_neighbors((22, 22), k=2) == [(20, 20), (10, 10)]


def test_nearest_neighbor_empty_and_k_exceeds_count(bounds, dtype):
    qt = QuadTree(bounds, capacity=4, dtype=dtype)
    assert qt.nearest_neighbor((5, 5)) is None
    assert qt.nearest_neighbors((5, 5), k=3) == []

    qt.insert((1, 1))
    assert qt.nearest_neighbors((5, 5), k=5) == [(1, 1)]


def test_get_all_node_boundaries_and_max_depth(bounds, dtype):
    qt = QuadTree(bounds, capacity=2, max_depth=6, dtype=dtype)
    qt.insert((10, 10))
    qt.insert((90, 90))
    qt.insert((25, 25))

    boundaries = qt.get_all_node_boundaries()
    assert boundaries == [
        (0, 0, 100, 100),
        (50, 0, 50, 50),
        (0, 0, 50, 50),
        (0, 50, 50, 50),
        (50, 50, 50, 50),
    ]
    assert qt.get_inner_max_depth() == 6
    assert qt.depth() == 1


def test_inner_max_depth_without_limit():
    assert QuadTree((0, 0, 200, 200), capacity=4).get_inner_max_depth() == 7
    assert QuadTree((0, 0, 200, 200), capacity=4, max_depth=2).get_inner_max_depth() == 2


def test_delete_and_clear(bounds, dtype):
    qt = QuadTree(bounds, capacity=1, dtype=dtype)
    for pt in [(0, 0), (1, 1), (60, 60)]:
        qt.insert(pt)

    assert qt.delete(0, 0) is True
    assert qt.delete(0, 0) is False
    assert qt.delete_tuple((60, 60)) is True
    assert len(qt) == 1
    assert qt.query(bounds) == [(1, 1)]

    qt.clear()
    assert len(qt) == 0
    assert qt.query(bounds) == []
    assert qt.get_all_node_boundaries() == [bounds]
    assert qt.bounds == bounds
    assert qt.capacity == 1
    assert qt.dtype == dtype


def test_update_moves_point(bounds, dtype):
    qt = QuadTree(bounds, capacity=2, dtype=dtype)
    qt.insert((1, 1))
    qt.insert((2, 2))

    assert qt.update((1, 1), (80, 80)) is True
    assert (1, 1) not in qt
    assert (80, 80) in qt
    assert len(qt) == 2

    assert qt.update((5, 5), (6, 6)) is False


def test_insert_many(bounds, dtype):
    qt = QuadTree(bounds, capacity=2, dtype=dtype)
    res = qt.insert_many([(1, 1), (2, 2), (3, 3)])
    assert res.count == 3
    assert res.gaps == []
    assert res.ok
    assert len(qt) == 3

    res2 = qt.insert_many([])
    assert res2.count == 0
    assert len(qt) == 3
