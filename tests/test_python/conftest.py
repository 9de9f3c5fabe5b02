import pytest

from intquadtree._common import Bounds


@pytest.fixture(params=["u8", "u16", "u32", "u64"])
def dtype(request) -> str:
    return request.param


@pytest.fixture
def bounds() -> Bounds:
    return (0, 0, 100, 100)


def _all_nodes(quad):
    """Yield every node of a subtree, pre-order."""
    yield quad
    if quad.children is not None:
        for child in quad.children:
            yield from _all_nodes(child)


@pytest.fixture
def all_nodes():
    return _all_nodes
