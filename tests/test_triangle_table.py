import pytest

from sobfusion.triangle_table import cube_triangles

# Corner pairs joined by each of the twelve cube edges.
EDGE_CORNERS = (
    (0, 1), (1, 2), (2, 3), (3, 0),
    (4, 5), (5, 6), (6, 7), (7, 4),
    (0, 4), (1, 5), (2, 6), (3, 7),
)


def _crossed_edges(cube_index):
    return {
        edge
        for edge, (a, b) in enumerate(EDGE_CORNERS)
        if ((cube_index >> a) & 1) != ((cube_index >> b) & 1)
    }


def test_single_corner_case():
    assert cube_triangles(1) == ((0, 8, 3),)


def test_last_corner_case():
    assert cube_triangles(128) == ((7, 6, 11),)


def test_two_triangle_case():
    assert cube_triangles(3) == ((1, 8, 3), (9, 8, 1))


@pytest.mark.parametrize("cube_index", [0, 255])
def test_fully_inside_or_outside_is_empty(cube_index):
    assert cube_triangles(cube_index) == ()


@pytest.mark.parametrize(
    "cube_index, vertices",
    [(7, 9), (23, 12), (61, 15), (105, 12), (254, 3)],
)
def test_vertex_counts_match_source_table(cube_index, vertices):
    assert 3 * len(cube_triangles(cube_index)) == vertices


@pytest.mark.parametrize("cube_index", range(256))
def test_triangles_use_exactly_crossed_edges(cube_index):
    used = {edge for tri in cube_triangles(cube_index) for edge in tri}
    assert used == _crossed_edges(cube_index)


@pytest.mark.parametrize("cube_index", range(256))
def test_triangles_are_well_formed(cube_index):
    triangles = cube_triangles(cube_index)
    assert len(triangles) <= 5
    for tri in triangles:
        assert len(tri) == 3
        assert len(set(tri)) == 3
        assert all(0 <= edge < 12 for edge in tri)


@pytest.mark.parametrize("cube_index", range(128))
def test_complement_cases_share_edges(cube_index):
    edges = {e for tri in cube_triangles(cube_index) for e in tri}
    complement = {e for tri in cube_triangles(255 - cube_index) for e in tri}
    assert edges == complement


@pytest.mark.parametrize("cube_index", [-1, 256, 1000])
def test_out_of_range_raises(cube_index):
    with pytest.raises(ValueError):
        cube_triangles(cube_index)


def test_non_integer_raises():
    with pytest.raises(TypeError):
        cube_triangles(1.5)