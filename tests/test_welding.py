# tests/test_welding.py
# End-to-end welding: length, winding, idempotence and threshold behaviour

import numpy as np
import pytest

from mesh_outlines import weld_mesh, weld_vertices

from meshes import COPLANAR_POSITIONS, FOLDED_POSITIONS, PAIR_INDICES, make_grid, split_vertices


def test_coplanar_duplicates_are_welded() -> None:
    result = weld_vertices(COPLANAR_POSITIONS, PAIR_INDICES, 1.0)
    assert result.tolist() == [0, 1, 2, 1, 4, 2]


def test_folded_triangles_are_not_welded() -> None:
    result = weld_vertices(FOLDED_POSITIONS, PAIR_INDICES, 1.0)
    assert result.tolist() == PAIR_INDICES


def test_degenerate_triangle_leaves_no_aliases() -> None:
    positions = [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0]
    result = weld_mesh(positions, [0, 1, 2], 1.0)
    assert result["aliases"] == {}
    assert result["merge_pairs"] == 0
    assert result["indices"].tolist() == [0, 1, 2]


def test_weld_statistics() -> None:
    result = weld_mesh(COPLANAR_POSITIONS, PAIR_INDICES)
    assert result["aliases"] == {3: 1, 5: 2}
    assert result["merge_pairs"] == 1
    assert result["welded"] == 2


def test_split_grid_welds_to_unique_positions() -> None:
    positions, triangles = split_vertices(*make_grid(2))
    result = weld_vertices(positions, triangles)

    assert len(result) == triangles.size
    assert len(result) % 3 == 0
    assert len(np.unique(result)) == 9
    # Every corner keeps its position, so the winding is unchanged
    np.testing.assert_allclose(positions[result], positions[triangles.reshape(-1)])


def test_weld_is_idempotent() -> None:
    positions, triangles = split_vertices(*make_grid(3))
    once = weld_vertices(positions, triangles)
    twice = weld_vertices(positions, once)
    assert twice.tolist() == once.tolist()


def test_aliases_resolve_to_representatives() -> None:
    positions, triangles = split_vertices(*make_grid(3))
    result = weld_mesh(positions, triangles)
    aliases = result["aliases"]
    for deleted, kept in aliases.items():
        assert kept not in aliases
        assert deleted not in result["indices"]


@pytest.mark.parametrize("positions", [COPLANAR_POSITIONS, FOLDED_POSITIONS])
def test_threshold_monotonicity(positions) -> None:
    counts = [weld_mesh(positions, PAIR_INDICES, angle)["welded"] for angle in (0.5, 1.0, 45.0, 89.0, 91.0, 180.0)]
    assert counts == sorted(counts)


def test_fold_is_welded_above_its_angle() -> None:
    result = weld_vertices(FOLDED_POSITIONS, PAIR_INDICES, 91.0)
    assert result.tolist() == [0, 1, 2, 1, 4, 2]


def test_smooth_curve_is_welded_but_crease_is_not() -> None:
    # Strip of quads bent by 0.5 degrees per step, then one 60 degree crease
    angles = [0.0, 0.5, 1.0, 61.0]
    profile = [(0.0, 0.0)]
    for angle in angles:
        x, z = profile[-1]
        rad = np.radians(angle)
        profile.append((x + np.cos(rad), z + np.sin(rad)))

    positions = [(x, y, z) for x, z in profile for y in (0.0, 1.0)]
    triangles = []
    for i in range(len(angles)):
        a, b, c, d = 2 * i, 2 * i + 2, 2 * i + 3, 2 * i + 1
        triangles.extend([(a, b, c), (a, c, d)])
    split_positions, split_triangles = split_vertices(positions, triangles)

    result = weld_vertices(split_positions, split_triangles, 1.0)
    # 3 smooth quads collapse onto their 8 shared corners,
    # the creased quad keeps its own 4 vertices
    assert len(np.unique(result)) == 12


@pytest.mark.parametrize(
    "positions, indices",
    [
        ([0.0, 0.0], [0, 1, 2]),
        ([0.0, 0.0, 0.0], [0, 0]),
        ([0.0, 0.0, 0.0], [0.0, 0.0, 0.0]),
    ],
)
def test_malformed_buffers_raise(positions, indices) -> None:
    with pytest.raises(ValueError):
        weld_vertices(positions, indices)


def test_empty_mesh() -> None:
    assert weld_vertices([], []).tolist() == []


def test_mesh_smaller_than_tolerance_is_welded_without_crossing() -> None:
    positions = np.array(COPLANAR_POSITIONS).reshape(-1, 3) * 0.05
    once = weld_vertices(positions, PAIR_INDICES)
    assert once.tolist() == [0, 1, 2, 1, 4, 2]
    np.testing.assert_allclose(positions[once], positions[PAIR_INDICES])

    twice = weld_vertices(positions, once)
    assert twice.tolist() == [0, 1, 2, 1, 4, 2]


def test_small_split_grid_keeps_positions() -> None:
    positions, triangles = split_vertices(*make_grid(3))
    positions = positions * 0.01
    result = weld_vertices(positions, triangles)
    assert len(np.unique(result)) == 16
    np.testing.assert_allclose(positions[result], positions[triangles.reshape(-1)])
    assert weld_vertices(positions, result).tolist() == result.tolist()
