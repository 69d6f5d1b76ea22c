import numpy as np
import pytest

import diagdist as dd
from diagdist.computing import compute_bottleneck
from diagdist.computing.cost import CostModel
from diagdist.data.constants import (
    STATUS_EMPTY_DIAGRAMS,
    STATUS_INVALID_ALGORITHM,
    STATUS_INVALID_NORM,
    STATUS_UNSUPPORTED_ALGORITHM,
)

NORMS = ["1", "2", "inf"]


def _spatial(**kwargs):
    return dict(px=1.0, py=1.0, pz=1.0, **kwargs)


@pytest.mark.parametrize("wasserstein", NORMS)
def test_distance_is_symmetric(diagram_pair, wasserstein):
    d1, d2 = diagram_pair
    forward = dd.tl.bottleneck_distance(d1, d2, wasserstein=wasserstein, **_spatial())
    backward = dd.tl.bottleneck_distance(d2, d1, wasserstein=wasserstein, **_spatial())
    assert forward.success and backward.success
    assert forward.distance == pytest.approx(backward.distance)


@pytest.mark.parametrize("wasserstein", NORMS)
def test_distance_to_itself_is_zero(diagram_pair, wasserstein):
    d1, _ = diagram_pair
    result = dd.tl.bottleneck_distance(d1, d1, wasserstein=wasserstein, **_spatial())
    assert result.distance == pytest.approx(0.0)
    assert sorted(result.matched_pairs) == [(i, i) for i in range(len(d1))]


def test_matchings_stay_within_class(diagram_pair):
    d1, d2 = diagram_pair
    result = dd.tl.bottleneck_distance(d1, d2, wasserstein="1", **_spatial())
    assert result.matchings
    for i, j in result.matched_pairs:
        assert d1[i].pair_class == d2[j].pair_class


def test_classes_do_not_mix(make_pair, make_diagram):
    d1 = make_diagram(make_pair("min", 0.0, 5.0))
    d2 = make_diagram(make_pair("max", 0.0, 5.0))
    result = dd.tl.bottleneck_distance(d1, d2, wasserstein="1")
    assert result.matchings == []
    assert result.added_persistence["min"] == pytest.approx(5.0)
    assert result.added_persistence["max"] == pytest.approx(5.0)
    assert result.distance == pytest.approx(10.0)


def test_zero_threshold_ignores_small_pairs(diagram_pair):
    d1, d2 = diagram_pair
    result = dd.tl.bottleneck_distance(d1, d2, wasserstein="2", zero_threshold=30.0)
    assert result.success
    assert result.zero_threshold > 0
    for i, j in result.matched_pairs:
        assert d1[i].abs_persistence >= result.zero_threshold
        assert d2[j].abs_persistence >= result.zero_threshold


@pytest.mark.parametrize("wasserstein,w", [("1", 1), ("2", 2), ("3", 3)])
def test_norm_aggregation(make_pair, make_diagram, wasserstein, w):
    d1 = make_diagram(make_pair("max", 0.0, 5.0))
    d2 = make_diagram(make_pair("max", 0.0, 7.0))
    result = dd.tl.bottleneck_distance(d1, d2, wasserstein=wasserstein)
    assert result.matchings == [(0, 0, pytest.approx(2.0))]
    assert result.distance == pytest.approx(2.0 ** (1.0 / w))


@pytest.fixture
def three_class_diagrams(make_pair, make_diagram):
    d1 = make_diagram(
        make_pair("min", 0.0, 10.0),
        make_pair("max", 0.0, 10.0),
        make_pair("saddle", 0.0, 10.0),
    )
    d2 = make_diagram(
        make_pair("min", 1.0, 10.0),
        make_pair("max", 0.0, 13.5),
        make_pair("saddle", 2.0, 10.0),
    )
    return d1, d2


@pytest.mark.parametrize(
    "wasserstein,expected",
    [("inf", 3.5), ("1", 6.5), ("2", np.sqrt(6.5))],
)
def test_one_match_per_class(three_class_diagrams, wasserstein, expected):
    d1, d2 = three_class_diagrams
    result = dd.tl.bottleneck_distance(d1, d2, wasserstein=wasserstein)
    assert sorted(result.matched_pairs) == [(0, 0), (1, 1), (2, 2)]
    assert result.distance == pytest.approx(expected)
    assert all(v == 0.0 for v in result.added_persistence.values())


@pytest.mark.parametrize("wasserstein,w", [("1", 1), ("2", 2), ("inf", 1)])
def test_empty_diagram(make_pair, make_diagram, wasserstein, w):
    d1 = make_diagram(make_pair("max", 0.0, 5.0))
    result = dd.tl.bottleneck_distance(d1, make_diagram(), wasserstein=wasserstein)
    assert result.success
    assert result.transposed
    assert result.matchings == []
    assert result.added_persistence["max"] == pytest.approx(5.0)
    assert result.distance == pytest.approx(5.0 ** (1.0 / w))


@pytest.mark.parametrize("wasserstein", ["inf", "-1", "0"])
def test_bottleneck_aliases(make_pair, make_diagram, wasserstein):
    d1 = make_diagram(make_pair("max", 0.0, 5.0))
    d2 = make_diagram(make_pair("max", 0.0, 7.0))
    result = dd.tl.bottleneck_distance(d1, d2, wasserstein=wasserstein)
    assert result.success
    assert result.distance == pytest.approx(2.0)


@pytest.mark.parametrize("wasserstein", ["-3", "-2", "abc", "1.5"])
def test_invalid_norm(diagram_pair, wasserstein):
    d1, d2 = diagram_pair
    result = dd.tl.bottleneck_distance(d1, d2, wasserstein=wasserstein)
    assert result.status == STATUS_INVALID_NORM
    assert result.distance is None
    assert result.matchings == []


def test_both_diagrams_empty(make_diagram):
    result = dd.tl.bottleneck_distance(make_diagram(), make_diagram())
    assert result.status == STATUS_EMPTY_DIAGRAMS
    assert not result.success


@pytest.mark.parametrize(
    "kwargs,status",
    [
        ({"algorithm": "legacy"}, STATUS_UNSUPPORTED_ALGORITHM),
        ({"algorithm": "3"}, STATUS_UNSUPPORTED_ALGORITHM),
        ({"algorithm": "bogus"}, STATUS_INVALID_ALGORITHM),
        ({"pv_algorithm": 2}, STATUS_UNSUPPORTED_ALGORITHM),
        ({"pv_algorithm": 9}, STATUS_INVALID_ALGORITHM),
    ],
)
def test_algorithm_selection(diagram_pair, kwargs, status):
    d1, d2 = diagram_pair
    result = dd.tl.execute(d1, d2, dd.DistanceConfig(**kwargs))
    assert result.status == status
    assert result.matchings == []


def test_pv_algorithm_overrides_name(diagram_pair):
    d1, d2 = diagram_pair
    config = dd.DistanceConfig(algorithm="bogus", pv_algorithm=0)
    assert dd.tl.execute(d1, d2, config).success


def test_transposed_indices_refer_to_inputs(diagram_pair):
    d1, d2 = diagram_pair
    assert len(d1) > len(d2)
    result = dd.tl.bottleneck_distance(d1, d2, wasserstein="2", **_spatial())
    assert result.transposed
    assert result.n_mismatches == 0
    for i, j in result.matched_pairs:
        assert 0 <= i < len(d1)
        assert 0 <= j < len(d2)
        assert d1[i].pair_class == d2[j].pair_class


def test_accepts_arrays_and_pair_sequences(diagram_pair):
    d1, d2 = diagram_pair
    reference = dd.tl.bottleneck_distance(d1, d2)
    from_arrays = dd.tl.bottleneck_distance(d1.to_array(), d2.to_array())
    from_lists = dd.tl.bottleneck_distance(list(d1), list(d2))
    assert from_arrays.distance == pytest.approx(reference.distance)
    assert from_lists.distance == pytest.approx(reference.distance)


def test_rejects_non_finite_arrays(diagram_pair):
    d1, d2 = diagram_pair
    arr = d1.to_array()
    arr[0, 3] = np.nan
    with pytest.raises(ValueError):
        dd.tl.bottleneck_distance(arr, d2)


def test_geometrical_range_reported(make_pair, make_diagram):
    d1 = make_diagram(make_pair("min", 0.0, 1.0, (0.0, 0.0, 0.0), (3.0, 4.0, 0.0)))
    d2 = make_diagram(make_pair("min", 0.0, 2.0))
    result = compute_bottleneck(d1, d2, dd.DistanceConfig(wasserstein="1"))
    assert result.geometrical_range == pytest.approx(5.0)


def test_mismatch_is_counted(make_pair, make_diagram, monkeypatch):
    d1 = make_diagram(make_pair("min", 0.0, 5.0))
    d2 = make_diagram(make_pair("min", 0.0, 6.0))
    monkeypatch.setattr(CostModel, "distance", lambda self, a, b: 42.0)
    result = compute_bottleneck(d1, d2, dd.DistanceConfig(wasserstein="1"))
    assert result.n_mismatches == 1
    assert result.distance == pytest.approx(42.0)
