import numpy as np
import pytest

from diagdist.computing.cost import CostModel
from diagdist.data import DistanceConfig


@pytest.mark.parametrize("w", [1, 2, 3])
def test_maximum_distance_uses_death_value(make_pair, w):
    model = CostModel(wasserstein=w)
    a = make_pair("max", 1.0, 5.0)
    b = make_pair("max", 1.0, 8.0)
    assert model.distance(a, b) == pytest.approx(3.0)


def test_minimum_distance_combines_value_and_position(make_pair):
    model = CostModel(px=1.0, py=1.0, pz=0.0, pe=2.0, ps=1.0, wasserstein=2)
    a = make_pair("min", 0.0, 2.0, birth_coords=(0.0, 0.0, 0.0))
    b = make_pair("min", 1.0, 2.0, birth_coords=(3.0, 4.0, 0.0))
    # pe * 1^2 + (3^2 + 4^2), then square root
    assert model.distance(a, b) == pytest.approx(np.sqrt(27.0))


def test_saddle_distance_uses_midpoints(make_pair):
    model = CostModel(px=1.0, wasserstein=1)
    a = make_pair("saddle", 1.0, 2.0, (0.0, 0.0, 0.0), (2.0, 0.0, 0.0))
    b = make_pair("saddle", 1.0, 2.0, (2.0, 0.0, 0.0), (4.0, 0.0, 0.0))
    assert model.distance(a, b) == pytest.approx(2.0)


def test_diagonal_distance(make_pair):
    model = CostModel(px=2.0, pe=1.0, ps=0.5, wasserstein=1)
    extremum = make_pair("max", 1.0, 5.0, (0.0, 0.0, 0.0), (1.0, 0.0, 0.0))
    saddle = make_pair("saddle", 1.0, 4.0)
    assert model.diagonal_distance(extremum) == pytest.approx(6.0)
    assert model.diagonal_distance(saddle) == pytest.approx(1.5)


def test_distance_is_symmetric_within_class(make_pair):
    model = CostModel(px=1.0, py=0.5, pz=0.25, pe=1.0, ps=2.0, wasserstein=2)
    a = make_pair("max", 0.5, 4.0, (0.1, 0.2, 0.3), (0.9, 0.1, 0.4))
    b = make_pair("component", 1.5, 6.0, (0.7, 0.3, 0.2), (0.2, 0.8, 0.6))
    assert model.distance(a, b) == pytest.approx(model.distance(b, a))


def test_distance_accepts_rows(make_pair):
    model = CostModel(wasserstein=2)
    a = make_pair("max", 1.0, 5.0)
    b = make_pair("max", 1.0, 9.0)
    assert model.distance(np.array(a.to_row()), np.array(b.to_row())) == pytest.approx(
        model.distance(a, b)
    )


def test_from_config_infinity_uses_linear_terms():
    model = CostModel.from_config(DistanceConfig(wasserstein="inf"))
    assert model.w == 1


def test_persistence_metric_drops_spatial_weights():
    config = DistanceConfig(px=1.0, py=2.0, pz=3.0, use_persistence_metric=True)
    model = CostModel.from_config(config)
    assert (model.px, model.py, model.pz) == (0.0, 0.0, 0.0)
    assert model.pe == 1.0 and model.ps == 1.0


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2", 2),
        (3, 3),
        ("inf", -1),
        ("INF", -1),
        ("-1", -1),
        ("0", -1),
        ("-2", None),
        ("-3", None),
        ("abc", None),
        ("1.5", None),
    ],
)
def test_config_norm(value, expected):
    assert DistanceConfig(wasserstein=value).norm == expected
