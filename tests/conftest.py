import numpy as np
import pytest

from diagdist.data import CriticalType, PersistenceDiagram, PersistencePair

_PAIR_TYPES = {
    "min": (CriticalType.LOCAL_MINIMUM, CriticalType.SADDLE1),
    "max": (CriticalType.SADDLE2, CriticalType.LOCAL_MAXIMUM),
    "saddle": (CriticalType.SADDLE1, CriticalType.SADDLE2),
    "component": (CriticalType.LOCAL_MINIMUM, CriticalType.LOCAL_MAXIMUM),
    "degenerate": (CriticalType.DEGENERATE, CriticalType.REGULAR),
}


def _make_pair(
    kind: str,
    birth: float,
    death: float,
    birth_coords=(0.0, 0.0, 0.0),
    death_coords=(0.0, 0.0, 0.0),
) -> PersistencePair:
    birth_type, death_type = _PAIR_TYPES[kind]
    return PersistencePair.from_values(
        birth_type=birth_type,
        death_type=death_type,
        birth_value=birth,
        death_value=death,
        birth_coords=birth_coords,
        death_coords=death_coords,
    )


def _random_diagram(rng: np.random.Generator, counts: dict[str, int]) -> PersistenceDiagram:
    pairs = []
    for kind, n in counts.items():
        for _ in range(n):
            birth = float(rng.uniform(0.0, 10.0))
            death = birth + float(rng.uniform(0.5, 5.0))
            pairs.append(
                _make_pair(
                    kind,
                    birth,
                    death,
                    tuple(float(v) for v in rng.uniform(0.0, 1.0, 3)),
                    tuple(float(v) for v in rng.uniform(0.0, 1.0, 3)),
                )
            )
    order = rng.permutation(len(pairs))
    return PersistenceDiagram(pairs=tuple(pairs[k] for k in order))


@pytest.fixture
def make_pair():
    return _make_pair


@pytest.fixture
def make_diagram():
    def _make(*pairs: PersistencePair) -> PersistenceDiagram:
        return PersistenceDiagram(pairs=tuple(pairs))

    return _make


@pytest.fixture
def diagram_pair() -> tuple[PersistenceDiagram, PersistenceDiagram]:
    rng = np.random.default_rng(7)
    d1 = _random_diagram(rng, {"min": 4, "max": 2, "saddle": 3, "component": 1})
    d2 = _random_diagram(rng, {"min": 2, "max": 4, "saddle": 3})
    return d1, d2
