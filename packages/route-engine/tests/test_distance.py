import pytest

from route_engine.distance import haversine_km, round_half_away
from route_engine.models import Coordinate

BENGALURU = Coordinate(latitude=12.9716, longitude=77.5946)
CHENNAI = Coordinate(latitude=13.0827, longitude=80.2707)


def test_haversine_km_is_zero_for_same_point() -> None:
    assert haversine_km(BENGALURU, BENGALURU) == 0.0


def test_haversine_km_is_symmetric() -> None:
    assert haversine_km(BENGALURU, CHENNAI) == haversine_km(CHENNAI, BENGALURU)


def test_haversine_km_bengaluru_to_chennai() -> None:
    distance = haversine_km(BENGALURU, CHENNAI)
    assert 290 <= distance <= 300


def test_haversine_km_thanjavur_to_chennai() -> None:
    distance = haversine_km(
        Coordinate(latitude=10.78523, longitude=79.13909),
        Coordinate(latitude=13.08369, longitude=80.27070),
    )
    assert distance == pytest.approx(283.0, abs=20)


def test_haversine_km_does_not_validate_ranges() -> None:
    distance = haversine_km(Coordinate(latitude=120.0, longitude=0.0), Coordinate(latitude=0.0, longitude=400.0))
    assert distance >= 0


@pytest.mark.parametrize(
    ("value", "expected"),
    [(1.005, 1.01), (2.675, 2.68), (-1.005, -1.01), (0.004, 0.0), (10.0, 10.0)],
)
def test_round_half_away_rounds_cents_away_from_zero(value: float, expected: float) -> None:
    assert round_half_away(value, 2) == expected
