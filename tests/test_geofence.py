import pytest

from flightwatch.domain.geofence import classify, is_approaching, is_inside
from flightwatch.models import AlertClassification, Region, StateRecord

MINNESOTA = Region(name="Minnesota", north=49.384, south=43.499, east=-89.491, west=-97.239)


def test_is_inside_includes_boundaries():
    assert is_inside(MINNESOTA, 44.9, -93.2)
    assert is_inside(MINNESOTA, MINNESOTA.north, MINNESOTA.east)
    assert is_inside(MINNESOTA, MINNESOTA.south, MINNESOTA.west)


@pytest.mark.parametrize(
    "lat,lon",
    [
        (MINNESOTA.north + 1, -93.2),
        (MINNESOTA.south - 1, -93.2),
        (44.9, MINNESOTA.east + 1),
        (44.9, MINNESOTA.west - 1),
    ],
)
def test_is_inside_rejects_points_outside(lat, lon):
    assert not is_inside(MINNESOTA, lat, lon)


def test_is_inside_requires_coordinates():
    assert not is_inside(MINNESOTA, None, -93.2)
    assert not is_inside(MINNESOTA, 44.9, None)


def test_zero_coordinates_are_not_treated_as_missing():
    equator = Region(north=1.0, south=-1.0, east=1.0, west=-1.0)
    assert is_inside(equator, 0.0, 0.0)
    assert is_approaching(equator, -5.0, 0.0, 0.0)


@pytest.mark.parametrize("heading", [0.0, 30.0, 44.0, 45.0, 315.0, 330.0, 359.999, 360.0])
def test_approaching_from_south_with_northbound_heading(heading):
    assert is_approaching(MINNESOTA, 40.0, -93.2, heading)


@pytest.mark.parametrize("heading", [46.0, 136.0, 180.0, 200.0, 314.0])
def test_not_approaching_from_south_otherwise(heading):
    assert not is_approaching(MINNESOTA, 40.0, -93.2, heading)


@pytest.mark.parametrize("heading", [45.0, 90.0, 135.0])
def test_approaching_from_west_with_eastbound_heading(heading):
    assert is_approaching(MINNESOTA, 46.0, -100.0, heading)


@pytest.mark.parametrize("heading", [44.0, 136.0, 270.0])
def test_not_approaching_from_west_otherwise(heading):
    assert not is_approaching(MINNESOTA, 46.0, -100.0, heading)


def test_north_and_east_approaches_are_not_detected():
    assert not is_approaching(MINNESOTA, 52.0, -93.2, 180.0)
    assert not is_approaching(MINNESOTA, 46.0, -85.0, 270.0)


def test_inside_is_never_approaching():
    for heading in range(0, 361, 15):
        assert not is_approaching(MINNESOTA, 44.9, -93.2, float(heading))
        assert not is_approaching(MINNESOTA, MINNESOTA.south, MINNESOTA.west, float(heading))


def test_missing_inputs_are_not_approaching():
    assert not is_approaching(MINNESOTA, None, -93.2, 10.0)
    assert not is_approaching(MINNESOTA, 40.0, None, 10.0)
    assert not is_approaching(MINNESOTA, 40.0, -93.2, None)


def test_headings_outside_compass_range_wrap():
    assert is_approaching(MINNESOTA, 40.0, -93.2, -10.0)
    assert is_approaching(MINNESOTA, 40.0, -93.2, 370.0)


def test_classify_scenarios():
    inside = StateRecord(icao24="a0b2c3", latitude=44.9, longitude=-93.2, true_track=10.0)
    approaching = StateRecord(icao24="a0b2c3", latitude=40.0, longitude=-93.2, true_track=10.0)
    departing = StateRecord(icao24="a0b2c3", latitude=40.0, longitude=-93.2, true_track=200.0)
    unknown = StateRecord(icao24="a0b2c3")

    assert classify(MINNESOTA, inside) is AlertClassification.INSIDE
    assert classify(MINNESOTA, approaching) is AlertClassification.APPROACHING
    assert classify(MINNESOTA, departing) is None
    assert classify(MINNESOTA, unknown) is None


def test_region_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        Region(north=40.0, south=45.0, east=-90.0, west=-97.0)
    with pytest.raises(ValueError):
        Region(north=45.0, south=40.0, east=-97.0, west=-90.0)
