from providers.geo import parse_geocode
from providers.overpass import build_query, parse_elements
from providers.wikipedia import summary_url


def test_overpass_query_uses_radius_and_center():
    q = build_query((41.9, 12.5), 6000)
    assert q.startswith("[out:json];node(around:6000,41.9,12.5)")
    assert 'tourism~"museum|attraction|' in q


def test_parse_elements_keeps_unnamed_and_skips_coordless():
    js = {"elements": [
        {"id": 1, "lat": 41.9, "lon": 12.5, "tags": {"name": "Colosseum", "tourism": "attraction"}},
        {"id": 2, "lat": 41.8, "lon": 12.4, "tags": {"tourism": "artwork"}},
        {"id": 3, "tags": {"name": "No coords"}},
    ]}
    out = parse_elements(js)
    assert [c.id for c in out] == ["1", "2"]
    assert out[0].name == "Colosseum"
    assert out[0].tags["tourism"] == "attraction"
    assert out[1].name is None


def test_parse_elements_empty_payloads():
    assert parse_elements({}) == []
    assert parse_elements(None) == []


def test_parse_geocode():
    assert parse_geocode([{"lat": "41.89", "lon": "12.49"}]) == (41.89, 12.49)
    assert parse_geocode([]) is None
    assert parse_geocode([{"display_name": "x"}]) is None


def test_summary_url_encodes_title():
    assert summary_url("Trevi Fountain").endswith("/page/summary/Trevi_Fountain")
    assert summary_url("Santa Maria/Trastevere").endswith("Santa_Maria%2FTrastevere")
