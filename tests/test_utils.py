import pytest

import utils
from models import Candidate
from utils import TTLCache, dedupe, distance_km


def test_distance_same_point_is_zero():
    assert distance_km((48.8566, 2.3522), (48.8566, 2.3522)) == 0.0


def test_distance_one_degree_latitude():
    # 2 * pi * 6371 / 360
    assert distance_km((0.0, 0.0), (1.0, 0.0)) == pytest.approx(111.195, abs=0.01)


def test_distance_is_symmetric():
    paris, rome = (48.8566, 2.3522), (41.9028, 12.4964)
    assert distance_km(paris, rome) == pytest.approx(distance_km(rome, paris))
    assert distance_km(paris, rome) == pytest.approx(1106, abs=10)


def test_dedupe_keeps_first_occurrence():
    a = Candidate(id="1", name="A", lat=0, lon=0)
    b = Candidate(id="1", name="B", lat=1, lon=1)
    c = Candidate(id="2", name="C", lat=2, lon=2)
    assert [x.name for x in dedupe([a, b, c])] == ["A", "C"]


def test_ttl_cache_expires(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(utils.time, "time", lambda: now[0])
    cache = TTLCache(ttl_seconds=10)
    cache.set("k", ["v"])
    assert cache.get("k") == ["v"]
    now[0] += 11
    assert cache.get("k") is None
    assert cache.get("missing") is None


def test_ttl_cache_purge_drops_only_expired(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(utils.time, "time", lambda: now[0])
    cache = TTLCache(ttl_seconds=10)
    cache.set("old", 1)
    now[0] += 8
    cache.set("new", 2)
    now[0] += 5
    assert cache.purge() == 1
    assert len(cache) == 1
    assert cache.get("new") == 2
