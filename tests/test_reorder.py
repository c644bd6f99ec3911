import pytest

from reorder import day_buckets, move_poi, reorder_days


def ids_by_day(trip):
    return [[p.id for p in bucket] for bucket in day_buckets(trip)]


def test_move_to_other_day(rome_trip):
    before = {p.id: p.day for p in rome_trip.pois}
    assert move_poi(rome_trip, "n2", 1, 0)
    assert rome_trip.find("n2").day == 1
    after = {p.id: p.day for p in rome_trip.pois}
    assert {k: v for k, v in after.items() if k != "n2"} == {k: v for k, v in before.items() if k != "n2"}
    assert ids_by_day(rome_trip) == [["n1", "n3", "n4"], ["n2", "n5", "n6", "n7"]]


def test_move_to_end_of_day(rome_trip):
    move_poi(rome_trip, "n1", 1, 99)
    assert ids_by_day(rome_trip) == [["n2", "n3", "n4"], ["n5", "n6", "n7", "n1"]]


def test_move_within_day(rome_trip):
    move_poi(rome_trip, "n4", 0, 0)
    assert ids_by_day(rome_trip) == [["n4", "n1", "n2", "n3"], ["n5", "n6", "n7"]]
    move_poi(rome_trip, "n4", 0, 2)
    assert ids_by_day(rome_trip) == [["n1", "n2", "n4", "n3"], ["n5", "n6", "n7"]]


def test_move_to_current_spot_is_noop(rome_trip):
    snapshot = rome_trip.model_copy(deep=True)
    for p in list(rome_trip.pois):
        bucket = [q.id for q in rome_trip.pois if q.day == p.day]
        assert not move_poi(rome_trip, p.id, p.day, bucket.index(p.id))
    assert rome_trip == snapshot


def test_move_into_empty_day(make_candidates):
    from itinerary import build_trip
    trip = build_trip(make_candidates(5), (41.9028, 12.4964), 4, "Rome")
    assert move_poi(trip, "n1", 3, 0)
    assert ids_by_day(trip) == [["n2"], ["n3", "n4"], ["n5"], ["n1"]]


def test_move_unknown_id_is_silent(rome_trip):
    snapshot = rome_trip.model_copy(deep=True)
    assert not move_poi(rome_trip, "gone", 1, 0)
    assert rome_trip == snapshot


def test_move_to_invalid_day_rejected_without_change(rome_trip):
    snapshot = rome_trip.model_copy(deep=True)
    with pytest.raises(ValueError):
        move_poi(rome_trip, "n1", 2, 0)
    with pytest.raises(ValueError):
        move_poi(rome_trip, "n1", -1, 0)
    assert rome_trip == snapshot


def test_reorder_days_remaps_every_poi(rome_trip):
    assert reorder_days(rome_trip, [1, 0])
    assert ids_by_day(rome_trip) == [["n5", "n6", "n7"], ["n1", "n2", "n3", "n4"]]


def test_reorder_then_inverse_restores_days(make_candidates):
    from itinerary import build_trip
    trip = build_trip(make_candidates(12), (41.9028, 12.4964), 4, "Rome")
    original = {p.id: p.day for p in trip.pois}
    perm = [2, 0, 3, 1]
    inverse = [perm.index(d) for d in range(4)]
    reorder_days(trip, perm)
    assert {p.id: p.day for p in trip.pois} == {k: perm[v] for k, v in original.items()}
    reorder_days(trip, inverse)
    assert {p.id: p.day for p in trip.pois} == original


def test_identity_permutation_is_noop(rome_trip):
    snapshot = rome_trip.model_copy(deep=True)
    assert not reorder_days(rome_trip, [0, 1])
    assert rome_trip == snapshot


@pytest.mark.parametrize("perm", [[0], [0, 0], [1, 2], [0, 1, 2]])
def test_bad_permutation_rejected_without_change(rome_trip, perm):
    snapshot = rome_trip.model_copy(deep=True)
    with pytest.raises(ValueError):
        reorder_days(rome_trip, perm)
    assert rome_trip == snapshot
