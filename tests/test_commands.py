import pytest

from valhalla.commands import (
    UnknownMobError,
    job_name_to_id,
    map_name_to_id,
    mob_name_to_ids,
)


@pytest.mark.parametrize(
    "name, map_id",
    [
        ("amherst", 1010000),
        ("southperry", 60000),
        ("henesys", 100000000),
        ("sleepy", 105040300),
        ("aqua", 230000000),
        ("balrog", 105090900),
    ],
)
def test_known_maps(name, map_id):
    assert map_name_to_id(name) == map_id


def test_unknown_map_goes_to_gm_map():
    assert map_name_to_id("nowhere") == map_name_to_id("gm") == 180000000


@pytest.mark.parametrize(
    "name, job_id",
    [
        ("Beginner", 0),
        ("Warrior", 100),
        ("DragonKnight", 131),
        ("IceLightMage", 221),
        ("ChiefBandit", 421),
        ("SuperGm", 510),
    ],
)
def test_known_jobs(name, job_id):
    assert job_name_to_id(name) == job_id


def test_unknown_job_and_case_sensitivity():
    assert job_name_to_id("warrior") == 0
    assert job_name_to_id("Pirate") == 0


def test_single_boss():
    assert mob_name_to_ids("balrog") == [8130100]
    assert mob_name_to_ids("pianus") == [8520000]


def test_zakum_spawns_arms_then_body():
    ids = mob_name_to_ids("zakum")
    assert len(ids) == 9
    assert ids[0] == 8800003
    assert ids[-1] == 8800000
    assert len(set(ids)) == 9


def test_returned_list_is_independent():
    first = mob_name_to_ids("mushmom")
    first.append(1)
    assert mob_name_to_ids("mushmom") == [6130101]


def test_unknown_mob_raises():
    with pytest.raises(UnknownMobError):
        mob_name_to_ids("snail")