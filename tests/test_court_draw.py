import random

import pytest
from conftest import females, make_player, males

from courtdraw.exceptions import (
    DrawException,
    GenderShortageException,
    InsufficientTotalPlayersException,
    InvalidConfigurationException,
    PriorityOverflowException,
)
from courtdraw.models.player import Gender
from courtdraw.models.session import GameMode
from courtdraw.pairing.court_draw import (
    MatchGenerator,
    draw_matches,
    filter_pool,
    resolve_requirements,
    validate_draw,
)


def _all_players(matches):
    return [p for match in matches for p in match.players]


# ========== Requirements ==========


@pytest.mark.parametrize(
    "mode, courts, per_match, total",
    [
        (GameMode.ANY_DOUBLES, 1, 4, 4),
        (GameMode.MIXED_DOUBLES, 2, 4, 8),
        (GameMode.MENS_DOUBLES, 3, 4, 12),
        (GameMode.WOMENS_SINGLES, 2, 2, 4),
        (GameMode.ANY_SINGLES, 4, 2, 8),
    ],
)
def test_resolve_requirements(mode, courts, per_match, total):
    req = resolve_requirements(mode, courts)
    assert req.players_per_match == per_match
    assert req.total_needed == total


def test_mixed_doubles_needs_two_per_gender_per_court():
    assert resolve_requirements(GameMode.MIXED_DOUBLES, 3).needed_per_gender == 6
    assert resolve_requirements(GameMode.ANY_DOUBLES, 3).needed_per_gender == 0


def test_zero_courts_rejected():
    with pytest.raises(InvalidConfigurationException):
        resolve_requirements(GameMode.ANY_DOUBLES, 0)


def test_filter_pool_by_mode_gender():
    pool = males("m1", "m2") + females("f1")
    assert [p.name for p in filter_pool(pool, GameMode.MENS_SINGLES)] == ["m1", "m2"]
    assert [p.name for p in filter_pool(pool, GameMode.WOMENS_DOUBLES)] == ["f1"]
    assert len(filter_pool(pool, GameMode.ANY_DOUBLES)) == 3
    assert len(filter_pool(pool, GameMode.MIXED_DOUBLES)) == 3


# ========== Validation ==========


def test_three_players_any_doubles_is_insufficient():
    pool = males("a", "b", "c")

    with pytest.raises(InsufficientTotalPlayersException) as excinfo:
        draw_matches(pool, GameMode.ANY_DOUBLES, 1, random.Random(1))

    assert excinfo.value.needed == 4
    assert excinfo.value.available == 3
    assert "4" in str(excinfo.value)
    assert "3" in str(excinfo.value)


def test_priority_overflow_over_total_slots():
    pool = males("a", "b", "c", is_priority=True) + males("d")
    with pytest.raises(PriorityOverflowException):
        validate_draw(pool, GameMode.MENS_SINGLES, 1)


def test_mixed_priority_overflow_names_the_gender():
    pool = males("m1", "m2", "m3", is_priority=True) + females("f1", "f2")
    with pytest.raises(PriorityOverflowException) as excinfo:
        validate_draw(pool, GameMode.MIXED_DOUBLES, 1)
    assert excinfo.value.gender == "male"
    assert "male" in str(excinfo.value)


def test_mixed_female_shortage():
    pool = males("m1", "m2", "m3") + females("f1")
    with pytest.raises(GenderShortageException) as excinfo:
        validate_draw(pool, GameMode.MIXED_DOUBLES, 1)
    assert excinfo.value.gender == "female"


def test_mixed_shortage_counts_only_regular_players():
    # one flagged female fills one slot; one regular female is still missing
    pool = males("m1", "m2", "m3") + females("f1", is_priority=True)
    with pytest.raises(GenderShortageException):
        validate_draw(pool, GameMode.MIXED_DOUBLES, 1)


def test_single_gender_mode_checks_filtered_pool():
    pool = males("m1") + females("f1", "f2", "f3")
    with pytest.raises(GenderShortageException) as excinfo:
        validate_draw(pool, GameMode.MENS_SINGLES, 1)
    assert excinfo.value.gender == "male"


def test_single_gender_priority_overflow_in_filtered_pool():
    pool = females("f1", "f2", "f3", is_priority=True) + males("m1")
    # total slots are 2, so the overall check fires first
    with pytest.raises(PriorityOverflowException):
        validate_draw(pool, GameMode.WOMENS_SINGLES, 1)


def test_validation_order_total_before_priority():
    pool = males("a", "b", "c", is_priority=True)
    with pytest.raises(InsufficientTotalPlayersException):
        validate_draw(pool, GameMode.ANY_DOUBLES, 1)


def test_all_draw_errors_share_a_base_class():
    with pytest.raises(DrawException):
        validate_draw(males("a"), GameMode.ANY_SINGLES, 1)


# ========== Mixed doubles ==========


def test_mixed_doubles_one_court_scenario():
    pool = males("M1", "M2") + females("F1", "F2")

    matches = draw_matches(pool, GameMode.MIXED_DOUBLES, 1, random.Random(3))

    assert len(matches) == 1
    match = matches[0]
    assert match.court == 1
    for team in (match.team_a, match.team_b):
        assert len(team) == 2
        assert {p.gender for p in team} == {Gender.MALE, Gender.FEMALE}
    assert sorted(p.name for p in match.players) == ["F1", "F2", "M1", "M2"]


def test_mixed_doubles_uses_both_pairings():
    pool = males("M1", "M2") + females("F1", "F2")
    rng = random.Random(17)
    pairings = set()
    for _ in range(100):
        match = draw_matches(pool, GameMode.MIXED_DOUBLES, 1, rng)[0]
        pairings.add(frozenset(frozenset(p.name for p in t) for t in (match.team_a, match.team_b)))
    assert len(pairings) == 2


def test_mixed_doubles_several_courts_balanced():
    pool = males(*[f"m{i}" for i in range(7)]) + females(*[f"f{i}" for i in range(6)])

    matches = draw_matches(pool, GameMode.MIXED_DOUBLES, 3, random.Random(8))

    assert [m.court for m in matches] == [1, 2, 3]
    players = _all_players(matches)
    assert len(players) == 12
    assert len(set(players)) == 12
    for match in matches:
        for team in (match.team_a, match.team_b):
            assert sorted(p.gender.value for p in team) == ["female", "male"]


def test_mixed_doubles_includes_priority_players():
    pool = (
        males("m1", "m2", "m3", "m4", play_count=0)
        + males("star", play_count=10, is_priority=True)
        + females("f1", "f2")
    )

    for seed in range(20):
        matches = draw_matches(pool, GameMode.MIXED_DOUBLES, 1, random.Random(seed))
        assert "star" in {p.name for p in _all_players(matches)}


# ========== Other modes ==========


def test_singles_teams_have_one_player_each():
    pool = males("a", "b", "c", "d") + females("e", "f")

    matches = draw_matches(pool, GameMode.ANY_SINGLES, 3, random.Random(2))

    assert len(matches) == 3
    assert all(len(m.team_a) == 1 and len(m.team_b) == 1 for m in matches)
    assert len(set(_all_players(matches))) == 6


def test_doubles_teams_have_two_players_each():
    pool = males(*[f"p{i}" for i in range(9)])

    matches = draw_matches(pool, GameMode.MENS_DOUBLES, 2, random.Random(2))

    assert len(matches) == 2
    assert all(len(m.team_a) == 2 and len(m.team_b) == 2 for m in matches)
    assert len(set(_all_players(matches))) == 8


def test_womens_doubles_only_uses_women():
    pool = males("m1", "m2", "m3", "m4") + females("f1", "f2", "f3", "f4")
    matches = draw_matches(pool, GameMode.WOMENS_DOUBLES, 1, random.Random(4))
    assert all(p.gender is Gender.FEMALE for p in _all_players(matches))


def test_mens_singles_priority_scenario():
    star = make_player("star", Gender.MALE, play_count=3, is_priority=True)
    others = males("a", "b", "c", "d")
    pool = [star] + others

    for seed in range(30):
        matches = draw_matches(pool, GameMode.MENS_SINGLES, 1, random.Random(seed))
        names = {p.name for p in _all_players(matches)}
        assert "star" in names
        assert len(names & {"a", "b", "c", "d"}) == 1


def test_fairness_fills_open_slots_with_least_played():
    pool = males("fresh1", "fresh2", play_count=0) + males("tired1", "tired2", "tired3", play_count=4)

    for seed in range(30):
        matches = draw_matches(pool, GameMode.MENS_SINGLES, 1, random.Random(seed))
        assert {p.name for p in _all_players(matches)} == {"fresh1", "fresh2"}


def test_priority_player_lands_on_random_court():
    star = make_player("star", Gender.FEMALE, is_priority=True)
    pool = [star] + females(*[f"f{i}" for i in range(7)])
    courts = set()
    rng = random.Random(21)

    for _ in range(60):
        for match in draw_matches(pool, GameMode.WOMENS_SINGLES, 4, rng):
            if star in match.players:
                courts.add(match.court)

    assert courts == {1, 2, 3, 4}


def test_other_gender_priority_players_are_left_out():
    pool = males("m1", "m2") + females("f1", is_priority=True)
    matches = draw_matches(pool, GameMode.MENS_SINGLES, 1, random.Random(1))
    assert {p.name for p in matches[0].players} == {"m1", "m2"}


def test_generator_with_same_seed_is_reproducible():
    pool = males(*[f"m{i}" for i in range(6)]) + females(*[f"f{i}" for i in range(6)])

    first = MatchGenerator(random.Random(99)).generate(pool, GameMode.ANY_DOUBLES, 2)
    second = MatchGenerator(random.Random(99)).generate(pool, GameMode.ANY_DOUBLES, 2)

    assert first == second


def test_draw_never_changes_play_counts():
    pool = males("a", "b") + females("c", "d")
    matches = draw_matches(pool, GameMode.MIXED_DOUBLES, 1, random.Random(1))
    assert all(p.play_count == 0 for p in _all_players(matches))
    assert all(p.play_count == 0 for p in pool)
