import random

import pytest

from courtdraw.models.player import Gender, Player


def make_player(name, gender=Gender.MALE, play_count=0, is_priority=False):
    return Player(
        id=f"id-{name}",
        name=name,
        gender=gender,
        play_count=play_count,
        is_priority=is_priority,
    )


def males(*names, **kwargs):
    return [make_player(n, Gender.MALE, **kwargs) for n in names]


def females(*names, **kwargs):
    return [make_player(n, Gender.FEMALE, **kwargs) for n in names]


@pytest.fixture
def rng():
    return random.Random(1234)
