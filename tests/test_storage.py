import json

import pytest
from conftest import females, males

from courtdraw.exceptions import FileLoadException
from courtdraw.models.session import GameMode, SessionState
from courtdraw.storage import JsonSessionStore, default_data_file


@pytest.fixture
def store(tmp_path):
    return JsonSessionStore(tmp_path / "roster.json")


def test_missing_file_loads_empty_session(store):
    state = store.load()
    assert state.players == ()
    assert state.selected_ids == frozenset()


def test_round_trip_keeps_roster_and_selection(store):
    players = males("Ben", play_count=2) + females("Amy", is_priority=True)
    state = SessionState(players=tuple(players), selected_ids=frozenset({"id-Amy"}))

    store.save(state)
    loaded = store.load()

    assert loaded.players == state.players
    assert loaded.selected_ids == {"id-Amy"}


def test_session_settings_are_not_persisted(store):
    state = SessionState(
        players=tuple(males("a")),
        game_mode=GameMode.ANY_SINGLES,
        number_of_courts=4,
    )
    store.save(state)

    loaded = store.load()

    assert loaded.game_mode is GameMode.MIXED_DOUBLES
    assert loaded.number_of_courts == 1
    assert loaded.pending_matches == ()


def test_file_layout(store):
    store.save(SessionState(players=tuple(females("Amy")), selected_ids={"id-Amy"}))

    data = json.loads(store.path.read_text(encoding="utf-8"))

    assert data == {
        "players": [
            {
                "id": "id-Amy",
                "name": "Amy",
                "gender": "female",
                "playCount": 0,
                "isPriority": False,
            }
        ],
        "selectedPlayerIds": ["id-Amy"],
    }


def test_save_creates_parent_directory(tmp_path):
    store = JsonSessionStore(tmp_path / "nested" / "dir" / "roster.json")
    store.save(SessionState(players=tuple(males("a"))))
    assert store.path.exists()
    assert not store.path.with_name("roster.json.tmp").exists()


def test_non_ascii_names_are_stored_verbatim(store):
    store.save(SessionState(players=tuple(males("张伟"))))
    assert "张伟" in store.path.read_text(encoding="utf-8")
    assert store.load().players[0].name == "张伟"


def test_corrupt_file_loads_empty_session(store):
    store.path.write_text("{not json", encoding="utf-8")

    assert store.load().players == ()
    with pytest.raises(FileLoadException):
        store.load_strict()


def test_wrong_top_level_type_loads_empty_session(store):
    store.path.write_text("[1, 2, 3]", encoding="utf-8")
    assert store.load() == SessionState()


def test_unknown_selected_ids_are_dropped(store):
    store.path.write_text(
        json.dumps(
            {
                "players": [{"id": "a", "name": "Amy", "gender": "female"}],
                "selectedPlayerIds": ["a", "ghost"],
            }
        ),
        encoding="utf-8",
    )

    assert store.load().selected_ids == {"a"}


def test_bad_player_records_are_skipped(store):
    store.path.write_text(
        json.dumps(
            {
                "players": [
                    {"id": "a", "name": "Amy", "gender": "female", "playCount": 3},
                    {"id": "b", "name": "Bob"},
                    {"id": "c", "name": "Cid", "gender": "robot"},
                    {"id": "d", "name": "Dee", "gender": "f", "playCount": -1},
                    {"id": "a", "name": "Copy", "gender": "male"},
                    "nonsense",
                    {"id": "e", "name": 123, "gender": "male"},
                    {"id": "f", "name": "Fay", "gender": "f", "playCount": 1e999},
                    {"id": "g", "name": "Gus", "gender": "m", "playCount": 2.7},
                    {"id": "h", "name": "Hal", "gender": "m", "isPriority": "yes"},
                ],
                "selectedPlayerIds": ["a", "b", "e", "f"],
            }
        ),
        encoding="utf-8",
    )

    state = store.load()

    assert [p.name for p in state.players] == ["Amy"]
    assert state.players[0].play_count == 3
    assert state.selected_ids == {"a"}


def test_string_priority_flags_are_read_literally(store):
    store.path.write_text(
        json.dumps(
            {
                "players": [
                    {"id": "a", "name": "Amy", "gender": "f", "isPriority": "false"},
                    {"id": "b", "name": "Ben", "gender": "m", "isPriority": "TRUE"},
                ],
            }
        ),
        encoding="utf-8",
    )

    amy, ben = store.load().players
    assert amy.is_priority is False
    assert ben.is_priority is True


def test_snake_case_keys_are_understood(store):
    store.path.write_text(
        json.dumps(
            {
                "players": [
                    {
                        "id": "a",
                        "name": "Amy",
                        "gender": "female",
                        "play_count": 2,
                        "is_priority": True,
                    }
                ],
            }
        ),
        encoding="utf-8",
    )

    (player,) = store.load().players
    assert player.play_count == 2
    assert player.is_priority
    assert store.load().selected_ids == frozenset()


def test_clear_removes_file(store):
    store.save(SessionState(players=tuple(males("a"))))
    store.clear()
    assert not store.path.exists()
    store.clear()


def test_default_data_file_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("COURTDRAW_DATA_FILE", str(tmp_path / "custom.json"))
    assert default_data_file() == tmp_path / "custom.json"
    assert JsonSessionStore().path == tmp_path / "custom.json"


def test_default_data_file_in_home(monkeypatch):
    monkeypatch.delenv("COURTDRAW_DATA_FILE", raising=False)
    path = default_data_file()
    assert path.name == "roster.json"
    assert path.parent.name == ".courtdraw"
