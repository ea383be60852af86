import json

import pytest

from ankiconnect.__main__ import build_parser, main


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_decks(fake_anki, capsys):
    fake_anki.results["deckNames"] = ["Default", "Spanish"]

    assert main(["--url", fake_anki.url, "decks"]) == 0

    assert json.loads(capsys.readouterr().out) == ["Default", "Spanish"]


def test_version(fake_anki, capsys):
    assert main(["--url", fake_anki.url, "version"]) == 0

    assert json.loads(capsys.readouterr().out) == {"version": 6, "supported": True}
    assert fake_anki.actions == ["version"]


def test_version_unsupported(fake_anki, capsys):
    fake_anki.results["version"] = 5

    assert main(["--url", fake_anki.url, "version"]) == 0
    assert json.loads(capsys.readouterr().out) == {"version": 5, "supported": False}


def test_url_from_environment(fake_anki, capsys, monkeypatch):
    monkeypatch.setenv("ANKI_CONNECT_URL", fake_anki.url)
    fake_anki.results["modelNames"] = ["Basic"]

    assert main(["models"]) == 0
    assert json.loads(capsys.readouterr().out) == ["Basic"]


def test_add_note(fake_anki, capsys):
    fake_anki.results["addNote"] = 1496198395707

    code = main([
        "--url", fake_anki.url,
        "add-note", "--deck", "Spanish", "--field", "Front=perro", "--field", "Back=dog = animal",
        "--tag", "animals",
    ])

    assert code == 0
    assert json.loads(capsys.readouterr().out) == {"id": 1496198395707}
    note = fake_anki.last["params"]["note"]
    assert note["modelName"] == "Basic"
    assert note["fields"] == {"Front": "perro", "Back": "dog = animal"}
    assert note["tags"] == ["animals"]


def test_invalid_field_argument(fake_anki):
    with pytest.raises(SystemExit):
        main(["--url", fake_anki.url, "add-note", "--deck", "Spanish", "--field", "Front"])


def test_store_media(fake_anki, capsys, tmp_path):
    source = tmp_path / "perro.mp3"
    source.write_bytes(b"ID3")
    fake_anki.results["storeMediaFile"] = "perro.mp3"

    assert main(["--url", fake_anki.url, "store-media", str(source)]) == 0

    assert fake_anki.last["params"]["filename"] == "perro.mp3"
    assert fake_anki.last["params"]["data"] == "SUQz"


def test_anki_error_exit_code(fake_anki, capsys):
    fake_anki.errors["sync"] = "auth not configured"

    assert main(["--url", fake_anki.url, "sync"]) == 1

    assert "auth not configured" in capsys.readouterr().err


def test_unreachable(closed_url, capsys):
    assert main(["--url", closed_url, "exit"]) == 1
    assert "cannot reach AnkiConnect" in capsys.readouterr().err


def test_missing_config_file(capsys):
    assert main(["--config", "missing.yaml", "version"]) == 1
    assert "missing.yaml" in capsys.readouterr().err


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_create_deck(fake_anki, capsys):
    fake_anki.results["createDeck"] = 1519323742721

    assert main(["--url", fake_anki.url, "create-deck", "Japanese::Tokyo"]) == 0

    assert json.loads(capsys.readouterr().out) == {"deck": "Japanese::Tokyo", "id": 1519323742721}
    assert fake_anki.last["params"] == {"deck": "Japanese::Tokyo"}


def test_delete_decks(fake_anki, capsys):
    assert main(["--url", fake_anki.url, "delete-decks", "Spanish", "French"]) == 0

    assert json.loads(capsys.readouterr().out) == {"deleted": ["Spanish", "French"]}
    assert fake_anki.last["params"] == {"decks": ["Spanish", "French"], "cardsToo": True}


def test_decks_with_ids(fake_anki, capsys):
    fake_anki.results["deckNamesAndIds"] = {"Default": 1}

    assert main(["--url", fake_anki.url, "decks", "--ids"]) == 0
    assert json.loads(capsys.readouterr().out) == {"Default": 1}


def test_models_fields_of(fake_anki, capsys):
    fake_anki.results["modelFieldNames"] = ["Front", "Back"]

    assert main(["--url", fake_anki.url, "models", "--fields-of", "Basic"]) == 0

    assert json.loads(capsys.readouterr().out) == ["Front", "Back"]
    assert fake_anki.last["params"] == {"modelName": "Basic"}


def test_find_notes(fake_anki, capsys):
    fake_anki.results["findNotes"] = [1483959289817]

    assert main(["--url", fake_anki.url, "find-notes", "deck:Spanish tag:animals"]) == 0

    assert json.loads(capsys.readouterr().out) == [1483959289817]
    assert fake_anki.last["params"] == {"query": "deck:Spanish tag:animals"}


def test_notes_info(fake_anki, capsys):
    fake_anki.results["notesInfo"] = [
        {
            "noteId": 1502298033753,
            "modelName": "Basic",
            "tags": ["animals"],
            "fields": {"Front": {"value": "perro", "order": 0}, "Back": {"value": "dog", "order": 1}},
            "cards": [1498938915662],
        }
    ]

    assert main(["--url", fake_anki.url, "notes-info", "1502298033753"]) == 0

    assert json.loads(capsys.readouterr().out) == fake_anki.results["notesInfo"]
    assert fake_anki.last["params"] == {"notes": [1502298033753]}


def test_delete_notes(fake_anki, capsys):
    assert main(["--url", fake_anki.url, "delete-notes", "1", "2"]) == 0

    assert json.loads(capsys.readouterr().out) == {"deleted": [1, 2]}
    assert fake_anki.last["params"] == {"notes": [1, 2]}


def test_media(fake_anki, capsys):
    fake_anki.results["getMediaFilesNames"] = ["perro.mp3"]

    assert main(["--url", fake_anki.url, "media", "--pattern", "*.mp3"]) == 0

    assert json.loads(capsys.readouterr().out) == ["perro.mp3"]
    assert fake_anki.last["params"] == {"pattern": "*.mp3"}


def test_unparsable_config_file(tmp_path, capsys):
    (tmp_path / "config.yaml").write_text("ankiconnect: [unclosed\n", encoding="utf-8")

    assert main(["version"]) == 1
    assert "Invalid configuration" in capsys.readouterr().err


def test_config_file_not_a_mapping(tmp_path, capsys):
    (tmp_path / "config.yaml").write_text("- just\n- a list\n", encoding="utf-8")

    assert main(["version"]) == 1
    assert "Invalid configuration" in capsys.readouterr().err


def test_url_without_scheme(capsys):
    assert main(["--url", "localhost:8765", "decks"]) == 1
    assert "Error:" in capsys.readouterr().err
