import os
import json
import base64

import pytest

from pocketgotchi.errors import InvalidSaveError
from pocketgotchi.persistence import (
    DatabaseManager, encode, decode, encode_pet, decode_pet, export_file, import_file,
)


def _browser_save(data):
    return base64.b64encode(json.dumps(data).encode("utf-8")).decode("ascii")


def test_pet_survives_encoding(pet):
    pet.is_sick = True
    pet.hunger = 12.345
    restored = decode_pet(encode_pet(pet))
    assert restored == pet


def test_payload_uses_browser_field_names(pet):
    data = decode(encode_pet(pet))
    assert data["emoji"] == pet.avatar
    assert data["isAlive"] is True
    assert data["lastUpdated"] == pet.last_updated
    assert "avatar" not in data


def test_decode_garbage_returns_none():
    assert decode("") is None
    assert decode("not base64 at all!") is None
    # valid base64, not JSON
    assert decode(base64.b64encode(b"\xff\xfe").decode("ascii")) is None


def test_decode_pet_rejects_missing_fields():
    with pytest.raises(InvalidSaveError):
        decode_pet(encode({"emoji": "\U0001F431"}))
    with pytest.raises(InvalidSaveError):
        decode_pet(encode({"name": "Mochi"}))
    with pytest.raises(InvalidSaveError):
        decode_pet(encode({"name": "Mochi", "emoji": "\U0001F431", "hunger": "lots"}))
    with pytest.raises(InvalidSaveError):
        decode_pet(encode(["Mochi"]))


def test_minimal_browser_save_gets_defaults():
    pet = decode_pet(_browser_save({"name": "Mochi", "emoji": "\U0001F431", "hunger": 150}))
    assert pet.name == "Mochi"
    assert pet.hunger == 100.0
    assert pet.health == 80.0
    assert pet.is_alive


def test_sqlite_store_round_trip(tmp_path):
    db_path = tmp_path / "pet.db"
    db = DatabaseManager(str(db_path))
    assert db.load("webgotchi_v1") is None
    db.save("webgotchi_v1", "abc")
    db.save("webgotchi_v1", "def")
    db.close()

    db = DatabaseManager(str(db_path))
    assert db.load("webgotchi_v1") == "def"
    db.delete("webgotchi_v1")
    assert db.load("webgotchi_v1") is None
    db.close()


def test_export_then_import(tmp_path, pet):
    path = tmp_path / "mochi.tama"
    export_file(pet, str(path))
    assert path.exists()
    assert not os.path.exists(str(path) + ".tmp")
    assert import_file(str(path)) == pet


def test_import_accepts_trailing_newline(tmp_path, pet):
    path = tmp_path / "mochi.tama"
    path.write_text(encode_pet(pet) + "\n")
    assert import_file(str(path)).name == "Mochi"


def test_import_rejects_bad_files(tmp_path):
    with pytest.raises(InvalidSaveError):
        import_file(str(tmp_path / "missing.tama"))
    junk = tmp_path / "junk.tama"
    junk.write_text("hello")
    with pytest.raises(InvalidSaveError):
        import_file(str(junk))


@pytest.mark.parametrize("payload", [
    '{"name": "Mo", "emoji": "\U0001F431", "createdAt": 1e999}',
    '{"name": "Mo", "emoji": "\U0001F431", "lastUpdated": NaN}',
    '{"name": "Mo", "emoji": "\U0001F431", "hunger": -Infinity}',
    '{"name": "Mo", "emoji": "\U0001F431", "hunger": ' + "9" * 400 + '}',
])
def test_decode_pet_rejects_unrepresentable_numbers(payload):
    text = base64.b64encode(payload.encode("utf-8")).decode("ascii")
    with pytest.raises(InvalidSaveError):
        decode_pet(text)


def test_import_rejects_infinite_timestamp(tmp_path):
    path = tmp_path / "mochi.tama"
    path.write_text(_browser_save({"name": "Mo", "emoji": "\U0001F431", "createdAt": float("inf")}))
    with pytest.raises(InvalidSaveError):
        import_file(str(path))
