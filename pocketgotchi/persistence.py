import os
import json
import time
import base64
import sqlite3
import logging
import binascii

from pocketgotchi.errors import InvalidSaveError
from pocketgotchi.models import CreatureState

logger = logging.getLogger(__name__)


# --- Encoding ---
# Saves are base64 over UTF-8 JSON: opaque to casual editing, lossless, and the
# same text the browser edition writes into its .tama files.

def encode(data: dict) -> str:
    raw = json.dumps(data, ensure_ascii=False).encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def decode(text):
    """Inverse of encode. Returns None for anything that doesn't decode."""
    if not text:
        return None
    try:
        raw = base64.b64decode(text.strip(), validate=True)
        return json.loads(raw.decode("utf-8"))
    except (binascii.Error, ValueError, UnicodeDecodeError):
        return None


def encode_pet(pet) -> str:
    return encode(pet.to_dict())


def decode_pet(text) -> CreatureState:
    data = decode(text)
    if data is None:
        raise InvalidSaveError("save data could not be decoded")
    return CreatureState.from_dict(data)


class DatabaseManager:
    """Keyed local store on SQLite. One row per save key."""
    def __init__(self, db_path):
        self.db_path = db_path
        self.conn = sqlite3.connect(db_path)
        self.create_tables()

    def create_tables(self):
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS saves (
                key TEXT PRIMARY KEY,
                payload TEXT NOT NULL,
                saved_at REAL
            )
        """)
        self.conn.commit()

    def save(self, key, payload):
        self.conn.execute(
            "INSERT OR REPLACE INTO saves (key, payload, saved_at) VALUES (?, ?, ?)",
            (key, payload, time.time()),
        )
        self.conn.commit()

    def load(self, key):
        cursor = self.conn.execute("SELECT payload FROM saves WHERE key = ?", (key,))
        row = cursor.fetchone()
        return row[0] if row else None

    def delete(self, key):
        self.conn.execute("DELETE FROM saves WHERE key = ?", (key,))
        self.conn.commit()

    def close(self):
        self.conn.close()


class MemoryStore:
    """Dict-backed store with the DatabaseManager interface, for tests and
    throwaway sessions."""
    def __init__(self):
        self.rows = {}

    def save(self, key, payload):
        self.rows[key] = payload

    def load(self, key):
        return self.rows.get(key)

    def delete(self, key):
        self.rows.pop(key, None)

    def close(self):
        pass


# --- File export / import ---

def export_file(pet, path):
    """Write the pet to a .tama file.

    Uses a simple atomic replace pattern to avoid truncated saves.
    """
    tmp = str(path) + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        f.write(encode_pet(pet))
    os.replace(tmp, path)
    logger.info("Exported %s to %s", pet.name, path)


def import_file(path) -> CreatureState:
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidSaveError(f"cannot read save file '{path}': {e}") from e
    pet = decode_pet(text)
    logger.info("Imported %s from %s", pet.name, path)
    return pet
