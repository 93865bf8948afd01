from __future__ import annotations
from typing import List, Optional
import json, sqlite3, os, threading
from securestore_core.logger import get_logger
from securestore_core.keystore.models import KeyGenParameters, KeyHandle
from securestore_core.keystore.provider import KeyStoreProvider
from securestore_core.utils import b64e, b64d, now_ts

log = get_logger("securestore.keystore.sqlite")


class SQLiteKeyStore(KeyStoreProvider):
    """
    Software-backed keystore persisting key material in a local SQLite file.

    Intended for hosts without hardware-backed key storage. Material is stored
    base64-encoded and unwrapped; protect the file with filesystem permissions.
    The file is only created on the provisioning path; lookups against a
    missing file report no entries.
    """
    name = "sqlite"

    def __init__(self, path="db/keystore.db"):
        self.path = path
        self.db: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    def load(self, create: bool = True) -> None:
        with self._lock:
            if self.db is not None:
                return
            if not create and not os.path.exists(self.path):
                return
            # If no directory, default to current working directory
            dir_path = os.path.dirname(self.path) or "."
            os.makedirs(dir_path, exist_ok=True)
            db = sqlite3.connect(self.path, check_same_thread=False)
            try:
                self._init(db)
            except sqlite3.Error:
                db.close()
                raise
            self.db = db
        log.debug(f"[SQLITE KEYSTORE] loaded path={self.path}")

    def _conn(self) -> sqlite3.Connection:
        self.load()
        return self.db

    def _reader(self) -> Optional[sqlite3.Connection]:
        # no store on disk yet: nothing to read, and nothing to create
        self.load(create=False)
        return self.db

    @staticmethod
    def _init(db: sqlite3.Connection) -> None:
        db.execute("""CREATE TABLE IF NOT EXISTS keyring(
            alias TEXT PRIMARY KEY,
            key_b64 TEXT NOT NULL,
            params TEXT NOT NULL,
            created_at TEXT NOT NULL
        )""")
        db.commit()

    def has_entry(self, alias: str) -> bool:
        db = self._reader()
        if db is None:
            return False
        cur = db.execute("SELECT 1 FROM keyring WHERE alias=?", (alias,))
        return cur.fetchone() is not None

    def create_entry(self, alias: str, params: KeyGenParameters) -> None:
        self.check_parameters(params)
        db = self._conn()
        material = os.urandom(params.key_size // 8)
        with self._lock:
            cur = db.execute(
                "INSERT OR IGNORE INTO keyring(alias,key_b64,params,created_at) VALUES(?,?,?,?)",
                (alias, b64e(material), json.dumps(params.to_dict(), sort_keys=True), now_ts())
            )
            db.commit()
        if cur.rowcount:
            log.info(f"[SQLITE KEYSTORE] created key alias={alias} size={params.key_size}")

    def get_key_handle(self, alias: str) -> Optional[KeyHandle]:
        db = self._reader()
        if db is None:
            return None
        cur = db.execute("SELECT key_b64, params FROM keyring WHERE alias=?", (alias,))
        row = cur.fetchone()
        if not row: return None
        key_b64, params = row
        return KeyHandle(alias, b64d(key_b64), KeyGenParameters.from_dict(json.loads(params)))

    def delete_entry(self, alias: str) -> None:
        db = self._reader()
        if db is None:
            return
        with self._lock:
            db.execute("DELETE FROM keyring WHERE alias=?", (alias,))
            db.commit()

    def aliases(self) -> List[str]:
        db = self._reader()
        if db is None:
            return []
        cur = db.execute("SELECT alias FROM keyring ORDER BY alias")
        return [r[0] for r in cur.fetchall()]

    def close(self) -> None:
        with self._lock:
            if self.db is not None:
                self.db.close()
                self.db = None
