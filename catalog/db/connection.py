from __future__ import annotations

import os
import sqlite3


def open_database(path: str) -> sqlite3.Connection:
    """Open (creating if needed) a SQLite file shared by request threads.

    ``:memory:`` is passed through untouched.
    """
    if path != ":memory:":
        path = os.path.abspath(path)
        os.makedirs(os.path.dirname(path), exist_ok=True)
    return sqlite3.connect(path, check_same_thread=False)
