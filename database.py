"""
Database Manager for TokenCalc
Key-value storage used to persist calculator history
"""
import sqlite3
from contextlib import closing
import config


class Database:
    def __init__(self, db_path=config.DB_PATH):
        self.db_path = db_path
        self.init_database()

    def get_connection(self):
        """Create and return a database connection"""
        return sqlite3.connect(self.db_path)

    def init_database(self):
        """Initialize database tables"""
        with closing(self.get_connection()) as conn:
            cursor = conn.cursor()
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS storage (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            ''')
            conn.commit()

    def get(self, key):
        """Return the stored value for key, or None"""
        with closing(self.get_connection()) as conn:
            cursor = conn.cursor()
            cursor.execute('SELECT value FROM storage WHERE key = ?', (key,))
            row = cursor.fetchone()
        return row[0] if row else None

    def set(self, key, value):
        """Store value under key, replacing any previous value"""
        with closing(self.get_connection()) as conn:
            cursor = conn.cursor()
            cursor.execute('''
                INSERT INTO storage (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
            ''', (key, value))
            conn.commit()

    def delete(self, key):
        """Remove key from storage"""
        with closing(self.get_connection()) as conn:
            cursor = conn.cursor()
            cursor.execute('DELETE FROM storage WHERE key = ?', (key,))
            conn.commit()


class MemoryStorage:
    """Dict-backed storage for sessions that should not touch disk"""

    def __init__(self, data=None):
        self.data = dict(data or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)
