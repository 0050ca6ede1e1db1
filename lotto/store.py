# sqlite backed storage for per-guild lotto settings

import asyncio
import json
import logging
import sqlite3
import threading
from typing import Optional

from lotto.settings import LottoSettings

logger = logging.getLogger(__name__)


def log_error(error: Exception) -> None:
    logger.error("Unexpected error")
    logger.error(str(error))
    logger.error(f"Code: {getattr(error, 'sqlite_errorcode', None)}")


class SettingsStore:
    """Loads and saves one LottoSettings row per guild.

    The connection is the bot's shared one (``bot.db``). Queries run on the
    default executor and a lock keeps them from interleaving on it.
    """

    def __init__(self, db: sqlite3.Connection):
        self.db = db
        self._lock = threading.Lock()
        self._create_table()

    def _create_table(self):
        cursor = self.db.cursor()
        cursor.execute('''
        CREATE TABLE IF NOT EXISTS lotto_settings (
            guild_id INTEGER PRIMARY KEY,
            hours INTEGER NOT NULL DEFAULT 4,
            channel_id INTEGER,
            role_id INTEGER,
            winners TEXT NOT NULL DEFAULT '[]'
        )
        ''')
        self.db.commit()
        cursor.close()

    def _fetch(self, guild_id: int) -> Optional[tuple]:
        with self._lock:
            cursor = self.db.cursor()
            try:
                cursor.execute(
                    'SELECT hours, channel_id, role_id, winners FROM lotto_settings WHERE guild_id = ?',
                    (guild_id,)
                )
                return cursor.fetchone()
            finally:
                cursor.close()

    def _write(self, guild_id: int, record: dict) -> None:
        with self._lock:
            cursor = self.db.cursor()
            try:
                cursor.execute('''
                    INSERT INTO lotto_settings (guild_id, hours, channel_id, role_id, winners)
                    VALUES (?, ?, ?, ?, ?)
                    ON CONFLICT(guild_id) DO UPDATE SET
                        hours = excluded.hours,
                        channel_id = excluded.channel_id,
                        role_id = excluded.role_id,
                        winners = excluded.winners
                ''', (guild_id, record['hours'], record['channel'], record['role'], json.dumps(record['winners'])))
                self.db.commit()
            finally:
                cursor.close()

    async def load(self, guild_id: int) -> Optional[LottoSettings]:
        """Return the stored settings for a guild, or None when there are none.

        Read errors are logged and reported as None as well.
        """
        loop = asyncio.get_running_loop()
        try:
            row = await loop.run_in_executor(None, self._fetch, guild_id)
        except sqlite3.Error as e:
            log_error(e)
            return None

        if row is None:
            logger.debug(f"Server {guild_id} has no settings saved")
            return None

        try:
            hours, channel_id, role_id, winners = row
            return LottoSettings.from_record({
                'hours': hours,
                'channel': channel_id,
                'role': role_id,
                'winners': json.loads(winners),
            })
        except (ValueError, TypeError) as e:
            log_error(e)
            return None

    async def save(self, guild_id: int, settings: LottoSettings) -> bool:
        """Persist settings for a guild. Failures are logged, never raised."""
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._write, guild_id, settings.to_record())
        except sqlite3.Error as e:
            log_error(e)
            return False
        logger.debug(f"Saved settings for server {guild_id}: {settings.to_record()}")
        return True
