"""Read-only access to Safari and Chrome history databases (macOS)."""

from __future__ import annotations

import logging
import shutil
import sqlite3
import tempfile
import time
from pathlib import Path

from browsing_signals.exceptions import BrowserHistoryReadError

logger = logging.getLogger(__name__)

SAFARI_HISTORY_PATH = Path.home() / "Library" / "Safari" / "History.db"
CHROME_BASE_PATH = Path.home() / "Library" / "Application Support" / "Google" / "Chrome"

# Seconds from 1970-01-01 to 2001-01-01 (Safari/WebKit epoch).
APPLE_EPOCH_OFFSET = 978307200
# Seconds from 1601-01-01 to 1970-01-01 (Chrome epoch).
CHROME_EPOCH_OFFSET = 11644473600

MAX_DAYS = 30

SAFARI_QUERY = """
    SELECT hv.visit_time AS visit_time,
           COALESCE(hi.url, '') AS url,
           COALESCE(hv.title, '') AS title
    FROM history_visits hv
    JOIN history_items hi ON hi.id = hv.history_item
    WHERE hv.visit_time >= ?
    ORDER BY hv.visit_time DESC
    LIMIT ?
"""

CHROME_QUERY = """
    SELECT v.visit_time AS visit_time,
           COALESCE(u.url, '') AS url,
           COALESCE(u.title, '') AS title,
           COALESCE(r.url, '') AS referrer
    FROM visits v
    JOIN urls u ON u.id = v.url
    LEFT JOIN visits fv ON fv.id = v.from_visit
    LEFT JOIN urls r ON r.id = fv.url
    WHERE v.visit_time >= ?
    ORDER BY v.visit_time DESC
    LIMIT ?
"""


class BrowserHistoryReader:
    """Pull recent visits from local browser history as raw rows.

    Rows carry ``url``, ``title``, ``visited_at`` (epoch milliseconds),
    ``source_type`` and, for Chrome, ``referrer``; feed them through
    :func:`browsing_signals.browser.parse_visits` to get page events.
    """

    def __init__(self) -> None:
        self.last_errors: dict[str, str] = {}

    def fetch_visits(
        self,
        days: int = 30,
        limit: int = 5000,
        include_safari: bool = True,
        include_chrome: bool = True,
    ) -> list[dict]:
        """Fetch visits from enabled browser sources, newest first.

        The `limit` is applied per enabled source.
        """
        since = time.time() - self._clamp_days(days) * 86400
        limit = max(1, limit)
        sources = []
        if include_safari:
            sources.append(("safari", self._fetch_safari_visits))
        if include_chrome:
            sources.append(("chrome", self._fetch_chrome_visits))

        visits: list[dict] = []
        errors: list[BrowserHistoryReadError] = []
        self.last_errors = {}
        for name, fetch in sources:
            try:
                visits.extend(fetch(since, limit))
            except BrowserHistoryReadError as e:
                errors.append(e)
                self.last_errors[name] = str(e)
                logger.warning("%s history fetch failed: %s", name.capitalize(), e)

        if not visits and errors:
            raise errors[0]

        visits.sort(key=lambda v: v["visited_at"], reverse=True)
        return visits

    @staticmethod
    def _clamp_days(days: int) -> int:
        return max(1, min(days, MAX_DAYS))

    def _fetch_safari_visits(self, since: float, limit: int) -> list[dict]:
        if not SAFARI_HISTORY_PATH.exists():
            logger.info("Safari history DB not found at %s", SAFARI_HISTORY_PATH)
            return []
        try:
            rows = _query(
                f"file:{SAFARI_HISTORY_PATH}?mode=ro",
                SAFARI_QUERY,
                (since - APPLE_EPOCH_OFFSET, limit),
                uri=True,
            )
        except sqlite3.Error as e:
            raise BrowserHistoryReadError(
                f"Cannot read Safari History.db ({e}). "
                "Enable Full Disk Access for your terminal if needed."
            ) from e
        visits: list[dict] = []
        for row in rows:
            visited_at = self._safari_ts_to_ms(row["visit_time"])
            if visited_at is None:
                continue
            visits.append({
                "source_type": "safari",
                "url": row["url"],
                "title": row["title"],
                "visited_at": visited_at,
            })
        return visits

    def _fetch_chrome_visits(self, since: float, limit: int) -> list[dict]:
        history_paths = self._chrome_history_paths()
        if not history_paths:
            logger.info("Chrome history DBs not found under %s", CHROME_BASE_PATH)
            return []

        chrome_since = int((since + CHROME_EPOCH_OFFSET) * 1_000_000)
        per_profile_limit = max(50, limit // len(history_paths))
        visits: list[dict] = []

        for history_path in history_paths:
            db_copy = self._copy_chrome_db(history_path)
            if not db_copy:
                continue
            try:
                rows = _query(str(db_copy), CHROME_QUERY, (chrome_since, per_profile_limit))
            except sqlite3.Error as e:
                logger.warning("Failed querying Chrome history (%s): %s", history_path.parent.name, e)
                rows = []
            finally:
                db_copy.unlink(missing_ok=True)

            for row in rows:
                visited_at = self._chrome_ts_to_ms(row["visit_time"])
                if visited_at is None:
                    continue
                visits.append({
                    "source_type": "chrome",
                    "url": row["url"],
                    "title": row["title"],
                    "referrer": row["referrer"],
                    "visited_at": visited_at,
                })

        visits.sort(key=lambda v: v["visited_at"], reverse=True)
        return visits[:limit]

    @staticmethod
    def _chrome_history_paths() -> list[Path]:
        if not CHROME_BASE_PATH.exists():
            return []
        return sorted(
            child / "History"
            for child in CHROME_BASE_PATH.iterdir()
            if child.is_dir()
            and child.name != "System Profile"
            and (child / "History").exists()
        )

    @staticmethod
    def _copy_chrome_db(path: Path) -> Path | None:
        """Chrome locks History DB; query a temporary copy instead."""
        try:
            with tempfile.NamedTemporaryFile(prefix="chrome-history-", suffix=".db", delete=False) as tmp:
                tmp_path = Path(tmp.name)
            shutil.copy2(path, tmp_path)
            return tmp_path
        except OSError as e:
            logger.warning("Failed to copy Chrome history DB %s: %s", path, e)
            return None

    @staticmethod
    def _safari_ts_to_ms(ts: float | int | None) -> int | None:
        if ts is None:
            return None
        try:
            return int((float(ts) + APPLE_EPOCH_OFFSET) * 1000)
        except (TypeError, ValueError, OverflowError):
            return None

    @staticmethod
    def _chrome_ts_to_ms(ts: int | None) -> int | None:
        if ts is None:
            return None
        try:
            return int(ts) // 1000 - CHROME_EPOCH_OFFSET * 1000
        except (TypeError, ValueError):
            return None


def _query(database: str, sql: str, params: tuple, uri: bool = False) -> list[sqlite3.Row]:
    conn = sqlite3.connect(database, uri=uri)
    try:
        conn.row_factory = sqlite3.Row
        return conn.execute(sql, params).fetchall()
    finally:
        conn.close()
