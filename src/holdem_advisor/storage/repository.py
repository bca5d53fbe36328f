"""Persistence for advisor regret state."""

import logging
from typing import List, Optional

from holdem_advisor.agents.regret import RegretState
from holdem_advisor.models.action import ActionType
from holdem_advisor.storage.database import Database

logger = logging.getLogger(__name__)


class RegretRepository:
    """Stores one RegretState per named advisor.

    Values are written as SQLite REALs, so ``load(save(state))`` gives back
    exactly the same floats in the same action order.
    """

    def __init__(self, db: Database):
        self.db = db

    def save(self, name: str, state: RegretState) -> None:
        """Insert or replace the stored state for ``name``."""
        with self.db.connect() as conn:
            conn.execute(
                "INSERT INTO advisors (name) VALUES (?) "
                "ON CONFLICT(name) DO UPDATE SET updated_at = CURRENT_TIMESTAMP",
                (name,),
            )
            conn.execute("DELETE FROM regrets WHERE advisor = ?", (name,))
            conn.executemany(
                """INSERT INTO regrets
                (advisor, position, action, regret_sum, strategy_sum)
                VALUES (?, ?, ?, ?, ?)""",
                [
                    (name, i, action.value, state.regret_sum[action], state.strategy_sum[action])
                    for i, action in enumerate(state.actions)
                ],
            )
        logger.debug("Saved advisor %r (%d actions)", name, len(state.actions))

    def load(self, name: str) -> Optional[RegretState]:
        """Load the state stored for ``name``, or None if there is none."""
        with self.db.connect() as conn:
            rows = conn.execute(
                "SELECT action, regret_sum, strategy_sum FROM regrets "
                "WHERE advisor = ? ORDER BY position",
                (name,),
            ).fetchall()
        if not rows:
            return None
        actions = tuple(ActionType(row["action"]) for row in rows)
        return RegretState(
            actions=actions,
            regret_sum={ActionType(row["action"]): row["regret_sum"] for row in rows},
            strategy_sum={ActionType(row["action"]): row["strategy_sum"] for row in rows},
        )

    def load_or_create(self, name: str) -> RegretState:
        return self.load(name) or RegretState()

    def delete(self, name: str) -> bool:
        """Remove a stored advisor. Returns whether anything was deleted."""
        with self.db.connect() as conn:
            cursor = conn.execute("DELETE FROM advisors WHERE name = ?", (name,))
        return cursor.rowcount > 0

    def list_advisors(self) -> List[dict]:
        """Stored advisors with their last update time and training mass."""
        with self.db.connect() as conn:
            rows = conn.execute(
                """SELECT a.name, a.updated_at, COALESCE(SUM(r.strategy_sum), 0) AS mass
                FROM advisors a LEFT JOIN regrets r ON r.advisor = a.name
                GROUP BY a.name ORDER BY a.name"""
            ).fetchall()
        return [dict(row) for row in rows]
