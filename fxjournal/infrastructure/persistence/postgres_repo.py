import asyncio
import logging
import psycopg2
from typing import List, Optional, Sequence
from fxjournal.core.entities.account import Account
from fxjournal.core.entities.trade import TradeRecord
from fxjournal.core.errors import DataSourceError
from fxjournal.core.interfaces.datasource import AccountId, IJournalSource

logger = logging.getLogger(__name__)

TRADES_QUERY = """
    SELECT id, account_id, pnl,
           created_at AT TIME ZONE 'UTC' AS created_at,
           updated_at AT TIME ZONE 'UTC' AS updated_at
    FROM journal_entries
    WHERE account_id = %s
    ORDER BY created_at ASC
"""

ACCOUNT_QUERY = """
    SELECT id, name, starting_balance
    FROM accounts
    WHERE id = %s
"""


def row_to_trade(row: Sequence) -> TradeRecord:
    return TradeRecord(
        id=row[0],
        account_id=row[1],
        pnl=row[2],
        opened_at=row[3],
        settled_at=row[4],
    )


def row_to_account(row: Sequence) -> Account:
    return Account(id=row[0], name=row[1], starting_balance=row[2])


class PostgresJournalRepo(IJournalSource):
    """
    Read-only view over the journal database.
    The schema is owned by the backend; nothing here writes.
    """

    def __init__(self, dsn: str):
        self.dsn = dsn

    def _fetch(self, query: str, params: tuple) -> List[tuple]:
        try:
            conn = psycopg2.connect(self.dsn)
        except psycopg2.Error as e:
            logger.error(f"Failed to connect to DB: {e}")
            raise DataSourceError(f"Failed to connect to DB: {e}") from e

        try:
            with conn.cursor() as cur:
                cur.execute(query, params)
                return cur.fetchall()
        except psycopg2.Error as e:
            logger.error(f"Query failed: {e}")
            raise DataSourceError(f"Query failed: {e}") from e
        finally:
            conn.close()

    # IJournalSource Implementation
    async def get_trades(self, account_id: AccountId) -> List[TradeRecord]:
        # psycopg2 is blocking; keep it off the event loop
        rows = await asyncio.to_thread(self._fetch, TRADES_QUERY, (account_id,))
        return [row_to_trade(row) for row in rows]

    async def get_account(self, account_id: AccountId) -> Optional[Account]:
        rows = await asyncio.to_thread(self._fetch, ACCOUNT_QUERY, (account_id,))
        if not rows:
            return None
        return row_to_account(rows[0])
