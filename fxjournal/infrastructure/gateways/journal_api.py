import logging
from datetime import datetime
from typing import Any, List, Optional

import httpx

from fxjournal.core.entities.account import Account
from fxjournal.core.entities.trade import TradeRecord, as_wall_clock
from fxjournal.core.errors import DataSourceError
from fxjournal.core.interfaces.datasource import AccountId, IJournalSource

logger = logging.getLogger(__name__)

BACKEND_TIMESTAMP_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M", "%Y-%m-%d")


def parse_backend_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a journal backend timestamp.

    The backend stores local wall-clock time as "YYYY-MM-DD HH:MM:SS".
    ISO variants ("T" separator, fractional seconds, trailing "Z" or an
    offset) are accepted and read as the same wall-clock time.
    Returns None when the value is missing or unusable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return as_wall_clock(value)

    raw = str(value).strip()
    if not raw:
        return None

    normalized = raw.replace("T", " ")
    if normalized.endswith("Z"):
        normalized = normalized[:-1]
    normalized = normalized.split(".")[0]

    for fmt in BACKEND_TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(normalized, fmt)
        except ValueError:
            continue

    try:
        return as_wall_clock(datetime.fromisoformat(raw))
    except ValueError:
        logger.debug(f"Unparseable timestamp: {raw!r}")
        return None


class JournalAPIGateway(IJournalSource):
    """
    IJournalSource backed by the journal REST API.

    Lists entries page by page (GET /journal) until the backend reports no
    more pages, so callers always get the complete set for an account.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        page_size: int = 500,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        :param base_url: API root, e.g. https://journal.example.com/api
        :param token: Bearer token issued by the identity provider.
        :param transport: Override for tests (httpx.MockTransport).
        """
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self.page_size = page_size
        self.client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )
        logger.info(f"JournalAPIGateway initialized. URL: {base_url}")

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "JournalAPIGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _get_json(self, path: str, params: Optional[dict] = None) -> Any:
        try:
            resp = await self.client.get(path, params=params)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Journal API {path} returned {e.response.status_code}")
            raise DataSourceError(f"Journal API {path} returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Journal API {path} request failed: {e}")
            raise DataSourceError(f"Journal API {path} request failed: {e}") from e
        except ValueError as e:
            # Body was not JSON
            raise DataSourceError(f"Journal API {path} returned invalid JSON") from e

    async def get_trades(self, account_id: AccountId) -> List[TradeRecord]:
        trades: List[TradeRecord] = []
        page = 1
        while True:
            data = await self._get_json(
                "/journal",
                params={"page": page, "limit": self.page_size, "accountId": account_id},
            )
            if not isinstance(data, dict):
                raise DataSourceError("Journal API /journal returned an unexpected payload")

            entries = data.get("entries") or []
            trades.extend(self._map_entries(entries))

            pagination = data.get("pagination") or {}
            pages = int(pagination.get("pages") or 0)
            if not entries or page >= pages:
                break
            page += 1

        logger.debug(f"Fetched {len(trades)} entries for account {account_id} in {page} page(s)")
        return trades

    def _map_entries(self, entries: List[dict]) -> List[TradeRecord]:
        """
        Maps raw journal entries to TradeRecord.
        created_at is when the entry was opened; updated_at moves when the
        outcome (pnl) is written, so it is the settlement time.
        """
        trades = []
        for entry in entries:
            try:
                pnl = entry.get("pnl")
                trades.append(TradeRecord(
                    id=entry["id"],
                    account_id=entry.get("account_id"),
                    pnl=None if pnl == "" else pnl,
                    opened_at=parse_backend_timestamp(entry.get("created_at")),
                    settled_at=parse_backend_timestamp(entry.get("updated_at")),
                ))
            except (KeyError, ValueError, TypeError, AttributeError) as map_err:
                logger.warning(f"Skipping malformed journal entry: {map_err}")
                continue
        return trades

    async def get_account(self, account_id: AccountId) -> Optional[Account]:
        """
        The backend has no single-account route; the account list is scanned.
        """
        data = await self._get_json("/accounts")
        rows = data.get("data") if isinstance(data, dict) else data
        if not isinstance(rows, list):
            raise DataSourceError("Journal API /accounts returned an unexpected payload")

        for row in rows:
            if str(row.get("id")) != str(account_id):
                continue
            return Account(
                id=row["id"],
                name=row.get("name"),
                starting_balance=row.get("starting_balance"),
            )
        return None
