import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional, Tuple, Union

from fxjournal.core.entities.account import Account
from fxjournal.core.entities.analytics import AnalyticsResult, TimeWindow
from fxjournal.core.entities.outcome import DaySummary, OutcomeSummary
from fxjournal.core.entities.trade import TradeRecord
from fxjournal.core.errors import AccountNotFoundError
from fxjournal.core.interfaces.datasource import AccountId, IJournalSource
from fxjournal.core.use_cases.analytics_calculator import compute_analytics
from fxjournal.core.use_cases.calendar_summary import build_month_calendar
from fxjournal.core.use_cases.equity_curve import DEFAULT_MAX_LABELS
from fxjournal.core.use_cases.outcome_classifier import summarize_outcomes
from fxjournal.core.use_cases.trade_filter import count_unsettled
from fxjournal.infrastructure.cache.redis_service import RedisService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionTag:
    """What a fetch was issued for. A result only applies while its tag is current."""
    generation: int
    account_id: AccountId
    window: TimeWindow


class AnalyticsService:
    """
    Fetch boundary around the analytics engine.

    The engine is pure; this class owns fetching, caching and the rule that a
    result computed for an old selection (account or window) is dropped
    instead of applied.
    """

    def __init__(
        self,
        datasource: IJournalSource,
        cache: Optional[RedisService] = None,
        max_labels: int = DEFAULT_MAX_LABELS,
        breakeven_tolerance: Union[Decimal, str] = Decimal("0.01"),
    ):
        self.db = datasource
        self.cache = cache
        self.max_labels = max_labels
        self.breakeven_tolerance = breakeven_tolerance

        self._generation = 0
        self._selection: Optional[SelectionTag] = None
        self.latest: Optional[AnalyticsResult] = None

    # --- Selection state ---

    @property
    def selection(self) -> Optional[SelectionTag]:
        return self._selection

    def select(self, account_id: AccountId, window: Union[TimeWindow, str] = TimeWindow.ALL) -> SelectionTag:
        """Switch account and/or window. Any fetch still in flight becomes stale."""
        self._generation += 1
        self._selection = SelectionTag(self._generation, account_id, TimeWindow.parse(window))
        self.latest = None
        return self._selection

    async def refresh(self, now: Optional[datetime] = None) -> Optional[AnalyticsResult]:
        """
        Fetch and compute for the current selection.
        Returns None (and leaves `latest` alone) if the selection changed meanwhile.
        """
        tag = self._selection
        if tag is None:
            raise ValueError("No account selected")

        trades, account = await self._load(tag.account_id)

        if tag != self._selection:
            logger.debug(f"Dropping stale analytics for account {tag.account_id} (generation {tag.generation})")
            return None

        result = self._compute(trades, account, tag.window, now)
        self.latest = result
        return result

    # --- One-shot queries ---

    async def get_analytics(
        self,
        account_id: AccountId,
        window: Union[TimeWindow, str] = TimeWindow.ALL,
        now: Optional[datetime] = None,
    ) -> AnalyticsResult:
        trades, account = await self._load(account_id)
        return self._compute(trades, account, TimeWindow.parse(window), now)

    async def get_outcomes(self, account_id: AccountId) -> OutcomeSummary:
        trades, _ = await self._load(account_id)
        return summarize_outcomes(trades, self.breakeven_tolerance)

    async def get_calendar(self, account_id: AccountId, year: int, month: int) -> Dict[date, DaySummary]:
        trades, _ = await self._load(account_id)
        return build_month_calendar(trades, year, month)

    # --- Internals ---

    async def _load(self, account_id: AccountId) -> Tuple[List[TradeRecord], Account]:
        trades, account = await asyncio.gather(
            self._get_trades(account_id),
            self.db.get_account(account_id),
        )
        if account is None:
            raise AccountNotFoundError(account_id)
        return trades, account

    async def _get_trades(self, account_id: AccountId) -> List[TradeRecord]:
        if self.cache:
            cached = self.cache.get_trades(account_id)
            if cached is not None:
                return cached

        trades = await self.db.get_trades(account_id)
        if self.cache:
            self.cache.set_trades(account_id, trades)
        return trades

    def _compute(
        self,
        trades: List[TradeRecord],
        account: Account,
        window: TimeWindow,
        now: Optional[datetime],
    ) -> AnalyticsResult:
        unsettled = count_unsettled(trades)
        if unsettled:
            logger.debug(f"Account {account.id}: {unsettled} closed entries without settlement time excluded")

        return compute_analytics(
            trades,
            account.starting_balance,
            window,
            now or datetime.now(),
            max_labels=self.max_labels,
        )
