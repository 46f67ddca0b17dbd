from typing import Dict, Iterable, List, Optional
from fxjournal.core.entities.account import Account
from fxjournal.core.entities.trade import TradeRecord
from fxjournal.core.interfaces.datasource import AccountId, IJournalSource

class InMemoryJournalSource(IJournalSource):
    """Dict-backed journal for tests and local runs. Keys are compared as strings."""

    def __init__(self, accounts: Iterable[Account] = (), trades: Iterable[TradeRecord] = ()):
        self.accounts: Dict[str, Account] = {str(a.id): a for a in accounts}
        self.trades: List[TradeRecord] = list(trades)

    def add_account(self, account: Account) -> None:
        self.accounts[str(account.id)] = account

    def add_trades(self, trades: Iterable[TradeRecord]) -> None:
        self.trades.extend(trades)

    async def get_trades(self, account_id: AccountId) -> List[TradeRecord]:
        return [t for t in self.trades if str(t.account_id) == str(account_id)]

    async def get_account(self, account_id: AccountId) -> Optional[Account]:
        return self.accounts.get(str(account_id))
