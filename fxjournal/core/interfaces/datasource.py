from abc import ABC, abstractmethod
from typing import List, Optional, Union
from fxjournal.core.entities.account import Account
from fxjournal.core.entities.trade import TradeRecord

AccountId = Union[int, str]

class IJournalSource(ABC):
    @abstractmethod
    async def get_trades(self, account_id: AccountId) -> List[TradeRecord]:
        """
        Every journal entry of the account, open ones included.
        Implementations must return the complete set, not a single page.
        """
        pass

    @abstractmethod
    async def get_account(self, account_id: AccountId) -> Optional[Account]:
        pass
