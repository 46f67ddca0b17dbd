"""Exception hierarchy for fxjournal. The analytics engine itself never raises."""


class JournalError(Exception):
    """Base class for fxjournal errors."""


class DataSourceError(JournalError):
    """Journal API, database or transport failure while fetching entries."""


class AccountNotFoundError(JournalError):
    """Requested account does not exist."""

    def __init__(self, account_id):
        super().__init__(f"Account {account_id} not found")
        self.account_id = account_id


__all__ = ["JournalError", "DataSourceError", "AccountNotFoundError"]
