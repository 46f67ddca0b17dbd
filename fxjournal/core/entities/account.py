from pydantic import BaseModel, field_validator
from typing import Optional, Union
from decimal import Decimal


class Account(BaseModel):
    """
    Trading account the journal entries belong to.
    """
    id: Union[int, str]
    name: Optional[str] = None
    starting_balance: Decimal = Decimal("0")

    @field_validator("starting_balance", mode="before")
    @classmethod
    def _default_missing_balance(cls, value):
        # Accounts created without a balance come back as null
        return Decimal("0") if value is None or value == "" else value
