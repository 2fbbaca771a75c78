from datetime import date as Date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Ledger fields are stored pipe-delimited, one record per line.
LEDGER_TEXT = r"^[^|\r\n]*$"


class Transaction(BaseModel):
    """
    A single expenditure or income record.
    Negative amounts are expenses, everything else is income.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = Field(default=None, pattern=LEDGER_TEXT)
    amount: float
    category: Optional[str] = Field(default=None, pattern=LEDGER_TEXT)
    date: Optional[Date] = None
    payment_method: Optional[str] = Field(default="", pattern=LEDGER_TEXT)
    vendor: Optional[str] = Field(default="", pattern=LEDGER_TEXT)


class TransactionCreate(BaseModel):
    amount: float
    category: str = Field(min_length=1, pattern=LEDGER_TEXT)
    date: Date
    payment_method: Optional[str] = Field(default="", pattern=LEDGER_TEXT)
    vendor: Optional[str] = Field(default="", pattern=LEDGER_TEXT)


class BankAccount(BaseModel):
    """Carried alongside transactions, not reconciled against them yet."""

    model_config = ConfigDict(frozen=True)

    account_id: str
    bank_name: str = ""
    balance: float = 0.0
    transaction_ids: List[str] = Field(default_factory=list)
