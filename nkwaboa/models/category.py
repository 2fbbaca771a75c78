from pydantic import BaseModel, ConfigDict, Field

from nkwaboa.models.transaction import LEDGER_TEXT


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, pattern=LEDGER_TEXT)
    name: str = Field(pattern=LEDGER_TEXT)
    budget_limit: float = Field(default=0.0, ge=0)
