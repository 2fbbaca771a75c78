from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from nkwaboa.db import ledger
from nkwaboa.models.transaction import Transaction, TransactionCreate

router = APIRouter()


@router.post("/", response_model=Transaction, status_code=status.HTTP_201_CREATED)
def create_transaction(payload: TransactionCreate):
    """
    Record an expenditure (negative amount) or income (positive amount).
    The category must already exist; add it through /categories first.
    """
    if not any(c.id == payload.category for c in ledger.load_categories()):
        raise HTTPException(status_code=404, detail=f"Category {payload.category} not found")

    stored = ledger.put_transaction(Transaction(**payload.model_dump()))
    if stored is None:
        raise HTTPException(status_code=500, detail="Failed to save expenditure")
    return stored


@router.get("/", response_model=List[Transaction])
def list_transactions():
    return ledger.load_transactions()


@router.get("/search", response_model=List[Transaction])
def search_transactions(q: str = Query(..., min_length=1, description="Category or vendor keyword")):
    return ledger.search_transactions(q)
