"""
Categories Router
Category budget limits and the categories currently spending past them
"""
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from nkwaboa.db import ledger
from nkwaboa.models.category import Category
from nkwaboa.routers.reports import get_analyzer
from nkwaboa.utils.analyzer import FinancialAnalyzer

router = APIRouter()


@router.get("/", response_model=List[Category])
def list_categories():
    return ledger.load_categories()


@router.post("/", response_model=Category, status_code=status.HTTP_201_CREATED)
def create_category(category: Category):
    if any(existing.id == category.id for existing in ledger.load_categories()):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Category already exists")
    if not ledger.put_category(category):
        raise HTTPException(status_code=500, detail="Failed to save category")
    return category


@router.get("/overspending")
def overspending(analyzer: FinancialAnalyzer = Depends(get_analyzer)) -> Dict[str, float]:
    """
    Expense totals for categories whose spending exceeds their budget limit.
    """
    limits = {c.id: c.budget_limit for c in ledger.load_categories()}
    return analyzer.overspending_categories(limits)
