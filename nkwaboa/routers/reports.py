import logging
import uuid
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse

from nkwaboa.db import ledger
from nkwaboa.utils import pdf_report, report
from nkwaboa.utils.analyzer import FinancialAnalyzer, InvalidArgumentError

router = APIRouter()
logger = logging.getLogger(__name__)


def get_analyzer() -> FinancialAnalyzer:
    """Build an analyzer over a fresh snapshot of the ledger."""
    return FinancialAnalyzer(ledger.load_transactions(), ledger.load_bank_accounts())


@router.get("/cash-flow")
def cash_flow(analyzer: FinancialAnalyzer = Depends(get_analyzer)) -> Dict:
    monthly = analyzer.monthly_cash_flow()
    return {
        "months": [
            {"month": month.label, **bucket.to_dict()}
            for month, bucket in monthly.items()
        ],
        "burn_rate": analyzer.calculate_burn_rate(),
    }


@router.get("/cash-flow/text", response_class=PlainTextResponse)
def cash_flow_text(analyzer: FinancialAnalyzer = Depends(get_analyzer)) -> str:
    return analyzer.generate_cash_flow_report()


@router.post("/cash-flow/export")
def export_cash_flow(analyzer: FinancialAnalyzer = Depends(get_analyzer)) -> Dict:
    """
    Render the cash-flow report as PDF and upload it to S3.
    """
    report_id = f"cash_flow_{uuid.uuid4().hex[:6]}"
    logger.info(f"Exporting cash-flow report {report_id}")

    pdf_bytes = pdf_report.render_cash_flow_pdf(
        analyzer.monthly_cash_flow(), analyzer.calculate_burn_rate()
    )
    pdf_url = pdf_report.upload_report(pdf_bytes, report_id)
    if pdf_url:
        logger.info(f"PDF uploaded: {pdf_url}")

    return {"report_id": report_id, "pdf_report_url": pdf_url}


@router.get("/burn-rate")
def burn_rate(analyzer: FinancialAnalyzer = Depends(get_analyzer)) -> Dict:
    return {"burn_rate": analyzer.calculate_burn_rate()}


@router.get("/forecast")
def forecast(
    months: int = Query(3, ge=1, le=120),
    analyzer: FinancialAnalyzer = Depends(get_analyzer),
) -> Dict:
    projection = analyzer.forecast_cash_needs(months)
    return {
        "months": months,
        "forecast": [{"month": month.label, "amount": amount} for month, amount in projection.items()],
    }


@router.get("/profitability")
def profitability(analyzer: FinancialAnalyzer = Depends(get_analyzer)) -> Dict[str, float]:
    return analyzer.profitability_by_category()


@router.get("/total")
def total_expenditure(analyzer: FinancialAnalyzer = Depends(get_analyzer)) -> Dict:
    return {"total": analyzer.total_expenditure()}


@router.get("/budget-variance")
def budget_variance(
    budget: float = Query(...),
    analyzer: FinancialAnalyzer = Depends(get_analyzer),
) -> Dict:
    result = analyzer.compare_budget_vs_actuals(budget)
    return {**result.to_dict(), "report": report.format_budget_variance(result)}


@router.get("/material-impact/{category}")
def material_impact(category: str, analyzer: FinancialAnalyzer = Depends(get_analyzer)) -> Dict:
    try:
        result = analyzer.analyze_material_impact(category)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {**result.to_dict(), "report": report.format_material_impact(result)}
