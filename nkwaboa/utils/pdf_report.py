import io
import logging
from typing import Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fpdf import FPDF

from nkwaboa.core.config import settings
from nkwaboa.utils.analyzer import MonthBucket, MonthKey

logger = logging.getLogger(__name__)

# Initialize S3 client using default AWS credential chain
# (environment variables, AWS credentials file, or IAM role)
s3 = boto3.client("s3", region_name=settings.S3_REGION)


def render_cash_flow_pdf(monthly: Dict[MonthKey, MonthBucket], burn_rate: float) -> bytes:
    currency = settings.CURRENCY_CODE + " "
    pdf = FPDF()
    pdf.add_page()
    pdf.set_font("Helvetica", "B", 16)
    pdf.cell(0, 10, "Monthly Cash Flow Report", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(5)

    if not monthly:
        pdf.set_font("Helvetica", "", 12)
        pdf.cell(0, 10, "No expenditure data available", new_x="LMARGIN", new_y="NEXT")
        return bytes(pdf.output())

    pdf.set_font("Helvetica", "B", 12)
    for heading in ("Month-Year", "Expenses", "Income", "Net"):
        pdf.cell(45, 10, heading)
    pdf.ln(10)

    pdf.set_font("Helvetica", "", 12)
    for month, bucket in monthly.items():
        pdf.cell(45, 10, month.label)
        pdf.cell(45, 10, f"{currency}{bucket.expense_total:.2f}")
        pdf.cell(45, 10, f"{currency}{bucket.income_total:.2f}")
        pdf.cell(45, 10, f"{currency}{bucket.net:.2f}")
        pdf.ln(10)

    pdf.ln(5)
    pdf.set_font("Helvetica", "B", 12)
    pdf.cell(0, 10, f"Average Monthly Burn Rate: {currency}{burn_rate:.2f}", new_x="LMARGIN", new_y="NEXT")
    return bytes(pdf.output())


def upload_report(pdf_bytes: bytes, report_id: str) -> Optional[str]:
    """Upload a rendered report to S3; returns its URL or None on failure."""
    s3_key = f"reports/cash-flow/{report_id}.pdf"
    try:
        s3.upload_fileobj(
            io.BytesIO(pdf_bytes),
            settings.S3_BUCKET_NAME,
            s3_key,
            ExtraArgs={"ContentType": "application/pdf"},
        )
        return f"https://{settings.S3_BUCKET_NAME}.s3.{settings.S3_REGION}.amazonaws.com/{s3_key}"
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Failed to upload PDF: {e}")
        return None
