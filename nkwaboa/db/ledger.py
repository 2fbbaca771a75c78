"""
Pipe-delimited flat-file storage for expenditures, categories and bank accounts.

expenditures: id|amount|category|date|payment_method|vendor
categories:   id|name|budget_limit
accounts:     account_id|bank_name|balance|txn_id,txn_id,...
"""
import logging
import re
from datetime import date
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from nkwaboa.core.config import settings
from nkwaboa.models.category import Category
from nkwaboa.models.transaction import BankAccount, Transaction

logger = logging.getLogger(__name__)

SEPARATOR = "|"
TRANSACTION_ID = re.compile(r"^EXP(\d+)$")


def _data_file(name: str) -> Path:
    return Path(settings.DATA_DIR) / name


def _read_lines(path: Path) -> List[str]:
    if not path.exists():
        return []
    try:
        with path.open(encoding="utf-8") as fp:
            return [line.rstrip("\n") for line in fp if line.strip()]
    except OSError as e:
        logger.error(f"Failed to read {path}: {e}")
        return []


def _write_lines(path: Path, lines: List[str]) -> bool:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fp:
            for line in lines:
                fp.write(line + "\n")
        return True
    except OSError as e:
        logger.error(f"Failed to write {path}: {e}")
        return False


def _or_none(value: str) -> Optional[str]:
    value = value.strip()
    return value or None


# ---------------------------------------------------------------------------
# Expenditures
# ---------------------------------------------------------------------------

def parse_transaction(line: str) -> Optional[Transaction]:
    """Parse one expenditure line; returns None when the line is malformed."""
    parts = line.split(SEPARATOR)
    if len(parts) != 6:
        return None
    txn_id, amount, category, txn_date, payment_method, vendor = parts
    try:
        return Transaction(
            id=_or_none(txn_id),
            amount=float(amount),
            category=_or_none(category),
            date=date.fromisoformat(txn_date.strip()) if txn_date.strip() else None,
            payment_method=payment_method.strip(),
            vendor=vendor.strip(),
        )
    except (ValueError, ValidationError):
        return None


def format_transaction(txn: Transaction) -> str:
    return SEPARATOR.join([
        txn.id or "",
        repr(txn.amount),
        txn.category or "",
        txn.date.isoformat() if txn.date else "",
        txn.payment_method or "",
        txn.vendor or "",
    ])


def load_transactions(path: Optional[Path] = None) -> List[Transaction]:
    path = path or _data_file(settings.EXPENDITURE_FILE)
    transactions = []
    for lineno, line in enumerate(_read_lines(path), start=1):
        txn = parse_transaction(line)
        if txn is None:
            logger.warning(f"Skipping malformed expenditure at {path}:{lineno}")
            continue
        transactions.append(txn)
    logger.debug(f"Loaded {len(transactions)} expenditures from {path}")
    return transactions


def save_transactions(transactions: List[Transaction], path: Optional[Path] = None) -> bool:
    path = path or _data_file(settings.EXPENDITURE_FILE)
    return _write_lines(path, [format_transaction(txn) for txn in transactions])


def next_transaction_id(lines: List[str]) -> str:
    """One past the highest EXP<n> id in the ledger, malformed lines included."""
    highest = 0
    for line in lines:
        match = TRANSACTION_ID.match(line.split(SEPARATOR, 1)[0].strip())
        if match:
            highest = max(highest, int(match.group(1)))
    return f"EXP{highest + 1}"


def put_transaction(txn: Transaction, path: Optional[Path] = None) -> Optional[Transaction]:
    """
    Append an expenditure to the ledger, assigning the next EXP<n> id when the
    record has none. Existing lines are left untouched. Returns the stored
    record, or None if the write failed.
    """
    path = path or _data_file(settings.EXPENDITURE_FILE)
    if not txn.id:
        txn = txn.model_copy(update={"id": next_transaction_id(_read_lines(path))})
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        needs_newline = path.exists() and path.stat().st_size > 0 and not path.read_bytes().endswith(b"\n")
        with path.open("a", encoding="utf-8") as fp:
            if needs_newline:
                fp.write("\n")
            fp.write(format_transaction(txn) + "\n")
    except OSError as e:
        logger.error(f"Failed to append to {path}: {e}")
        return None
    return txn


def search_transactions(keyword: str, path: Optional[Path] = None) -> List[Transaction]:
    """Case-insensitive substring match on category or vendor."""
    needle = keyword.strip().lower()
    return [
        txn for txn in load_transactions(path)
        if needle in (txn.category or "").lower() or needle in (txn.vendor or "").lower()
    ]


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

def parse_category(line: str) -> Optional[Category]:
    parts = line.split(SEPARATOR)
    if len(parts) != 3:
        return None
    try:
        return Category(id=parts[0].strip(), name=parts[1].strip(), budget_limit=float(parts[2]))
    except (ValueError, ValidationError):
        return None


def load_categories(path: Optional[Path] = None) -> List[Category]:
    path = path or _data_file(settings.CATEGORY_FILE)
    categories = []
    for lineno, line in enumerate(_read_lines(path), start=1):
        category = parse_category(line)
        if category is None:
            logger.warning(f"Skipping malformed category at {path}:{lineno}")
            continue
        categories.append(category)
    return categories


def save_categories(categories: List[Category], path: Optional[Path] = None) -> bool:
    path = path or _data_file(settings.CATEGORY_FILE)
    return _write_lines(
        path,
        [SEPARATOR.join([c.id, c.name, repr(c.budget_limit)]) for c in categories],
    )


def put_category(category: Category, path: Optional[Path] = None) -> bool:
    """Insert a new category. Returns False if the id already exists or the write failed."""
    categories = load_categories(path)
    if any(existing.id == category.id for existing in categories):
        logger.info(f"Category {category.id} already exists")
        return False
    categories.append(category)
    return save_categories(categories, path)


# ---------------------------------------------------------------------------
# Bank accounts
# ---------------------------------------------------------------------------

def parse_bank_account(line: str) -> Optional[BankAccount]:
    parts = line.split(SEPARATOR)
    if len(parts) != 4:
        return None
    try:
        return BankAccount(
            account_id=parts[0].strip(),
            bank_name=parts[1].strip(),
            balance=float(parts[2]),
            transaction_ids=[code.strip() for code in parts[3].split(",") if code.strip()],
        )
    except (ValueError, ValidationError):
        return None


def load_bank_accounts(path: Optional[Path] = None) -> List[BankAccount]:
    path = path or _data_file(settings.BANK_ACCOUNT_FILE)
    accounts = []
    for lineno, line in enumerate(_read_lines(path), start=1):
        account = parse_bank_account(line)
        if account is None:
            logger.warning(f"Skipping malformed bank account at {path}:{lineno}")
            continue
        accounts.append(account)
    return accounts
