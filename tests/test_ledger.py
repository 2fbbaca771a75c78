from datetime import date

import pytest
from pydantic import ValidationError

from nkwaboa.db import ledger
from nkwaboa.models.category import Category
from nkwaboa.models.transaction import Transaction

expenditure_lines = [
    "EXP1|-250.0|Cement|2024-01-04|Cash|Ghacem",
    "EXP2|1200.0|Sales|2024-01-20|Bank|",
    "EXP3|-80.0||2024-02-01|MoMo|Trotro",
    "EXP4|-45.5|Transport||Cash|Uber",
    "not a record",
    "EXP6|abc|Cement|2024-02-01|Cash|Ghacem",
    "EXP7|-10.0|Cement|2024-13-01|Cash|Ghacem",
]


def write(path, lines):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def test_load_transactions_skips_malformed_lines(ledger_dir):
    write(ledger_dir / "expenditures.txt", expenditure_lines)
    transactions = ledger.load_transactions()
    assert [t.id for t in transactions] == ["EXP1", "EXP2", "EXP3", "EXP4"]
    assert transactions[0].date == date(2024, 1, 4)
    assert transactions[0].amount == -250.0
    assert transactions[2].category is None
    assert transactions[3].date is None


def test_missing_ledger_is_empty():
    assert ledger.load_transactions() == []
    assert ledger.load_categories() == []
    assert ledger.load_bank_accounts() == []


def test_save_and_reload(ledger_dir):
    transactions = [
        Transaction(id="EXP1", amount=-19.99, category="Fuel", date=date(2024, 3, 1), payment_method="Cash", vendor="Shell"),
        Transaction(id="EXP2", amount=40.0, category=None, date=None),
    ]
    assert ledger.save_transactions(transactions)
    assert (ledger_dir / "expenditures.txt").read_text(encoding="utf-8").splitlines()[0] == (
        "EXP1|-19.99|Fuel|2024-03-01|Cash|Shell"
    )
    assert ledger.load_transactions() == transactions


def test_put_transaction_assigns_id():
    first = ledger.put_transaction(Transaction(amount=-10.0, category="Fuel", date=date(2024, 3, 1)))
    second = ledger.put_transaction(Transaction(amount=-20.0, category="Food", date=date(2024, 3, 2)))
    assert first.id == "EXP1"
    assert second.id == "EXP2"
    assert len(ledger.load_transactions()) == 2


def test_search_transactions(ledger_dir):
    write(ledger_dir / "expenditures.txt", expenditure_lines)
    assert [t.id for t in ledger.search_transactions("cem")] == ["EXP1"]
    assert [t.id for t in ledger.search_transactions("TROTRO")] == ["EXP3"]
    assert ledger.search_transactions("nothing") == []


def test_categories(ledger_dir):
    assert ledger.put_category(Category(id="CEM", name="Cement", budget_limit=500.0))
    assert not ledger.put_category(Category(id="CEM", name="Duplicate", budget_limit=1.0))
    write(ledger_dir / "categories.txt", ["CEM|Cement|500.0", "broken|line"])
    assert ledger.load_categories() == [Category(id="CEM", name="Cement", budget_limit=500.0)]


def test_bank_accounts(ledger_dir):
    write(ledger_dir / "accounts.txt", ["ACC1|GCB|5000.0|EXP1, EXP2", "ACC2|Ecobank|0|", "bad"])
    accounts = ledger.load_bank_accounts()
    assert [a.account_id for a in accounts] == ["ACC1", "ACC2"]
    assert accounts[0].transaction_ids == ["EXP1", "EXP2"]
    assert accounts[1].transaction_ids == []


@pytest.mark.parametrize("field", ["id", "category", "payment_method", "vendor"])
def test_transaction_fields_cannot_hold_separators(field):
    for value in ("Shell|Total", "Shell\nTotal", "Shell\rTotal"):
        with pytest.raises(ValidationError):
            Transaction(amount=-10.0, **{field: value})


def test_category_fields_cannot_hold_separators():
    with pytest.raises(ValidationError):
        Category(id="CEM|X", name="Cement")
    with pytest.raises(ValidationError):
        Category(id="CEM", name="Cement\nBlocks")


def test_put_transaction_continues_after_highest_id(ledger_dir):
    write(ledger_dir / "expenditures.txt", [
        "EXP1|-10.0|Fuel|2024-03-01|Cash|Shell",
        "EXP7|-5.0|Fuel|2024-03-02|Cash|Shell|Total",
        "EXP3|-20.0|Food|2024-03-03|Cash|Papaye",
    ])
    stored = ledger.put_transaction(Transaction(amount=-1.0, category="Fuel", date=date(2024, 3, 4)))
    assert stored.id == "EXP8"

    lines = (ledger_dir / "expenditures.txt").read_text(encoding="utf-8").splitlines()
    assert lines[1] == "EXP7|-5.0|Fuel|2024-03-02|Cash|Shell|Total"
    assert lines[-1] == "EXP8|-1.0|Fuel|2024-03-04||"
    assert [t.id for t in ledger.load_transactions()] == ["EXP1", "EXP3", "EXP8"]


def test_put_transaction_after_unterminated_line(ledger_dir):
    ledger_dir.mkdir(parents=True)
    (ledger_dir / "expenditures.txt").write_text("EXP1|-10.0|Fuel|2024-03-01|Cash|Shell", encoding="utf-8")
    ledger.put_transaction(Transaction(amount=-2.0, category="Fuel", date=date(2024, 3, 2)))
    assert [t.id for t in ledger.load_transactions()] == ["EXP1", "EXP2"]


def test_next_transaction_id():
    assert ledger.next_transaction_id([]) == "EXP1"
    assert ledger.next_transaction_id(["EXP2|1|a|||", "IMPORT9|1|a|||", "EXP10|broken"]) == "EXP11"
