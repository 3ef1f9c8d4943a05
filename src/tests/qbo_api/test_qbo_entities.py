from __future__ import annotations

import pytest

from qbo_api.entities import entity_name, singular, snake_to_camel


@pytest.mark.parametrize(
    "label, expected",
    [
        ("customers", "Customer"),
        (":customers", "Customer"),
        ("journal_entries", "JournalEntry"),
        ("time_activities", "TimeActivity"),
        ("tax_codes", "TaxCode"),
        ("classes", "Class"),
        ("preferences", "Preferences"),
        ("entitlements", "Entitlements"),
        ("company_info", "CompanyInfo"),
        ("Customer", "Customer"),
        ("Class", "Class"),
        ("attachables", "Attachable"),
    ],
)
def test_singular(label: str, expected: str) -> None:
    assert singular(label) == expected
    assert entity_name(label) == expected


def test_snake_to_camel_keeps_camel_case() -> None:
    assert snake_to_camel("SalesReceipt") == "SalesReceipt"
    assert snake_to_camel("sales_receipts") == "SalesReceipts"
