"""Entity label helpers.

Callers name entities the way they read in a URL or a Python attribute
(`customers`, `journal_entries`, `:tax_codes`). Response envelopes key the
payload by the singular CamelCase QBO name (`Customer`, `JournalEntry`).
"""

from __future__ import annotations

# Entity names as they appear as keys inside QBO response envelopes.
KNOWN_ENTITIES = frozenset(
    {
        "Account",
        "Attachable",
        "Bill",
        "BillPayment",
        "Budget",
        "Class",
        "CompanyCurrency",
        "CompanyInfo",
        "CreditCardPayment",
        "CreditMemo",
        "Customer",
        "CustomerType",
        "Department",
        "Deposit",
        "Employee",
        "Entitlements",
        "Estimate",
        "ExchangeRate",
        "Invoice",
        "Item",
        "JournalCode",
        "JournalEntry",
        "Payment",
        "PaymentMethod",
        "Preferences",
        "Purchase",
        "PurchaseOrder",
        "RecurringTransaction",
        "RefundReceipt",
        "ReimburseCharge",
        "SalesReceipt",
        "TaxAgency",
        "TaxCode",
        "TaxRate",
        "TaxService",
        "Term",
        "TimeActivity",
        "Transfer",
        "Vendor",
        "VendorCredit",
    }
)

_IRREGULAR = {
    "Classes": "Class",
    "Entitlements": "Entitlements",
    "Preferences": "Preferences",
    "CompanyInfos": "CompanyInfo",
}


def snake_to_camel(label: str) -> str:
    """`journal_entries` -> `JournalEntries`; CamelCase input is kept as-is."""

    label = str(label).lstrip(":")
    if "_" not in label and label[:1].isupper():
        return label
    return "".join(part[:1].upper() + part[1:] for part in label.split("_") if part)


def singular(entity: str) -> str:
    """Return the singular CamelCase entity name for a (usually plural) label."""

    name = snake_to_camel(entity)
    if name in KNOWN_ENTITIES:
        return name
    if name in _IRREGULAR:
        return _IRREGULAR[name]
    if name.endswith("ies"):
        return name[:-3] + "y"
    if name.endswith("sses"):
        return name[:-2]
    if name.endswith("s"):
        return name[:-1]
    return name


def entity_name(entity: str) -> str:
    return singular(entity)
