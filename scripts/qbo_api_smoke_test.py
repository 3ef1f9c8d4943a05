"""Smoke test: call a couple of QuickBooks Online APIs with the current credentials.

Env vars (either OAuth2 or OAuth1):
- QBO_ACCESS_TOKEN
- QBO_CONSUMER_KEY / QBO_CONSUMER_SECRET / QBO_TOKEN / QBO_TOKEN_SECRET
- QBO_REALM_ID
- QBO_ENVIRONMENT (sandbox|production) [default: sandbox]
- QBO_API_LOG=1 to log every request/response

Run:
  python scripts/qbo_api_smoke_test.py
"""

from __future__ import annotations

import logging
import os

from qbo_api import QBOApi, QBOConfigurationError


def main() -> None:
    if os.environ.get("QBO_API_LOG"):
        logging.basicConfig(level=logging.DEBUG)

    try:
        qbo = QBOApi.from_env()
        realm_id = os.environ.get("QBO_REALM_ID")
        if not realm_id:
            raise QBOConfigurationError("Missing QBO_REALM_ID")
    except QBOConfigurationError as e:
        raise SystemExit(f"Configuration error: {e}") from e

    print("Calling CompanyInfo...")
    company_info = qbo.request("get", f"companyinfo/{realm_id}", entity="company_info") or {}
    print("✅ Company:", company_info.get("CompanyName"), "|", company_info.get("Id"))

    print("\nQuerying customers...")
    customers = qbo.request(
        "get",
        "query",
        entity="customers",
        params={"query": "select * from Customer MAXRESULTS 5"},
    )
    if customers is None:
        print("No customers in this company.")
    else:
        for c in customers:
            print(f"- {c.get('Id')}: {c.get('DisplayName')}")

    qbo.close()


if __name__ == "__main__":
    main()
