from fastapi import Header


def get_company_id(x_company_id: str = Header(...)) -> str:
    # Set by the authenticating gateway; the ledger trusts it as the caller's company.
    return x_company_id
