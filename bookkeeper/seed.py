from __future__ import annotations

import sys

from sqlalchemy import func, select

from .db import SessionLocal
from .models import Company, PaymentMethod


SEED_PAYMENT_METHODS = [
    "Cash",
    "Check",
    "Credit Card",
    "Bank Transfer",
]


def seed_payment_methods(session, company_id: int) -> int:
    if session.get(Company, company_id) is None:
        raise ValueError(f"Company {company_id} not found")
    created = 0
    for name in SEED_PAYMENT_METHODS:
        exists = session.execute(
            select(PaymentMethod).where(
                PaymentMethod.company_id == company_id,
                func.lower(PaymentMethod.name) == name.lower(),
            )
        ).scalar_one_or_none()
        if exists:
            continue
        session.add(PaymentMethod(company_id=company_id, name=name, is_active=True))
        created += 1
    if created:
        session.commit()
    return created


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1 or not args[0].isdigit():
        print("usage: python -m bookkeeper.seed COMPANY_ID")
        raise SystemExit(2)
    with SessionLocal() as session:
        created = seed_payment_methods(session, int(args[0]))
    print(f"Seeded payment methods: {created}")


if __name__ == "__main__":
    main()
