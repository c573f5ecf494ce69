"""Persistence layer for loans and their scheduled repayments.

A loan is stored together with one repayment row per generated installment.
Rows start out ``PENDING`` with no amount paid and no payment date; recording
a payment fills both in. The status reported for a row is derived from its
dates, so an unpaid row past its due date is reported as ``OVERDUE``.

The store defaults to SQLite for local development, but accepts any
SQLAlchemy-compatible URL (e.g. PostgreSQL/MySQL).
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, create_engine, select
from sqlalchemy.orm import declarative_base, relationship, selectinload, sessionmaker
from sqlalchemy.pool import StaticPool

from repayment_calc.data_models import Installment, LoanTerms, RepaymentStatus
from repayment_calc.status import payment_status

logger = logging.getLogger(__name__)

Base = declarative_base()


class LoanModel(Base):
    __tablename__ = "loans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    borrower = Column(String(255), nullable=False)
    principal = Column(Numeric(28, 10), nullable=False)
    interest_rate = Column(Numeric(28, 10), nullable=False)
    start_date = Column(Date, nullable=False)
    maturity_date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    repayments = relationship(
        "RepaymentModel",
        back_populates="loan",
        order_by="RepaymentModel.due_date",
        cascade="all, delete-orphan",
    )


class RepaymentModel(Base):
    __tablename__ = "repayments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    loan_id = Column(Integer, ForeignKey("loans.id"), index=True, nullable=False)
    due_date = Column(Date, nullable=False)
    amount_due = Column(Numeric(28, 10), nullable=False)
    amount_paid = Column(Numeric(28, 10), nullable=True)
    payment_date = Column(Date, nullable=True)
    status = Column(String(16), default=RepaymentStatus.PENDING, nullable=False)

    loan = relationship("LoanModel", back_populates="repayments")


class RepaymentStore:
    """Database-backed loan and repayment store."""

    def __init__(self, url: str) -> None:
        if url in ("sqlite://", "sqlite:///:memory:"):
            # every connection to an in-memory database would otherwise see an empty one
            self._engine = create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                future=True,
            )
        else:
            self._engine = create_engine(url, future=True)
        Base.metadata.create_all(self._engine)
        self._session_factory = sessionmaker(self._engine, expire_on_commit=False, future=True)

    def create_loan(self, borrower: str, terms: LoanTerms, schedule: Iterable[Installment]) -> Dict[str, Any]:
        """Store a loan and one ``PENDING`` repayment per installment."""
        loan = LoanModel(
            borrower=borrower,
            principal=terms.principal,
            interest_rate=terms.rate,
            start_date=terms.start_date,
            maturity_date=terms.maturity_date,
        )
        for entry in schedule:
            loan.repayments.append(
                RepaymentModel(
                    due_date=entry.due_date,
                    amount_due=entry.amount_due,
                    status=RepaymentStatus.PENDING,
                )
            )
        with self._session_factory() as session:
            session.add(loan)
            session.commit()
            logger.info("Created loan %s for %s with %d repayments", loan.id, borrower, len(loan.repayments))
            return self._loan_to_dict(loan)

    def get_loan(self, loan_id: int, today: Optional[date] = None) -> Optional[Dict[str, Any]]:
        with self._session_factory() as session:
            loan = session.execute(
                select(LoanModel).options(selectinload(LoanModel.repayments)).where(LoanModel.id == loan_id)
            ).scalar_one_or_none()
            if loan is None:
                return None
            return self._loan_to_dict(loan, today)

    def list_loans(self, today: Optional[date] = None) -> List[Dict[str, Any]]:
        with self._session_factory() as session:
            rows: Iterable[LoanModel] = session.execute(
                select(LoanModel)
                .options(selectinload(LoanModel.repayments))
                .order_by(LoanModel.created_at.desc(), LoanModel.id.desc())
            ).scalars()
            return [self._loan_to_dict(row, today) for row in rows]

    def record_payment(
        self,
        repayment_id: int,
        amount_paid: Decimal,
        paid_on: date,
        today: Optional[date] = None,
    ) -> Optional[Dict[str, Any]]:
        """Mark a repayment as paid. Returns ``None`` if it does not exist."""
        with self._session_factory() as session:
            row = session.get(RepaymentModel, repayment_id)
            if row is None:
                return None
            row.amount_paid = amount_paid
            row.payment_date = paid_on
            row.status = RepaymentStatus.PAID
            session.commit()
            logger.info("Recorded payment of %s on repayment %s", amount_paid, repayment_id)
            return self._repayment_to_dict(row, today)

    @classmethod
    def _loan_to_dict(cls, row: LoanModel, today: Optional[date] = None) -> Dict[str, Any]:
        repayments = [cls._repayment_to_dict(r, today) for r in row.repayments]
        return {
            "id": row.id,
            "borrower": row.borrower,
            "principal": float(row.principal),
            "interestRate": float(row.interest_rate),
            "startDate": row.start_date.isoformat(),
            "maturityDate": row.maturity_date.isoformat(),
            "createdAt": row.created_at.isoformat(),
            "totalDue": float(sum((Decimal(r.amount_due) for r in row.repayments), Decimal("0"))),
            "repayments": repayments,
        }

    @staticmethod
    def _repayment_to_dict(row: RepaymentModel, today: Optional[date] = None) -> Dict[str, Any]:
        return {
            "id": row.id,
            "loanId": row.loan_id,
            "dueDate": row.due_date.isoformat(),
            "amountDue": float(row.amount_due),
            "amountPaid": float(row.amount_paid) if row.amount_paid is not None else None,
            "paymentDate": row.payment_date.isoformat() if row.payment_date else None,
            "status": payment_status(row.due_date, row.payment_date, today),
        }


def create_store_from_env(url: str | None) -> RepaymentStore:
    return RepaymentStore(url or "sqlite:///repayments.sqlite3")
