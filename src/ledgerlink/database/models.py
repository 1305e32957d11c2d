"""SQLAlchemy models for ledgerlink database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Organization(Base):
    """Organization model, owner of all reconciliation data."""

    __tablename__ = "organizations"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    slug = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    expenses = relationship("Expense", back_populates="organization", cascade="all, delete-orphan")
    transactions = relationship(
        "BankTransaction", back_populates="organization", cascade="all, delete-orphan"
    )
    activities = relationship("Activity", back_populates="organization", cascade="all, delete-orphan")


class Expense(Base):
    """Expense model (amount is the total including tax)."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    organization_id = Column(
        Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    description = Column(String, nullable=False)
    amount_ttc = Column(Numeric(12, 2), nullable=False)
    status = Column(String, default="PENDING", nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    organization = relationship("Organization", back_populates="expenses")
    transaction_links = relationship(
        "BankTransactionExpense", back_populates="expense", cascade="all, delete-orphan"
    )


class BankTransaction(Base):
    """Bank statement line model."""

    __tablename__ = "bank_transactions"

    id = Column(Integer, primary_key=True)
    hash = Column(String(64), unique=True, nullable=False)
    organization_id = Column(
        Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    date = Column(Date, nullable=False)
    value_date = Column(Date, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String, nullable=False)
    balance = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    organization = relationship("Organization", back_populates="transactions")
    expense_links = relationship(
        "BankTransactionExpense", back_populates="bank_transaction", cascade="all, delete-orphan"
    )


class BankTransactionExpense(Base):
    """Association between a bank transaction and an expense."""

    __tablename__ = "bank_transaction_expenses"

    id = Column(Integer, primary_key=True)
    bank_transaction_id = Column(
        Integer, ForeignKey("bank_transactions.id", ondelete="CASCADE"), nullable=False
    )
    expense_id = Column(Integer, ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # At most one link per (transaction, expense) pair
    __table_args__ = (
        UniqueConstraint("bank_transaction_id", "expense_id", name="uq_transaction_expense"),
    )

    # Relationships
    bank_transaction = relationship("BankTransaction", back_populates="expense_links")
    expense = relationship("Expense", back_populates="transaction_links")


class Activity(Base):
    """Audit log entry model."""

    __tablename__ = "activities"

    id = Column(Integer, primary_key=True)
    organization_id = Column(
        Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    type = Column(String, nullable=False)
    entity_type = Column(String, nullable=True)
    entity_id = Column(Integer, nullable=True)
    description = Column(String, nullable=False)
    details = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    organization = relationship("Organization", back_populates="activities")


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Turn on foreign key enforcement for SQLite connections."""
    module = type(dbapi_connection).__module__
    if module.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
