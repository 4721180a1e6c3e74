"""SQLAlchemy models for ledger snapshots."""

from sqlalchemy import (
    BigInteger,
    Column,
    Date,
    ForeignKey,
    Integer,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    name = Column(String, primary_key=True)
    account_type = Column(String, nullable=False)

    # Relationships
    tags = relationship("AccountTag", back_populates="account", cascade="all, delete-orphan")


class AccountTag(Base):
    """Account tag model."""

    __tablename__ = "account_tags"

    account_name = Column(String, ForeignKey("accounts.name"), primary_key=True)
    tag = Column(String, primary_key=True)

    # Relationships
    account = relationship("Account", back_populates="tags")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(String(64), primary_key=True)
    name = Column(String, nullable=False)
    notes = Column(String, nullable=False, default="")
    date = Column(Date, nullable=False)
    # both NULL for transactions without a time of day
    hour = Column(Integer, nullable=True)
    minute = Column(Integer, nullable=True)

    # Relationships
    tags = relationship(
        "TransactionTag", back_populates="transaction", cascade="all, delete-orphan"
    )
    postings = relationship("Posting", back_populates="transaction", cascade="all, delete-orphan")


class TransactionTag(Base):
    """Transaction tag model."""

    __tablename__ = "transaction_tags"

    transaction_id = Column(String(64), ForeignKey("transactions.id"), primary_key=True)
    tag = Column(String, primary_key=True)

    # Relationships
    transaction = relationship("Transaction", back_populates="tags")


class Posting(Base):
    """Amount posted to one account by one transaction."""

    __tablename__ = "postings"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(String(64), ForeignKey("transactions.id"), nullable=False)
    account_name = Column(String, ForeignKey("accounts.name"), nullable=False)

    # Relationships
    transaction = relationship("Transaction", back_populates="postings")
    amounts = relationship("PostingAmount", back_populates="posting", cascade="all, delete-orphan")


class PostingAmount(Base):
    """One currency component of a posting."""

    __tablename__ = "posting_amounts"

    posting_id = Column(Integer, ForeignKey("postings.id"), primary_key=True)
    currency = Column(String, primary_key=True)
    value = Column(BigInteger, nullable=False)
    n_decimals = Column(Integer, nullable=False)

    # Relationships
    posting = relationship("Posting", back_populates="amounts")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
