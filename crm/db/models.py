# crm/db/models.py

from sqlalchemy import (
    Column,
    String,
    ForeignKey,
    Integer,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

# Largest value an INTEGER primary key can hold (signed 64-bit)
MAX_ROW_ID = 2**63 - 1


def is_storable_id(value: int) -> bool:
    return -MAX_ROW_ID - 1 <= value <= MAX_ROW_ID


class Customer(Base):
    __tablename__ = "customers"
    # AUTOINCREMENT on SQLite so ids of deleted customers are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    phone_number = Column(String, nullable=False, unique=True)

    # No ORM or database cascade: address cleanup is done explicitly by the delete handler.
    addresses = relationship("Address", back_populates="customer", passive_deletes="all")


class Address(Base):
    __tablename__ = "addresses"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    address_details = Column(String, nullable=False)
    city = Column(String, nullable=False)
    state = Column(String, nullable=False)
    pin_code = Column(String, nullable=False)

    customer = relationship("Customer", back_populates="addresses")
