# crm/crud/customer_crud.py
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from crm.core.errors import Conflict, NotFound, ValidationError
from crm.core.logging import get_logger
from crm.crud.pagination import PageResult, all_of, any_of, apply_filters, contains, paginate
from crm.db.models import Address, Customer, is_storable_id
from crm.db.session import transaction
from crm.schemas.customer_schemas import CustomerCreate, CustomerUpdate
from crm.utils.decorators import handle_storage_errors
from crm.utils.validators import clean_customer, validate_customer

logger = get_logger(__name__)

# Only these keys may be passed as sortBy for the customer list
CUSTOMER_SORT_COLUMNS = {
    "id": Customer.id,
    "first_name": Customer.first_name,
    "last_name": Customer.last_name,
    "phone_number": Customer.phone_number,
}

DUPLICATE_PHONE_MESSAGE = "Phone number already exists"


def _validated(customer_in: CustomerCreate | CustomerUpdate) -> dict:
    data = customer_in.model_dump()
    error = validate_customer(data)
    if error:
        raise ValidationError(error)
    return clean_customer(data)


def _ensure_phone_available(db: Session, phone_number: str, exclude_id: int | None = None):
    query = db.query(Customer.id).filter(Customer.phone_number == phone_number)
    if exclude_id is not None:
        query = query.filter(Customer.id != exclude_id)
    if query.first() is not None:
        logger.warning(f"Rejected duplicate phone number for customer {exclude_id or '(new)'}")
        raise Conflict(DUPLICATE_PHONE_MESSAGE)


def _flush_or_conflict(db: Session):
    # The unique index still guards against a concurrent insert slipping past the lookup.
    # Rollback is left to the enclosing transaction.
    try:
        db.flush()
    except IntegrityError:
        raise Conflict(DUPLICATE_PHONE_MESSAGE)


def get_customer_by_id(db: Session, customer_id: int) -> Customer | None:
    """Fetches a single customer by their ID."""
    if not is_storable_id(customer_id):
        return None
    return db.query(Customer).filter(Customer.id == customer_id).first()


def require_customer(db: Session, customer_id: int) -> Customer:
    db_customer = get_customer_by_id(db, customer_id)
    if db_customer is None:
        raise NotFound("Customer not found")
    return db_customer


@handle_storage_errors("create customer")
def create_customer(db: Session, customer_in: CustomerCreate) -> Customer:
    """Validates and inserts a new customer. Raises Conflict if the phone number is taken."""
    values = _validated(customer_in)
    with transaction(db):
        _ensure_phone_available(db, values["phone_number"])
        db_customer = Customer(**values)
        db.add(db_customer)
        _flush_or_conflict(db)
    logger.info(f"Created customer {db_customer.id}")
    return db_customer


@handle_storage_errors("fetch customer")
def read_customer(db: Session, customer_id: int) -> Customer:
    return require_customer(db, customer_id)


@handle_storage_errors("fetch customers")
def list_customers(
        db: Session,
        *,
        page: int = 1,
        limit: int | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
        search: str | None = None,
        city: str | None = None,
        state: str | None = None,
        pin_code: str | None = None,
) -> PageResult[Customer]:
    """
    A page of customers.

    `search` matches first name, last name or phone number. `city`, `state`
    and `pin_code` keep customers that own at least one address matching all
    of the given values. All matching is case-insensitive substring matching.
    """
    search_predicate = any_of(
        contains(Customer.first_name, search),
        contains(Customer.last_name, search),
        contains(Customer.phone_number, search),
    )

    address_match = all_of(
        contains(Address.city, city),
        contains(Address.state, state),
        contains(Address.pin_code, pin_code),
    )
    owns_matching_address = Customer.addresses.any(address_match) if address_match is not None else None

    query = apply_filters(db.query(Customer), search_predicate, owns_matching_address)
    return paginate(
        query,
        sort_columns=CUSTOMER_SORT_COLUMNS,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@handle_storage_errors("update customer")
def update_customer(db: Session, customer_id: int, customer_in: CustomerUpdate) -> Customer:
    """Replaces the name and phone number of an existing customer."""
    values = _validated(customer_in)
    with transaction(db):
        db_customer = require_customer(db, customer_id)
        _ensure_phone_available(db, values["phone_number"], exclude_id=customer_id)
        for key, value in values.items():
            setattr(db_customer, key, value)
        _flush_or_conflict(db)
    logger.info(f"Updated customer {customer_id}")
    return db_customer


@handle_storage_errors("delete customer")
def delete_customer(db: Session, customer_id: int) -> None:
    """Deletes a customer and, first, every address they own. Both happen or neither does."""
    with transaction(db):
        db_customer = require_customer(db, customer_id)
        removed = (
            db.query(Address)
            .filter(Address.customer_id == customer_id)
            .delete(synchronize_session=False)
        )
        db.delete(db_customer)
        db.flush()
    logger.info(f"Deleted customer {customer_id} and {removed} address(es)")
