# crm/crud/address_crud.py
from sqlalchemy.orm import Session

from crm.core.errors import NotFound, ValidationError
from crm.core.logging import get_logger
from crm.crud.customer_crud import require_customer
from crm.crud.pagination import PageResult, apply_filters, contains, paginate
from crm.db.models import Address, Customer, is_storable_id
from crm.db.session import transaction
from crm.schemas.address_schemas import AddressCreate, AddressUpdate
from crm.utils.decorators import handle_storage_errors
from crm.utils.validators import clean_address, validate_address

logger = get_logger(__name__)

# Keys accepted as sortBy for the address search; customer names come from the join
ADDRESS_SORT_COLUMNS = {
    "id": Address.id,
    "customer_id": Address.customer_id,
    "address_details": Address.address_details,
    "city": Address.city,
    "state": Address.state,
    "pin_code": Address.pin_code,
    "first_name": Customer.first_name,
    "last_name": Customer.last_name,
}


def _validated(address_in: AddressCreate | AddressUpdate) -> dict:
    data = address_in.model_dump()
    error = validate_address(data)
    if error:
        raise ValidationError(error)
    return clean_address(data)


def get_address_by_id(db: Session, address_id: int) -> Address | None:
    """Fetches a single address by its ID, whichever customer owns it."""
    if not is_storable_id(address_id):
        return None
    return db.query(Address).filter(Address.id == address_id).first()


def require_address(db: Session, address_id: int) -> Address:
    db_address = get_address_by_id(db, address_id)
    if db_address is None:
        raise NotFound("Address not found")
    return db_address


@handle_storage_errors("create address")
def create_address(db: Session, customer_id: int, address_in: AddressCreate) -> Address:
    """
    Adds an address to an existing customer.
    The customer lookup and the insert share one transaction, so the address
    cannot be attached to a customer deleted in between.
    """
    values = _validated(address_in)
    with transaction(db):
        require_customer(db, customer_id)
        db_address = Address(customer_id=customer_id, **values)
        db.add(db_address)
        db.flush()
    logger.info(f"Created address {db_address.id} for customer {customer_id}")
    return db_address


@handle_storage_errors("fetch addresses")
def get_addresses_for_customer(db: Session, customer_id: int) -> tuple[list[Address], bool]:
    """
    All addresses of a customer, plus whether there is exactly one of them.
    The flag is recomputed from the rows on every call. An unknown customer
    simply has no addresses.
    """
    if not is_storable_id(customer_id):
        return [], False
    addresses = (
        db.query(Address)
        .filter(Address.customer_id == customer_id)
        .order_by(Address.id.asc())
        .all()
    )
    return addresses, len(addresses) == 1


@handle_storage_errors("fetch address")
def read_address(db: Session, address_id: int) -> Address:
    return require_address(db, address_id)


@handle_storage_errors("update address")
def update_address(db: Session, address_id: int, address_in: AddressUpdate) -> Address:
    values = _validated(address_in)
    with transaction(db):
        db_address = require_address(db, address_id)
        for key, value in values.items():
            setattr(db_address, key, value)
        db.flush()
    logger.info(f"Updated address {address_id}")
    return db_address


@handle_storage_errors("delete address")
def delete_address(db: Session, address_id: int) -> None:
    with transaction(db):
        db_address = require_address(db, address_id)
        db.delete(db_address)
        db.flush()
    logger.info(f"Deleted address {address_id}")


@handle_storage_errors("search addresses")
def search_addresses(
        db: Session,
        *,
        city: str | None = None,
        state: str | None = None,
        pin_code: str | None = None,
        page: int = 1,
        limit: int | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
) -> PageResult:
    """
    A page of addresses across all customers, each joined with its owner's
    name. Every given filter must match (case-insensitive substring).
    """
    query = (
        db.query(
            Address.id,
            Address.customer_id,
            Address.address_details,
            Address.city,
            Address.state,
            Address.pin_code,
            Customer.first_name,
            Customer.last_name,
        )
        .join(Customer, Address.customer_id == Customer.id)
    )
    query = apply_filters(
        query,
        contains(Address.city, city),
        contains(Address.state, state),
        contains(Address.pin_code, pin_code),
    )
    return paginate(
        query,
        sort_columns=ADDRESS_SORT_COLUMNS,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
