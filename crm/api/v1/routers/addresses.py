# crm/api/v1/routers/addresses.py
from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from crm.db.session import get_db
from crm.schemas.address_schemas import (
    AddressCreate,
    AddressRead,
    AddressSearchRead,
    AddressUpdate,
    CustomerAddresses,
)
from crm.schemas.common_schemas import Created, Message
from crm.schemas.pagination_schemas import Page
from crm.crud import address_crud

router = APIRouter()


@router.post("/customers/{customer_id}/addresses", response_model=Created, status_code=status.HTTP_201_CREATED)
def create_customer_address(
        customer_id: int,
        payload: AddressCreate,
        db: Session = Depends(get_db),
):
    """Add an address to an existing customer."""
    db_address = address_crud.create_address(db=db, customer_id=customer_id, address_in=payload)
    return Created(message="Address created successfully", id=db_address.id)


@router.get("/customers/{customer_id}/addresses", response_model=CustomerAddresses)
def get_customer_addresses(
        customer_id: int,
        db: Session = Depends(get_db),
):
    """List a customer's addresses and whether they have exactly one."""
    addresses, has_only_one = address_crud.get_addresses_for_customer(db, customer_id=customer_id)
    return CustomerAddresses(
        addresses=[AddressRead.model_validate(address) for address in addresses],
        hasOnlyOneAddress=has_only_one,
    )


@router.get("/addresses", response_model=Page[AddressSearchRead])
def search_addresses(
        db: Session = Depends(get_db),
        city: str | None = Query(None),
        state: str | None = Query(None),
        pin_code: str | None = Query(None),
        page: int = Query(1, description="1-indexed page number"),
        limit: int | None = Query(None, description="Page size, defaults to DEFAULT_PAGE_SIZE"),
        sort_by: str | None = Query(None, alias="sortBy"),
        sort_order: str | None = Query(None, alias="sortOrder", description="asc or desc"),
):
    """Search addresses of all customers by city, state and pin code."""
    result = address_crud.search_addresses(
        db,
        city=city,
        state=state,
        pin_code=pin_code,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return Page.from_result(result, AddressSearchRead)


@router.get("/addresses/{address_id}", response_model=AddressRead)
def get_address(
        address_id: int,
        db: Session = Depends(get_db),
):
    """Get a specific address by its ID."""
    return address_crud.read_address(db, address_id=address_id)


@router.put("/addresses/{address_id}", response_model=Message)
def update_existing_address(
        address_id: int,
        payload: AddressUpdate,
        db: Session = Depends(get_db),
):
    address_crud.update_address(db=db, address_id=address_id, address_in=payload)
    return Message(message="Address updated successfully")


@router.delete("/addresses/{address_id}", response_model=Message)
def delete_existing_address(
        address_id: int,
        db: Session = Depends(get_db),
):
    address_crud.delete_address(db=db, address_id=address_id)
    return Message(message="Address deleted successfully")
