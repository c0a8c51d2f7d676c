# crm/api/v1/routers/customers.py
from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from crm.db.session import get_db
from crm.schemas.customer_schemas import CustomerCreate, CustomerRead, CustomerUpdate
from crm.schemas.common_schemas import Created, Message
from crm.schemas.pagination_schemas import Page
from crm.crud import customer_crud

router = APIRouter()


@router.post("", response_model=Created, status_code=status.HTTP_201_CREATED)
def create_new_customer(
        payload: CustomerCreate,
        db: Session = Depends(get_db),
):
    """Create a new customer. The phone number must not belong to another customer."""
    db_customer = customer_crud.create_customer(db=db, customer_in=payload)
    return Created(message="Customer created successfully", id=db_customer.id)


@router.get("", response_model=Page[CustomerRead])
def get_all_customers(
        db: Session = Depends(get_db),
        page: int = Query(1, description="1-indexed page number"),
        limit: int | None = Query(None, description="Page size, defaults to DEFAULT_PAGE_SIZE"),
        sort_by: str | None = Query(None, alias="sortBy", description="id, first_name, last_name or phone_number"),
        sort_order: str | None = Query(None, alias="sortOrder", description="asc or desc"),
        search: str | None = Query(None, description="Substring of the first name, last name or phone number"),
        city: str | None = Query(None, description="Only customers with an address in a matching city"),
        state: str | None = Query(None, description="Only customers with an address in a matching state"),
        pin_code: str | None = Query(None, description="Only customers with an address with a matching pin code"),
):
    """List customers with search, address filters, sorting and pagination."""
    result = customer_crud.list_customers(
        db,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
        city=city,
        state=state,
        pin_code=pin_code,
    )
    return Page.from_result(result, CustomerRead)


@router.get("/{customer_id}", response_model=CustomerRead)
def get_customer_details(
        customer_id: int,
        db: Session = Depends(get_db),
):
    """Get a single customer by their ID."""
    return customer_crud.read_customer(db, customer_id=customer_id)


@router.put("/{customer_id}", response_model=Message)
def update_existing_customer(
        customer_id: int,
        payload: CustomerUpdate,
        db: Session = Depends(get_db),
):
    """Replace a customer's name and phone number."""
    customer_crud.update_customer(db=db, customer_id=customer_id, customer_in=payload)
    return Message(message="Customer updated successfully")


@router.delete("/{customer_id}", response_model=Message)
def delete_existing_customer(
        customer_id: int,
        db: Session = Depends(get_db),
):
    """Delete a customer together with all of their addresses."""
    customer_crud.delete_customer(db=db, customer_id=customer_id)
    return Message(message="Customer deleted successfully")
