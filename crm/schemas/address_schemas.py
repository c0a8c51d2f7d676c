from pydantic import BaseModel, Field
from typing import Any, List


class AddressPayload(BaseModel):
    address_details: Any = Field(None, description="At least 5 characters after trimming.")
    city: Any = Field(None, description="At least 2 characters after trimming.")
    state: Any = Field(None, description="At least 2 characters after trimming.")
    pin_code: Any = Field(None, description="5 or 6 digits.")

# Properties to receive on address creation
class AddressCreate(AddressPayload):
    pass

# Properties to receive on address update
class AddressUpdate(AddressPayload):
    pass

# Properties to return to the client
class AddressRead(BaseModel):
    id: int
    customer_id: int
    address_details: str
    city: str
    state: str
    pin_code: str

    class Config:
        from_attributes = True

class AddressSearchRead(AddressRead):
    """An address joined with the name of the customer who owns it."""
    first_name: str
    last_name: str

class CustomerAddresses(BaseModel):
    addresses: List[AddressRead]
    hasOnlyOneAddress: bool = Field(..., description="Derived from the current address count, never stored.")
