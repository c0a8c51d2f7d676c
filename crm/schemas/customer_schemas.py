from pydantic import BaseModel, Field
from typing import Any


class CustomerPayload(BaseModel):
    # Types, lengths and field order are checked by crm.utils.validators.
    first_name: Any = Field(None, description="At least 2 characters after trimming.")
    last_name: Any = Field(None, description="At least 2 characters after trimming.")
    phone_number: Any = Field(None, description="Exactly 10 digits, unique across customers.")

class CustomerCreate(CustomerPayload):
    pass

# Updates always replace all three fields
class CustomerUpdate(CustomerPayload):
    pass

class CustomerRead(BaseModel):
    id: int
    first_name: str
    last_name: str
    phone_number: str

    class Config:
        from_attributes = True
