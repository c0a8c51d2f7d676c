from pydantic import BaseModel


# Acknowledgement returned by update and delete endpoints
class Message(BaseModel):
    message: str

# Returned by create endpoints
class Created(Message):
    id: int
