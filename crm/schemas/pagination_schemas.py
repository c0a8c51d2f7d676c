from pydantic import BaseModel
from typing import Generic, List, Type, TypeVar

T = TypeVar("T", bound=BaseModel)


class Page(BaseModel, Generic[T]):
    """One page of a list view, as returned by the paginated query engine."""
    data: List[T]
    total: int
    page: int
    limit: int
    totalPages: int

    @classmethod
    def from_result(cls, result, item_schema: Type[T]) -> "Page[T]":
        """Builds the response from a crm.crud.pagination.PageResult, converting each row with `item_schema`."""
        return cls[item_schema](
            data=[item_schema.model_validate(row, from_attributes=True) for row in result.data],
            total=result.total,
            page=result.page,
            limit=result.limit,
            totalPages=result.total_pages,
        )
