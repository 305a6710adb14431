import math

from pydantic import BaseModel


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(
            current_page=page,
            total_pages=math.ceil(total / limit) if limit else 0,
            total_items=total,
            items_per_page=limit,
        )
