from pydantic import Field

from eventhub.schemas.responseSchema import CamelModel


class CountryResponse(CamelModel):
    id: int
    name: str
    code: str


class StateResponse(CamelModel):
    id: int
    name: str
    country_id: int


class CategoryResponse(CamelModel):
    id: int
    category_name: str
    is_active: bool


class SubcategoryResponse(CamelModel):
    id: int
    category_id: int
    subcategory_name: str
    is_active: bool = Field(default=True)
