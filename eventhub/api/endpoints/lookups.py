from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.constants.constants import ErrorCode
from eventhub.core.database import aget_db
from eventhub.core.exceptions import NotFoundError
from eventhub.models.category import Category, Subcategory
from eventhub.models.location import Country, State
from eventhub.schemas.lookupSchema import CategoryResponse, CountryResponse, StateResponse, SubcategoryResponse
from eventhub.schemas.responseSchema import ApiResponse

router = APIRouter(prefix="/lookups", tags=["lookups"])


@router.get("/countries", response_model=ApiResponse[List[CountryResponse]])
async def list_countries(db: AsyncSession = Depends(aget_db)):
    result = await db.execute(select(Country).order_by(Country.name))
    return ApiResponse(message="Countries fetched successfully.", data=[CountryResponse.model_validate(row) for row in result.scalars().all()])


@router.get("/countries/{country_id}/states", response_model=ApiResponse[List[StateResponse]])
async def list_states(country_id: int = Path(..., gt=0), db: AsyncSession = Depends(aget_db)):
    if await db.get(Country, country_id) is None:
        raise NotFoundError("Invalid countryId", ErrorCode.INVALID_COUNTRY_ID)

    result = await db.execute(
        select(State).where(State.country_id == country_id).order_by(State.name)
    )
    return ApiResponse(message="States fetched successfully.", data=[StateResponse.model_validate(row) for row in result.scalars().all()])


@router.get("/categories", response_model=ApiResponse[List[CategoryResponse]])
async def list_categories(db: AsyncSession = Depends(aget_db)):
    """Active categories only"""
    result = await db.execute(
        select(Category).where(Category.is_active.is_(True)).order_by(Category.category_name)
    )
    return ApiResponse(message="Categories fetched successfully.", data=[CategoryResponse.model_validate(row) for row in result.scalars().all()])


@router.get("/categories/{category_id}/subcategories", response_model=ApiResponse[List[SubcategoryResponse]])
async def list_subcategories(category_id: int = Path(..., gt=0), db: AsyncSession = Depends(aget_db)):
    """Active subcategories of one category"""
    if await db.get(Category, category_id) is None:
        raise NotFoundError("Invalid categoryId", ErrorCode.INVALID_CATEGORY_ID)

    result = await db.execute(
        select(Subcategory)
        .where(Subcategory.category_id == category_id, Subcategory.is_active.is_(True))
        .order_by(Subcategory.subcategory_name)
    )
    return ApiResponse(message="Subcategories fetched successfully.", data=[SubcategoryResponse.model_validate(row) for row in result.scalars().all()])
