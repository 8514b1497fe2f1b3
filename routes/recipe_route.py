"""
Recipe Management Routes - handlers live in utils.recipe_handlers
"""
from fastapi import APIRouter, Body, Depends
from typing import List, Optional

from database.mongo import get_recipe_collection
from models.rating_model import RatingIn
from models.recipe_model import RecipeDocument, RecipeIn, RecipeOut, RecipeUpdate
from utils.recipe_handlers import (
    create_recipe_handler,
    delete_recipe_handler,
    get_all_recipes_handler,
    get_recipe_handler,
    rate_recipe_handler,
    update_recipe_handler,
)

router = APIRouter(prefix="/recipes", tags=["Recipes"])

# ==================== RECIPE ROUTES ====================
@router.get("", response_model=List[RecipeOut], response_model_exclude_unset=True)
async def get_all_recipes(collection=Depends(get_recipe_collection)):
    return await get_all_recipes_handler(collection)

@router.get("/{recipe_id}", response_model=RecipeOut, response_model_exclude_unset=True)
async def get_recipe(recipe_id: str, collection=Depends(get_recipe_collection)):
    return await get_recipe_handler(recipe_id, collection)

@router.post("", status_code=201, response_model=RecipeDocument, response_model_exclude_unset=True)
async def create_recipe(recipe: RecipeIn, collection=Depends(get_recipe_collection)):
    return await create_recipe_handler(recipe, collection)

@router.put("/{recipe_id}", response_model=RecipeDocument, response_model_exclude_unset=True)
async def update_recipe(recipe_id: str, payload: RecipeUpdate, collection=Depends(get_recipe_collection)):
    return await update_recipe_handler(recipe_id, payload, collection)

@router.delete("/{recipe_id}")
async def delete_recipe(recipe_id: str, collection=Depends(get_recipe_collection)):
    return await delete_recipe_handler(recipe_id, collection)

@router.post("/{recipe_id}/rate")
async def rate_recipe(recipe_id: str, payload: Optional[RatingIn] = Body(default=None), collection=Depends(get_recipe_collection)):
    return await rate_recipe_handler(recipe_id, payload, collection)
