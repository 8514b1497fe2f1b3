"""
Recipe Route Handlers
All recipe-related route handlers consolidated here, routes/recipe_route.py only wires them
"""
import logging
from typing import List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import ValidationError
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from core.errors import BadRequest, InternalError, NotFound
from models.rating_model import Rating, RatingIn
from models.recipe_model import (
    RecipeDocument,
    RecipeIn,
    RecipeOut,
    RecipeUpdate,
    to_recipe_document,
    to_recipe_out,
)

logger = logging.getLogger(__name__)

# Errors raised by the driver for a bad identifier or a failed store call
STORE_ERRORS = (PyMongoError, InvalidId)


# ==================== HELPER FUNCTIONS ====================

def _object_id(recipe_id: str) -> ObjectId:
    """
    Convert path id to ObjectId, raises InvalidId with the driver's message
    """
    return ObjectId(recipe_id)


# ==================== RECIPE HANDLERS ====================

async def get_all_recipes_handler(collection) -> List[RecipeOut]:
    """
    Every recipe in natural store order, _id renamed to id
    """
    try:
        recipes = await collection.find().to_list(length=None)
    except PyMongoError as e:
        raise BadRequest(str(e))

    return [to_recipe_out(recipe) for recipe in recipes]


async def get_recipe_handler(recipe_id: str, collection) -> RecipeOut:
    try:
        recipe = await collection.find_one({"_id": _object_id(recipe_id)})
    except STORE_ERRORS as e:
        raise BadRequest(str(e))

    if not recipe:
        raise NotFound()

    return to_recipe_out(recipe)


async def create_recipe_handler(recipe: RecipeIn, collection) -> RecipeDocument:
    """
    Insert a new recipe. The response keeps the native _id field.
    """
    recipe_dict = recipe.dict(exclude_unset=True)
    recipe_dict.setdefault("ingredients", [])
    recipe_dict.setdefault("instructions", [])
    recipe_dict["ratings"] = []

    try:
        result = await collection.insert_one(recipe_dict)
    except PyMongoError as e:
        raise BadRequest(str(e))

    recipe_dict["_id"] = result.inserted_id
    logger.info(f"Recipe created: {result.inserted_id}")

    return to_recipe_document(recipe_dict)


async def update_recipe_handler(recipe_id: str, payload: RecipeUpdate, collection) -> RecipeDocument:
    """
    $set only the fields present in the body, return the updated document
    """
    changes = payload.dict(exclude_unset=True)

    try:
        oid = _object_id(recipe_id)
        if changes:
            updated = await collection.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        else:
            updated = await collection.find_one({"_id": oid})
    except STORE_ERRORS as e:
        raise BadRequest(str(e))

    if not updated:
        raise NotFound()

    return to_recipe_document(updated)


async def delete_recipe_handler(recipe_id: str, collection) -> dict:
    try:
        deleted = await collection.find_one_and_delete({"_id": _object_id(recipe_id)})
    except STORE_ERRORS as e:
        raise BadRequest(str(e))

    if not deleted:
        raise NotFound()

    logger.info(f"Recipe deleted: {recipe_id}")
    return {"message": "Recipe deleted successfully"}


async def rate_recipe_handler(recipe_id: str, payload: Optional[RatingIn], collection) -> dict:
    """
    Append {rating, comment} to the recipe's ratings.

    Read-modify-write: two concurrent calls on the same recipe can both read
    the old sequence, and the later write drops the earlier entry.
    """
    if payload is None or not payload.rating or not payload.comment:
        raise BadRequest("Rating and comment are required")

    try:
        oid = _object_id(recipe_id)
        recipe = await collection.find_one({"_id": oid})
        if not recipe:
            raise NotFound()

        entry = Rating(rating=payload.rating, comment=payload.comment)
        ratings = recipe.get("ratings") or []
        ratings.append(entry.dict())

        await collection.update_one({"_id": oid}, {"$set": {"ratings": ratings}})
    except (PyMongoError, InvalidId, ValidationError) as e:
        raise InternalError(str(e))

    return {"message": "Rating and comment added successfully"}
