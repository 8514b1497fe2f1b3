from pydantic import BaseModel, Field, validator
from typing import List, Optional
from bson import ObjectId

from models.rating_model import Number, Rating


class Nutrition(BaseModel):
    calories: Optional[Number] = None
    protein: Optional[str] = None
    fat: Optional[str] = None
    carbohydrates: Optional[str] = None
    fiber: Optional[str] = None
    sugar: Optional[str] = None

    class Config:
        coerce_numbers_to_str = True


class RecipeIn(BaseModel):
    """Fields accepted when creating a recipe - all optional, ratings start empty"""
    name: Optional[str] = None
    description: Optional[str] = None
    ingredients: Optional[List[str]] = None
    instructions: Optional[List[str]] = None
    image: Optional[str] = None
    prepTime: Optional[Number] = None
    nutrition: Optional[Nutrition] = None

    class Config:
        coerce_numbers_to_str = True
        json_schema_extra = {
            "example": {
                "name": "Tomato Soup",
                "description": "A quick weeknight soup.",
                "ingredients": ["tomatoes", "onion", "stock"],
                "instructions": ["Chop", "Simmer", "Blend"],
                "image": "https://example.com/soup.jpg",
                "prepTime": 20,
                "nutrition": {"calories": 180, "protein": "4g", "fat": "6g"},
            }
        }


class RecipeUpdate(RecipeIn):
    """Partial update - only the fields present in the body are applied"""
    ratings: Optional[List[Rating]] = None


class RecipeDocument(RecipeUpdate):
    """Recipe as stored, keeping the native _id field (create/update responses)"""
    id: str = Field(alias="_id")

    @validator("id", pre=True, always=True)
    def convert_objectid(cls, v):
        if isinstance(v, ObjectId):
            return str(v)
        return v

    class Config:
        validate_by_name = True
        coerce_numbers_to_str = True


class RecipeOut(RecipeUpdate):
    """Recipe as read by clients - _id renamed to id"""
    id: str

    @validator("id", pre=True, always=True)
    def convert_objectid(cls, v):
        if isinstance(v, ObjectId):
            return str(v)
        return v


def to_recipe_out(doc: dict) -> RecipeOut:
    """Rename the store-native _id to id, dropping _id from the output"""
    data = {k: v for k, v in doc.items() if k not in ("_id", "id")}
    return RecipeOut(id=doc["_id"], **data)


def to_recipe_document(doc: dict) -> RecipeDocument:
    return RecipeDocument(**doc)
