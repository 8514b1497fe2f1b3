from pydantic import BaseModel
from typing import Any, Optional, Union

Number = Union[int, float]


class Rating(BaseModel):
    """One entry of a recipe's ratings sequence"""
    rating: Optional[Number] = None
    comment: Optional[str] = None

    class Config:
        coerce_numbers_to_str = True


class RatingIn(BaseModel):
    """Body of POST /recipes/{id}/rate - values are checked by the handler"""
    rating: Optional[Any] = None
    comment: Optional[Any] = None
