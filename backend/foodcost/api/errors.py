"""Translate costing-core errors into HTTP responses."""

from fastapi import HTTPException

from foodcost.errors import FoodCostError, NotFoundError, ReferentialIntegrityError, ValidationError


def http_error(exc: FoodCostError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, ReferentialIntegrityError):
        return HTTPException(
            status_code=409,
            detail={"message": str(exc), "ingredientId": exc.ingredient_id, "recipeIds": exc.recipe_ids},
        )
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=400, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))
