"""Error taxonomy for catalog writes, deletes and external collaborators."""


class FoodCostError(Exception):
    """Base class for errors raised by the costing core."""


class ValidationError(FoodCostError):
    """Catalog write rejected; the catalog is left unchanged."""


class NotFoundError(FoodCostError):
    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(f"{kind} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


class ReferentialIntegrityError(FoodCostError):
    """Delete refused because recipes still reference the ingredient."""

    def __init__(self, ingredient_id: str, recipe_ids: list[str]) -> None:
        super().__init__(
            "Cannot delete ingredient because it is used in a recipe."
        )
        self.ingredient_id = ingredient_id
        self.recipe_ids = recipe_ids


class ExternalServiceError(FoodCostError):
    """Generative service failed or returned an unusable payload."""
