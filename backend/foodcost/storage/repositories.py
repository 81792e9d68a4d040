from __future__ import annotations

import math
import threading
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from sqlmodel import Session

from foodcost.config import settings
from foodcost.errors import NotFoundError, ReferentialIntegrityError, ValidationError
from foodcost.logging import get_logger
from foodcost.schemas.costing import Ingredient, Recipe, Unit, normalize_category
from foodcost.services.costing.units import cost_per_base_unit
from foodcost.storage import db
from foodcost.storage.models import LLMCallLog
from foodcost.storage.store import CollectionStore, SqlCollectionStore

logger = get_logger(__name__)


class RecipeRepository:
    """
    Recipes keyed by id. Changes reach the store only on explicit save/delete.
    Mutations build a new list, write it to the store, and only then replace the
    in-memory list, so a failed write leaves the repository unchanged.
    """

    def __init__(
        self,
        store: CollectionStore,
        key: Optional[str] = None,
        lock: Optional[threading.RLock] = None,
    ) -> None:
        self._store = store
        self._key = key or settings.recipes_store_key
        self._lock = lock or threading.RLock()
        self._items: list[Recipe] = [Recipe.model_validate(d) for d in store.load(self._key)]

    def _commit(self, items: list[Recipe]) -> None:
        self._store.save(self._key, [r.model_dump(by_alias=True, mode="json") for r in items])
        self._items = items

    def list(self) -> list[Recipe]:
        return list(self._items)

    def get(self, recipe_id: str) -> Optional[Recipe]:
        return next((r for r in self._items if r.id == recipe_id), None)

    def save(self, recipe: Recipe) -> Recipe:
        """Insert, or replace the whole recipe with the same id (last write wins)."""
        with self._lock:
            items = list(self._items)
            for idx, existing in enumerate(items):
                if existing.id == recipe.id:
                    items[idx] = recipe
                    break
            else:
                items.append(recipe)
            self._commit(items)
        logger.info(
            "recipe.saved id=%s name=%s servings=%s lines=%s",
            recipe.id,
            recipe.name,
            recipe.servings,
            len(recipe.ingredients),
        )
        return recipe

    def delete(self, recipe_id: str) -> None:
        with self._lock:
            if self.get(recipe_id) is None:
                raise NotFoundError("recipe", recipe_id)
            self._commit([r for r in self._items if r.id != recipe_id])
        logger.info("recipe.deleted id=%s", recipe_id)


def _validate(ingredient: Ingredient) -> None:
    if not (ingredient.name or "").strip():
        raise ValidationError("Ingredient name is required")
    if ingredient.purchase_cost is None or not math.isfinite(ingredient.purchase_cost):
        raise ValidationError("Purchase cost is required")
    if ingredient.purchase_cost < 0:
        raise ValidationError("Purchase cost must not be negative")
    qty = ingredient.purchase_quantity
    if not qty or not math.isfinite(qty) or qty < 0:
        raise ValidationError("Purchase quantity must be positive")


def _with_derived_cost(ingredient: Ingredient) -> Ingredient:
    return ingredient.model_copy(
        update={
            "name": ingredient.name.strip(),
            "category": normalize_category(ingredient.category),
            "cost_per_base_unit": cost_per_base_unit(
                ingredient.purchase_unit, ingredient.purchase_cost, ingredient.purchase_quantity
            ),
        }
    )


class IngredientCatalog:
    """
    In-memory ingredient collection backed by a CollectionStore.

    cost_per_base_unit is recomputed from the purchase fields on every write.
    `recipes` returns the recipes to check before a delete is allowed. Writes
    hold `lock` from check to commit and replace the in-memory list only after
    the store accepted it.
    """

    def __init__(
        self,
        store: CollectionStore,
        key: Optional[str] = None,
        recipes: Optional[Callable[[], Iterable[Recipe]]] = None,
        lock: Optional[threading.RLock] = None,
    ) -> None:
        self._store = store
        self._key = key or settings.ingredients_store_key
        self._recipes = recipes or (lambda: [])
        self._lock = lock or threading.RLock()
        self._items: list[Ingredient] = [Ingredient.model_validate(d) for d in store.load(self._key)]

    def _commit(self, items: list[Ingredient]) -> None:
        self._store.save(self._key, [i.model_dump(by_alias=True, mode="json") for i in items])
        self._items = items

    def __len__(self) -> int:
        return len(self._items)

    def list(self) -> list[Ingredient]:
        return list(self._items)

    def get(self, ingredient_id: str) -> Optional[Ingredient]:
        return next((i for i in self._items if i.id == ingredient_id), None)

    def find_by_name(self, name: str) -> Optional[Ingredient]:
        wanted = (name or "").lower()
        return next((i for i in self._items if i.name.lower() == wanted), None)

    def search(self, term: str) -> list[Ingredient]:
        t = (term or "").lower()
        return [i for i in self._items if t in i.name.lower() or t in i.category.lower()]

    @staticmethod
    def _admit(ingredient: Ingredient, items: list[Ingredient]) -> Ingredient:
        _validate(ingredient)
        if any(i.id == ingredient.id for i in items):
            raise ValidationError(f"Duplicate ingredient id: {ingredient.id}")
        stored = _with_derived_cost(ingredient)
        items.append(stored)
        return stored

    def add(self, ingredient: Ingredient) -> Ingredient:
        with self._lock:
            items = list(self._items)
            stored = self._admit(ingredient, items)
            self._commit(items)
        logger.info(
            "ingredient.created id=%s name=%s unit=%s cost_per_base_unit=%s",
            stored.id,
            stored.name,
            stored.purchase_unit.value,
            stored.cost_per_base_unit,
        )
        return stored

    def update(self, ingredient: Ingredient) -> Ingredient:
        with self._lock:
            items = list(self._items)
            for idx, existing in enumerate(items):
                if existing.id == ingredient.id:
                    break
            else:
                raise NotFoundError("ingredient", ingredient.id)
            _validate(ingredient)
            stored = _with_derived_cost(ingredient)
            items[idx] = stored
            self._commit(items)
        logger.info(
            "ingredient.updated id=%s name=%s cost_per_base_unit=%s",
            stored.id,
            stored.name,
            stored.cost_per_base_unit,
        )
        return stored

    def delete(self, ingredient_id: str) -> None:
        with self._lock:
            if self.get(ingredient_id) is None:
                raise NotFoundError("ingredient", ingredient_id)
            referencing = [
                r.id for r in self._recipes() if any(line.ingredient_id == ingredient_id for line in r.ingredients)
            ]
            if referencing:
                logger.warning("ingredient.delete_refused id=%s recipes=%s", ingredient_id, referencing)
                raise ReferentialIntegrityError(ingredient_id, referencing)
            self._commit([i for i in self._items if i.id != ingredient_id])
        logger.info("ingredient.deleted id=%s", ingredient_id)

    def bulk_add(self, ingredients: Iterable[Ingredient]) -> int:
        """Add every row that passes add's checks (and has cost > 0); skip the rest. Returns the admitted count."""
        admitted = 0
        skipped = 0
        with self._lock:
            items = list(self._items)
            for ingredient in ingredients:
                if not ingredient.purchase_cost or ingredient.purchase_cost <= 0:
                    skipped += 1
                    continue
                try:
                    self._admit(ingredient, items)
                except ValidationError as e:
                    logger.debug("ingredient.bulk.skip name=%s reason=%s", ingredient.name, e)
                    skipped += 1
                    continue
                admitted += 1
            if admitted:
                self._commit(items)
        logger.info("ingredient.bulk admitted=%s skipped=%s", admitted, skipped)
        return admitted


DEFAULT_INGREDIENTS = (
    ("1", "All-Purpose Flour", "Flours", Unit.KILOGRAM, 18000, 1),
    ("2", "Eggs (Large Tray)", "Dairy", Unit.PIECE, 65000, 30),
    ("3", "Fresh Milk", "Dairy", Unit.LITER, 28000, 1),
    ("4", "Ground Beef", "Meat", Unit.KILOGRAM, 140000, 1),
    ("5", "Olive Oil", "Condiments", Unit.LITER, 125000, 1),
    ("6", "Tomatoes", "Vegetables", Unit.KILOGRAM, 15000, 1),
)


def seed_default_catalog(catalog: IngredientCatalog) -> int:
    """Populate an empty catalog with the starter ingredients."""
    if len(catalog):
        return 0
    return catalog.bulk_add(
        Ingredient(
            id=ingredient_id,
            name=name,
            category=category,
            purchase_unit=unit,
            purchase_cost=cost,
            purchase_quantity=qty,
        )
        for ingredient_id, name, category, unit, cost, qty in DEFAULT_INGREDIENTS
    )


@dataclass
class Workspace:
    """
    The single logical session: one catalog and one recipe collection.
    Both repositories share `lock`; hold it across a check and the write it guards.
    """

    catalog: IngredientCatalog
    recipes: RecipeRepository
    lock: threading.RLock = field(default_factory=threading.RLock)


def build_workspace(store: CollectionStore, seed: bool = False) -> Workspace:
    lock = threading.RLock()
    recipes = RecipeRepository(store, lock=lock)
    catalog = IngredientCatalog(store, recipes=recipes.list, lock=lock)
    if seed:
        seeded = seed_default_catalog(catalog)
        if seeded:
            logger.info("catalog.seeded count=%s", seeded)
    return Workspace(catalog=catalog, recipes=recipes, lock=lock)


_workspace: Optional[Workspace] = None
_workspace_lock = threading.Lock()


def get_workspace() -> Workspace:
    global _workspace
    if _workspace is not None:
        return _workspace
    with _workspace_lock:
        if _workspace is None:
            _workspace = build_workspace(
                SqlCollectionStore(lambda: db.get_session()),
                seed=settings.seed_default_catalog,
            )
    return _workspace


def log_llm_call(
    session: Session,
    prompt_name: str,
    prompt_version: str,
    model: str,
    input_payload: str,
    output_payload: str,
    latency_ms: int,
) -> None:
    session.add(
        LLMCallLog(
            prompt_name=prompt_name,
            prompt_version=prompt_version,
            model=model,
            input_payload=input_payload,
            output_payload=output_payload,
            latency_ms=latency_ms,
        )
    )
    session.commit()
