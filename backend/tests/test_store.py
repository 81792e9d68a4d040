from sqlmodel import Session

from foodcost.schemas.costing import Recipe, RecipeIngredient
from foodcost.storage.models import StoredCollection
from foodcost.storage.repositories import RecipeRepository, build_workspace
from foodcost.storage.store import MemoryCollectionStore, SqlCollectionStore


def test_sql_store_round_trip(engine):
    store = SqlCollectionStore(lambda: Session(engine))
    assert store.load("foodcost_recipes") == []
    store.save("foodcost_recipes", [{"id": "a", "name": "Soup"}])
    store.save("foodcost_recipes", [{"id": "a", "name": "Soup"}, {"id": "b", "name": "Stew"}])
    assert [r["id"] for r in store.load("foodcost_recipes")] == ["a", "b"]
    with Session(engine) as session:
        assert session.get(StoredCollection, "foodcost_recipes") is not None


def test_sql_backed_workspace_reloads(engine):
    store = SqlCollectionStore(lambda: Session(engine))
    ws = build_workspace(store, seed=True)
    recipe = ws.recipes.save(
        Recipe(name="Bread", ingredients=[RecipeIngredient(ingredient_id="1", quantity=500, unit="g")])
    )
    again = build_workspace(store, seed=True)
    assert len(again.catalog) == len(ws.catalog)
    assert again.recipes.get(recipe.id) == recipe


def test_recipe_save_is_whole_entity_replace():
    store = MemoryCollectionStore()
    repo = RecipeRepository(store)
    recipe = repo.save(Recipe(name="Soup", description="old"))
    repo.save(recipe.model_copy(update={"description": "new", "servings": 6}))
    reloaded = RecipeRepository(store)
    assert len(reloaded.list()) == 1
    assert reloaded.get(recipe.id).description == "new"
    assert reloaded.get(recipe.id).servings == 6


def test_memory_store_isolates_callers():
    store = MemoryCollectionStore()
    items = [{"id": "x"}]
    store.save("k", items)
    items.append({"id": "y"})
    loaded = store.load("k")
    loaded.append({"id": "z"})
    assert store.load("k") == [{"id": "x"}]
