import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from foodcost import main
from foodcost.schemas.costing import Ingredient, Recipe, RecipeIngredient, Unit
from foodcost.storage import db as db_module
from foodcost.storage.repositories import build_workspace, get_workspace
from foodcost.storage.store import MemoryCollectionStore


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="store")
def store_fixture():
    return MemoryCollectionStore()


@pytest.fixture(name="workspace")
def workspace_fixture(store):
    return build_workspace(store)


@pytest.fixture(name="flour")
def flour_fixture(workspace):
    return workspace.catalog.add(
        Ingredient(
            name="All-Purpose Flour",
            category="Flours",
            purchase_unit=Unit.KILOGRAM,
            purchase_cost=18000,
            purchase_quantity=1,
        )
    )


@pytest.fixture(name="milk")
def milk_fixture(workspace):
    return workspace.catalog.add(
        Ingredient(
            name="Fresh Milk",
            category="Dairy",
            purchase_unit=Unit.LITER,
            purchase_cost=28000,
            purchase_quantity=1,
        )
    )


@pytest.fixture(name="pancake")
def pancake_fixture(flour, milk):
    return Recipe(
        name="Pancakes",
        servings=2,
        ingredients=[
            RecipeIngredient(ingredient_id=flour.id, quantity=250, unit="g"),
            RecipeIngredient(ingredient_id=milk.id, quantity=300, unit="ml"),
        ],
        labor_cost=5000,
        overhead_percentage=10,
        target_food_cost_percentage=30,
    )


@pytest.fixture(name="client")
def client_fixture(monkeypatch, engine, workspace):
    def _get_session_override():
        return Session(engine)

    monkeypatch.setattr(db_module, "engine", engine)
    monkeypatch.setattr(db_module, "get_session", _get_session_override)
    monkeypatch.setattr(main, "configure_dspy", lambda: None)
    main.app.dependency_overrides[get_workspace] = lambda: workspace

    client = TestClient(main.app)
    yield client
    main.app.dependency_overrides.clear()
