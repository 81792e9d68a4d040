from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from foodcost.api.errors import http_error
from foodcost.errors import FoodCostError
from foodcost.logging import get_logger
from foodcost.schemas.api import BulkImportRequest, BulkImportResponse, IngredientIn
from foodcost.schemas.costing import Ingredient
from foodcost.services.costing.importing import parse_csv_rows, resolve_import_rows
from foodcost.storage.repositories import Workspace, get_workspace
from foodcost.utils.timing import time_span

router = APIRouter()
logger = get_logger(__name__)


def _ingredient_from(body: IngredientIn, ingredient_id: str | None = None) -> Ingredient:
    if body.purchase_cost is None or not body.purchase_quantity:
        raise HTTPException(status_code=400, detail="name, purchaseCost and purchaseQuantity are required")
    fields = dict(
        name=body.name,
        category=body.category or "Others",
        purchase_unit=body.purchase_unit,
        purchase_cost=body.purchase_cost,
        purchase_quantity=body.purchase_quantity,
    )
    if ingredient_id:
        fields["id"] = ingredient_id
    return Ingredient(**fields)


@router.get("/ingredients", response_model=list[Ingredient])
def list_ingredients(search: str | None = None, ws: Workspace = Depends(get_workspace)):
    if search:
        return ws.catalog.search(search)
    return ws.catalog.list()


@router.post("/ingredients", response_model=Ingredient, status_code=201)
def create_ingredient(body: IngredientIn, ws: Workspace = Depends(get_workspace)):
    try:
        return ws.catalog.add(_ingredient_from(body))
    except FoodCostError as e:
        raise http_error(e)


@router.put("/ingredients/{ingredient_id}", response_model=Ingredient)
def update_ingredient(ingredient_id: str, body: IngredientIn, ws: Workspace = Depends(get_workspace)):
    try:
        return ws.catalog.update(_ingredient_from(body, ingredient_id))
    except FoodCostError as e:
        raise http_error(e)


@router.delete("/ingredients/{ingredient_id}")
def delete_ingredient(ingredient_id: str, ws: Workspace = Depends(get_workspace)) -> dict:
    try:
        ws.catalog.delete(ingredient_id)
    except FoodCostError as e:
        raise http_error(e)
    return {"ok": True, "deleted": ingredient_id}


def _import(rows: list[dict], ws: Workspace) -> BulkImportResponse:
    with time_span("ingredients.import", rows=len(rows)):
        resolved, unresolved = resolve_import_rows(rows)
        admitted = ws.catalog.bulk_add(resolved)
    rejected = len(rows) - admitted
    logger.info("ingredients.import.end rows=%s unresolved=%s admitted=%s", len(rows), unresolved, admitted)
    return BulkImportResponse(admitted=admitted, rejected=rejected)


@router.post("/ingredients/bulk", response_model=BulkImportResponse)
def bulk_import(body: BulkImportRequest, ws: Workspace = Depends(get_workspace)):
    return _import(body.rows, ws)


@router.post("/ingredients/import", response_model=BulkImportResponse)
def import_file(file: UploadFile = File(...), ws: Workspace = Depends(get_workspace)):
    """Import a CSV export of the ingredient sheet (Name, Category, Cost, Quantity, Unit)."""
    content = file.file.read()
    try:
        rows = parse_csv_rows(content)
    except (UnicodeDecodeError, ValueError) as e:
        logger.warning("ingredients.import.unreadable filename=%s error=%s", file.filename, e)
        raise HTTPException(status_code=400, detail="Failed to parse file.")
    if not rows:
        raise HTTPException(
            status_code=400,
            detail="No valid ingredients found in file. Please check column headers (Name, Cost, Quantity, Unit).",
        )
    return _import(rows, ws)
