from fastapi import APIRouter, Depends

from foodcost.services.costing.dashboard import MenuSummary, summarize_menu
from foodcost.storage.repositories import Workspace, get_workspace

router = APIRouter()


@router.get("/dashboard", response_model=MenuSummary)
def dashboard(ws: Workspace = Depends(get_workspace)):
    return summarize_menu(ws.recipes.list(), ws.catalog)
