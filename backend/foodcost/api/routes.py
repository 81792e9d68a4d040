from fastapi import APIRouter

from foodcost.api.dashboard import router as dashboard_router
from foodcost.api.health import router as health_router
from foodcost.api.ingredients import router as ingredients_router
from foodcost.api.recipes import router as recipes_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(ingredients_router)
router.include_router(recipes_router)
router.include_router(dashboard_router)
