"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from tripmaster.api.routes import auth, pois, itineraries, budget, memos, amap

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(pois.router)
api_router.include_router(itineraries.router)
api_router.include_router(budget.router)
api_router.include_router(memos.router)
api_router.include_router(amap.router)
