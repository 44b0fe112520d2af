from fastapi import APIRouter
from pathforge.routers import auth, jobs

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(jobs.router, tags=["Jobs"])
