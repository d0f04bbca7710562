from fastapi import APIRouter

from .companies import router as companies_router
from .customers import router as customers_router
from .documents import router as documents_router
from .jobs import router as jobs_router

api_router = APIRouter()
api_router.include_router(companies_router, tags=["companies"])
api_router.include_router(customers_router, tags=["customers"])
api_router.include_router(documents_router, tags=["documents"])
api_router.include_router(jobs_router, tags=["jobs"])
