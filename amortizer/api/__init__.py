from fastapi import APIRouter
from amortizer.api.amortization import router as amortization_router

api_router = APIRouter()
api_router.include_router(amortization_router, tags=["amortization"])
