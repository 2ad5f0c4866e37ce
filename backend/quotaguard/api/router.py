from fastapi import APIRouter

from quotaguard.api.system import router as system_router

api_router = APIRouter()
api_router.include_router(system_router)
