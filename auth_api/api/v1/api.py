from fastapi import APIRouter

from auth_api.api.v1.routes_auth import router as auth_router


api_router = APIRouter()

api_router.include_router(auth_router, tags=["auth"])


@api_router.get("/healthz", tags=["health"])
def healthz():
    return {"status": "ok"}
