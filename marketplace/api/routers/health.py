# marketplace/api/routers/health.py
from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request):
    backend = "memory" if request.app.state.memory_storage is not None else "database"
    return {"status": "ok", "storage": backend}
