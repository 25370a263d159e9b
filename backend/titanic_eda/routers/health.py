from fastapi import APIRouter

from ..services import session as session_service

router = APIRouter(tags=["health"])

@router.get("", summary="Liveness probe")
def health():
    return {"status": "ok", "dataset_loaded": session_service.session.loaded}
