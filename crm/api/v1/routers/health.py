from fastapi import APIRouter
from crm.utils.decorators import log_request

router = APIRouter()

@router.get("/health")
@log_request
async def health_check():
    """Checks the health of the application."""
    return {"status": "ok"}
