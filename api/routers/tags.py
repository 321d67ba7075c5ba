"""Tags API router."""

from fastapi import APIRouter

from api.services.queries import QueryService
from api.models.schemas import TagOut

router = APIRouter()


@router.get("", response_model=list[TagOut])
async def list_tags():
    """Get all tags for the tag selector."""
    query_service = QueryService()
    return query_service.list_tags()
