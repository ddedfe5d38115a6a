"""Primary API router definition."""

from fastapi import APIRouter

from . import students, transactions

api_router = APIRouter()

api_router.include_router(transactions.router)
api_router.include_router(students.router)


@api_router.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    """Basic health probe endpoint."""
    return {"status": "ok"}
