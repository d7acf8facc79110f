"""API router configuration."""

from fastapi import APIRouter

from src.api.endpoints import summative_evaluations

# Create main API router
api_router = APIRouter()

# Summative Evaluations - final scenario grading sessions
api_router.include_router(
    summative_evaluations.router,
    prefix="/summative-evaluations",
    tags=["Summative Evaluations"],
    responses={
        400: {"description": "Business rule violation"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Resource not found"},
        422: {"description": "Validation Error"},
    },
)


# Export for main.py
def get_api_router():
    """Get configured API router with all endpoints."""
    return api_router
