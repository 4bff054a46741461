"""
API v1 router aggregation.
"""
from fastapi import APIRouter
from heptareview.api.v1.endpoints import cards, reviews, subjects, stats

api_router = APIRouter()

# Include all endpoint routers
# Note: Each router already defines its own prefix, so we don't add another one here
api_router.include_router(cards.router)
api_router.include_router(reviews.router)
api_router.include_router(subjects.router)
api_router.include_router(stats.router)
