from fastapi import APIRouter
from app.api.v1.endpoints import auth, notices, clubs, departments, users, club_applications

api_router = APIRouter()


# Simple health check endpoint for load balancers
@api_router.get("/health", tags=["Health"])
async def health_check():
    """Liveness probe"""
    return {"status": "healthy", "service": "campus-noticeboard"}


api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(notices.router, prefix="/notices", tags=["Notices"])
api_router.include_router(clubs.router, prefix="/clubs", tags=["Clubs"])
api_router.include_router(departments.router, prefix="/departments", tags=["Departments"])
api_router.include_router(users.router, prefix="/users", tags=["User Management"])
api_router.include_router(club_applications.router, prefix="/club-applications", tags=["Club Applications"])
