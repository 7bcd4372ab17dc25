# API endpoints
from . import auth, notices, clubs, departments, users, club_applications

__all__ = ["auth", "notices", "clubs", "departments", "users", "club_applications"]
