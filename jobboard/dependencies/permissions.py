import enum
from typing import Dict, FrozenSet

from fastapi import Depends, HTTPException, status

from ..models.user import User, UserRole
from .security import get_current_user


class Action(str, enum.Enum):
    MANAGE_RESUMES = "manage_resumes"
    USE_AI = "use_ai"
    APPLY_TO_JOBS = "apply_to_jobs"
    MANAGE_JOBS = "manage_jobs"
    REVIEW_APPLICATIONS = "review_applications"
    MANAGE_SKILLS = "manage_skills"


PERMISSIONS: Dict[Action, FrozenSet[UserRole]] = {
    Action.MANAGE_RESUMES: frozenset({UserRole.APPLICANT, UserRole.ADMIN}),
    Action.USE_AI: frozenset({UserRole.APPLICANT, UserRole.ADMIN}),
    Action.APPLY_TO_JOBS: frozenset({UserRole.APPLICANT}),
    Action.MANAGE_JOBS: frozenset({UserRole.EMPLOYER, UserRole.ADMIN}),
    Action.REVIEW_APPLICATIONS: frozenset({UserRole.EMPLOYER, UserRole.ADMIN}),
    Action.MANAGE_SKILLS: frozenset({UserRole.ADMIN}),
}


def can(user: User, action: Action) -> bool:
    return user.role in PERMISSIONS[action]


def is_admin(user: User) -> bool:
    return user.role == UserRole.ADMIN


def require_permission(action: Action):
    """Dependency factory: the acting user, or 403 when their role lacks ``action``."""

    async def dependency(current_user: User = Depends(get_current_user)) -> User:
        if not can(current_user, action):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied. Insufficient permissions.",
            )
        return current_user

    return dependency
