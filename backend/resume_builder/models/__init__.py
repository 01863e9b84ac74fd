from resume_builder.models.user import User
from resume_builder.models.resume import Resume

__all__ = [
    "User",
    "Resume",
]
