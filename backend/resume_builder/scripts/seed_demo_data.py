"""
Demo users and a sample resume for local development.

Runs at startup when SEED_DEMO_DATA=true, or directly:
    python -m resume_builder.scripts.seed_demo_data
"""
import logging
from resume_builder.services.auth_service import AuthService
from resume_builder.services.resume_service import ResumeService
from resume_builder.stores.credential_store import CredentialStore

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {
        "full_name": "John Doe",
        "email": "test@example.com",
        "password": "password123",
        "language": "en",
    },
    {
        "full_name": "Jane Smith",
        "email": "jane@example.com",
        "mobile": "+1234567890",
        "password": "password123",
        "language": "en",
    },
    {
        "full_name": "Demo User",
        "mobile": "+9876543210",
        "password": "demo123",
        "language": "en",
    },
]

SAMPLE_RESUME = {
    "personalInfo": {
        "fullName": "John Doe",
        "email": "test@example.com",
        "phone": "+1-555-0123",
        "address": "123 Main Street, New York, NY 10001",
    },
    "summary": "Experienced software developer with 5+ years of expertise in full-stack web development.",
    "education": [
        {
            "institution": "University of Technology",
            "degree": "Bachelor of Science",
            "field": "Computer Science",
            "startYear": "2016",
            "endYear": "2020",
            "gpa": "3.8",
        }
    ],
    "experience": [
        {
            "company": "Tech Solutions Inc.",
            "position": "Senior Software Developer",
            "startDate": "2021-01-15",
            "endDate": "2024-12-31",
            "description": "Led development of web applications using React, Node.js, and SQLite.",
        }
    ],
    "skills": ["JavaScript", "React", "Node.js", "SQLite", "Express.js", "TypeScript"],
}


def seed_demo_data(
    auth_service: AuthService,
    credential_store: CredentialStore,
    resume_service: ResumeService,
) -> bool:
    """Creates the demo users once; returns False when they already exist"""
    if credential_store.find_by_identifier(DEMO_USERS[0]["email"]):
        logger.info("Demo data already exists, skipping seed")
        return False

    created = []
    for demo in DEMO_USERS:
        user = credential_store.create_user(
            full_name=demo["full_name"],
            password_hash=auth_service.hash_password(demo["password"]),
            language=demo["language"],
            email=demo.get("email"),
            mobile=demo.get("mobile"),
        )
        created.append(user)
        logger.info(f"Created demo user: {user.full_name} ({user.email or user.mobile})")

    resume_service.save(created[0].id, SAMPLE_RESUME)
    logger.info(f"Created sample resume for {created[0].full_name}")
    return True


if __name__ == "__main__":
    from resume_builder.core.config import get_settings
    from resume_builder.core.database import Database
    from resume_builder.stores.resume_store import ResumeStore

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    settings = get_settings()
    database = Database(settings.DATABASE_URL)
    database.create_all()
    store = CredentialStore(database)
    seed_demo_data(AuthService(store, settings), store, ResumeService(ResumeStore(database)))
