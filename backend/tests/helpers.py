import copy


def signup_form(**overrides):
    data = {
        "fullName": "Jane Smith",
        "email": "jane@example.com",
        "password": "password123",
        "language": "en",
        "termsAccepted": "true",
    }
    data.update(overrides)
    return {key: value for key, value in data.items() if value is not None}


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


SAMPLE_RESUME = {
    "personalInfo": {
        "fullName": "Jane Smith",
        "email": "jane@example.com",
        "phone": "+1-555-0100",
        "address": "1 Main Street",
    },
    "summary": "Backend developer.",
    "education": [
        {
            "institution": "State University",
            "degree": "BSc",
            "field": "Computer Science",
            "startYear": "2014",
            "endYear": "2018",
            "gpa": "3.6",
        },
        {
            "institution": "Tech Institute",
            "degree": "MSc",
            "field": "Data Engineering",
            "startYear": "2018",
            "endYear": "2020",
        },
    ],
    "experience": [
        {
            "company": "Acme",
            "position": "Engineer",
            "startDate": "2020-09-01",
            "endDate": "2023-05-31",
            "description": "Built APIs.",
        }
    ],
    "skills": ["Python", "SQL", "FastAPI"],
}


def sample_resume():
    return copy.deepcopy(SAMPLE_RESUME)
