from resume_builder.factory import create_app

# uvicorn resume_builder.main:app
app = create_app()
