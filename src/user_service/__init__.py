"""In-memory user CRUD service built on FastAPI."""
