"""User API router with CRUD operations over the in-memory repository."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from src.user_service.api.http.deps import get_user_repository
from src.user_service.entities.core.user import (
    User,
    UserNotFoundError,
    UserPayload,
    UserRepository,
)

router = APIRouter(tags=["users"])


@router.get("/users", response_model=list[User])
def list_users(
    repository: UserRepository = Depends(get_user_repository),
) -> list[User] | PlainTextResponse:
    """List all users."""
    users = repository.list_all()
    if not users:
        return PlainTextResponse("No Users", status_code=404)
    return users


@router.get("/user/{user_id:int}", response_model=User)
def get_user(
    user_id: int,
    repository: UserRepository = Depends(get_user_repository),
) -> User:
    """Get a user by ID."""
    user = repository.get(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


@router.post("/user", response_model=User, status_code=201)
def create_user(
    payload: UserPayload,
    repository: UserRepository = Depends(get_user_repository),
) -> User:
    """Create a new user. Any client-supplied id or created_at is ignored."""
    return repository.create(payload)


@router.put("/user", response_model=User)
def update_user(
    payload: UserPayload,
    repository: UserRepository = Depends(get_user_repository),
) -> User:
    """Merge the non-empty fields of the payload into the user it names."""
    return repository.update(payload)


@router.delete("/user/{user_id:int}", response_class=PlainTextResponse)
def delete_user(
    user_id: int,
    repository: UserRepository = Depends(get_user_repository),
) -> str:
    """Delete a user."""
    if not repository.delete(user_id):
        raise UserNotFoundError(user_id)
    return f"Deleted User Id:{user_id}"
