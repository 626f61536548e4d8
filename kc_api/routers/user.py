from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kc_api.database import get_db, next_sequential_id
from kc_api.dependencies import RoleGuard, AUTHENTICATED, has_role, TokenClaims
from kc_api.exceptions import NotFound
from kc_api.models.enums import Role
from kc_api.models.user_model import User
from kc_api.schemas.user_schema import CreateUserRequest, UpdateUserRequest, UserResponse, DeletedResponse
from kc_api.services.escalation import parse_role

router = APIRouter()


@router.post("", response_model=UserResponse, summary="Creating an account on behalf of someone",
             responses={403: {"description": "Admin role claim required"}},
             status_code=status.HTTP_201_CREATED)
def create_user(user: CreateUserRequest,
                _: TokenClaims = Depends(RoleGuard(has_role(Role.ADMIN))),
                db: Session = Depends(get_db)):
    new_user = User(
        id=next_sequential_id(db, User),
        email=user.email or "",
        username=user.username or "",
        password=user.password or "",
        role=parse_role(user.role).value if user.role else Role.USER.value,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    return new_user


@router.get("", response_model=List[UserResponse], summary="Listing every account",
            responses={403: {"description": "Admin role claim required"}})
def list_users(_: TokenClaims = Depends(RoleGuard(has_role(Role.ADMIN))), db: Session = Depends(get_db)):
    return db.query(User).all()


@router.get("/{user_id}", response_model=UserResponse, summary="Displaying any account",
            responses={404: {"description": "Not Found"}})
def get_user(user_id: str, _: TokenClaims = Depends(RoleGuard(AUTHENTICATED)), db: Session = Depends(get_db)):
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound()
    return user


@router.put("/{user_id}", response_model=UserResponse, summary="Editing any account's profile",
            description="""
                Any authenticated caller can edit any account; the caller is not compared
                with the account being edited.
            """,
            responses={404: {"description": "Not Found"}})
def update_user(user_id: str, update_data: UpdateUserRequest,
                _: TokenClaims = Depends(RoleGuard(AUTHENTICATED)),
                db: Session = Depends(get_db)):
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound()

    if update_data.email is not None:
        user.email = update_data.email
    if update_data.username is not None:
        user.username = update_data.username
    if update_data.password is not None:
        user.password = update_data.password
    user.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(user)
    return user


@router.delete("/{user_id}", response_model=DeletedResponse, summary="Deleting any account",
               responses={404: {"description": "Not Found"}})
def delete_user(user_id: str, _: TokenClaims = Depends(RoleGuard(AUTHENTICATED)), db: Session = Depends(get_db)):
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound()

    db.delete(user)
    db.commit()
    return {"deleted": user_id}
