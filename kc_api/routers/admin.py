import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from kc_api.database import get_db
from kc_api.dependencies import RoleGuard, AUTHENTICATED, has_role, TokenClaims
from kc_api.exceptions import NotFound
from kc_api.models.enums import Role
from kc_api.models.user_model import User
from kc_api.schemas.user_schema import UserListResponse, UserResponse, UpdateRoleRequest
from kc_api.services import escalation

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/users", response_model=UserListResponse, summary="Listing every account with its role",
            description="Unbounded; exposes every email. Requires an admin role claim in the token.",
            responses={
                401: {"description": "Not authenticated"},
                403: {"description": "Admin role claim required"},
            })
def list_accounts(_: TokenClaims = Depends(RoleGuard(has_role(Role.ADMIN))), db: Session = Depends(get_db)):
    users = db.query(User).all()
    return {"users": users, "count": len(users)}


@router.put("/users/{user_id}/role", response_model=UserResponse, summary="Changing an account's role",
            description="""
                Sets the stored role. Tokens already issued to that account keep the role
                they were signed with.
            """,
            responses={
                400: {"description": "Invalid role"},
                403: {"description": "Admin role claim required"},
                404: {"description": "Not Found"},
            })
def update_role(user_id: str, request: UpdateRoleRequest,
                claims: TokenClaims = Depends(RoleGuard(has_role(Role.ADMIN))),
                db: Session = Depends(get_db)):
    user = escalation.set_role(db, user_id, request.role, claims)
    if not user:
        raise NotFound()
    return user


@router.put("/users/{user_id}/role/escalate", response_model=UserResponse, summary="Promoting an account to moderator",
            description="Open to moderators and admins, with no limit on how far promotions chain.",
            responses={
                403: {"description": "Moderator or admin role claim required"},
                404: {"description": "Not Found"},
            })
def escalate_role(user_id: str,
                  claims: TokenClaims = Depends(RoleGuard(has_role(Role.MODERATOR, Role.ADMIN))),
                  db: Session = Depends(get_db)):
    user = escalation.escalate_to_moderator(db, user_id, claims)
    if not user:
        raise NotFound()
    return user


@router.delete("/users/{user_id}", summary="Deleting an account",
               description="Only authentication is required here, unlike the other account administration routes.",
               responses={404: {"description": "Not Found"}},
               status_code=status.HTTP_204_NO_CONTENT)
def delete_account(user_id: str, claims: TokenClaims = Depends(RoleGuard(AUTHENTICATED)), db: Session = Depends(get_db)):
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound()

    db.delete(user)
    db.commit()
    logger.info("Account %s deleted by account %s (token role %s)", user_id, claims.sub, claims.role)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/audit-logs", summary="Listing audit records",
            description="No audit trail is kept, so the list is always empty.",
            responses={403: {"description": "Admin role claim required"}})
def audit_logs(_: TokenClaims = Depends(RoleGuard(has_role(Role.ADMIN)))):
    return []


@router.get("/crash-test", summary="Raising an unhandled error",
            description="Used to check that internal errors reach the client only as a generic message.")
def crash_test(_: TokenClaims = Depends(RoleGuard(AUTHENTICATED))):
    raise RuntimeError("Intentional crash test error")
