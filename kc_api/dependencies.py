import enum
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from fastapi import Depends
from fastapi.security import APIKeyHeader
from jose import JWTError
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from kc_api.exceptions import (
    MissingHeader,
    MalformedHeader,
    InvalidSignatureOrFormat,
    NoRoleClaim,
    InsufficientRole,
)
from kc_api.models.enums import Role
from kc_api.models.user_model import User
from kc_api.utils.auth import TokenSigner, get_token_signer

logger = logging.getLogger(__name__)

# Read the raw header so a missing header and a non-Bearer scheme fail differently.
authorization_header = APIKeyHeader(name="Authorization", scheme_name="Bearer", auto_error=False)


class TokenClaims(BaseModel):
    sub: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    iat: Optional[int] = None

    class Config:
        extra = "allow"


def verify_bearer(authorization: Optional[str], signer: TokenSigner) -> TokenClaims:
    if not authorization:
        raise MissingHeader()
    if not authorization.startswith("Bearer "):
        raise MalformedHeader()

    token = authorization[len("Bearer "):]
    try:
        payload = signer.verify(token)
    except JWTError:
        raise InvalidSignatureOrFormat()

    # The subject is not looked up: a deleted account's token keeps working.
    try:
        return TokenClaims.model_validate(payload)
    except ValidationError:
        raise InvalidSignatureOrFormat()


def token_role(claims: TokenClaims) -> Optional[str]:
    return claims.role


def stored_role(db: Session, account_id: str) -> Optional[str]:
    account = db.query(User).filter(User.id == account_id).first()
    return account.role if account else None


class PolicyKind(str, enum.Enum):
    NONE = "none"
    AUTHENTICATED = "anyAuthenticated"
    ROLE = "role"


@dataclass(frozen=True)
class AccessPolicy:
    kind: PolicyKind
    roles: Tuple[str, ...] = ()


PUBLIC = AccessPolicy(PolicyKind.NONE)
AUTHENTICATED = AccessPolicy(PolicyKind.AUTHENTICATED)


def has_role(*roles) -> AccessPolicy:
    return AccessPolicy(PolicyKind.ROLE, tuple(Role(role).value for role in roles))


def check_role(required_roles, claims: TokenClaims) -> None:
    """
    Per-request role predicate.

    Only the token's role claim is consulted. The stored role of the account
    is never read here, so a token keeps the role it was issued with.
    """
    if not required_roles:
        return

    role = token_role(claims)
    if not role:
        raise NoRoleClaim()
    if role not in required_roles:
        raise InsufficientRole(required_roles, role)


class RoleGuard:
    """
    Dependency attached to every route with that route's declared policy.

    ``PUBLIC`` routes never read the Authorization header. Every other policy
    verifies the bearer token first and then applies ``check_role``.
    """

    def __init__(self, policy: AccessPolicy):
        self.policy = policy

    def __call__(self, authorization: Optional[str] = Depends(authorization_header),
                 signer: TokenSigner = Depends(get_token_signer)) -> Optional[TokenClaims]:
        if self.policy.kind == PolicyKind.NONE:
            return None

        claims = verify_bearer(authorization, signer)
        check_role(self.policy.roles, claims)
        return claims

    def __repr__(self):
        return f"RoleGuard({self.policy.kind.value}, {self.policy.roles})"
