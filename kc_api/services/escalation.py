import logging
from typing import Optional

from sqlalchemy.orm import Session

from kc_api.dependencies import TokenClaims, token_role, stored_role
from kc_api.exceptions import ValidationFailure
from kc_api.models.enums import Role
from kc_api.models.user_model import User

logger = logging.getLogger(__name__)


def parse_role(value: str) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationFailure(
            f"Invalid role: {value}. Expected one of: " + ", ".join(r.value for r in Role)
        )


def set_role(db: Session, target_id: str, role: str, caller: TokenClaims) -> Optional[User]:
    new_role = parse_role(role)

    target = db.query(User).filter(User.id == target_id).first()
    if target is None:
        return None

    target.role = new_role.value
    db.commit()
    db.refresh(target)
    logger.info("Account %s role set to %s by account %s", target.id, new_role.value, caller.sub)
    return target


def escalate_to_moderator(db: Session, target_id: str, caller: TokenClaims) -> Optional[User]:
    """
    Sets the target's stored role to moderator, whatever it was before.

    The caller only needs a moderator or admin role claim in their token.
    There is no depth or rate limit, so every newly promoted account can
    promote the next one straight away.
    """
    target = db.query(User).filter(User.id == target_id).first()
    if target is None:
        return None

    previous = target.role
    target.role = Role.MODERATOR.value
    db.commit()
    db.refresh(target)
    logger.info(
        "Account %s escalated from %s to moderator by account %s (token role %s, stored role %s)",
        target.id, previous, caller.sub, token_role(caller), stored_role(db, caller.sub),
    )
    return target
