import logging

from sqlalchemy.orm import Session

from kc_api.database import next_sequential_id
from kc_api.exceptions import MissingField, DuplicateEmail, UnknownEmail, WrongSecret, NotFound
from kc_api.models.enums import Role
from kc_api.models.user_model import User
from kc_api.utils.auth import TokenSigner, issue_token

logger = logging.getLogger(__name__)


def register(db: Session, signer: TokenSigner, email, username, password) -> dict:
    if not email or not username or not password:
        raise MissingField(
            "Missing required registration fields: email, username, and password are all required"
        )

    # Application-level check only; the email column has no unique constraint.
    existing = db.query(User).filter(User.email == email).first()
    if existing:
        logger.warning("Registration rejected, email already registered: %s", email)
        raise DuplicateEmail(email)

    new_user = User(
        id=next_sequential_id(db, User),
        email=email,
        username=username,
        password=password,
        role=Role.USER.value,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    logger.info("Registered account %s (%s)", new_user.id, email)

    return {
        "token": issue_token(signer, new_user.id, new_user.email, new_user.role),
        "user_id": new_user.id,
        "message": "Registration success",
    }


def login(db: Session, signer: TokenSigner, email, password) -> dict:
    if not email or not password:
        raise MissingField("Missing required login fields: email and password are both required")

    db_user = db.query(User).filter(User.email == email).first()

    # The two failures are worded differently on purpose.
    if not db_user:
        logger.warning("Login failed, unknown email: %s", email)
        raise UnknownEmail()
    if db_user.password != password:
        logger.warning("Login failed, wrong password for account %s", db_user.id)
        raise WrongSecret()

    logger.info("Account %s logged in", db_user.id)
    return {
        "token": issue_token(signer, db_user.id, db_user.email, db_user.role),
        "user_id": db_user.id,
        "message": "Login success",
    }


def logout() -> dict:
    # Nothing is revoked server-side; the token stays valid.
    return {"message": "Logged out (client-side only, token still valid)"}


def get_profile(db: Session, account_id: str) -> User:
    user = db.query(User).filter(User.id == account_id).first()
    if user is None:
        raise NotFound()
    return user
