from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kc_api.database import get_db
from kc_api.dependencies import RoleGuard, PUBLIC, AUTHENTICATED, TokenClaims
from kc_api.schemas.user_schema import RegisterRequest, LoginRequest, AuthResponse, MessageResponse, UserResponse
from kc_api.services import credentials
from kc_api.utils.auth import TokenSigner, get_token_signer

router = APIRouter()


@router.post("/register", response_model=AuthResponse, summary="New account registration",
             description="""
                Creates an account and returns a bearer token for it. The password is stored
                exactly as sent and the email is only checked for duplicates by a lookup.
             """,
             responses={
                 400: {"description": "Missing required registration fields"},
                 409: {"description": "User with email already exists"},
                 201: {"description": "Account created"},
             },
             status_code=status.HTTP_201_CREATED)
def register_user(user: RegisterRequest,
                  _: None = Depends(RoleGuard(PUBLIC)),
                  db: Session = Depends(get_db),
                  signer: TokenSigner = Depends(get_token_signer)):
    return credentials.register(db, signer, user.email, user.username, user.password)


@router.post("/login", response_model=AuthResponse, summary="Account login",
             description="""
                Logs into an account with email and password and returns a bearer token
                carrying the account's current stored role.
             """,
             responses={
                 400: {"description": "Missing required login fields"},
                 401: {"description": "Authentication failed",
                       "content": {
                           "application/json": {
                               "examples": {
                                   "unknown_email": {"value": {"detail": "No user with that email"}},
                                   "wrong_password": {"value": {"detail": "Incorrect password"}},
                               }
                           }
                       }
                       },
             },
             status_code=status.HTTP_201_CREATED)
def login_user(user: LoginRequest,
               _: None = Depends(RoleGuard(PUBLIC)),
               db: Session = Depends(get_db),
               signer: TokenSigner = Depends(get_token_signer)):
    return credentials.login(db, signer, user.email, user.password)


@router.post("/logout", response_model=MessageResponse, summary="Logging out of your account",
             description="""
                Acknowledges a logout. Nothing is revoked on the server, the token keeps working.
             """,
             responses={401: {"description": "Not authenticated"}},
             status_code=status.HTTP_201_CREATED)
def logout(_: TokenClaims = Depends(RoleGuard(AUTHENTICATED))):
    return credentials.logout()


@router.get("/me", response_model=UserResponse, summary="Displaying account information",
            responses={
                401: {"description": "Not authenticated"},
                404: {"description": "Account from the token no longer exists"},
            })
def get_me(claims: TokenClaims = Depends(RoleGuard(AUTHENTICATED)), db: Session = Depends(get_db)):
    return credentials.get_profile(db, claims.sub)
