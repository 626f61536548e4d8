from datetime import datetime, timezone

from jose import jwt

from kc_api.config import get_settings


class TokenSigner:
    """
    Signs and verifies bearer tokens with one symmetric key.

    No ``exp``, ``aud`` or ``iss`` claim is written, and ``verify`` accepts any
    token carrying a valid signature. There is no revocation list.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def sign(self, claims: dict) -> str:
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict:
        # Raises jose.JWTError on a bad signature or an undecodable token.
        return jwt.decode(token, self.secret_key, algorithms=[self.algorithm], options={"verify_aud": False})


def get_token_signer() -> TokenSigner:
    settings = get_settings()
    return TokenSigner(settings.secret_key, settings.algorithm)


def issue_token(signer: TokenSigner, account_id: str, email: str, role: str) -> str:
    claims = {
        "sub": str(account_id),
        "email": email,
        "role": role,
        "iat": int(datetime.now(timezone.utc).timestamp()),
    }
    return signer.sign(claims)
