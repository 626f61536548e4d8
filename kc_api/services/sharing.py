import logging
from typing import Optional

from sqlalchemy.orm import Session

from kc_api.database import next_sequential_id
from kc_api.dependencies import TokenClaims
from kc_api.models.file_model import FileRecord
from kc_api.models.sharing_model import SharingRecord
from kc_api.schemas.sharing_schema import CreateSharingRequest, UpdateSharingRequest

logger = logging.getLogger(__name__)


def create_share(db: Session, request: CreateSharingRequest, owner: TokenClaims) -> SharingRecord:
    share_id = next_sequential_id(db, SharingRecord)

    share = SharingRecord(
        id=share_id,
        owner_id=owner.sub,
        file_id=request.file_id,
        public=request.public,
        # sequential, derived from the record count like the id itself
        public_token=f"share-{share_id}" if request.public else None,
        expires_at=request.expires_at,
    )
    db.add(share)
    db.commit()
    db.refresh(share)
    logger.info("Share %s created for file %s by account %s", share.id, share.file_id, owner.sub)
    return share


def update_share(db: Session, share_id: str, request: UpdateSharingRequest) -> Optional[SharingRecord]:
    share = db.query(SharingRecord).filter(SharingRecord.id == share_id).first()
    if share is None:
        return None

    changes = request.model_dump(exclude_unset=True)
    if "public" in changes:
        share.public = changes["public"]
    if "expires_at" in changes:
        share.expires_at = changes["expires_at"]

    db.commit()
    db.refresh(share)
    return share


def resolve_by_public_token(db: Session, token: str) -> Optional[FileRecord]:
    """
    Unauthenticated lookup of the file behind a public share token.

    ``expires_at`` and the share's current ``public`` flag are not consulted.
    """
    share = db.query(SharingRecord).filter(SharingRecord.public_token == token).first()
    if share is None:
        return None
    return db.query(FileRecord).filter(FileRecord.id == share.file_id).first()
