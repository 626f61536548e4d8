import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from starlette.responses import FileResponse

from kc_api.database import get_db
from kc_api.dependencies import RoleGuard, PUBLIC, AUTHENTICATED, TokenClaims
from kc_api.exceptions import NotFound
from kc_api.models.sharing_model import SharingRecord
from kc_api.schemas.sharing_schema import CreateSharingRequest, UpdateSharingRequest, SharingResponse
from kc_api.schemas.user_schema import DeletedResponse
from kc_api.services import sharing, file_storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/public/{token}", summary="Downloading a publicly shared file",
            description="""
                The only unauthenticated read. The share's expiry date is not checked.
            """,
            responses={404: {"description": "Not Found"}})
def public_download(token: str, _: None = Depends(RoleGuard(PUBLIC)), db: Session = Depends(get_db)):
    record = sharing.resolve_by_public_token(db, token)
    if not record or not file_storage.exists(record.storage_path):
        raise NotFound()

    return FileResponse(
        path=record.storage_path,
        filename=record.filename,
        media_type=record.mimetype or "application/octet-stream",
    )


@router.post("", response_model=SharingResponse, summary="Sharing a file",
             description="Public shares get a sequential lookup token of the form share-<n>.",
             status_code=status.HTTP_201_CREATED)
def create_share(request: CreateSharingRequest,
                 claims: TokenClaims = Depends(RoleGuard(AUTHENTICATED)),
                 db: Session = Depends(get_db)):
    return sharing.create_share(db, request, claims)


@router.get("", response_model=List[SharingResponse], summary="Listing every share")
def list_shares(_: TokenClaims = Depends(RoleGuard(AUTHENTICATED)), db: Session = Depends(get_db)):
    return db.query(SharingRecord).all()


@router.get("/{share_id}", response_model=SharingResponse, responses={404: {"description": "Not Found"}})
def get_share(share_id: str, _: TokenClaims = Depends(RoleGuard(AUTHENTICATED)), db: Session = Depends(get_db)):
    share = db.query(SharingRecord).filter(SharingRecord.id == share_id).first()
    if not share:
        raise NotFound()
    return share


@router.put("/{share_id}", response_model=SharingResponse, responses={404: {"description": "Not Found"}})
def update_share(share_id: str, request: UpdateSharingRequest,
                 _: TokenClaims = Depends(RoleGuard(AUTHENTICATED)),
                 db: Session = Depends(get_db)):
    share = sharing.update_share(db, share_id, request)
    if not share:
        raise NotFound()
    return share


@router.delete("/{share_id}", response_model=DeletedResponse, responses={404: {"description": "Not Found"}})
def delete_share(share_id: str, claims: TokenClaims = Depends(RoleGuard(AUTHENTICATED)), db: Session = Depends(get_db)):
    share = db.query(SharingRecord).filter(SharingRecord.id == share_id).first()
    if not share:
        raise NotFound()

    db.delete(share)
    db.commit()
    logger.info("Share %s deleted by account %s", share_id, claims.sub)
    return {"deleted": share_id}
