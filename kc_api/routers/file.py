import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, UploadFile, File, Form, status
from sqlalchemy.orm import Session
from starlette.responses import FileResponse

from kc_api.database import get_db, next_sequential_id
from kc_api.dependencies import RoleGuard, AUTHENTICATED, has_role, TokenClaims
from kc_api.exceptions import NotFound
from kc_api.models.enums import ApprovalStatus, Role
from kc_api.models.file_model import FileRecord
from kc_api.schemas.file_schema import FileRecordResponse, ApproveFileRequest
from kc_api.schemas.user_schema import DeletedResponse
from kc_api.services import approval, file_storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=FileRecordResponse, summary="Uploading a file",
             description="""
                Multipart upload. The client filename is used verbatim as the storage key and
                the client content type is stored without inspecting the bytes. The caller
                becomes the recorded owner. New files start as pending.
             """,
             responses={401: {"description": "Not authenticated"}},
             status_code=status.HTTP_201_CREATED)
async def upload_file(file: UploadFile = File(...),
                      description: Optional[str] = Form(None),
                      claims: TokenClaims = Depends(RoleGuard(AUTHENTICATED)),
                      storage_dir: str = Depends(file_storage.get_storage_dir),
                      db: Session = Depends(get_db)):
    data = await file.read()

    record = FileRecord(
        id=next_sequential_id(db, FileRecord),
        owner_id=claims.sub,
        filename=file.filename,
        mimetype=file.content_type,
        storage_path=file_storage.storage_path(storage_dir, file.filename),
        size=len(data),
        description=description,
        approval_status=ApprovalStatus.PENDING.value,
        uploaded_at=datetime.now(timezone.utc),
    )
    # Insert the row first so an id collision fails before the bytes on disk change.
    db.add(record)
    db.flush()
    file_storage.save_upload(record.storage_path, data)
    db.commit()
    db.refresh(record)
    return record


@router.get("", response_model=List[FileRecordResponse], summary="Listing every file",
            description="Returns all file records, whoever uploaded them, without paging.")
def list_files(_: TokenClaims = Depends(RoleGuard(AUTHENTICATED)), db: Session = Depends(get_db)):
    return db.query(FileRecord).all()


@router.get("/{file_id}", response_model=FileRecordResponse, summary="Displaying a file record",
            responses={404: {"description": "Not Found"}})
def get_file(file_id: str, _: TokenClaims = Depends(RoleGuard(AUTHENTICATED)), db: Session = Depends(get_db)):
    record = db.query(FileRecord).filter(FileRecord.id == file_id).first()
    if not record:
        raise NotFound()
    return record


@router.get("/{file_id}/download", summary="Downloading a file",
            description="Streams the stored bytes with the content type the uploader declared.",
            responses={
                404: {"description": "Not Found"},
                200: {"description": "File content", "content": {"application/octet-stream": {}}},
            })
def download_file(file_id: str, _: TokenClaims = Depends(RoleGuard(AUTHENTICATED)), db: Session = Depends(get_db)):
    record = db.query(FileRecord).filter(FileRecord.id == file_id).first()
    if not record or not file_storage.exists(record.storage_path):
        raise NotFound()

    return FileResponse(
        path=record.storage_path,
        filename=record.filename,
        media_type=record.mimetype or "application/octet-stream",
    )


@router.delete("/{file_id}", response_model=DeletedResponse, summary="Deleting a file",
               description="Removes the record and its stored bytes. Any authenticated caller may delete any file.",
               responses={404: {"description": "Not Found"}})
def delete_file(file_id: str, claims: TokenClaims = Depends(RoleGuard(AUTHENTICATED)), db: Session = Depends(get_db)):
    record = db.query(FileRecord).filter(FileRecord.id == file_id).first()
    if not record:
        raise NotFound()

    file_storage.remove_stored(record.storage_path)
    db.delete(record)
    db.commit()
    logger.info("File %s (owner %s) deleted by account %s", file_id, record.owner_id, claims.sub)
    return {"deleted": file_id}


@router.put("/{file_id}/approve", response_model=FileRecordResponse, summary="Approving or rejecting a file",
            description="""
                Sets the approval status of any file. Requires a moderator or admin role claim
                in the token. The current status is not checked, the last call wins.
            """,
            responses={
                400: {"description": "Invalid approval status"},
                403: {"description": "Moderator or admin role claim required"},
                404: {"description": "Not Found"},
            })
def approve_file(file_id: str, request: ApproveFileRequest,
                 claims: TokenClaims = Depends(RoleGuard(has_role(Role.ADMIN, Role.MODERATOR))),
                 db: Session = Depends(get_db)):
    record = approval.set_approval_status(db, file_id, request.status, claims)
    if not record:
        raise NotFound()
    return record
