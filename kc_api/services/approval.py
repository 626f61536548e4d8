import logging
from typing import Optional

from sqlalchemy.orm import Session

from kc_api.dependencies import TokenClaims
from kc_api.exceptions import ValidationFailure
from kc_api.models.enums import ApprovalStatus
from kc_api.models.file_model import FileRecord

logger = logging.getLogger(__name__)


def parse_status(value: str) -> ApprovalStatus:
    try:
        return ApprovalStatus(value)
    except ValueError:
        raise ValidationFailure(
            f"Invalid approval status: {value}. Expected one of: "
            + ", ".join(s.value for s in ApprovalStatus)
        )


def set_approval_status(db: Session, file_id: str, status: str, caller: TokenClaims) -> Optional[FileRecord]:
    """
    Moves a file to ``status`` whatever its current status is.

    The caller's role was checked by the route guard against the token only.
    There is no ownership check and no record of the previous decision;
    concurrent moderators simply overwrite each other, last write wins.
    """
    new_status = parse_status(status)

    record = db.query(FileRecord).filter(FileRecord.id == file_id).first()
    if record is None:
        return None

    record.approval_status = new_status.value
    db.commit()
    db.refresh(record)
    logger.info("File %s set to %s by account %s (token role %s)",
                record.id, new_status.value, caller.sub, caller.role)
    return record
