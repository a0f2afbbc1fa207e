# routers/notices.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import verify_token
from services.notice_service import NoticeNotFound, generate_notice
from schemas.notice import NoticeRequest, NoticeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notices", tags=["notices"])


@router.post("/generate", response_model=NoticeResponse, summary="Generate a 7-day pay-or-quit notice")
def generate(
     body: NoticeRequest,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     if not body.invoice_id or not body.lease_id:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="Invoice ID and Lease ID are required"
          )
     try:
          return generate_notice(db, body.invoice_id, body.lease_id, send_email=body.send_email)
     except NoticeNotFound as e:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
     except RuntimeError as e:
          logger.error("Notice e-mail failed for invoice %s: %s", body.invoice_id, e)
          raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
