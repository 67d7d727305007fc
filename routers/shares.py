# routers/shares.py
"""
Read-only sharing of properties with other registered accounts.
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user
from models import Share, User
from schemas.share import ShareCreate, ShareResponse, ShareCreateResponse
from services.share_service import ShareService

router = APIRouter(prefix="/api/shares", tags=["shares"])


def _build_share_response(share: Share) -> ShareResponse:
     return ShareResponse(
          id=share.id,
          property_id=share.property_id,
          property_name=share.property.name,
          owner_id=share.owner_id,
          owner_name=share.owner.full_name,
          owner_email=share.owner.email,
          viewer_id=share.viewer_id,
          viewer_email=share.viewer.email,
     )


@router.post(
     "",
     response_model=ShareCreateResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Share properties with another user"
)
def create_shares(
     share_data: ShareCreate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     """
     Give a registered user a read-only view of one or more owned properties.

     - **viewer_email**: the account to share with (must already exist)
     - **property_ids**: owned properties; ones already shared with the viewer are skipped
     """
     created, skipped = ShareService.share_properties(db, user, share_data.viewer_email, share_data.property_ids)
     db.commit()
     for share in created:
          db.refresh(share)
     return ShareCreateResponse(
          created=[_build_share_response(s) for s in created],
          skipped_property_ids=skipped,
     )


@router.get("", response_model=List[ShareResponse], summary="Shares I granted")
def list_my_shares(
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     return [_build_share_response(s) for s in ShareService.shares_by_owner(db, user.id)]


@router.get("/received", response_model=List[ShareResponse], summary="Shares granted to me")
def list_received_shares(
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     return [_build_share_response(s) for s in ShareService.shares_for_viewer(db, user.id)]


@router.delete("/{share_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Revoke a share")
def revoke_share(
     share_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     ShareService.revoke_share(db, user.id, share_id)
     db.commit()
     return None
