# routers/contractors.py
from typing import List
from datetime import date
from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user
from models import User
from schemas.contractor import ContractorCreate, ContractorUpdate, ContractorResponse
from schemas.report import ImportResult
from services.contractor_service import ContractorService
from services.csv_io import decode_upload

router = APIRouter(prefix="/api/contractors", tags=["contractors"])


@router.post("", response_model=ContractorResponse, status_code=status.HTTP_201_CREATED, summary="Add a contractor")
def create_contractor(
     contractor_data: ContractorCreate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     contractor = ContractorService.create_contractor(db, user.id, contractor_data)
     db.commit()
     db.refresh(contractor)
     return ContractorResponse.model_validate(contractor)


@router.get("", response_model=List[ContractorResponse], summary="List contractors")
def list_contractors(
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     return [ContractorResponse.model_validate(c) for c in ContractorService.list_contractors(db, user.id)]


@router.get("/export", summary="Export contractors as CSV")
def export_contractors(
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     filename = f"rentledger_contractors_{date.today().isoformat()}.csv"
     return Response(
          content=ContractorService.to_csv(ContractorService.list_contractors(db, user.id)),
          media_type="text/csv",
          headers={"Content-Disposition": f'attachment; filename="{filename}"'},
     )


@router.post("/import", response_model=ImportResult, summary="Import contractors from CSV")
def import_contractors(
     file: UploadFile = File(..., description="CSV with Name, Contact and optional CompanyName, CompanyAddress, Email, Comments"),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     """
     Add one contractor per row. Invalid rows are listed in **errors** and
     skipped; the valid ones are saved.
     """
     result = ContractorService.import_csv(db, user.id, decode_upload(file.file.read()))
     db.commit()
     return result


@router.get("/{contractor_id}", response_model=ContractorResponse, summary="Get contractor by ID")
def get_contractor(
     contractor_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     return ContractorResponse.model_validate(ContractorService.get_contractor(db, user.id, contractor_id))


@router.put("/{contractor_id}", response_model=ContractorResponse, summary="Update contractor")
def update_contractor(
     contractor_id: int,
     contractor_data: ContractorUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     contractor = ContractorService.update_contractor(db, user.id, contractor_id, contractor_data)
     db.commit()
     db.refresh(contractor)
     return ContractorResponse.model_validate(contractor)


@router.delete("/{contractor_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete contractor")
def delete_contractor(
     contractor_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     """Delete a contractor. Repairs it worked on are kept, unassigned."""
     ContractorService.delete_contractor(db, user.id, contractor_id)
     db.commit()
     return None
