# services/contractor_service.py
import logging
from typing import List

import pydantic
from sqlalchemy.orm import Session

from models import Contractor, Repair
from schemas.contractor import ContractorCreate, ContractorUpdate
from schemas.report import ImportResult, ImportRowError
from .csv_io import read_rows, write_rows
from .errors import NotFoundError

logger = logging.getLogger(__name__)

# Column name -> Contractor attribute
CSV_COLUMNS = {
     "Name": "name",
     "Contact": "contact",
     "CompanyName": "company_name",
     "CompanyAddress": "company_address",
     "Email": "email",
     "Comments": "comments",
}
REQUIRED_CSV_COLUMNS = ["Name", "Contact"]


class ContractorService:
     """Contractors belong to the owner who added them."""

     @staticmethod
     def create_contractor(db: Session, owner_id: int, data: ContractorCreate) -> Contractor:
          contractor = Contractor(owner_id=owner_id, **data.model_dump())
          db.add(contractor)
          db.flush()
          return contractor

     @staticmethod
     def list_contractors(db: Session, owner_id: int) -> List[Contractor]:
          return (
               db.query(Contractor)
               .filter(Contractor.owner_id == owner_id)
               .order_by(Contractor.name)
               .all()
          )

     @staticmethod
     def get_contractor(db: Session, owner_id: int, contractor_id: int) -> Contractor:
          contractor = (
               db.query(Contractor)
               .filter(Contractor.id == contractor_id, Contractor.owner_id == owner_id)
               .first()
          )
          if contractor is None:
               raise NotFoundError(f"Contractor with ID {contractor_id} not found")
          return contractor

     @staticmethod
     def update_contractor(db: Session, owner_id: int, contractor_id: int, data: ContractorUpdate) -> Contractor:
          contractor = ContractorService.get_contractor(db, owner_id, contractor_id)
          for name, value in data.model_dump(exclude_unset=True).items():
               if value is None and name in ("name", "contact"):
                    continue
               setattr(contractor, name, value)
          db.flush()
          return contractor

     @staticmethod
     def delete_contractor(db: Session, owner_id: int, contractor_id: int) -> None:
          """Delete a contractor; repairs assigned to it keep their history without one."""
          contractor = ContractorService.get_contractor(db, owner_id, contractor_id)
          db.query(Repair).filter(Repair.contractor_id == contractor.id).update(
               {Repair.contractor_id: None}, synchronize_session="fetch"
          )
          db.delete(contractor)
          db.flush()

     @staticmethod
     def to_csv(contractors: List[Contractor]) -> str:
          return write_rows(
               list(CSV_COLUMNS),
               ([getattr(c, attr) or "" for attr in CSV_COLUMNS.values()] for c in contractors),
          )

     @staticmethod
     def import_csv(db: Session, owner_id: int, text: str) -> ImportResult:
          """
          Add a contractor per CSV row. Name and Contact are required; rows
          missing either, or with an invalid Email, are reported and skipped.
          """
          errors = []
          imported = 0
          for row_number, row in read_rows(text, REQUIRED_CSV_COLUMNS):
               values = {attr: row.get(column) or None for column, attr in CSV_COLUMNS.items()}
               if not values["name"] or not values["contact"]:
                    errors.append(ImportRowError(row=row_number, message="Missing Name or Contact."))
                    continue
               try:
                    data = ContractorCreate(**values)
               except pydantic.ValidationError as e:
                    field = e.errors()[0]["loc"][0]
                    errors.append(ImportRowError(row=row_number, message=f"Invalid value for {field}."))
                    continue
               ContractorService.create_contractor(db, owner_id, data)
               imported += 1

          logger.info("User %s imported %d contractors (%d rejected)", owner_id, imported, len(errors))
          return ImportResult(imported=imported, errors=errors)
