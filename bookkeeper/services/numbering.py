from sqlalchemy.orm import Session

from ..models import DocumentSequence
from ..models.base import utcnow
from .calculations import DocumentKind
from .documents import number_taken


def next_document_number(
    db: Session, company_id: int, kind: DocumentKind, prefix: str
) -> str:
    """Hand out the next ``PREFIX-YY-NNNNN`` number for a company.

    Numbers a user already typed in by hand are skipped.
    """
    year = utcnow().year
    sequence = db.get(DocumentSequence, (company_id, prefix, year))
    if sequence is None:
        sequence = DocumentSequence(
            company_id=company_id, prefix=prefix, year=year, last_number=0
        )
        db.add(sequence)

    while True:
        sequence.last_number += 1
        number = f"{prefix}-{str(year)[2:]}-{sequence.last_number:05d}"
        if not number_taken(db, kind, company_id, number):
            break
    sequence.updated_at = utcnow()
    db.flush()
    return number
