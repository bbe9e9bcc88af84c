from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import NamedEntityCreate, NamedEntityRead
from ..services import lookups as lookups_service

router = APIRouter(prefix="/api")


def _register(entity: lookups_service.NamedEntity) -> None:
    def create(
        company_id: int, payload: NamedEntityCreate, db: Session = Depends(get_db)
    ) -> NamedEntityRead:
        return lookups_service.create_named(db, entity, company_id, payload.name)

    def list_(company_id: int, db: Session = Depends(get_db)) -> list[NamedEntityRead]:
        return lookups_service.list_named(db, entity, company_id)

    path = f"/{entity.slug}/{{company_id}}"
    router.add_api_route(
        path,
        create,
        methods=["POST"],
        response_model=NamedEntityRead,
        status_code=201,
        name=f"create_{entity.slug}",
    )
    router.add_api_route(
        path,
        list_,
        methods=["GET"],
        response_model=list[NamedEntityRead],
        name=f"list_{entity.slug}",
    )


for _entity in lookups_service.NAMED_ENTITIES.values():
    _register(_entity)
