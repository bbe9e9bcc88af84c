from pydantic import BaseModel


class NamedEntityCreate(BaseModel):
    name: str = ""


class NamedEntityRead(BaseModel):
    id: int
    company_id: int
    name: str
    is_active: bool

    model_config = {"from_attributes": True}
