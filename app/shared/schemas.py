"""Base schemas shared by the domain packages"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes exposed as camelCase JSON (both accepted on input)"""

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class MessageResponse(CamelModel):
    message: str
