from typing import List, Union
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Base for every wire model: snake_case in Python, camelCase in JSON
class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Error responses
class ErrorResponse(BaseModel):
    error: str
    message: str


class FieldError(BaseModel):
    loc: List[Union[str, int]]
    msg: str
    type: str


class ValidationErrorResponse(ErrorResponse):
    errors: List[FieldError]


class SeatConflictResponse(ErrorResponse):
    unavailableSeatIds: List[str]
    unavailableSeatNumbers: List[str]
