"""
Shared field types and response fragments used across the API schemas.
"""
from typing import Annotated

from pydantic import AfterValidator, BaseModel, constr

from store_rating.core.security import password_policy_errors


def _check_password(value: str) -> str:
    errors = password_policy_errors(value)
    if errors:
        raise ValueError("; ".join(errors))
    return value


# Field constraints shared by registration, admin forms and store forms
NameStr = constr(strip_whitespace=True, min_length=3, max_length=60)
AddressStr = constr(strip_whitespace=True, min_length=1, max_length=400)
StoreNameStr = constr(strip_whitespace=True, min_length=20, max_length=60)
PasswordStr = Annotated[str, AfterValidator(_check_password)]


class PageInfo(BaseModel):
    """Offset pagination metadata returned by every list endpoint."""
    currentPage: int
    totalPages: int
    totalItems: int
    itemsPerPage: int


class MessageOut(BaseModel):
    message: str
