"""Request body for resolving a scanned QR token."""
from pydantic import Field

from sams.schemas.base import RequestSchema


class TokenVerify(RequestSchema):
    token: str = Field(..., min_length=1, max_length=128)
