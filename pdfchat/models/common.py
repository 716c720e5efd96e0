"""
Common response models.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain acknowledgement response."""

    message: str
