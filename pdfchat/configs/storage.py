"""
Upload storage configuration.

Where uploaded PDFs are written and which uploads are accepted.

Dependencies: pydantic, pydantic_settings
System role: Raw file storage configuration for the upload pipeline
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from pdfchat.configs.base import BaseSettings


class UploadSettings(BaseSettings):
    """Local upload directory and upload validation limits."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="UPLOAD_",
        case_sensitive=False,
        extra="ignore",
    )

    directory: str = Field(default="uploads", description="Directory for stored PDFs")
    max_file_size_bytes: int = Field(
        default=10 * 1024 * 1024,
        gt=0,
        description="Maximum accepted upload size in bytes",
    )
    allowed_content_types: list[str] = Field(
        default=["application/pdf"],
        description="Accepted upload MIME types",
    )
