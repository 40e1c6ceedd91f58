"""Pydantic schemas for the two-step object upload."""

from pydantic import Field

from nusong_client.schemas.base import APIModel


class UploadTarget(APIModel):
    """Signed URL the raw file is PUT to."""

    upload_url: str = Field(alias="uploadURL")


class NormalizedPath(APIModel):
    """Internal object reference for an uploaded file."""

    object_path: str
