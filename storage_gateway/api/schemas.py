"""
Request and response schemas for the JSON API.
"""

from typing import List

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Uniform error envelope."""

    error: str = Field(..., description="Human-readable error description")


class LoginRequest(BaseModel):
    username: str
    token: str


class LoginResponse(BaseModel):
    name: str


class LogoutResponse(BaseModel):
    message: str = "Logged out"


class WhoAmIResponse(BaseModel):
    username: str
    name: str


class FileInfoResponse(BaseModel):
    name: str
    size: int
    last_modified: str


class ListResponse(BaseModel):
    files: List[FileInfoResponse]
    total: int


class UploadResponse(BaseModel):
    filename: str
    size: int
    message: str


class DeleteResponse(BaseModel):
    filename: str
    message: str
