"""FastAPI dependencies for objects created in the application lifespan."""
from fastapi import Request

from imagehost.config import Settings
from imagehost.services.file_storage import FileStorageService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_file_storage(request: Request) -> FileStorageService:
    return request.app.state.file_storage
