"""
File CRUD endpoints proxied to the object store.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from starlette.datastructures import UploadFile

from storage_gateway.api.dependencies import CurrentUser, get_storage
from storage_gateway.api.schemas import (
    DeleteResponse,
    FileInfoResponse,
    ListResponse,
    UploadResponse,
)
from storage_gateway.domain.exceptions import UploadError
from storage_gateway.infra.config.logging_config import get_logger
from storage_gateway.infra.storage.object_storage import (
    DEFAULT_CONTENT_TYPE,
    ObjectStorage,
)

router = APIRouter(prefix="/files", tags=["files"])
log = get_logger("api.files")


async def first_file_part(request: Request) -> UploadFile:
    """Return the first file part of a multipart body, whatever its field name."""
    try:
        form = await request.form()
    except Exception as e:
        raise UploadError(f"Invalid multipart body: {e}") from e

    for _, value in form.multi_items():
        if isinstance(value, UploadFile):
            return value
    raise UploadError("No file provided")


@router.get("", response_model=ListResponse)
async def list_files(
    user: CurrentUser,
    prefix: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=0),
    storage: ObjectStorage = Depends(get_storage),
) -> ListResponse:
    log.info("files.list", username=user.username, prefix=prefix, limit=limit)
    files = await storage.list_files(prefix, limit)
    return ListResponse(
        files=[
            FileInfoResponse(name=f.name, size=f.size, last_modified=f.last_modified)
            for f in files
        ],
        total=len(files),
    )


@router.post("", response_model=UploadResponse)
async def upload_file(
    request: Request,
    user: CurrentUser,
    storage: ObjectStorage = Depends(get_storage),
) -> UploadResponse:
    part = await first_file_part(request)
    if not part.filename:
        raise UploadError("No filename provided")

    filename = part.filename
    content_type = part.content_type or DEFAULT_CONTENT_TYPE
    log.info(
        "files.upload",
        username=user.username,
        filename=filename,
        content_type=content_type,
    )

    data = await part.read()
    await storage.upload(filename, data, content_type)
    return UploadResponse(
        filename=filename, size=len(data), message="File uploaded successfully"
    )


@router.get("/{filename:path}")
async def download_file(
    filename: str,
    user: CurrentUser,
    storage: ObjectStorage = Depends(get_storage),
) -> Response:
    log.info("files.download", username=user.username, filename=filename)
    data, content_type = await storage.download(filename)
    # set the header verbatim; media_type would append a charset to text/* types
    return Response(content=data, headers={"Content-Type": content_type})


@router.put("/{filename:path}", response_model=UploadResponse)
async def update_file(
    filename: str,
    request: Request,
    user: CurrentUser,
    storage: ObjectStorage = Depends(get_storage),
) -> UploadResponse:
    """Overwrite ``filename`` with the first file part; the part's own name is ignored."""
    log.info("files.update", username=user.username, filename=filename)
    part = await first_file_part(request)
    content_type = part.content_type or DEFAULT_CONTENT_TYPE

    data = await part.read()
    await storage.upload(filename, data, content_type)
    return UploadResponse(
        filename=filename, size=len(data), message="File updated successfully"
    )


@router.delete("/{filename:path}", response_model=DeleteResponse)
async def delete_file(
    filename: str,
    user: CurrentUser,
    storage: ObjectStorage = Depends(get_storage),
) -> DeleteResponse:
    log.info("files.delete", username=user.username, filename=filename)
    await storage.delete(filename)
    return DeleteResponse(filename=filename, message="File deleted successfully")
