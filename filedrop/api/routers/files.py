"""
Files API router.

Provides upload, download and listing endpoints. Files are keyed by the
client-supplied filename; uploading an existing filename overwrites it.
"""

import sys
from urllib.parse import quote

from fastapi import APIRouter, Query, Request
from fastapi.responses import Response
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from filedrop.api.dependencies import AppSettings, Storage
from filedrop.core.exceptions import (
    BadRequestError,
    ContentDispositionError,
    EmptyFormError,
    MalformedFieldError,
    MissingFilenameError,
    StorageError,
)
from filedrop.core.logging import TransferLogger

router = APIRouter(tags=["Files"])

transfer_logger = TransferLogger()

# Fields after the first are discarded, so no form limit may reject them
FORM_LIMITS = {
    "max_files": sys.maxsize,
    "max_fields": sys.maxsize,
    "max_part_size": sys.maxsize,
}


def is_multipart(request: Request) -> bool:
    """Check whether the request carries a multipart form body."""
    content_type = request.headers.get("content-type", "")
    return content_type.lower().startswith("multipart/form-data")


def build_content_disposition(filename: str, quote_filename: bool = False) -> str:
    """
    Build the Content-Disposition value for a download.

    By default the filename is interpolated as-is, so names containing
    spaces, quotes or semicolons yield a header clients may misparse.
    With ``quote_filename`` the value follows RFC 6266: a quoted ASCII
    fallback plus an RFC 5987 ``filename*`` parameter.

    Raises:
        ContentDispositionError: If the filename contains control
            characters in unquoted mode.
    """
    if quote_filename:
        fallback = "".join(
            c if 0x20 <= ord(c) < 0x7F else "_" for c in filename
        )
        fallback = fallback.replace("\\", "\\\\").replace('"', '\\"')
        encoded = quote(filename, safe="")
        return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{encoded}"

    if any((ord(c) < 0x20 and c != "\t") or ord(c) == 0x7F for c in filename):
        raise ContentDispositionError(filename)

    # Starlette encodes header values as latin-1; this puts the raw UTF-8 bytes on the wire
    return f"attachment; filename={filename}".encode("utf-8").decode("latin-1")


async def read_first_field(request: Request) -> tuple[str, str, str | None, bytes]:
    """
    Read the first field of a multipart form.

    Later fields are parsed but discarded, whatever their size or number.

    Returns:
        Tuple of (field name, filename, content type, payload).

    Raises:
        EmptyFormError: If the form has no field.
        MalformedFieldError: If the first field carries no filename.
        BadRequestError: If the body is not a valid multipart form.
    """
    try:
        async with request.form(**FORM_LIMITS) as form:
            items = form.multi_items()
            if not items:
                raise EmptyFormError()

            field_name, value = items[0]
            if not isinstance(value, UploadFile) or not value.filename:
                raise MalformedFieldError(field_name)

            data = await value.read()
            return field_name, value.filename, value.content_type, data
    except StarletteHTTPException as e:
        raise BadRequestError(
            message=f"Invalid multipart body: {e.detail}",
        ) from e


async def store_raw_body(
    request: Request, storage: Storage, filename: str | None
) -> None:
    """Store the request body under the ``filename`` query parameter."""
    if filename is None:
        raise MissingFilenameError()

    data = await request.body()
    transfer_logger.log_upload(filename=filename, size=len(data))
    await storage.write(filename, data)


async def store_first_field(request: Request, storage: Storage) -> None:
    """Store the first multipart field under its own filename."""
    field_name, filename, content_type, data = await read_first_field(request)
    transfer_logger.log_upload(
        filename=filename,
        size=len(data),
        field_name=field_name,
        content_type=content_type,
    )
    await storage.write(filename, data)


@router.api_route(
    "/upload",
    methods=["POST", "PUT"],
    status_code=201,
    response_class=Response,
    summary="Upload file",
    description=(
        "Store the raw request body under the `filename` query parameter. "
        "A multipart form body is handled like `/upload/mul`."
    ),
)
async def upload(
    request: Request,
    storage: Storage,
    filename: str | None = Query(None, description="Storage key of the file"),
) -> Response:
    """Upload a file from the raw body or a multipart form."""
    if is_multipart(request):
        await store_first_field(request, storage)
    else:
        await store_raw_body(request, storage, filename)

    return Response(status_code=201)


@router.api_route(
    "/upload/mul",
    methods=["POST", "PUT"],
    status_code=201,
    response_class=Response,
    summary="Upload multipart file",
    description="Store the first field of a multipart form under its filename.",
)
async def upload_multipart(request: Request, storage: Storage) -> Response:
    """Upload a file from the first multipart field."""
    await store_first_field(request, storage)
    return Response(status_code=201)


@router.get(
    "/list",
    response_model=list[str],
    summary="List files",
    description="List stored filenames in no particular order.",
)
@router.get(
    "/upload",
    response_model=list[str],
    include_in_schema=False,
)
async def list_uploads(storage: Storage) -> list[str]:
    """
    List stored filenames.

    Enumeration failures are reported as an empty list, not as an error.
    """
    try:
        files = await storage.list_files()
    except StorageError as e:
        transfer_logger.log_listing_failed(str(e))
        return []

    transfer_logger.log_listing(len(files))
    return files


@router.get(
    "/download",
    response_class=Response,
    summary="Download file",
    description="Return the file content as an attachment.",
)
async def download(
    storage: Storage,
    settings: AppSettings,
    filename: str | None = Query(None, description="Storage key of the file"),
) -> Response:
    """Download a stored file."""
    if filename is None:
        raise MissingFilenameError()

    data = await storage.read(filename)
    content_disposition = build_content_disposition(
        filename, quote_filename=settings.quote_content_disposition
    )
    transfer_logger.log_download(filename=filename, size=len(data))

    return Response(
        content=data,
        media_type="application/octet-stream",
        headers={"Content-Disposition": content_disposition},
    )
