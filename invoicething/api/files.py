# invoicething/api/files.py

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.concurrency import run_in_threadpool

from invoicething.api.deps import get_current_user
from invoicething.core.exceptions import NotFoundError
from invoicething.db.engine import get_engine
from invoicething.models.files import FileUrlOut, UploadUrlOut
from invoicething.services import attachments
from invoicething.services.attachments import AttachmentStore, get_attachment_store

router = APIRouter(prefix="/files", tags=["files"])


@router.post("/upload-url", response_model=UploadUrlOut)
def generate_upload_url(
    current_user: dict = Depends(get_current_user),
    store: AttachmentStore = Depends(get_attachment_store),
) -> UploadUrlOut:
    """
    Reserve a storage id for a receipt image; PUT the bytes to upload_url.
    """
    engine = get_engine()

    with engine.begin() as conn:
        storage_id, upload_url = attachments.issue_upload(conn, store, current_user["id"])

    return UploadUrlOut(storage_id=storage_id, upload_url=upload_url)


def _store_upload(store: AttachmentStore, user_id: int, storage_id: str, content: bytes) -> None:
    engine = get_engine()
    with engine.begin() as conn:
        attachments.store_upload(conn, store, user_id, storage_id, content)


@router.put("/{storage_id}", status_code=204)
async def upload_file(
    storage_id: str,
    request: Request,
    current_user: dict = Depends(get_current_user),
    store: AttachmentStore = Depends(get_attachment_store),
) -> Response:
    content = await request.body()
    try:
        await run_in_threadpool(
            _store_upload, store, current_user["id"], storage_id, content
        )
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Upload URL not found")
    return Response(status_code=204)


@router.get("/{storage_id}/url", response_model=FileUrlOut)
def get_file_url(
    storage_id: str,
    current_user: dict = Depends(get_current_user),
    store: AttachmentStore = Depends(get_attachment_store),
) -> FileUrlOut:
    engine = get_engine()

    with engine.connect() as conn:
        url = attachments.get_url(conn, store, current_user["id"], storage_id)

    return FileUrlOut(storage_id=storage_id, url=url)


@router.get("/{storage_id}")
def download_file(
    storage_id: str,
    current_user: dict = Depends(get_current_user),
    store: AttachmentStore = Depends(get_attachment_store),
) -> Response:
    engine = get_engine()

    with engine.connect() as conn:
        content = attachments.read(conn, store, current_user["id"], storage_id)

    if content is None:
        raise HTTPException(status_code=404, detail="File not found")
    return Response(content=content, media_type="application/octet-stream")


@router.delete("/{storage_id}", status_code=204)
def delete_file(
    storage_id: str,
    current_user: dict = Depends(get_current_user),
    store: AttachmentStore = Depends(get_attachment_store),
) -> Response:
    engine = get_engine()

    with engine.begin() as conn:
        deleted = attachments.delete(conn, store, current_user["id"], storage_id)

    if not deleted:
        raise HTTPException(status_code=404, detail="File not found")
    return Response(status_code=204)
