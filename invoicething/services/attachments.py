# invoicething/services/attachments.py
"""
Claim receipt images.

Upload is two-step: the owner is issued a storage id (with its upload URL),
then PUTs the bytes to that URL. Ownership and upload state live in the
`attachments` table; the bytes live in a local directory. Every lookup is
scoped to the acting user, so another user's file reads as missing.
"""

import logging
import re
import uuid
from pathlib import Path
from typing import Optional, Tuple

from invoicething.core.config import get_config
from invoicething.core.exceptions import InvalidArgumentError, NotFoundError
from invoicething.db.engine import now_ms
from invoicething.repositories import attachments as repo

logger = logging.getLogger(__name__)

_STORAGE_ID = re.compile(r"^[0-9a-f]{32}$")


def check_storage_id(storage_id: str) -> str:
    if not _STORAGE_ID.match(storage_id):
        raise InvalidArgumentError(f"Malformed storage id {storage_id!r}")
    return storage_id


class AttachmentStore:
    """Byte storage only; callers check ownership first."""

    def __init__(self, root: str, url_prefix: str = "/files"):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    def _path(self, storage_id: str) -> Path:
        return self.root / check_storage_id(storage_id)

    def url_for(self, storage_id: str) -> str:
        return f"{self.url_prefix}/{storage_id}"

    def write(self, storage_id: str, content: bytes) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        self._path(storage_id).write_bytes(content)

    def read(self, storage_id: str) -> Optional[bytes]:
        path = self._path(storage_id)
        if not path.is_file():
            return None
        return path.read_bytes()

    def remove(self, storage_id: str) -> None:
        path = self._path(storage_id)
        if path.exists():
            path.unlink()


def get_attachment_store() -> AttachmentStore:
    return AttachmentStore(get_config().ATTACHMENT_DIR)


def _expiry_cutoff() -> int:
    return now_ms() - get_config().UPLOAD_URL_TTL_SECONDS * 1000


def issue_upload(conn, store: AttachmentStore, user_id: int) -> Tuple[str, str]:
    """Reserve a new storage id for user_id; returns (storage_id, upload_url)."""
    expired = repo.delete_expired_pending(conn, _expiry_cutoff())
    if expired:
        logger.info("Dropped %d expired upload reservation(s)", len(expired))

    storage_id = uuid.uuid4().hex
    repo.create_attachment(conn, user_id, storage_id)
    logger.info("Issued upload URL for attachment %s to user %s", storage_id, user_id)
    return storage_id, store.url_for(storage_id)


def store_upload(
    conn, store: AttachmentStore, user_id: int, storage_id: str, content: bytes
) -> None:
    check_storage_id(storage_id)
    row = repo.get_attachment(conn, user_id, storage_id)
    if row is None or row["uploaded"]:
        raise NotFoundError(f"No open upload for {storage_id}")
    if row["created_at"] < _expiry_cutoff():
        raise NotFoundError(f"Upload URL for {storage_id} has expired")

    store.write(storage_id, content)
    repo.mark_uploaded(conn, storage_id, len(content))
    logger.info("Stored attachment %s (%d bytes) for user %s", storage_id, len(content), user_id)


def _uploaded(conn, user_id: int, storage_id: str) -> Optional[dict]:
    check_storage_id(storage_id)
    row = repo.get_attachment(conn, user_id, storage_id)
    if row is None or not row["uploaded"]:
        return None
    return row


def get_url(conn, store: AttachmentStore, user_id: int, storage_id: str) -> Optional[str]:
    if _uploaded(conn, user_id, storage_id) is None:
        return None
    return store.url_for(storage_id)


def read(conn, store: AttachmentStore, user_id: int, storage_id: str) -> Optional[bytes]:
    if _uploaded(conn, user_id, storage_id) is None:
        return None
    return store.read(storage_id)


def delete(conn, store: AttachmentStore, user_id: int, storage_id: str) -> bool:
    check_storage_id(storage_id)
    if not repo.delete_attachment(conn, user_id, storage_id):
        return False
    store.remove(storage_id)
    logger.info("Deleted attachment %s for user %s", storage_id, user_id)
    return True


def require_uploaded(conn, user_id: int, storage_id: str) -> None:
    """Raise unless storage_id is an uploaded file owned by user_id."""
    if _uploaded(conn, user_id, storage_id) is None:
        raise InvalidArgumentError(f"Unknown attachment {storage_id}")
