"""Storage of uploaded item images."""

from __future__ import annotations

import logging
import os
import uuid
from collections.abc import Iterable, Mapping
from typing import Any

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from inventory_manager.schemas.forms import FormError

logger = logging.getLogger(__name__)


def has_upload(upload: FileStorage | None) -> bool:
    # Browsers submit an empty part when the file input is left blank.
    return upload is not None and bool(upload.filename)


class ImageStore:
    """Saves uploads under one folder with generated, collision-free names."""

    def __init__(self, folder: str, allowed_extensions: Iterable[str]) -> None:
        self._folder = folder
        self._allowed = tuple(ext.lower() for ext in allowed_extensions)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> ImageStore:
        return cls(
            folder=str(config["UPLOAD_FOLDER"]),
            allowed_extensions=config.get("ALLOWED_IMAGE_EXTENSIONS", ()),
        )

    @property
    def folder(self) -> str:
        return self._folder

    def extension(self, filename: str) -> str:
        _, ext = os.path.splitext(secure_filename(filename))
        return ext.lstrip(".").lower()

    def check(self, upload: FileStorage | None) -> FormError | None:
        """Return a form error when the upload is not an accepted image."""

        if not has_upload(upload):
            return None
        if self.extension(upload.filename or "") in self._allowed:
            return None
        allowed = self._allowed[-1] if self._allowed else "image"
        if len(self._allowed) > 1:
            allowed = ", ".join(self._allowed[:-1]) + f" or {allowed}"
        return FormError(field="image", message=f"Image must be a {allowed} file")

    def save(self, upload: FileStorage | None) -> str | None:
        """Store the upload and return its stored filename (None when nothing was uploaded)."""

        if not has_upload(upload):
            return None

        stored_name = f"{uuid.uuid4().hex}.{self.extension(upload.filename or '')}"
        os.makedirs(self._folder, exist_ok=True)
        upload.save(os.path.join(self._folder, stored_name))
        logger.info("Stored upload %r as %s", upload.filename, stored_name)
        return stored_name
