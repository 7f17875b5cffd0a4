import os
import secrets
from dataclasses import dataclass
from typing import Mapping, Optional

import httpx

from ._utils.constants import HEADER_CONTENT_TYPE, MIME_MULTIPART_POST_FORM
from .models.errors import BodyReadError, EncodingError

# Only used to drive httpx's encoder; never sent.
_PLACEHOLDER_URL = "http://multipart.invalid/"


@dataclass(frozen=True)
class MultipartForm:
    """An assembled ``multipart/form-data`` body."""

    content: bytes
    content_type: str

    @property
    def boundary(self) -> str:
        _, _, boundary = self.content_type.partition("boundary=")
        return boundary.strip('"')


def build_form(
    files: Optional[Mapping[str, str]] = None,
    fields: Optional[Mapping[str, str]] = None,
    boundary: Optional[str] = None,
) -> MultipartForm:
    """Assemble a multipart body from local files and text fields.

    File parts come first, then text parts. Encoding is left to httpx, which
    percent-encodes quotes and control characters in names.

    Args:
        files: field name -> path of a local file. The part's filename is the
            base name of the path; its content type is guessed from it.
        fields: field name -> text value.
        boundary: boundary to use instead of a random one.

    Raises:
        BodyReadError: if a file cannot be opened or read.
        EncodingError: if a field name or value is not a string.
    """
    parts: list[tuple[str, tuple]] = []

    for name, path in (files or {}).items():
        _check_name(name)
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise BodyReadError(f"cannot read form file {path!r}: {e}", path) from e
        parts.append((name, (os.path.basename(path), data)))

    for name, value in (fields or {}).items():
        _check_name(name)
        if not isinstance(value, str):
            raise EncodingError(
                f"form field {name!r} must be a string, got {type(value).__name__}",
                MIME_MULTIPART_POST_FORM,
            )
        parts.append((name, (None, value.encode("utf-8"))))

    boundary = boundary or secrets.token_hex(16)
    content_type = f"{MIME_MULTIPART_POST_FORM}; boundary={boundary}"
    if not parts:
        # httpx only switches to multipart when there is at least one part.
        return MultipartForm(
            content=f"--{boundary}--\r\n".encode("ascii"), content_type=content_type
        )

    request = httpx.Request(
        "POST",
        _PLACEHOLDER_URL,
        headers={HEADER_CONTENT_TYPE: content_type},
        files=parts,
    )
    return MultipartForm(
        content=request.read(), content_type=request.headers[HEADER_CONTENT_TYPE]
    )


def _check_name(name: object) -> None:
    if not isinstance(name, str):
        raise EncodingError(
            f"form field name must be a string, got {type(name).__name__}",
            MIME_MULTIPART_POST_FORM,
        )
