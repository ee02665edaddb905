# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured error types raised by gridsync.

Transport failures surface as :class:`HttpError` (non-2xx responses) or as the
raw :mod:`requests` exception (network errors). Structural problems with a
target sheet surface as :class:`SheetStructureError` before anything is mutated.
A successful response whose body lacks the expected records surfaces as
:class:`ResponseFormatError`.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional

from ._error_codes import TRANSIENT_STATUS_CODES, http_subcode


class GridSyncError(Exception):
    """Base structured error for gridsync."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat().replace("+00:00", "Z")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ValidationError(GridSyncError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")


class MetadataError(GridSyncError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="metadata_error", subcode=subcode, details=details, source="client")


class SheetStructureError(GridSyncError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="sheet_structure_error", subcode=subcode, details=details, source="client")


class ResponseFormatError(GridSyncError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="response_format_error", subcode=subcode, details=details, source="server")


class HttpError(GridSyncError):
    def __init__(
        self,
        message: str,
        status_code: int,
        is_transient: Optional[bool] = None,
        subcode: Optional[str] = None,
        service_error_code: Optional[str] = None,
        url: Optional[str] = None,
        method: Optional[str] = None,
        body_excerpt: Optional[str] = None,
        retry_after: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = details or {}
        if service_error_code is not None:
            d["service_error_code"] = service_error_code
        if url is not None:
            d["url"] = url
        if method is not None:
            d["method"] = method
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        if retry_after is not None:
            d["retry_after"] = retry_after
        if is_transient is None:
            is_transient = status_code in TRANSIENT_STATUS_CODES
        super().__init__(
            message,
            code="http_error",
            subcode=subcode or http_subcode(status_code),
            status_code=status_code,
            details=d,
            source="server",
            is_transient=is_transient,
        )


__all__ = [
    "GridSyncError",
    "HttpError",
    "ValidationError",
    "MetadataError",
    "ResponseFormatError",
    "SheetStructureError",
]
