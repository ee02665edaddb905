# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Immutable registry of jobs API endpoint URLs."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping, Optional

JOBS_API_BASE = "https://api.streamtime.net/v1/"

_DEFAULT_PATHS = {
    "Jobs": "jobs/search",
    "JobItems": "job_items/search",
    "Companies": "companies/search",
    "Users": "users",
    "Expenses": "logged_expenses/search",
    "Invoices": "invoices/search",
    "InvoiceLines": "invoice_line_items/search",
    "Quotes": "quotes/search",
    "Time": "logged_times/search",
}


class EndpointRegistry(Mapping[str, str]):
    """
    Read-only mapping of endpoint name to absolute URL.

    A registry is handed to each client when it is built, so two clients can
    target different hosts without sharing state.

    Example::

        registry = EndpointRegistry.default().with_base("https://staging.example/v1/")
        registry["Jobs"]  # "https://staging.example/v1/jobs/search"
    """

    def __init__(self, urls: Mapping[str, str], paths: Optional[Mapping[str, str]] = None) -> None:
        self._urls = MappingProxyType(dict(urls))
        self._paths = MappingProxyType(dict(paths)) if paths is not None else None

    @classmethod
    def from_paths(cls, base: str, paths: Mapping[str, str]) -> "EndpointRegistry":
        root = base if base.endswith("/") else base + "/"
        return cls({name: root + path.lstrip("/") for name, path in paths.items()}, paths=paths)

    @classmethod
    def default(cls) -> "EndpointRegistry":
        return cls.from_paths(JOBS_API_BASE, _DEFAULT_PATHS)

    def with_base(self, base: str) -> "EndpointRegistry":
        """
        Return a copy of this registry's endpoints rooted at ``base``.

        :raises ValueError: If the registry was built from absolute URLs and
            has no relative paths to rebase.
        """
        if self._paths is None:
            raise ValueError("Registry was built from absolute URLs; use from_paths to rebase it.")
        return self.from_paths(base, self._paths)

    def __getitem__(self, name: str) -> str:
        return self._urls[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._urls)

    def __len__(self) -> int:
        return len(self._urls)

    def __repr__(self) -> str:
        return f"EndpointRegistry({dict(self._urls)!r})"


DEFAULT_JOB_ENDPOINTS = EndpointRegistry.default()

__all__ = ["EndpointRegistry", "DEFAULT_JOB_ENDPOINTS", "JOBS_API_BASE"]
