# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Secret storage contract, with an environment-backed implementation."""

from __future__ import annotations

import logging
import os
from typing import MutableMapping, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class SecretStore(Protocol):
    def get(self, name: str) -> Optional[str]:
        ...

    def set(self, name: str, value: str) -> None:
        ...


class EnvSecretStore:
    """
    :class:`SecretStore` over process environment variables.

    ``EnvSecretStore(prefix="GRIDSYNC_").get("airtableToken")`` reads
    ``GRIDSYNC_AIRTABLETOKEN``.

    :param prefix: Prepended to every upper-cased secret name.
    :param environ: Mapping to use instead of :data:`os.environ`.
    """

    def __init__(self, prefix: str = "", environ: Optional[MutableMapping[str, str]] = None) -> None:
        self.prefix = prefix
        self._environ = os.environ if environ is None else environ

    def _name(self, name: str) -> str:
        return f"{self.prefix}{name}".upper()

    def get(self, name: str) -> Optional[str]:
        return self._environ.get(self._name(name))

    def set(self, name: str, value: str) -> None:
        key = self._name(name)
        replaced = key in self._environ
        self._environ[key] = value
        # Never log the secret itself.
        if replaced:
            logger.info("Secret %s has been replaced", name)
        else:
            logger.info("Secret %s has been set", name)


__all__ = ["SecretStore", "EnvSecretStore"]
