"""Finder — a single get-by-identifier lookup with normalized not-found."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .client import RemoteClient
from .errors import EmptyResultError, NotFoundError, RemoteNotFound

logger = logging.getLogger(__name__)


class Finder:
    """Look up a remote object by identifier."""

    def __init__(self, client: RemoteClient) -> None:
        self.client = client

    def find(self, identifier: str) -> Mapping[str, Any]:
        """Return the remote object's fields.

        Raises NotFoundError if the object is missing and EmptyResultError if
        the API answered without a payload; any other error propagates as is.
        """
        request = {"identifier": identifier}
        try:
            out = self.client.get(identifier)
        except RemoteNotFound as err:
            logger.debug("Lookup of '%s' found nothing: %s", identifier, err)
            raise NotFoundError(last_request=request, cause=err) from err

        if out is None:
            raise EmptyResultError(last_request=request)

        return out
