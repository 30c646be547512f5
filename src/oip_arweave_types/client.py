"""HTTP access to the OIP templates API."""

from __future__ import annotations

import logging
from typing import Any

import requests

from .config import DEFAULT_API_ROOT

logger = logging.getLogger(__name__)

TYPESCRIPT_FIELD = "typeScript"


class TemplatesApiError(RuntimeError):
    """Raised when the templates API cannot produce a declaration blob."""


class TemplatesClient:
    """Thin wrapper over the ``?typeScriptTypes=true`` templates endpoint."""

    def __init__(
        self,
        api_root: str = DEFAULT_API_ROOT,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.api_root = api_root
        self.timeout = timeout
        self.session = session

    def _get(self, params: dict[str, str]) -> requests.Response:
        get = self.session.get if self.session is not None else requests.get
        return get(self.api_root, params=params, timeout=self.timeout)

    @staticmethod
    def _blob_from(response: requests.Response) -> str:
        data: Any = response.json()
        blob = data.get(TYPESCRIPT_FIELD) if isinstance(data, dict) else None
        if not blob:
            raise TemplatesApiError("API response missing TypeScript content")
        return blob

    def fetch_all_templates(self) -> str:
        """Return the declaration blob for every template."""
        logger.info("Fetching templates from %s", self.api_root)
        try:
            response = self._get({"typeScriptTypes": "true"})
            response.raise_for_status()
            blob = self._blob_from(response)
        except (requests.RequestException, ValueError) as exc:
            logger.error("Failed to fetch templates from API: %s", exc)
            raise TemplatesApiError(str(exc)) from exc
        logger.info("Successfully fetched templates")
        return blob

    def fetch_template(self, name: str) -> str | None:
        """Return the declaration blob for one template, or None on failure."""
        logger.info("Fetching schema for template: %s", name)
        try:
            response = self._get({"typeScriptTypes": "true", "template": name})
            if response.status_code == 404:
                logger.error('Template "%s" not found', name)
                return None
            response.raise_for_status()
            blob = self._blob_from(response)
        except (requests.RequestException, ValueError, TemplatesApiError) as exc:
            logger.error('Failed to fetch template schema for "%s": %s', name, exc)
            return None
        logger.info('Successfully fetched schema for "%s"', name)
        return blob
