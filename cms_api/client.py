"""
Client HTTP pour l'API CMS pages (équivalent Python du wrapper du dashboard).

Les payloads sont validés localement avec les mêmes schemas que le serveur
avant d'être envoyés.
"""

import logging
from typing import Any, Mapping, Optional

import requests

from cms_api.schemas.cms_page import validate_page_create, validate_page_update, validate_pagination

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10


class CmsApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CmsApiClient:
    def __init__(self, base_url: str, bearer_token: str = "", session: Optional[requests.Session] = None,
                 timeout: float = REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.bearer_token = bearer_token
        self.session = session or requests.Session()
        self.timeout = timeout

    def set_bearer_token(self, token: str) -> None:
        self.bearer_token = token

    def _request(self, method: str, path: str, json: Any = None, params: Optional[dict] = None):
        headers = {"Content-Type": "application/json"}
        if self.bearer_token:
            headers["Authorization"] = f"Bearer {self.bearer_token}"

        response = self.session.request(
            method,
            f"{self.base_url}{path}",
            json=json,
            params=params,
            headers=headers,
            timeout=self.timeout
        )

        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = None
            # un proxy peut renvoyer une liste ou une chaine
            message = body.get("message") if isinstance(body, dict) else None
            message = message or f"HTTP {response.status_code}: {response.reason}"
            logger.warning(f"{method} {path} -> {response.status_code}: {message}")
            raise CmsApiError(message, response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def list_pages(self, page: int = 1, per_page: int = 15, store_id: Optional[int] = None,
                   is_active: Optional[bool] = None) -> dict:
        params = validate_pagination({
            "page": page, "perPage": per_page, "storeId": store_id, "isActive": is_active
        })
        query = params.model_dump(by_alias=True, exclude_none=True)
        if "isActive" in query:
            query["isActive"] = "true" if query["isActive"] else "false"
        return self._request("GET", "/api/cms-pages", params=query)

    def get_page(self, page_id: int) -> dict:
        return self._request("GET", f"/api/cms-pages/{page_id}")

    def create_page(self, data: Mapping[str, Any]) -> dict:
        payload = validate_page_create(data).model_dump(by_alias=True)
        return self._request("POST", "/api/cms-pages", json=payload)

    def update_page(self, page_id: int, data: Mapping[str, Any]) -> dict:
        payload = validate_page_update(data).model_dump(by_alias=True, exclude_unset=True)
        return self._request("PUT", f"/api/cms-pages/{page_id}", json=payload)

    def delete_page(self, page_id: int) -> None:
        self._request("DELETE", f"/api/cms-pages/{page_id}")

    def get_stats(self) -> dict:
        return self._request("GET", "/api/cms-pages/stats")

    def health(self) -> dict:
        return self._request("GET", "/api/health")
