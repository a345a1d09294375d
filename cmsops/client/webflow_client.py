"""
Webflow CMS API client (v2).

Thin wrapper over requests for the six calls the CMS tools need:
list collections, get collection (with fields), list items, create item,
patch item, delete item. Mutating calls pass through a Throttle first.
"""

from typing import Optional

import requests

from cmsops.client.throttle import Throttle
from cmsops.config import API_BASE, DEFAULT_RATE_PER_SECOND, ITEMS_PAGE_SIZE, REQUEST_TIMEOUT_SECONDS
from cmsops.errors import WebflowAPIError
from cmsops.reconcile.models import Collection, CollectionRecord


# =============================================================================
# WEBFLOW API CLIENT
# =============================================================================


class WebflowClient:
    """Webflow API client for read and write operations on one site token."""

    def __init__(self, access_token: str, base_url: str = API_BASE,
                 throttle: Optional[Throttle] = None, timeout: int = REQUEST_TIMEOUT_SECONDS):
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.throttle = throttle or Throttle(DEFAULT_RATE_PER_SECOND)
        self.timeout = timeout

    def _headers(self):
        return {
            "Authorization": f"Bearer {self.access_token}",
            "accept": "application/json",
            "content-type": "application/json",
        }

    def _request(self, method: str, path: str, params: dict = None, payload: dict = None):
        url = f"{self.base_url}{path}"
        response = requests.request(
            method,
            url,
            headers=self._headers(),
            params=params,
            json=payload,
            timeout=self.timeout,
        )

        if response.status_code < 200 or response.status_code >= 300:
            raise WebflowAPIError(response.status_code, response.text, method=method, path=path)

        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    def _mutate(self, method: str, path: str, payload: dict = None):
        self.throttle.acquire()
        return self._request(method, path, payload=payload)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_collections(self, site_id: str) -> list:
        data = self._request("GET", f"/sites/{site_id}/collections")
        return [Collection.from_api(c) for c in data.get("collections", [])]

    def get_collection(self, collection_id: str) -> Collection:
        """Collection details including its field schema."""
        data = self._request("GET", f"/collections/{collection_id}")
        return Collection.from_api(data)

    def list_items(self, collection_id: str, limit: Optional[int] = None) -> list:
        """All items of a collection (handles offset pagination), or the first `limit`."""
        path = f"/collections/{collection_id}/items"
        all_items = []
        offset = 0

        while True:
            page_size = ITEMS_PAGE_SIZE
            if limit is not None:
                page_size = min(page_size, limit - len(all_items))
            data = self._request("GET", path, params={"offset": offset, "limit": page_size})
            items = data.get("items", [])
            all_items.extend(CollectionRecord.from_api(item) for item in items)

            if limit is not None and len(all_items) >= limit:
                break

            pagination = data.get("pagination") or {}
            total = pagination.get("total")
            offset += len(items)
            if not items or total is None or offset >= total:
                break

        return all_items

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create_item(self, collection_id: str, field_data: dict) -> dict:
        return self._mutate("POST", f"/collections/{collection_id}/items", {"fieldData": field_data})

    def update_item(self, collection_id: str, item_id: str, field_data: dict) -> dict:
        return self._mutate("PATCH", f"/collections/{collection_id}/items/{item_id}", {"fieldData": field_data})

    def delete_item(self, collection_id: str, item_id: str) -> dict:
        return self._mutate("DELETE", f"/collections/{collection_id}/items/{item_id}")
