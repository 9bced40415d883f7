# core/store/remote.py
import logging
import os
from typing import List, Optional, Tuple

import httpx

from core.errors import NotFoundError, StoreConnectionError
from core.models.book import Book
from .base import BookStore

logger = logging.getLogger(__name__)

class HttpBookStore(BookStore):
    """Book store reached over the catalog HTTP API"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0
    ):
        """Create a store talking to the catalog API.

        Args:
            base_url: API root, defaults to the CATALOG_API_URL environment variable
            client: Preconfigured client (tests pass one with an ASGI transport)
            timeout: Request timeout in seconds when a client is created here
        """
        self.base_url = base_url or os.getenv("CATALOG_API_URL", "http://127.0.0.1:8000")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def _request(self, method: str, path: str, book_id: Optional[int] = None, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            logger.error("Catalog API unreachable at %s: %s", self.base_url, e)
            raise StoreConnectionError(f"Cannot reach catalog API at {self.base_url}") from e

        if response.status_code == 404 and book_id is not None:
            raise NotFoundError(book_id)
        response.raise_for_status()
        return response

    @staticmethod
    def _payload(book: Book) -> dict:
        return book.model_dump(mode="json", by_alias=True)

    async def add_book(self, book: Book) -> int:
        response = await self._request("POST", "/books", json=self._payload(book))
        return int(response.json()["id"])

    async def get_book(self, book_id: int) -> Book:
        response = await self._request("GET", f"/books/{book_id}", book_id=book_id)
        return Book.model_validate(response.json())

    async def get_all_books(self) -> List[Tuple[int, Book]]:
        response = await self._request("GET", "/books")
        return [
            (int(item["id"]), Book.model_validate(item["book"]))
            for item in response.json()
        ]

    async def update_book(self, book_id: int, book: Book) -> None:
        await self._request("PUT", f"/books/{book_id}", book_id=book_id, json=self._payload(book))

    async def delete_book(self, book_id: int) -> None:
        await self._request("DELETE", f"/books/{book_id}", book_id=book_id)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
