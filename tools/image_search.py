"""Outfit illustration lookups backed by the Unsplash search API."""

from __future__ import annotations

import contextvars
import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence
from urllib.parse import quote

import requests
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from attire_app.logging_config import get_logger, log_event
from models.recommendation import OutfitImage


LOGGER = get_logger(__name__)

UNSPLASH_SEARCH_URL = "https://api.unsplash.com/search/photos"
PLACEHOLDER_URL = "https://via.placeholder.com/{size}/2c3e50/ffffff?text={text}"
_QUERY_MARKERS = ("outfit", "fashion", "wearing", "style")
MAX_WORKERS = 4


class _PhotoUrls(BaseModel):
    regular: str
    small: str


class _PhotoUserLinks(BaseModel):
    html: Optional[str] = None


class _PhotoUser(BaseModel):
    name: Optional[str] = None
    links: _PhotoUserLinks = _PhotoUserLinks()


class _Photo(BaseModel):
    urls: _PhotoUrls
    alt_description: Optional[str] = None
    user: _PhotoUser = _PhotoUser()


class _SearchResponse(BaseModel):
    results: List[_Photo] = []


def build_fashion_query(description: str) -> str:
    """Turn an outfit description into a photo search query."""

    lowered = description.lower()
    query = description
    if not any(marker in lowered for marker in _QUERY_MARKERS):
        query = f"person wearing {description}"
    if "portrait" not in lowered:
        query += " fashion portrait"
    return query


def placeholder_images(description: str, count: int = 1) -> List[OutfitImage]:
    text = quote(description[:50], safe="")
    return [
        OutfitImage(
            url=PLACEHOLDER_URL.format(size="600x800", text=text),
            thumbnail_url=PLACEHOLDER_URL.format(size="300x400", text=text),
            description=description,
            source="generated",
        )
        for _ in range(count)
    ]


class ImageIllustrator(ABC):
    """Attaches representative photos to outfit descriptions."""

    @abstractmethod
    def search_outfit_images(self, description: str, count: int = 1) -> List[OutfitImage]:
        """Return up to ``count`` images for one description without raising."""

    def get_images_for_descriptions(self, descriptions: Sequence[str]) -> List[OutfitImage]:
        """Look up one image per description concurrently, preserving order.

        Each lookup runs in a copy of the caller's context so worker log lines
        keep the request's correlation id.
        """

        if not descriptions:
            return []
        workers = min(MAX_WORKERS, len(descriptions))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(contextvars.copy_context().run, self.search_outfit_images, text, 1)
                for text in descriptions
            ]
            batches = [future.result() for future in futures]
        return [images[0] for images in batches if images]


class UnsplashImageSearch(ImageIllustrator):
    """Unsplash photo search that degrades to placeholder images."""

    def __init__(
        self,
        access_key: str | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self.access_key = access_key
        self.timeout_seconds = timeout_seconds
        if not access_key:
            LOGGER.warning("Unsplash access key not set; outfit images will use placeholders")

    def search_outfit_images(self, description: str, count: int = 1) -> List[OutfitImage]:
        if not self.access_key:
            return placeholder_images(description, count)

        query = build_fashion_query(description)
        try:
            response = requests.get(
                UNSPLASH_SEARCH_URL,
                params={"query": query, "per_page": count, "orientation": "portrait"},
                headers={"Authorization": f"Client-ID {self.access_key}"},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            parsed = _SearchResponse.model_validate(response.json())
        except (requests.RequestException, ValueError, SchemaValidationError) as exc:
            log_event(LOGGER, logging.WARNING, "image_search_failed", error=type(exc).__name__)
            return placeholder_images(description, count)

        if not parsed.results:
            log_event(LOGGER, logging.INFO, "image_search_empty", results=0)
            return placeholder_images(description, count)

        return [
            OutfitImage(
                url=photo.urls.regular,
                thumbnail_url=photo.urls.small,
                description=photo.alt_description or description,
                photographer=photo.user.name,
                photographer_url=photo.user.links.html,
                source="unsplash",
            )
            for photo in parsed.results[:count]
        ]


class PlaceholderIllustrator(ImageIllustrator):
    """Offline illustrator returning generated placeholders only."""

    def search_outfit_images(self, description: str, count: int = 1) -> List[OutfitImage]:
        return placeholder_images(description, count)


__all__ = [
    "ImageIllustrator",
    "UnsplashImageSearch",
    "PlaceholderIllustrator",
    "build_fashion_query",
    "placeholder_images",
]
