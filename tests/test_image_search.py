"""Unsplash illustration lookups and placeholder fallbacks."""

from typing import Any, Dict, List

import pytest
import requests

from attire_app.logging_config import CORRELATION_ID, correlation_context
from tools.image_search import (
    UNSPLASH_SEARCH_URL,
    PlaceholderIllustrator,
    UnsplashImageSearch,
    build_fashion_query,
    placeholder_images,
)


class FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> Any:
        return self.payload


PHOTO = {
    "urls": {"regular": "https://images.example/regular.jpg", "small": "https://images.example/small.jpg"},
    "alt_description": "man in navy blazer",
    "user": {"name": "Ana Lens", "links": {"html": "https://unsplash.com/@ana"}},
}


def test_fashion_query_adds_context_words() -> None:
    assert build_fashion_query("navy blazer with chinos") == "person wearing navy blazer with chinos fashion portrait"
    assert build_fashion_query("relaxed summer outfit") == "relaxed summer outfit fashion portrait"
    assert build_fashion_query("street style portrait") == "street style portrait"


def test_placeholders_truncate_description() -> None:
    description = "Navy blazer over a white oxford shirt with grey wool trousers and brown loafers"
    image = placeholder_images(description)[0]
    assert image.source == "generated"
    assert "600x800" in image.url
    assert "300x400" in image.thumbnail_url
    assert image.description == description
    assert "loafers" not in image.url
    assert "Navy%20blazer" in image.url


def test_missing_key_returns_placeholders_without_network(monkeypatch: pytest.MonkeyPatch) -> None:
    def fail_get(*_args, **_kwargs):
        raise AssertionError("network should not be used")

    monkeypatch.setattr("tools.image_search.requests.get", fail_get)
    images = UnsplashImageSearch(access_key=None).search_outfit_images("black dress", count=2)
    assert len(images) == 2
    assert all(image.source == "generated" for image in images)


def test_search_maps_unsplash_results(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: List[Dict[str, Any]] = []

    def fake_get(url: str, params=None, headers=None, timeout=None):
        calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        return FakeResponse({"results": [PHOTO]})

    monkeypatch.setattr("tools.image_search.requests.get", fake_get)
    images = UnsplashImageSearch(access_key="key-123", timeout_seconds=4).search_outfit_images("navy blazer")

    assert calls[0]["url"] == UNSPLASH_SEARCH_URL
    assert calls[0]["params"] == {
        "query": "person wearing navy blazer fashion portrait",
        "per_page": 1,
        "orientation": "portrait",
    }
    assert calls[0]["headers"] == {"Authorization": "Client-ID key-123"}
    assert calls[0]["timeout"] == 4
    assert images[0].url == PHOTO["urls"]["regular"]
    assert images[0].thumbnail_url == PHOTO["urls"]["small"]
    assert images[0].photographer == "Ana Lens"
    assert images[0].photographer_url == "https://unsplash.com/@ana"
    assert images[0].source == "unsplash"


@pytest.mark.parametrize(
    "response",
    [FakeResponse({}, status_code=401), FakeResponse({"results": []}), FakeResponse({"results": [{"urls": {}}]})],
)
def test_search_failures_fall_back_to_placeholders(monkeypatch: pytest.MonkeyPatch, response: FakeResponse) -> None:
    monkeypatch.setattr("tools.image_search.requests.get", lambda *args, **kwargs: response)
    images = UnsplashImageSearch(access_key="key-123").search_outfit_images("grey suit")
    assert [image.source for image in images] == ["generated"]


def test_connection_errors_fall_back_to_placeholders(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_get(*_args, **_kwargs):
        raise requests.Timeout("slow")

    monkeypatch.setattr("tools.image_search.requests.get", fake_get)
    images = UnsplashImageSearch(access_key="key-123").search_outfit_images("grey suit")
    assert images[0].source == "generated"


def test_one_image_per_description_in_order() -> None:
    descriptions = ["white shirt", "black jeans", "denim jacket", "red scarf", "brown boots"]
    images = PlaceholderIllustrator().get_images_for_descriptions(descriptions)
    assert [image.description for image in images] == descriptions
    assert PlaceholderIllustrator().get_images_for_descriptions([]) == []


def test_lookups_keep_the_callers_correlation_id() -> None:
    seen: List[Any] = []

    class _Recording(PlaceholderIllustrator):
        def search_outfit_images(self, description: str, count: int = 1):
            seen.append(CORRELATION_ID.get())
            return super().search_outfit_images(description, count)

    with correlation_context("req-42"):
        images = _Recording().get_images_for_descriptions(["white shirt", "black jeans", "red scarf"])

    assert len(images) == 3
    assert seen == ["req-42", "req-42", "req-42"]
