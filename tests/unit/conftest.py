from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from print_finder.config import settings


def pytest_collection_modifyitems(items):
    """Automatically mark all tests in this directory as unit tests."""
    current_dir = Path(__file__).parent
    for item in items:
        # Only mark items that are inside this directory
        item_path = Path(item.fspath)
        if current_dir in item_path.parents:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def make_client() -> Callable[..., httpx.AsyncClient]:
    """Build an AsyncClient whose requests are answered by ``handler``.

    Every request seen is appended to ``client.seen_requests``.
    """

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        seen: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
        client.seen_requests = seen
        return client

    return _make


@pytest.fixture
def thingiverse_token(monkeypatch) -> str:
    """Configure a Thingiverse token for the duration of a test."""
    monkeypatch.setattr(settings, "thingiverse_token", "test-token")
    return "test-token"


@pytest.fixture
def printables_payload() -> dict:
    """A trimmed Printables GraphQL search response."""
    return {
        "data": {
            "search": {
                "total": 2,
                "hits": [
                    {
                        "score": 12.5,
                        "object": {
                            "id": "3161",
                            "name": "3DBenchy",
                            "slug": "3dbenchy",
                            "primaryImage": {
                                "url": "https://media.printables.com/media/prints/3161/images/1234567"
                            },
                            "user": {"name": "CreativeTools"},
                        },
                    },
                    {
                        "score": 10.1,
                        "object": {
                            "id": "42",
                            "name": "Benchy Stand",
                            "slug": "benchy-stand",
                            "primaryImage": {
                                "url": "https://media.printables.com/media/prints/42/thumb.png"
                            },
                            "user": {"name": "maker42"},
                        },
                    },
                ],
            }
        }
    }


@pytest.fixture
def thingiverse_payload() -> dict:
    """A trimmed Thingiverse search response."""
    return {
        "total": 2,
        "hits": [
            {
                "id": 763622,
                "name": "#3DBenchy - The jolly 3D printing torture-test",
                "public_url": "https://www.thingiverse.com/thing:763622",
                "thumbnail": "https://cdn.thingiverse.com/renders/benchy_thumb.jpg",
                "creator": {"name": "CreativeTools"},
            },
            {
                "id": 1001,
                "name": "Benchy Boat Trailer",
                "public_url": "https://www.thingiverse.com/thing:1001",
                "thumbnail": "https://cdn.thingiverse.com/renders/trailer_thumb.jpg",
                "creator": {"name": "towing_fan"},
            },
        ],
    }


def makerworld_card(
    title: str | None = "Benchy",
    href: str | None = "/de/models/1001",
    image: str | None = "https://makerworld.bblmw.com/makerworld/model/1001/cover.jpg",
    author: str | None = "bambu_fan",
) -> str:
    """Render one Makerworld search result card."""
    anchor = f'<a href="{href}">{title}</a>' if href is not None else f"<a>{title or ''}</a>"
    img = (
        f'<img src="data:image/gif;base64,R0lGOD" data-src="{image}">'
        if image is not None
        else '<img src="data:image/gif;base64,R0lGOD">'
    )
    author_html = (
        f'<div class="author-name"><a href="/de/@{author}">{author}</a></div>'
        if author is not None
        else ""
    )
    return f"""
    <div class="card-item-hover-box model-item">
      <div class="image-box"><div class="img-box">{img}</div></div>
      <h3 class="model-title">{anchor if title is not None else ""}</h3>
      {author_html}
    </div>
    """


@pytest.fixture
def makerworld_html() -> str:
    """A Makerworld search page with two complete cards and one without an image."""
    cards = [
        makerworld_card(),
        makerworld_card(title="Benchy Keychain", href="/de/models/2002", author="keyring"),
        makerworld_card(title="Broken Card", href="/de/models/3003", image=None),
    ]
    return f"<html><body><div class='search-result'>{''.join(cards)}</div></body></html>"


@pytest.fixture
def card() -> Callable[..., str]:
    """Factory fixture for single Makerworld cards."""
    return makerworld_card
