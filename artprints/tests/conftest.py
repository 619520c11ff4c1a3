import os
from datetime import datetime, timedelta, timezone

import pytest

# Keep the test run independent from the developer's environment
os.environ.setdefault("ARTPRINTS_LOGGING_VERBOSITY_LEVEL", "DEBUG")
os.environ.pop("ARTPRINTS_CLOUDINARY_CLOUD_NAME", None)


def make_artwork(index: int, **overrides) -> dict:
    """Artwork payload as sent by the marketplace API."""
    artwork = {
        "id": f"art-{index}",
        "title": f"Artwork {index}",
        "description": f"Description of artwork {index}",
        "imageUrl": f"https://images.example.com/art-{index}.jpg",
        "artistID": "artist-1",
        "createdAt": "2024-05-01T10:00:00Z",
    }
    artwork.update(overrides)
    return artwork


def make_page(start: int, count: int) -> list[dict]:
    return [make_artwork(i) for i in range(start, start + count)]


@pytest.fixture
def artwork_page():
    return make_page


@pytest.fixture
def signed_in_store():
    """``local-store`` content of a signed-in user."""
    return {
        "logged_in": True,
        "email": "artist@example.com",
        "user_id": "uid-1",
        "id_token": "id-token",
        "refresh_token": "refresh-token",
        "expire_datetime": (datetime.now(timezone.utc) + timedelta(hours=1)).isoformat(),
        "session_cookie": "session-cookie",
    }


@pytest.fixture
def artwork_payload():
    return make_artwork
