import copy

import pytest
import requests

from champion_gallery.config import Settings

AHRI = {
    "id": "Ahri",
    "name": "Ahri",
    "title": "the Nine-Tailed Fox",
    "blurb": "Innately connected to the latent power of Runeterra...",
    "image": {"full": "Ahri.png", "sprite": "champion0.png"},
    "info": {"attack": 3, "defense": 4, "magic": 8, "difficulty": 5},
    "tags": ["Mage", "Assassin"],
}

LUX = {
    "id": "Lux",
    "name": "Lux",
    "title": "the Lady of Luminosity",
    "blurb": "Luxanna Crownguard hails from Demacia...",
    "image": {"full": "Lux.png"},
    "info": {"attack": 2, "defense": 4, "magic": 9, "difficulty": 5},
    "tags": ["Mage", "Support"],
}


def make_payload(*records):
    return {"type": "champion", "data": {r["id"]: copy.deepcopy(r) for r in records}}


class FakeResponse:
    def __init__(self, payload=None, status_code=200, body_error=None):
        self.payload = payload
        self.status_code = status_code
        self.body_error = body_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self.body_error is not None:
            raise self.body_error
        return self.payload


class FakeSession:
    """Stands in for ``requests`` and records every GET."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def settings():
    return Settings(
        endpoint="https://cdn.test/data/champion.json",
        thumbnail_base="https://cdn.test/img/champion/",
        portrait_base="https://cdn.test/img/champion/loading/",
        portrait_suffix="_0.jpg",
    )


@pytest.fixture
def payload():
    return make_payload(AHRI, LUX)


@pytest.fixture
def session(payload):
    return FakeSession(FakeResponse(payload))
