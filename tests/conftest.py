from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Generator

import os
import pytest

import sys


ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Modules fall back to get_settings() when no Settings is passed; keep that
# path usable without a developer's local environment.
os.environ.setdefault("COCKTAIL_API_KEY", "1")

from PIL import Image

from cocktailnet.config import Settings


@pytest.fixture
def settings() -> Generator[Settings, None, None]:
    """Return a fresh Settings instance for each test.

    Tests can freely mutate fields on this object without affecting others.
    """

    yield Settings(
        api_key="1",
        api_base_url="https://api.example.com",
        http_max_workers=4,
        _env_file=None,
    )


@pytest.fixture
def png_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (4, 3), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()
