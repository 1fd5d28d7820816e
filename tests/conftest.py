import os
import time
from threading import Thread

import pytest
import requests
import uvicorn

# Keep demo boards fast under test; must be set before settings are loaded
os.environ.setdefault("DEMO_DELAY_SECONDS", "0.05")

from honorboard.main import app  # noqa: E402


@pytest.fixture(scope="session")
def test_api_base_url():
    """Honor board API under test: API_BASE_URL if set, else a local uvicorn server."""
    external = os.getenv("API_BASE_URL")
    if external:
        base = external.rstrip("/")
        r = requests.get(base + "/health", timeout=3)
        assert r.status_code == 200
        yield base
        return

    port = int(os.getenv("TEST_API_PORT", "8020"))
    host = os.getenv("TEST_API_HOST", "127.0.0.1")
    config = uvicorn.Config(app, host=host, port=port, log_level="warning")
    server = uvicorn.Server(config)

    thread = Thread(target=server.run, daemon=True)
    thread.start()

    base = f"http://{host}:{port}"
    # Wait for server to be ready
    deadline = time.time() + 25
    last_err = None
    while time.time() < deadline:
        try:
            r = requests.get(base + "/health", timeout=1.5)
            if r.status_code == 200:
                break
        except Exception as e:  # pragma: no cover
            last_err = e
            time.sleep(0.2)
    else:
        raise RuntimeError(f"API server did not start: {last_err}")

    yield base

    server.should_exit = True
    thread.join(timeout=3)
