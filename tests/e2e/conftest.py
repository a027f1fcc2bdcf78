import threading

import pytest
from playwright.sync_api import sync_playwright

from cabinet.config import load_config, merge_options, resolve_public_dir
from cabinet.server import CabinetServer, serve_handler


@pytest.fixture(scope="session")
def playwright_api():
    with sync_playwright() as p:
        yield p


@pytest.fixture
def site(tmp_path):
    """A project root whose serve.json points at a ``public`` folder."""
    public = tmp_path / "public"
    (public / "docs").mkdir(parents=True)
    (public / "index.html").write_text("<h1>cabinet</h1>", encoding="utf-8")
    (public / "app.mjs").write_text("export default 1;", encoding="utf-8")
    (public / "docs" / "guide.txt").write_text("read me", encoding="utf-8")
    (tmp_path / "secret.txt").write_text("outside public", encoding="utf-8")
    (tmp_path / "serve.json").write_text('{"public": "public", "cleanUrls": true}', encoding="utf-8")
    return tmp_path


@pytest.fixture
def start_server(site, playwright_api):
    """Start a live server for ``site`` and return a request context bound to it."""
    started = []

    def start(handler=serve_handler):
        root = str(site)
        config = load_config(root, cwd=root)
        options = merge_options(config, resolve_public_dir(root, config))
        server = CabinetServer(("127.0.0.1", 0), options, handler)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        request = playwright_api.request.new_context(base_url=f"http://127.0.0.1:{server.server_address[1]}")
        started.append((server, thread, request))
        return request

    yield start

    for server, thread, request in started:
        request.dispose()
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)
