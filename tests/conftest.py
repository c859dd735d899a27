"""Shared test fixtures for the DS log viewer."""

from pathlib import Path

import pytest

from ds_log_viewer.core.document_view import DocumentView
from ds_log_viewer.models.addon import AddonInfo, AddonRegistry
from ds_log_viewer.models.document import LogDocument
from ds_log_viewer.utils.async_helpers import ClipboardError

# Get the fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"
LOGS_DIR = FIXTURES_DIR / "logs"


class FakeResolver:
    """Icon resolver that answers from a script of results.

    Each call pops the next scripted result for the id; an Exception
    instance is raised, anything else is returned. Once the script runs out
    the fallback is used.
    """

    def __init__(self, fallback: str | Exception = "") -> None:
        self.fallback = fallback
        self.scripts: dict[str, list[str | Exception]] = {}
        self.calls: list[str] = []

    def script(self, reference_id: str, *results: str | Exception) -> None:
        self.scripts[reference_id] = list(results)

    async def fetch_icon_url(self, reference_id: str) -> str:
        self.calls.append(reference_id)
        script = self.scripts.get(reference_id)
        result = script.pop(0) if script else self.fallback
        if isinstance(result, Exception):
            raise result
        return result


class FakeClipboard:
    """Clipboard that records writes or fails on demand."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.contents: list[str] = []

    def write_text(self, text: str) -> None:
        if self.error is not None:
            raise self.error
        self.contents.append(text)


class FakeNotifier:
    """Notifier that records (message, success) pairs."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, bool]] = []

    def notify(self, message: str, success: bool) -> None:
        self.messages.append((message, success))


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def client_log_text() -> str:
    """Load a client log with two mods and two Lua errors."""
    return (LOGS_DIR / "client_log.txt").read_text()


@pytest.fixture
def client_log(client_log_text: str) -> LogDocument:
    """Return the client log as a document."""
    return LogDocument.from_text(client_log_text)


@pytest.fixture
def scenario_document() -> LogDocument:
    """Return a short log with one engine frame and one add-on frame."""
    return LogDocument(
        [
            "[00:00:01]: start",
            "LUA ERROR stack traceback:",
            "scripts/x.lua:12 in (method) f",
            "../mods/coolmod/main.lua:3 in",
            "[00:00:02]: next",
        ]
    )


@pytest.fixture
def workshop_document() -> LogDocument:
    """Return a short log whose add-on frame comes from a workshop mod."""
    return LogDocument(
        [
            "[0:0:0]: start",
            "LUA ERROR stack traceback:",
            "scripts/main.lua:10 in (...)",
            "../mods/workshop-123456789/modmain.lua:5",
            "[0:0:1]: end",
        ]
    )


@pytest.fixture
def cool_registry() -> AddonRegistry:
    """Return a registry that knows the add-on in ``scenario_document``."""
    return AddonRegistry([AddonInfo("coolmod", "Cool Mod")])


@pytest.fixture
def resolver() -> FakeResolver:
    """Return a resolver that answers 'not known yet' by default."""
    return FakeResolver()


@pytest.fixture
def clipboard() -> FakeClipboard:
    """Return a working clipboard."""
    return FakeClipboard()


@pytest.fixture
def failing_clipboard() -> FakeClipboard:
    """Return a clipboard whose writes always fail."""
    return FakeClipboard(error=ClipboardError("clipboard unavailable"))


@pytest.fixture
def notifier() -> FakeNotifier:
    """Return a recording notifier."""
    return FakeNotifier()


@pytest.fixture
def client_view(client_log: LogDocument) -> DocumentView:
    """Return a headless view over the client log."""
    return DocumentView(client_log)
