"""Abstract interfaces for clipboard access and user notifications."""

from typing import Protocol


class Clipboard(Protocol):
    """System clipboard provided by the host."""

    def write_text(self, text: str) -> None:
        """
        Place text on the clipboard.

        Raises:
            ClipboardError: If the clipboard cannot be written
        """
        ...


class Notifier(Protocol):
    """One-shot user notifications (toast, alert, status bar)."""

    def notify(self, message: str, success: bool) -> None:
        """Show a message to the user."""
        ...
