"""
Contracts for the collaborators driven by the state orchestrator.

The playback engine, the configuration editor and the hosting site (clipboard,
file picker, editable fields, change notifications) live outside this package.
The orchestrator only talks to them through these protocols.
"""

from typing import Any, Callable, Optional, Protocol, Sequence

from leto.config import ReadingConfig
from leto.models import ReadingState


class PlaybackManager(Protocol):
    """Segments the text and advances the reading position."""

    def bind_state(self, state: ReadingState) -> None:
        """Receives a fresh snapshot of the current state."""

    def update_config(self, config: ReadingConfig) -> None:
        """Receives a fresh copy of the current config."""

    def allow_interop(self) -> None:
        """Called once the page has rendered and site calls are possible."""

    def setup_segments(self, text: str) -> None:
        """Re-derives the segmentation of the text."""

    def clamp_position(self) -> None:
        """Keeps the playback position inside the current segmentation."""

    def start_playback(self) -> None: ...

    def stop_playback(self) -> None: ...

    async def persist_current_state(self) -> None: ...

    async def rename_persisted_state(self, old_title: str, new_title: str) -> None: ...


class ConfigManager(Protocol):
    """Backs the configuration UI."""

    def update_config(self, config: ReadingConfig) -> None: ...


class SiteInteraction(Protocol):
    """Calls into the hosting page."""

    async def read_clipboard_text(self) -> str: ...

    async def extract_text_from_files(self, files: Sequence[Any]) -> str: ...

    async def notify_state_changed(self) -> None: ...

    async def set_title_field(self, title: str) -> None: ...

    async def set_text_field(self, text: str) -> None: ...

    async def load_saved_config(self) -> Optional[str]:
        """Returns the stored config JSON, or None if nothing was saved."""


PlaybackManagerFactory = Callable[
    [ReadingState, ReadingConfig, SiteInteraction], PlaybackManager
]
ConfigManagerFactory = Callable[
    [ReadingConfig, SiteInteraction, Callable[[], None]], ConfigManager
]
