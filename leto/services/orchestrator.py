"""
Reading state orchestration.

This module provides the StateOrchestrator class, which owns the live reading
state and config, and is the only sanctioned way to change them. Every change
is pushed to the playback and config managers before control returns to the
caller, so nobody observes a new text with stale segmentation.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence

from leto import constants
from leto.config import ReadingConfig
from leto.errors import PreconditionError
from leto.models import ExtractionRequest, ReadingState, ReadingStateSource
from leto.services.base import (
    ConfigManager,
    ConfigManagerFactory,
    PlaybackManager,
    PlaybackManagerFactory,
    SiteInteraction,
)
from leto.services.web import ContentExtractor

logger = logging.getLogger(__name__)


class ReaderLifecycle(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    READY = "ready"


@dataclass
class _Managers:
    playback: PlaybackManager
    config: ConfigManager


class StateOrchestrator:
    """
    Owns the reading state and config and keeps the managers in sync.

    Lifecycle: Uninitialized -> Initialized (state, config and managers set,
    see ``on_initialized``) -> Ready (first render done, see
    ``after_first_render``). Managers only ever see copies of the state and
    config; their progress comes back through ``handle_position_changed``.
    """

    def __init__(
        self,
        site: SiteInteraction,
        playback_factory: PlaybackManagerFactory,
        config_manager_factory: ConfigManagerFactory,
        extractor: Optional[ContentExtractor] = None,
    ):
        self._site = site
        self._playback_factory = playback_factory
        self._config_manager_factory = config_manager_factory
        self._extractor = extractor or ContentExtractor()

        self._state: Optional[ReadingState] = None
        self._config: Optional[ReadingConfig] = None
        self._managers: Optional[_Managers] = None
        self.lifecycle = ReaderLifecycle.UNINITIALIZED

    @property
    def state(self) -> ReadingState:
        """A copy of the current state."""
        return self._require_state().copy()

    @property
    def config(self) -> ReadingConfig:
        """A copy of the current config."""
        return self._require_config().copy()

    def _require_state(self) -> ReadingState:
        if self._state is None:
            raise PreconditionError("State must be initialized")
        return self._state

    def _require_config(self) -> ReadingConfig:
        if self._config is None:
            raise PreconditionError("Config must be initialized")
        return self._config

    def _require_managers(self) -> _Managers:
        if self._managers is None:
            raise PreconditionError("Managers must be initialized")
        return self._managers

    # Lifecycle

    async def on_initialized(self) -> None:
        """Installs the demo state and default config, then builds the managers."""
        if self.lifecycle is not ReaderLifecycle.UNINITIALIZED:
            raise PreconditionError(f"Cannot initialize from {self.lifecycle.value}")

        await self.set_state(ReadingState.get_demo())
        await self.set_config(ReadingConfig.get_default())

        playback = self._playback_factory(
            self._require_state().copy(), self._require_config().copy(), self._site
        )
        self._managers = _Managers(playback, self._build_config_manager())
        self._resync()

        self.lifecycle = ReaderLifecycle.INITIALIZED
        logger.info("Reader initialized.")

    async def after_first_render(self) -> None:
        """Enables interop, loads the saved config and auto-plays the demo."""
        if self.lifecycle is not ReaderLifecycle.INITIALIZED:
            raise PreconditionError(
                f"Cannot become ready from {self.lifecycle.value}"
            )
        state = self._require_state()
        managers = self._require_managers()

        # A bad saved config must fail before interop is switched on
        saved_config = await self._read_saved_config()
        managers.playback.allow_interop()
        if saved_config is not None:
            await self._apply_saved_config(saved_config)

        self.lifecycle = ReaderLifecycle.READY
        logger.info("Reader ready.")

        if state.is_demo():
            managers.playback.start_playback()

    def _build_config_manager(self) -> ConfigManager:
        return self._config_manager_factory(
            self._require_config().copy(), self._site, self._resegment
        )

    async def _read_saved_config(self) -> Optional[ReadingConfig]:
        payload = await self._site.load_saved_config()
        if not payload:
            return None
        return ReadingConfig.from_json(payload)

    async def _apply_saved_config(self, config: ReadingConfig) -> None:
        self._config = config
        self._require_managers().config = self._build_config_manager()
        logger.info("Loaded saved config.")

        await self.set_config(self._config)

    # Resynchronization

    def _resegment(self) -> None:
        state = self._require_state()
        playback = self._require_managers().playback
        playback.bind_state(state.copy())
        playback.setup_segments(state.text)

    def _resync(self) -> None:
        """Pushes the current state to the managers. Must not suspend."""
        if self._managers is None:
            return
        self._resegment()
        self._managers.playback.clamp_position()

    # Mutations

    async def set_state(self, new_state: ReadingState) -> None:
        """Stops playback of the previous state, installs the new one and resyncs."""
        if self._managers is not None:
            self._managers.playback.stop_playback()

        self._state = new_state.copy()
        self._resync()

        await self._site.set_title_field(self._state.title)
        await self._site.set_text_field(self._state.text)
        await self._site.notify_state_changed()

    async def set_config(self, new_config: ReadingConfig) -> None:
        """Installs the config and forwards it to the managers, if any."""
        self._config = new_config.copy()

        if self._managers is not None:
            self._managers.config.update_config(self._config.copy())
            self._managers.playback.update_config(self._config.copy())

        await self._site.notify_state_changed()

    async def handle_new_text(self) -> None:
        playback = self._require_managers().playback
        await self.set_state(ReadingState.get_blank(ReadingStateSource.NEW_BLANK))
        await playback.persist_current_state()

    async def handle_paste_title(self) -> None:
        self._require_managers()
        self._require_state()

        title = await self._site.read_clipboard_text()

        state = self._require_state()
        state.title = title or ""
        await self.set_state(state)

    async def handle_paste_text(self) -> None:
        self._require_managers()
        self._require_state()

        text = await self._site.read_clipboard_text()

        state = self._require_state()
        state.text = text
        await self.set_state(state)

    async def handle_file_upload(self, files: Sequence[Any]) -> None:
        self._require_managers()
        self._require_state()

        imported_text = await self._site.extract_text_from_files(files)

        state = self._require_state()
        state.text = imported_text
        await self.set_state(state)

    async def handle_text_changed(self, text: str) -> None:
        """Applies an edit of the text field."""
        managers = self._require_managers()
        state = self._require_state()

        trimmed = (text or "").strip()
        if not trimmed:
            state.text = constants.DEFAULT_NEW_TEXT
            await self.set_state(state)
        else:
            state.text = trimmed
            self._resegment()

        await managers.playback.persist_current_state()

    async def handle_title_changed(self, title: str) -> None:
        """Applies an edit of the title field and renames the saved record."""
        managers = self._require_managers()
        state = self._require_state()

        old_title = state.title
        state.title = title
        managers.playback.bind_state(state.copy())

        await managers.playback.rename_persisted_state(old_title, title)

    def handle_position_changed(self, position: int) -> int:
        """Records playback progress. Returns the clamped position."""
        state = self._require_state()
        state.position = position
        return state.position

    # Import / export

    async def import_state(self, payload: str, version: Optional[str] = None) -> None:
        state = ReadingState.import_from_serialized(
            payload, ReadingStateSource.JSON_IMPORT, version=version
        )
        await self.set_state(state)

    async def scrape(self, request: ExtractionRequest) -> None:
        state = await ReadingState.scrape_from_web(request, self._extractor)
        await self.set_state(state)

    def export_state(self) -> str:
        return self._require_state().export_to_serialized()
