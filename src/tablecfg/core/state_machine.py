"""Simple phase state machine for the bootstrap flow."""

from __future__ import annotations

from enum import Enum, auto
import logging

logger = logging.getLogger(__name__)


class BootstrapState(Enum):
    IDLE = auto()
    PROVISIONING = auto()
    LOADING = auto()
    READY = auto()
    FAILED = auto()


class BootstrapEvent(Enum):
    START = auto()
    TABLE_READY = auto()
    SNAPSHOT_LOADED = auto()
    ERROR = auto()
    RESET = auto()


_TRANSITIONS = {
    BootstrapState.IDLE: {
        BootstrapEvent.START: BootstrapState.PROVISIONING,
    },
    BootstrapState.PROVISIONING: {
        BootstrapEvent.TABLE_READY: BootstrapState.LOADING,
        BootstrapEvent.ERROR: BootstrapState.FAILED,
    },
    BootstrapState.LOADING: {
        BootstrapEvent.SNAPSHOT_LOADED: BootstrapState.READY,
        BootstrapEvent.ERROR: BootstrapState.FAILED,
    },
    BootstrapState.READY: {
        BootstrapEvent.RESET: BootstrapState.IDLE,
    },
    BootstrapState.FAILED: {
        BootstrapEvent.RESET: BootstrapState.IDLE,
    },
}


class BootstrapStateMachine:
    """Tracks the phase of one bootstrap run."""

    def __init__(self):
        self.state = BootstrapState.IDLE

    @property
    def finished(self) -> bool:
        return self.state in (BootstrapState.READY, BootstrapState.FAILED)

    def allows(self, event: BootstrapEvent) -> bool:
        return event in _TRANSITIONS[self.state]

    def transition(self, event: BootstrapEvent) -> bool:
        """Apply ``event``; returns False and keeps the state if it is not allowed."""
        if not self.allows(event):
            logger.warning("Ignoring %s while %s", event.name, self.state.name)
            return False
        self.state = _TRANSITIONS[self.state][event]
        return True
