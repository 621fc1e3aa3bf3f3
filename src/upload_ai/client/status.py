"""Upload progress states and their allowed transitions."""

import logging
from collections.abc import Callable
from enum import Enum

from upload_ai.exceptions import InvalidTransitionError

logger = logging.getLogger(__name__)


class UploadStatus(str, Enum):
    WAITING = "waiting"
    CONVERTING = "converting"
    UPLOADING = "uploading"
    GENERATING = "generating"
    SUCCESS = "success"
    ERROR = "error"


TRANSITIONS: dict[UploadStatus, frozenset[UploadStatus]] = {
    UploadStatus.WAITING: frozenset({UploadStatus.CONVERTING, UploadStatus.ERROR}),
    UploadStatus.CONVERTING: frozenset({UploadStatus.UPLOADING, UploadStatus.ERROR}),
    UploadStatus.UPLOADING: frozenset({UploadStatus.GENERATING, UploadStatus.ERROR}),
    UploadStatus.GENERATING: frozenset({UploadStatus.SUCCESS, UploadStatus.ERROR}),
    UploadStatus.SUCCESS: frozenset({UploadStatus.WAITING}),
    UploadStatus.ERROR: frozenset({UploadStatus.WAITING}),
}

STATUS_MESSAGES = {
    UploadStatus.WAITING: "Upload video",
    UploadStatus.CONVERTING: "Converting...",
    UploadStatus.UPLOADING: "Uploading...",
    UploadStatus.GENERATING: "Transcribing...",
    UploadStatus.SUCCESS: "Success!",
    UploadStatus.ERROR: "An error occurred during the process.",
}

StatusListener = Callable[[UploadStatus], None]


class UploadStateMachine:
    """Tracks the upload chain and rejects any transition not in TRANSITIONS."""

    def __init__(self):
        self._status = UploadStatus.WAITING
        self._listeners: list[StatusListener] = []

    @property
    def status(self) -> UploadStatus:
        return self._status

    @property
    def message(self) -> str:
        return STATUS_MESSAGES[self._status]

    def can_transition(self, target: UploadStatus) -> bool:
        return target in TRANSITIONS[self._status]

    def transition(self, target: UploadStatus) -> None:
        """
        Moves to the target status and notifies listeners.

        Raises:
            InvalidTransitionError: If the move is not allowed from the current status.
        """
        if not self.can_transition(target):
            raise InvalidTransitionError(self._status.value, target.value)

        previous, self._status = self._status, target
        logger.info(
            "Upload status changed",
            extra={"from": previous.value, "to": target.value},
        )
        for listener in list(self._listeners):
            listener(target)

    def fail(self) -> None:
        """Moves to ERROR unless the machine is already there or finished."""
        if self.can_transition(UploadStatus.ERROR):
            self.transition(UploadStatus.ERROR)

    def reset(self) -> None:
        """Manual recovery: returns SUCCESS or ERROR to WAITING."""
        if self._status is not UploadStatus.WAITING:
            self.transition(UploadStatus.WAITING)

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Registers a listener and returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
