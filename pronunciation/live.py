"""Running score while a listening session is open.

The loop re-scores the current (possibly partial) transcript on a fixed
interval and only publishes the overall score. The full result is computed
once, when the session stops.

State machine::

    IDLE --start()--> LISTENING --stop()--> FINALIZING --> IDLE
                          |
                          +--fail()/reset()--> IDLE
"""
from __future__ import annotations

import enum
import logging
import threading
from typing import Callable, Optional

from . import config
from .analyzer import SessionAnalyzer
from .models.result import PronunciationResult

logger = logging.getLogger(__name__)

TranscriptSource = Callable[[], str]


class SessionState(enum.Enum):
    IDLE = "idle"
    LISTENING = "listening"
    FINALIZING = "finalizing"


class TranscriptBuffer:
    """Latest transcript pushed by the speech-to-text side.

    Callable, so it can be handed to LiveAnalysisLoop as its source.
    """

    def __init__(self, text: str = ""):
        self._lock = threading.Lock()
        self._text = text

    def update(self, text: str) -> None:
        if not isinstance(text, str):
            raise TypeError(f"transcript must be a str, got {type(text).__name__}")
        with self._lock:
            self._text = text

    def clear(self) -> None:
        self.update("")

    def __call__(self) -> str:
        with self._lock:
            return self._text


class RepeatingTask:
    """Calls ``callback`` every ``interval`` seconds on a daemon thread.

    Waiting happens on an Event, so cancel() takes effect immediately; it
    does not join, so it is safe to call from inside the callback.
    """

    def __init__(
        self,
        interval: float,
        callback: Callable[[], object],
        on_error: Optional[Callable[[Exception], None]] = None,
        name: str = "live-analysis",
    ):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self.callback = callback
        self.on_error = on_error
        self.name = name
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError(f"RepeatingTask {self.name} already started")
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()

    def cancel(self) -> None:
        self._stopped.set()

    @property
    def active(self) -> bool:
        return (
            self._thread is not None
            and self._thread.is_alive()
            and not self._stopped.is_set()
        )

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            try:
                self.callback()
            except Exception as e:
                logger.exception("Repeating task %s failed", self.name)
                if self.on_error is not None:
                    self.on_error(e)
                return


class LiveAnalysisLoop:
    """Timer-driven running score for one listening session at a time.

    Starting a new session cancels the previous timer first. Every exit
    path (stop, fail, reset) cancels the timer, and a tick that finishes
    after its session ended is discarded.
    """

    def __init__(
        self,
        transcript_source: TranscriptSource,
        analyzer: Optional[SessionAnalyzer] = None,
        interval: Optional[float] = None,
        on_score: Optional[Callable[[int], None]] = None,
    ):
        self.transcript_source = transcript_source
        self.analyzer = analyzer if analyzer is not None else SessionAnalyzer()
        self.interval = interval if interval is not None else config.LIVE_INTERVAL
        self.on_score = on_score

        self._lock = threading.RLock()
        self._generation = 0
        self._task: Optional[RepeatingTask] = None

        self.state = SessionState.IDLE
        self.target: Optional[str] = None
        self.running_score: Optional[int] = None
        self.result: Optional[PronunciationResult] = None
        self.persisted = False
        self.error: Optional[Exception] = None

    @property
    def timer_active(self) -> bool:
        return self._task is not None and self._task.active

    def start(self, target: str) -> None:
        """Open a listening session for ``target``."""
        if not isinstance(target, str):
            raise TypeError(f"target must be a str, got {type(target).__name__}")
        with self._lock:
            self._end_session()
            generation = self._generation
            self.target = target
            self.running_score = None
            self.result = None
            self.persisted = False
            self.error = None
            self.state = SessionState.LISTENING
            self._task = RepeatingTask(
                self.interval,
                lambda: self._tick(generation),
                on_error=lambda e: self._tick_failed(generation, e),
            )
            self._task.start()
        logger.debug("Listening session %d started for %r", generation, target)

    def tick(self) -> Optional[int]:
        """Run one scoring tick now; returns the published score, if any."""
        with self._lock:
            generation = self._generation
        return self._tick(generation)

    def stop(self) -> Optional[PronunciationResult]:
        """End the session and score the final transcript once.

        Returns:
            The full result (persisted through the analyzer; ``persisted``
            records whether that succeeded), or None if
            no session was open or the transcript was blank
        """
        with self._lock:
            if self.state is not SessionState.LISTENING:
                return None
            self._end_session()
            self.state = SessionState.FINALIZING
            try:
                transcript = self.transcript_source()
                if transcript.strip():
                    self.result, self.persisted = self.analyzer.analyze_and_persist(
                        transcript, self.target
                    )
            finally:
                self.state = SessionState.IDLE
            return self.result

    def fail(self, error: Exception) -> None:
        """Abort the session after a transcript-source error."""
        with self._lock:
            self._end_session()
            self.state = SessionState.IDLE
            self.error = error
        logger.warning("Listening session aborted: %s", error)

    def reset(self) -> None:
        with self._lock:
            self._end_session()
            self.state = SessionState.IDLE
            self.target = None
            self.running_score = None
            self.result = None
            self.persisted = False
            self.error = None

    def _end_session(self) -> None:
        # Caller holds the lock. Bumping the generation orphans in-flight ticks.
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self._generation += 1

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation and self.state is SessionState.LISTENING

    def _tick(self, generation: int) -> Optional[int]:
        with self._lock:
            if not self._is_current(generation):
                return None
            transcript = self.transcript_source()
            if not transcript.strip():
                return None
            score = self.analyzer.quick_score(transcript, self.target)
            self.running_score = score
            # Published under the lock so stop() cannot end the session in between
            if self.on_score is not None:
                self.on_score(score)
        return score

    def _tick_failed(self, generation: int, error: Exception) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self.fail(error)
