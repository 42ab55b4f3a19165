"""
Live Preview - Recompiles the game as the player types.

The editor calls ``on_change`` on every keystroke and ``check_pending`` on
every animation tick. A Debouncer keeps rapid edits from recompiling more
than once per delay window, and the last valid game is kept so there is
always something to show while the player is mid-edit.

Everything here is synchronous: each compile finishes before the call
returns, and nothing runs in the background.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, Literal, Union

from pydantic import BaseModel, Field

from gamespeak.config import get_debounce_ms
from gamespeak.engine.scaffolding import ScaffoldingEngine
from gamespeak.engine.validator import GameValidator, get_validator
from gamespeak.models.errors import YamlError
from gamespeak.models.game import AnyGameDefinition
from gamespeak.models.level import SchemaLevel
from gamespeak.models.scaffold import ScaffoldedError

logger = logging.getLogger(__name__)

MIN_DEBOUNCE_MS = 50
MAX_DEBOUNCE_MS = 1000


def clamp_delay(delay_ms: int) -> int:
    """Keep a debounce delay inside [MIN_DEBOUNCE_MS, MAX_DEBOUNCE_MS]"""
    clamped = max(MIN_DEBOUNCE_MS, min(MAX_DEBOUNCE_MS, delay_ms))
    if clamped != delay_ms:
        logger.warning(f"Debounce delay {delay_ms}ms clamped to {clamped}ms")
    return clamped


class Debouncer:
    """Throttles a stream of triggers to one execution per delay window.

    ``schedule()`` says whether to run now; a refused call is remembered as
    pending and released by ``check_pending()`` once the delay has passed.

    Args:
        delay_ms: Delay in milliseconds, clamped to [50, 1000]. Defaults to
            GAMESPEAK_DEBOUNCE_MS or 150.
        clock: Returns the current time in seconds (default time.monotonic)
    """

    def __init__(
        self,
        delay_ms: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._delay_ms = clamp_delay(get_debounce_ms() if delay_ms is None else delay_ms)
        self._clock = clock
        self._last_run: float | None = None
        self._pending = False

    @property
    def delay(self) -> int:
        """Delay in milliseconds"""
        return self._delay_ms

    @property
    def is_pending(self) -> bool:
        return self._pending

    def set_delay(self, delay_ms: int) -> None:
        self._delay_ms = clamp_delay(delay_ms)

    def _elapsed_ms(self, now: float) -> float:
        assert self._last_run is not None
        return (now - self._last_run) * 1000.0

    def schedule(self) -> bool:
        """Returns True if the caller should run now, else marks a pending run"""
        now = self._clock()
        if self._last_run is not None and self._elapsed_ms(now) < self._delay_ms:
            self._pending = True
            return False

        self._last_run = now
        self._pending = False
        return True

    def check_pending(self) -> bool:
        """Returns True once when a pending run's delay has passed"""
        if not self._pending or self._last_run is None:
            return False

        now = self._clock()
        if self._elapsed_ms(now) >= self._delay_ms:
            self._last_run = now
            self._pending = False
            return True
        return False

    def reset(self) -> None:
        """Forget the last run and any pending one"""
        self._last_run = None
        self._pending = False


# =============================================================================
# Preview results
# =============================================================================


class PreviewSuccess(BaseModel):
    """The text compiled; ``game`` is ready to render"""
    status: Literal["success"] = "success"
    game: AnyGameDefinition
    compile_time_ms: float


class PreviewError(BaseModel):
    """The text did not compile"""
    status: Literal["error"] = "error"
    errors: list[YamlError] = Field(default_factory=list)


class PreviewDebounced(BaseModel):
    """Skipped because the last compile was too recent"""
    status: Literal["debounced"] = "debounced"


PreviewResult = Union[PreviewSuccess, PreviewError, PreviewDebounced]


class PreviewStatus(str, Enum):
    """Preview state for the editor's status light"""

    READY = "ready"
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


class PreviewStats(BaseModel):
    total_compilations: int
    successful_compilations: int
    success_rate: float
    avg_compile_time_ms: float | None = None


class LivePreview:
    """Edit-to-game loop for one editor session.

    Example:
        >>> preview = LivePreview()
        >>> result = preview.on_change("character: bunny")
        >>> result.status
        'success'
        >>> preview.on_change("character: cat").status  # right away
        'debounced'
    """

    def __init__(
        self,
        debounce_ms: int | None = None,
        validator: GameValidator | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.debouncer = Debouncer(debounce_ms, clock=clock)
        self.validator = validator or get_validator()

        self.last_valid_game: AnyGameDefinition | None = None
        self.last_errors: list[YamlError] = []
        self._last_level: SchemaLevel = SchemaLevel.LEVEL1
        self._last_result: PreviewResult | None = None

        self.compilation_count = 0
        self.success_count = 0
        self._total_compile_ms = 0.0

    def on_change(self, text: str) -> PreviewResult:
        """Handle an edit: compile now, or report that it was debounced"""
        if not self.debouncer.schedule():
            return PreviewDebounced()
        return self._compile(text)

    # Name used by editor integrations
    on_yaml_change = on_change

    def compile_now(self, text: str) -> PreviewResult:
        """Compile immediately, e.g. on save or run"""
        self.debouncer.reset()
        return self._compile(text)

    def check_pending(self, text: str) -> PreviewResult | None:
        """Compile a held-back edit once its delay has passed"""
        if self.debouncer.check_pending():
            return self._compile(text)
        return None

    def _compile(self, text: str) -> PreviewResult:
        start = time.perf_counter()
        self.compilation_count += 1
        result = self.validator.compile(text)
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        self._total_compile_ms += elapsed_ms
        self._last_level = result.level

        if result.valid:
            self.last_valid_game = result.game
            self.last_errors = []
            self.success_count += 1
            outcome: PreviewResult = PreviewSuccess(game=result.game, compile_time_ms=elapsed_ms)
        else:
            self.last_errors = [result.error]
            outcome = PreviewError(errors=list(self.last_errors))

        logger.debug(
            f"Compiled {result.level.label} in {elapsed_ms:.2f}ms "
            f"({'ok' if result.valid else result.error.kind})"
        )
        self._last_result = outcome
        return outcome

    def scaffold_last_error(self, text: str) -> ScaffoldedError | None:
        """Explain the stored error with a scaffold, if there is one"""
        if not self.last_errors:
            return None
        engine = ScaffoldingEngine(self._last_level)
        return engine.scaffold(text, self.last_errors[0])

    @property
    def has_pending(self) -> bool:
        return self.debouncer.is_pending

    @property
    def debounce_delay(self) -> int:
        return self.debouncer.delay

    def set_debounce_delay(self, delay_ms: int) -> None:
        self.debouncer.set_delay(delay_ms)

    @property
    def success_rate(self) -> float:
        if self.compilation_count == 0:
            return 1.0
        return self.success_count / self.compilation_count

    @property
    def status(self) -> PreviewStatus:
        if self.debouncer.is_pending:
            return PreviewStatus.PENDING
        if isinstance(self._last_result, PreviewSuccess):
            return PreviewStatus.SUCCESS
        if isinstance(self._last_result, PreviewError):
            return PreviewStatus.ERROR
        return PreviewStatus.READY

    def stats(self) -> PreviewStats:
        average = None
        if self.compilation_count:
            average = self._total_compile_ms / self.compilation_count
        return PreviewStats(
            total_compilations=self.compilation_count,
            successful_compilations=self.success_count,
            success_rate=self.success_rate,
            avg_compile_time_ms=average,
        )

    def reset(self) -> None:
        """Start the session over"""
        self.debouncer.reset()
        self.last_valid_game = None
        self.last_errors = []
        self._last_level = SchemaLevel.LEVEL1
        self._last_result = None
        self.compilation_count = 0
        self.success_count = 0
        self._total_compile_ms = 0.0
