"""Application bootstrap and lifecycle management."""

from typing import Callable, Protocol

from .config import TelemetrySettings, load_settings
from .grid import InMemoryGrid, create_sample_grid
from .logging_config import get_logger
from .session import GridSession
from .telemetry import HttpSink, ITelemetrySink, LogSink, TelemetryService

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Reset telemetry and grid interaction state between runs."""
        ...

    @property
    def telemetry(self) -> TelemetryService:
        ...

    @property
    def session(self) -> GridSession:
        ...

    @property
    def grid(self) -> InMemoryGrid:
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        settings: TelemetrySettings | None = None,
        grid_factory: Callable[[], InMemoryGrid] = create_sample_grid,
    ):
        self._settings = settings or load_settings()
        self._grid_factory = grid_factory

        # Components (will be initialized in start())
        self._telemetry: TelemetryService | None = None
        self._session: GridSession | None = None
        self._grid: InMemoryGrid | None = None

    @property
    def settings(self) -> TelemetrySettings:
        return self._settings

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. TelemetryService (no dependencies)
        sinks: list[ITelemetrySink] = [LogSink()]
        if self._settings.endpoint:
            sinks.append(HttpSink(self._settings.endpoint))
            logger.info("Forwarding telemetry to %s", self._settings.endpoint)
        self._telemetry = TelemetryService(
            capacity=self._settings.buffer_capacity, sinks=sinks
        )

        # 2. GridSession (depends on TelemetryService)
        self._session = GridSession(
            self._telemetry,
            scroll_delay=self._settings.scroll_debounce_seconds,
        )

        # 3. Grid, attached once ready
        self._grid = self._grid_factory()
        self._session.attach(self._grid)
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._session is not None:
            self._session.close()
        if self._telemetry is not None:
            await self._telemetry.aclose()
            logger.info("Telemetry closed")

    async def reset(self) -> None:
        """Reset telemetry and grid interaction state between runs."""
        grid = self.grid
        session = self.session

        grid.deselect_all()
        grid.set_filter_model(None)
        grid.apply_sort([])
        grid.scroll_to(top=0, left=0)
        if session.scroll_tracker:
            session.scroll_tracker.cancel()

        session.clear_telemetry()
        logger.info("Reset complete")

    @property
    def telemetry(self) -> TelemetryService:
        """Get telemetry service instance."""
        if self._telemetry is None:
            raise RuntimeError("Application not started")
        return self._telemetry

    @property
    def session(self) -> GridSession:
        """Get grid session instance."""
        if self._session is None:
            raise RuntimeError("Application not started")
        return self._session

    @property
    def grid(self) -> InMemoryGrid:
        """Get grid instance."""
        if self._grid is None:
            raise RuntimeError("Application not started")
        return self._grid
