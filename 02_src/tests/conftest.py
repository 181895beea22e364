"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class RecordingSink:
    """Sink that keeps every event it receives."""

    def __init__(self):
        self.events = []
        self.closed = False

    def handle(self, event):
        self.events.append(event)

    async def aclose(self):
        self.closed = True


@pytest.fixture
def sink():
    """Create a recording sink."""
    return RecordingSink()


@pytest.fixture
def telemetry(sink):
    """Create TelemetryService with a log sink and a recording sink."""
    from grid_telemetry.telemetry import LogSink, TelemetryService

    return TelemetryService(sinks=[LogSink(), sink])


@pytest.fixture
def grid():
    """Create the sample 15-row grid (10 rows rendered at the top)."""
    from grid_telemetry.grid import create_sample_grid

    return create_sample_grid()


@pytest.fixture
def small_grid():
    """Create the sample grid with a 5-row viewport."""
    from grid_telemetry.grid import create_sample_grid

    return create_sample_grid(viewport_height=240)


@pytest.fixture
def session(telemetry):
    """Create GridSession with a short scroll debounce."""
    from grid_telemetry.session import GridSession

    return GridSession(telemetry, scroll_delay=0.05)


@pytest_asyncio.fixture
async def app():
    """Create and start an Application."""
    from grid_telemetry.app import Application
    from grid_telemetry.config import TelemetrySettings

    application = Application(settings=TelemetrySettings(scroll_debounce_seconds=0.05))
    await application.start()
    yield application
    await application.stop()


@pytest.fixture(autouse=True)
def reset_sim_instance():
    """Keep the control router's SIM global isolated between tests."""
    from grid_telemetry.api.routes import control

    control.set_sim_instance(None)
    yield
    control.set_sim_instance(None)
