import pytest

from app.core.initializer import ApplicationInitializer, ComponentInitializer
from app.core.startup import AppStartupService


class RecordingInitializer(ComponentInitializer):
    def __init__(self, name, events, fail=False):
        self._name = name
        self.events = events
        self.fail = fail

    @property
    def name(self) -> str:
        return self._name

    async def initialize(self) -> None:
        if self.fail:
            raise RuntimeError(f"{self._name} unavailable")
        self.events.append(f"init:{self._name}")

    async def cleanup(self) -> None:
        self.events.append(f"cleanup:{self._name}")


async def test_cleanup_runs_in_reverse_order():
    events = []
    initializer = ApplicationInitializer()
    initializer.register_initializer(RecordingInitializer("db", events))
    initializer.register_initializer(RecordingInitializer("indexes", events))

    await initializer.initialize_all()
    assert initializer.initialized_components == ["db", "indexes"]

    await initializer.cleanup_all()
    assert events == ["init:db", "init:indexes", "cleanup:indexes", "cleanup:db"]
    assert initializer.initialized_components == []


async def test_failed_initialization_rolls_back():
    events = []
    initializer = ApplicationInitializer()
    initializer.register_initializer(RecordingInitializer("db", events))
    initializer.register_initializer(RecordingInitializer("indexes", events, fail=True))

    with pytest.raises(RuntimeError):
        await initializer.initialize_all()

    assert events == ["init:db", "cleanup:db"]
    assert initializer.initialized_components == []


async def test_startup_service_drives_given_initializers():
    events = []
    service = AppStartupService(initializers=[RecordingInitializer("db", events)])

    await service.initialize_application()
    await service.shutdown_application()

    assert events == ["init:db", "cleanup:db"]
