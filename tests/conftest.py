import threading

import pytest

from fakes import FakeResponse


@pytest.fixture
def hang():
    """A callable response that blocks until the test finishes."""
    release = threading.Event()

    def _hang():
        release.wait(10)
        return FakeResponse({})

    yield _hang
    release.set()
