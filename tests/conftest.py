"""Pytest configuration and fixtures."""

from collections.abc import Generator

import numpy as np
import pytest

from optsim.config import reset_config
from optsim.logging_setup import reset_logging
from optsim.options.chain import OptionChain
from optsim.options.contract import Contract, OptionType


@pytest.fixture(autouse=True)
def reset_globals() -> Generator[None, None, None]:
    """Reset global state before each test."""
    reset_config()
    reset_logging()
    yield
    reset_config()
    reset_logging()


@pytest.fixture
def seed() -> int:
    """Provide deterministic seed."""
    return 42


@pytest.fixture
def rng(seed: int) -> np.random.Generator:
    """Seeded numpy generator."""
    return np.random.default_rng(seed)


@pytest.fixture
def call_contract() -> Contract:
    """Call(100, 5, 2024-12-31)."""
    return Contract(OptionType.CALL, strike=100.0, premium=5.0, expiry="2024-12-31")


@pytest.fixture
def put_contract() -> Contract:
    """Put(100, 4, 2024-12-31)."""
    return Contract(OptionType.PUT, strike=100.0, premium=4.0, expiry="2024-12-31")


@pytest.fixture
def chain(seed: int, call_contract: Contract, put_contract: Contract) -> OptionChain:
    """Seeded chain holding the default Call then Put."""
    chain = OptionChain(seed=seed)
    chain.add(call_contract)
    chain.add(put_contract)
    return chain


class RecordingObserver:
    """Observer that counts notifications and logs them to a shared list."""

    def __init__(self, name: str = "obs", log: list | None = None):
        self.name = name
        self.calls = 0
        self.log = log if log is not None else []

    def update(self) -> None:
        self.calls += 1
        self.log.append(self.name)


@pytest.fixture
def recording_observer() -> RecordingObserver:
    """Fresh recording observer."""
    return RecordingObserver()


@pytest.fixture
def observer_factory() -> type[RecordingObserver]:
    """The RecordingObserver class, for tests that need several."""
    return RecordingObserver
