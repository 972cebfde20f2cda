"""Option chain: ordered contracts with simulated premium drift.

The chain owns its random generator and a table of observers keyed by
subscription handle. Every premium update ends with exactly one
synchronous notification round.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Protocol, Tuple

import numpy as np

from optsim.logging_setup import fields, get_logger
from optsim.options.contract import Contract

logger = get_logger("options.chain")

DEFAULT_DRIFT_MIN_PCT = -5
DEFAULT_DRIFT_MAX_PCT = 4


class Observer(Protocol):
    """Anything that wants to hear about price updates."""

    def update(self) -> None: ...


class OptionChain:
    """Ordered collection of contracts plus observer notification.

    Contracts are kept in insertion order and never removed. Premium
    updates replace each entry with a drifted copy.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        drift_min_pct: int = DEFAULT_DRIFT_MIN_PCT,
        drift_max_pct: int = DEFAULT_DRIFT_MAX_PCT,
    ):
        """Initialize an empty chain.

        Args:
            seed: Seed for a fresh generator (ignored if ``rng`` is given).
            rng: Explicit generator to draw drift from.
            drift_min_pct: Lowest integer percent drift per update.
            drift_max_pct: Highest integer percent drift per update.
        """
        if drift_min_pct > drift_max_pct:
            raise ValueError(
                f"drift_min_pct ({drift_min_pct}) > drift_max_pct ({drift_max_pct})"
            )
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.drift_min_pct = drift_min_pct
        self.drift_max_pct = drift_max_pct

        self._contracts: List[Contract] = []
        self._observers: Dict[int, Observer] = {}
        self._next_handle = 0

    def __len__(self) -> int:
        return len(self._contracts)

    def __iter__(self) -> Iterator[Contract]:
        return iter(tuple(self._contracts))

    @property
    def contracts(self) -> Tuple[Contract, ...]:
        """Snapshot of the contracts in insertion order."""
        return tuple(self._contracts)

    def add(self, contract: Contract) -> None:
        """Append a contract."""
        self._contracts.append(contract)
        logger.info("Added %s (chain size %d)", contract.describe(), len(self._contracts))

    def first_quote(self) -> Optional[Contract]:
        """The first contract in insertion order, or None if empty."""
        if not self._contracts:
            return None
        return self._contracts[0]

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def register_observer(self, observer: Observer) -> int:
        """Subscribe an observer.

        Returns:
            Handle to pass to ``unregister_observer``.
        """
        handle = self._next_handle
        self._next_handle += 1
        self._observers[handle] = observer
        logger.debug("Registered observer %d: %r", handle, observer)
        return handle

    def unregister_observer(self, handle: int) -> bool:
        """Drop a subscription. Returns False if the handle is unknown."""
        removed = self._observers.pop(handle, None)
        return removed is not None

    def notify_observers(self) -> None:
        """Call ``update()`` on every observer in registration order."""
        for observer in list(self._observers.values()):
            observer.update()

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def _draw_drift_pct(self) -> int:
        # integers() excludes the upper bound
        return int(self.rng.integers(self.drift_min_pct, self.drift_max_pct + 1))

    def update_all_premiums(self) -> None:
        """Drift every premium by a random whole percent, then notify."""
        for i, contract in enumerate(self._contracts):
            drift_pct = self._draw_drift_pct()
            new_premium = contract.premium * (1.0 + drift_pct / 100.0)
            self._contracts[i] = contract.with_premium(new_premium)
            logger.debug(
                "Premium %d: %.4f -> %.4f (%+d%%)",
                i,
                contract.premium,
                new_premium,
                drift_pct,
                extra=fields(
                    index=i,
                    option_type=contract.option_type.value,
                    old_premium=contract.premium,
                    new_premium=new_premium,
                    drift_pct=drift_pct,
                ),
            )

        self.notify_observers()
