"""Trade blotter for entered contracts.

Quantities entered at the console are kept here, separate from the
option chain; the chain only ever sees the contract itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import pandas as pd

from optsim.logging_setup import get_logger
from optsim.options.contract import Contract

logger = get_logger("options.trades")

BLOTTER_COLUMNS = ["option_type", "strike", "premium", "expiry", "quantity"]


@dataclass
class Trade:
    """A contract held in some quantity."""

    contract: Contract
    quantity: int

    def payoff(self, market_price: float) -> float:
        """Quantity-weighted payoff at ``market_price``."""
        return self.contract.payoff(market_price) * self.quantity


@dataclass
class TradeBook:
    """Ordered list of trades."""

    trades: List[Trade] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.trades)

    def record(self, trade: Trade) -> None:
        """Append a trade."""
        self.trades.append(trade)
        logger.info(
            "Recorded trade: %s x %d", trade.contract.describe(), trade.quantity
        )

    def to_frame(self) -> pd.DataFrame:
        """Blotter as a DataFrame, one row per trade in recording order."""
        rows = [
            {
                "option_type": t.contract.option_type.value,
                "strike": t.contract.strike,
                "premium": t.contract.premium,
                "expiry": t.contract.expiry,
                "quantity": t.quantity,
            }
            for t in self.trades
        ]
        return pd.DataFrame(rows, columns=BLOTTER_COLUMNS)

    def evaluate(self, market_price: float) -> pd.DataFrame:
        """Blotter with per-unit and total payoff at ``market_price``.

        Args:
            market_price: Underlying price to evaluate at.

        Returns:
            DataFrame with blotter columns plus ``payoff`` and ``total_payoff``.
        """
        df = self.to_frame()
        df["payoff"] = [t.contract.payoff(market_price) for t in self.trades]
        df["total_payoff"] = [t.payoff(market_price) for t in self.trades]
        return df

    def total_payoff(self, market_price: float) -> float:
        """Sum of quantity-weighted payoffs."""
        return float(sum(t.payoff(market_price) for t in self.trades))
