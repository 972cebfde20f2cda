"""Option contracts, the option chain, and the trade blotter."""

from optsim.options.chain import Observer, OptionChain
from optsim.options.contract import (
    Contract,
    InvalidContractType,
    OptionType,
    create_contract,
    payoff,
)
from optsim.options.trades import Trade, TradeBook

__all__ = [
    "Contract",
    "InvalidContractType",
    "Observer",
    "OptionChain",
    "OptionType",
    "Trade",
    "TradeBook",
    "create_contract",
    "payoff",
]
