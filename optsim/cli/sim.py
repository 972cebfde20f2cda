"""Console entry point (`optsim`) for the options quote simulator.

Subcommands:

- ``run`` (default): interactive menu to refresh the quote or enter trades
- ``simulate``: non-interactive premium drift for a fixed number of ticks
- ``payoff``: evaluate a set of trades at a market price
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, TextIO

import pandas as pd

from optsim import __version__
from optsim.cli._console import (
    CLEAR_LINE,
    ansi_enabled,
    configure_windows_console,
    move_cursor,
)
from optsim.cli.display import RealTimeDisplay
from optsim.config import get_config
from optsim.logging_setup import get_logger, reset_logging, setup_logging
from optsim.options.chain import OptionChain
from optsim.options.contract import create_contract
from optsim.options.trades import Trade, TradeBook

logger = get_logger("cli.sim")

MENU = (
    "Choose an action:\n"
    "1. Get updated quote\n"
    "2. Enter a trade\n"
    "3. Exit\n"
    "Enter your choice (1/2/3): "
)

DEFAULT_CONTRACTS = [
    ("Call", 100.0, 5.0, "2024-12-31"),
    ("Put", 100.0, 4.0, "2024-12-31"),
]


def build_default_chain(seed: Optional[int] = None) -> OptionChain:
    """Chain seeded with the starting Call and Put at strike 100."""
    sim_cfg = get_config().simulation
    chain = OptionChain(
        seed=seed if seed is not None else sim_cfg.seed,
        drift_min_pct=sim_cfg.drift_min_pct,
        drift_max_pct=sim_cfg.drift_max_pct,
    )
    for tag, strike, premium, expiry in DEFAULT_CONTRACTS:
        contract = create_contract(tag, strike, premium, expiry)
        if contract is not None:
            chain.add(contract)
    return chain


class TradingSession:
    """Interactive menu loop over an option chain.

    Input is read line by line; end of input ends the session.
    """

    def __init__(
        self,
        chain: OptionChain,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        ansi: bool = True,
        prompt_row: int = 15,
    ):
        self.chain = chain
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.ansi = ansi
        self.prompt_row = prompt_row
        self.trade_book = TradeBook()
        self.display: Optional[RealTimeDisplay] = None

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def _prompt(self, text: str) -> Optional[str]:
        """Write a prompt and read one line; None at end of input."""
        self._write(text)
        line = self.stdin.readline()
        if not line:
            return None
        return line.strip()

    def show_menu(self) -> Optional[str]:
        """Draw the menu and return the user's choice."""
        if self.ansi:
            self._write(move_cursor(self.prompt_row, 1) + CLEAR_LINE)
        return self._prompt(MENU)

    def refresh_quote(self) -> None:
        """One market tick; the display redraws via notification."""
        self.chain.update_all_premiums()

    def enter_trade(self) -> bool:
        """Prompt for a trade and add it to the chain.

        Returns:
            False if input ended mid-entry, True otherwise.
        """
        self._write("\n")
        answers: List[str] = []
        for text in (
            "Enter option type (Call/Put): ",
            "Enter strike price: ",
            "Enter premium: ",
            "Enter expiry date (YYYY-MM-DD): ",
            "Enter quantity: ",
        ):
            answer = self._prompt(text)
            if answer is None:
                return False
            answers.append(answer)

        tag, strike_s, premium_s, expiry, quantity_s = answers
        try:
            strike = float(strike_s)
            premium = float(premium_s)
            quantity = int(quantity_s)
        except ValueError as e:
            logger.info("Discarded trade with malformed number: %s", e)
            self._write("Invalid number. Trade not executed.\n")
            return True

        contract = create_contract(tag, strike, premium, expiry)
        if contract is None:
            self._write("Invalid option type. Trade not executed.\n")
            return True

        self.chain.add(contract)
        self.trade_book.record(Trade(contract=contract, quantity=quantity))
        self._write("Trade executed successfully.\n")
        return True

    def run(self) -> int:
        """Run the menu loop until exit or end of input.

        The display subscribes to the chain for the duration of the loop
        only.

        Returns:
            Process exit code (always 0).
        """
        self.display = RealTimeDisplay(
            self.chain, stream=self.stdout, ansi=self.ansi, prompt_row=self.prompt_row
        )
        try:
            while True:
                choice = self.show_menu()
                if choice is None or choice == "3":
                    break
                if choice == "1":
                    self.refresh_quote()
                elif choice == "2":
                    if not self.enter_trade():
                        break
                else:
                    logger.debug("Ignored menu choice %r", choice)
        finally:
            self.display.close()

        logger.info("Session ended with %d trade(s) recorded", len(self.trade_book))
        return 0


def parse_trade_spec(spec: str) -> Optional[Trade]:
    """Parse ``TYPE,STRIKE,PREMIUM,EXPIRY,QTY`` into a Trade.

    Returns:
        Trade, or None if the type tag is invalid.

    Raises:
        ValueError: If the spec is malformed.
    """
    fields = [f.strip() for f in spec.split(",")]
    if len(fields) != 5:
        raise ValueError(
            f"Trade spec must be TYPE,STRIKE,PREMIUM,EXPIRY,QTY, got {spec!r}"
        )
    tag, strike, premium, expiry, quantity = fields
    contract = create_contract(tag, float(strike), float(premium), expiry)
    if contract is None:
        return None
    return Trade(contract=contract, quantity=int(quantity))


def _init_logging(args: argparse.Namespace) -> None:
    if getattr(args, "log_level", None):
        reset_logging()
        setup_logging(level=args.log_level)


def _use_ansi(args: argparse.Namespace) -> bool:
    if args.no_ansi or not get_config().display.ansi:
        return False
    return ansi_enabled(sys.stdout)


def cmd_run(args: argparse.Namespace) -> int:
    """Interactive quote/trade loop."""
    _init_logging(args)
    configure_windows_console()
    ansi = _use_ansi(args)
    session = TradingSession(
        build_default_chain(seed=args.seed),
        ansi=ansi,
        prompt_row=get_config().display.prompt_row,
    )
    return session.run()


class QuotePrinter:
    """Observer that prints the first quote on every tick."""

    def __init__(self, chain: OptionChain, stream: Optional[TextIO] = None):
        self.chain = chain
        self.stream = stream if stream is not None else sys.stdout
        self.ticks = 0

    def update(self) -> None:
        self.ticks += 1
        quote = self.chain.first_quote()
        if quote is not None:
            self.stream.write(f"[{self.ticks:>4}] {quote.describe()}\n")


def cmd_simulate(args: argparse.Namespace) -> int:
    """Run a fixed number of ticks and print the first quote after each."""
    _init_logging(args)
    chain = build_default_chain(seed=args.seed)
    chain.register_observer(QuotePrinter(chain))
    for _ in range(args.ticks):
        chain.update_all_premiums()
    return 0


def cmd_payoff(args: argparse.Namespace) -> int:
    """Evaluate trades at a market price and print the table."""
    _init_logging(args)
    book = TradeBook()
    for spec in args.trade:
        try:
            trade = parse_trade_spec(spec)
        except ValueError as e:
            print(f"Skipping trade: {e}", file=sys.stderr)
            continue
        if trade is None:
            print(f"Invalid option type in {spec!r}. Trade not executed.", file=sys.stderr)
            continue
        book.record(trade)

    if not len(book):
        print("No valid trades.")
        return 0

    df = book.evaluate(args.market_price)
    with pd.option_context("display.width", 120, "display.max_columns", None):
        print(df.to_string(index=False))
    print(f"\nTotal payoff @ {args.market_price:g}: {book.total_payoff(args.market_price):.2f}")
    return 0


def _add_seed_arg(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for premium drift (default: OPTSIM_SEED or unseeded)",
    )


def _add_log_level_arg(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: LOG_LEVEL or WARNING)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="optsim",
        description="Options quote simulator with random premium drift",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    run_p = subparsers.add_parser("run", help="Interactive quote and trade menu")
    _add_seed_arg(run_p)
    _add_log_level_arg(run_p)
    run_p.add_argument(
        "--no-ansi",
        action="store_true",
        help="Disable ANSI cursor control (plain scrolling output)",
    )
    run_p.set_defaults(func=cmd_run)

    simulate_p = subparsers.add_parser(
        "simulate",
        help="Drift premiums for N ticks and print the first quote each tick",
    )
    _add_seed_arg(simulate_p)
    _add_log_level_arg(simulate_p)
    simulate_p.add_argument(
        "--ticks",
        type=int,
        default=10,
        help="Number of price updates (default: 10)",
    )
    simulate_p.set_defaults(func=cmd_simulate)

    payoff_p = subparsers.add_parser(
        "payoff",
        help="Evaluate trades at a market price",
    )
    payoff_p.add_argument(
        "--market-price",
        type=float,
        required=True,
        help="Underlying price to evaluate at",
    )
    payoff_p.add_argument(
        "--trade",
        action="append",
        default=[],
        metavar="TYPE,STRIKE,PREMIUM,EXPIRY,QTY",
        help="Trade to evaluate, e.g. Put,100,4,2024-12-31,2 (repeatable)",
    )
    _add_log_level_arg(payoff_p)
    payoff_p.set_defaults(func=cmd_payoff)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        args = parser.parse_args(["run"])
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
