"""Real-time single-quote display."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from optsim.cli._console import CLEAR_SCREEN, move_cursor
from optsim.logging_setup import get_logger
from optsim.options.chain import OptionChain

logger = get_logger("cli.display")

HEADER = "Latest Option Quote:"
SEPARATOR = "--------------------------------"


class RealTimeDisplay:
    """Redraws the chain's first quote whenever the chain notifies.

    Subscribes on construction; ``close()`` drops the subscription.
    """

    def __init__(
        self,
        chain: OptionChain,
        stream: Optional[TextIO] = None,
        ansi: bool = True,
        prompt_row: int = 15,
    ):
        self.chain = chain
        self.stream = stream if stream is not None else sys.stdout
        self.ansi = ansi
        self.prompt_row = prompt_row
        self.render_count = 0
        self._handle: Optional[int] = chain.register_observer(self)

    def render(self) -> str:
        """Build the screen text for the current first quote."""
        parts = []
        if self.ansi:
            parts.append(move_cursor(1, 1) + CLEAR_SCREEN)
        parts.append(HEADER + "\n")
        quote = self.chain.first_quote()
        if quote is not None:
            parts.append(quote.describe() + "\n")
        parts.append(SEPARATOR + "\n")
        if self.ansi:
            # park the cursor where the menu prompt is drawn
            parts.append(move_cursor(self.prompt_row, 1))
        return "".join(parts)

    def update(self) -> None:
        """Observer callback."""
        self.stream.write(self.render())
        self.stream.flush()
        self.render_count += 1

    def close(self) -> None:
        """Unsubscribe from the chain. Safe to call twice."""
        if self._handle is not None:
            self.chain.unregister_observer(self._handle)
            logger.debug("Display unsubscribed (handle %d)", self._handle)
            self._handle = None
