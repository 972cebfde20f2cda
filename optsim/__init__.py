"""optsim - Options Quote Simulator.

A small interactive console simulator for Call/Put contracts with
random premium drift and a live single-quote view.
"""

__version__ = "0.1.0"
