"""
Gavel - Car Auction Negotiation Engine

A deterministic-by-seed, turn-based bidding engine for a car flipping game.
The player haggles against a rival whose patience and budget run down as
the auction drags on. The engine provides:
- Auction session state (copy-on-write)
- Pure bidding transitions (bid, power bid, kick tires, stall, quit)
- Rival AI with strategy-driven decisions
- An in-process service and HTTP API for presentation layers
"""

__version__ = "0.1.0"
