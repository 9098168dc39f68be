"""
nftforge - Game Asset Progression Engine

A deterministic, rules-driven engine for the lifecycle of game-asset tokens.
The engine tracks per-asset progression state and provides:
- Mint, Update, Evolve and Fuse transitions
- Rarity ladder and achievement tiers
- Attribute sets for an external attribute ledger
- A host-side registry, REST API and CLI
"""

__version__ = "0.1.0"
