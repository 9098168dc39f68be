"""
nftforge CLI - Command-line interface for the progression engine.

Usage:
    nftforge mint <asset_id> --name N --uri U [--level L] [--rarity R]
    nftforge update <asset_id> <new_level> [--cooldown S] [--rarity R]
    nftforge evolve <asset_id>
    nftforge fuse <first_id> <second_id> <result_id> [--type T]
    nftforge show <asset_id>
    nftforge appraise <asset_id>
    nftforge ladder
    nftforge serve [--host H] [--port P]

State and ledger attributes are kept as JSON under --store
(default: $NFTFORGE_STORE or ~/.nftforge). Every transition accepts --at
to pin the timestamp (unix seconds) instead of using the clock.
"""

import argparse
import logging
import os
import sys
import time
from pathlib import Path

DEFAULT_STORE = os.getenv("NFTFORGE_STORE", "~/.nftforge")
DEFAULT_LOG_LEVEL = os.getenv("NFTFORGE_LOG_LEVEL", "INFO")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="nftforge - Game asset progression engine",
        prog="nftforge",
    )
    parser.add_argument("--store", default=DEFAULT_STORE, help="Directory for state and ledger files")
    parser.add_argument("--log-level", default=DEFAULT_LOG_LEVEL, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Mint command
    mint_parser = subparsers.add_parser("mint", help="Mint a new asset")
    mint_parser.add_argument("asset_id", help="Asset identifier")
    mint_parser.add_argument("--name", required=True, help="Display name")
    mint_parser.add_argument("--uri", required=True, help="Metadata URI")
    mint_parser.add_argument("--level", type=int, default=1, help="Initial level")
    mint_parser.add_argument("--rarity", default="Common", help="Requested rarity")
    mint_parser.add_argument("--fusion-potential", type=int, default=0, help="Initial fusion potential")
    mint_parser.add_argument("--at", type=int, help="Timestamp (unix seconds)")

    # Update command
    update_parser = subparsers.add_parser("update", help="Raise an asset's level")
    update_parser.add_argument("asset_id", help="Asset identifier")
    update_parser.add_argument("new_level", type=int, help="New level")
    update_parser.add_argument("--cooldown", type=int, default=0, help="Base cooldown in seconds")
    update_parser.add_argument("--rarity", help="Replace rarity (not ladder-checked)")
    update_parser.add_argument("--at", type=int, help="Timestamp (unix seconds)")

    # Evolve command
    evolve_parser = subparsers.add_parser("evolve", help="Evolve an asset one tier")
    evolve_parser.add_argument("asset_id", help="Asset identifier")
    evolve_parser.add_argument("--at", type=int, help="Timestamp (unix seconds)")

    # Fuse command
    fuse_parser = subparsers.add_parser("fuse", help="Fuse two assets into a third")
    fuse_parser.add_argument("first_id", help="First source asset")
    fuse_parser.add_argument("second_id", help="Second source asset")
    fuse_parser.add_argument("result_id", help="Result asset")
    fuse_parser.add_argument("--type", dest="fusion_type", default="Power", help="Fusion type")
    fuse_parser.add_argument("--at", type=int, help="Timestamp (unix seconds)")

    # Read-only commands
    show_parser = subparsers.add_parser("show", help="Show an asset's record and attributes")
    show_parser.add_argument("asset_id", help="Asset identifier")

    appraise_parser = subparsers.add_parser("appraise", help="Appraise an asset")
    appraise_parser.add_argument("asset_id", help="Asset identifier")
    appraise_parser.add_argument("--at", type=int, help="Timestamp (unix seconds)")

    subparsers.add_parser("ladder", help="Print the rarity ladder")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "mint": cmd_mint,
        "update": cmd_update,
        "evolve": cmd_evolve,
        "fuse": cmd_fuse,
        "show": cmd_show,
        "appraise": cmd_appraise,
        "ladder": cmd_ladder,
        "serve": cmd_serve,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)
    handler(args)


def open_registry(store: str):
    """Registry backed by JSON files in the store directory."""
    from .ledger import JsonFileLedger
    from .registry import AssetRegistry

    root = Path(store).expanduser()
    return AssetRegistry(
        ledger=JsonFileLedger(root / "ledger.json"),
        state_path=root / "states.json",
    )


def _now(args) -> int:
    return args.at if getattr(args, "at", None) is not None else int(time.time())


def _report(result):
    """Print a transition result; exit 1 on failure."""
    if not result.success:
        print(f"Error [{result.error_code}]: {result.error}")
        sys.exit(1)
    for change in result.state_changes:
        print(change)
    print("\nAttributes:")
    for attr in result.attributes:
        print(f"  {attr.key}: {attr.value}")


def cmd_mint(args):
    """Mint a new asset."""
    from .engine_core import Rarity

    try:
        rarity = Rarity.parse(args.rarity)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    registry = open_registry(args.store)
    _report(registry.mint(
        asset_id=args.asset_id,
        name=args.name,
        uri=args.uri,
        level=args.level,
        rarity=rarity.value,
        fusion_potential=args.fusion_potential,
        now=_now(args),
    ))


def cmd_update(args):
    """Raise an asset's level."""
    registry = open_registry(args.store)
    _report(registry.update(
        asset_id=args.asset_id,
        new_level=args.new_level,
        min_time_elapsed=args.cooldown,
        now=_now(args),
        new_rarity=args.rarity,
    ))


def cmd_evolve(args):
    """Evolve an asset."""
    registry = open_registry(args.store)
    _report(registry.evolve(args.asset_id, _now(args)))


def cmd_fuse(args):
    """Fuse two assets."""
    registry = open_registry(args.store)
    _report(registry.fuse(
        first_id=args.first_id,
        second_id=args.second_id,
        result_id=args.result_id,
        fusion_type=args.fusion_type,
        now=_now(args),
    ))


def cmd_show(args):
    """Show an asset's record and ledger attributes."""
    registry = open_registry(args.store)
    state = registry.get(args.asset_id)
    if state is None:
        print(f"Error: Asset {args.asset_id} not found")
        sys.exit(1)

    print(f"Asset: {state.asset_id} ({state.key})")
    for field_name, value in state.to_dict().items():
        if field_name != "asset_id":
            print(f"  {field_name}: {value}")

    record = registry.ledger.get(args.asset_id)
    if record:
        print("\nLedger:")
        if record.name:
            print(f"  name: {record.name}")
        if record.uri:
            print(f"  uri: {record.uri}")
        for key, value in record.attributes:
            print(f"  {key}: {value}")


def cmd_appraise(args):
    """Appraise an asset."""
    registry = open_registry(args.store)
    appraisal = registry.appraise(args.asset_id, _now(args))
    if appraisal is None:
        print(f"Error: Asset {args.asset_id} not found")
        sys.exit(1)

    print(f"Appraisal of {appraisal.asset_id}:")
    print(f"  Achievement tier: {appraisal.achievement_tier.value}")
    print(f"  Bonus experience: {appraisal.bonus_experience}")
    print(f"  Fusion bonus: {appraisal.fusion_bonus}")
    print(f"  Achievement points: {appraisal.achievement_points}")
    print(f"  Total value: {appraisal.total_value}")
    print(f"  Next rarity: {appraisal.next_rarity.value} ({appraisal.evolution_chance}% chance)")
    print(f"  Evolution ready in: {appraisal.seconds_until_evolution}s")


def cmd_ladder(args):
    """Print the rarity ladder."""
    from .engine_core import RARITY_LADDER

    print(f"{'Tier':<10} {'Cooldown':>8} {'Reward':>6} {'Chance':>6}  Next")
    for profile in RARITY_LADDER.values():
        print(
            f"{profile.rarity.value:<10} x{profile.cooldown_multiplier:<7} "
            f"x{profile.reward_multiplier:<5} {profile.evolution_chance:>5}%  "
            f"{profile.next_tier.value}"
        )


def cmd_serve(args):
    """Run the REST API with uvicorn."""
    import uvicorn
    from .api.app import create_app, create_service

    app = create_app(service=create_service(args.store))
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
