"""
Gavel CLI - Command-line interface for the auction engine.

Usage:
    gavel simulate [--rival ID] [--script bid,stall,...]   Run a scripted auction
    gavel rivals                                            List the rival roster
    gavel serve [--host H] [--port P]                       Run the HTTP API
"""

import argparse
import logging
import sys

from .format import format_currency


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Gavel - Car Auction Negotiation Engine",
        prog="gavel",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Run a scripted auction")
    simulate_parser.add_argument("--rival", default="sterling_vance", help="Roster rival id")
    simulate_parser.add_argument("--valuation", type=int, default=20000, help="Car valuation")
    simulate_parser.add_argument("--money", type=int, default=20000, help="Player money")
    simulate_parser.add_argument("--inspection", type=int, default=2, help="Player inspection level")
    simulate_parser.add_argument("--tactics", type=int, default=2, help="Player tactics level")
    simulate_parser.add_argument("--tags", default="", help="Comma-separated car tags")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    simulate_parser.add_argument(
        "--script",
        default="bid",
        help="Comma-separated tactics; the last one repeats until the auction ends",
    )
    simulate_parser.add_argument("--max-turns", type=int, default=50, help="Give up after this many turns")

    # Rivals command
    subparsers.add_parser("rivals", help="List the rival roster")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind host")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "simulate":
        return cmd_simulate(args)
    elif args.command == "rivals":
        return cmd_rivals(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


_TACTICS = {"bid", "power_bid", "kick_tires", "stall", "quit"}


def cmd_simulate(args):
    """Run a scripted auction and print the log."""
    from .bots.roster import RIVALS, build_rival_state, calculate_rival_interest
    from .engine_core.action import Action
    from .engine_core.state import PlayerSnapshot
    from .session import SessionManager, AuctionLoop

    profile = RIVALS.get(args.rival)
    if profile is None:
        print(f"Error: Unknown rival: {args.rival}")
        print(f"Available: {', '.join(sorted(RIVALS))}")
        sys.exit(1)

    script = [step.strip() for step in args.script.split(",") if step.strip()]
    unknown = [step for step in script if step not in _TACTICS]
    if not script or unknown:
        print(f"Error: Unknown tactics: {', '.join(unknown) or '(empty script)'}")
        sys.exit(1)

    tags = [tag.strip() for tag in args.tags.split(",") if tag.strip()]
    interest = calculate_rival_interest(profile, tags)

    manager = SessionManager()
    session = manager.create_session(
        rival=build_rival_state(profile, interest),
        player=PlayerSnapshot(money=args.money, inspection=args.inspection, tactics=args.tactics),
        car_valuation=args.valuation,
        rival_name=profile.name,
        profile=profile,
        seed=args.seed,
    )
    loop = AuctionLoop(session)
    loop.start()

    print(f"Auction: {format_currency(args.valuation)} car vs {profile.name} "
          f"({profile.strategy.value}, interest {interest})")
    print(f"Opening bid: {format_currency(session.auction.current_bid)}\n")

    factories = {
        "bid": Action.bid,
        "power_bid": Action.power_bid,
        "kick_tires": Action.kick_tires,
        "stall": Action.stall,
        "quit": Action.quit,
    }

    turn = 0
    printed = 0
    while not session.auction.is_resolved and turn < args.max_turns:
        tactic = script[min(turn, len(script) - 1)]
        result = loop.submit(factories[tactic]())
        turn += 1

        for error in result.errors:
            print(f"  ! {error}")
        if not result.success and session.auction.is_player_turn:
            # Scripted tactic refused and nothing changed; walk away
            loop.submit(Action.quit())

        for entry in session.log[printed:]:
            print(f"  [{entry.actor.value:>6}] {entry.text}")
        printed = len(session.log)

    outcome = session.auction.outcome
    if outcome is None:
        print(f"\nNo result after {args.max_turns} turns.")
        return 1

    print(f"\n{outcome.message}")
    print(f"Final bid: {format_currency(session.auction.current_bid)}")
    for intent in session.intents:
        skill = f" ({intent.skill})" if intent.skill else ""
        print(f"  -> {intent.intent_type.value}{skill}: {intent.amount}")
    return 0


def cmd_rivals(args):
    """List the rival roster."""
    from .bots.roster import RIVALS, get_tier_name

    for profile in RIVALS.values():
        print(f"{profile.rival_id:<16} {profile.name:<30} "
              f"{get_tier_name(profile.tier):<11} {profile.strategy.value:<11} "
              f"budget {format_currency(profile.budget):>8}  patience {profile.patience}")
        print(f"{'':<16} wishlist: {', '.join(profile.wishlist)}")
    return 0


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("gavel.api.app:app", host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
