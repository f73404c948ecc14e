#!/usr/bin/env python3
"""CLI entry point for the pickleball scorer.

Usage:
    python main.py play [mode] [scoring]   Score a game from the keyboard
    python main.py replay <sequence>       Replay rally winners (m/o) and print the score
    python main.py game [style] [style]    Simulate a game and print stats
    python main.py chart                   Simulate a game and save score charts
    python main.py test                    Run all tests

    mode:    singles | doubles          (default doubles)
    scoring: rally | sideout            (default rally)
"""

import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
log = logging.getLogger("main")

_WINNER_KEYS = {"m": "me", "o": "opponent"}


def _arg(index, default):
    return sys.argv[index] if len(sys.argv) > index else default


def _print_state(session):
    """Print the scoreboard line for the current state."""
    from scorer.types import GameMode

    s = session.state
    line = f"  Me {s.my_score:2d}  |  Opponent {s.opponent_score:2d}   call: {session.score_call()}"
    if s.mode == GameMode.DOUBLES:
        line += f"   serving: {session.active_server_id()}"
        line += f"   me {s.my_players[0]}/{s.my_players[1]}  opp {s.opponent_players[0]}/{s.opponent_players[1]}"
    else:
        line += f"   server: {s.server.value}"
    print(line)


def cmd_play():
    """Score a game interactively."""
    from scorer.session import MatchSession

    session = MatchSession(_arg(2, "doubles"), _arg(3, "rally"))

    print("=" * 60)
    print(f"  {session.mode.value.upper()} / {session.scoring_type.value.upper()} SCORING")
    print("=" * 60)
    print("Keys: m=me won rally  o=opponent won rally  u=undo  r=reset  q=quit")
    print("-" * 60)
    _print_state(session)

    while True:
        try:
            key = input("> ").strip().lower()
        except EOFError:
            break

        if key == "q":
            break
        if key == "u":
            session.undo()
        elif key == "r":
            session.reset()
        elif key in _WINNER_KEYS:
            if session.is_finished:
                print("  Game over. r=rematch  q=quit")
                continue
            session.record(_WINNER_KEYS[key])
        else:
            print("  Unknown key")
            continue

        _print_state(session)
        if session.is_finished:
            who = "YOU WON!" if session.state.winner.value == "me" else "OPPONENT WON"
            print(f"\n  {who}  r=rematch  u=undo  q=quit")


def cmd_replay():
    """Replay a sequence of rally winners."""
    from scorer.session import MatchSession

    sequence = _arg(2, "")
    session = MatchSession(_arg(3, "doubles"), _arg(4, "rally"))
    winners = [_WINNER_KEYS.get(ch, ch) for ch in sequence.lower()]

    session.record_many(winners)
    _print_state(session)
    if session.is_finished:
        print(f"  WINNER: {session.state.winner.value}")


def cmd_game():
    """Simulate a game and print stats."""
    from sim.game import PLAYSTYLES, SimTeam, simulate_game

    styles = list(PLAYSTYLES.keys())
    me_style = sys.argv[2] if len(sys.argv) > 2 and sys.argv[2] in styles else "aggressive"
    opp_style = sys.argv[3] if len(sys.argv) > 3 and sys.argv[3] in styles else "defensive"

    me = SimTeam("Me", me_style)
    opponent = SimTeam("Opponent", opp_style)

    print("=" * 60)
    print(f"  SIMULATED GAME: {me.label} vs {opponent.label}")
    print("=" * 60)

    result = simulate_game(me, opponent, _arg(4, "doubles"), _arg(5, "sideout"))
    s = result.stats

    for i, (winner, state) in enumerate(zip(result.rallies, result.timeline)):
        print(f"  Rally {i+1:3d}: {winner.value:8s}  [{state.my_score}-{state.opponent_score}]")

    print()
    print(f"  FINAL SCORE: {s['me_points']} - {s['opponent_points']}")
    print(f"  WINNER: {s['winner']}")
    print(f"  Total rallies: {s['total_rallies']}  |  Side outs: {s['side_outs']}")
    print(f"  Longest run: me {s['me_longest_run']}  |  opponent {s['opponent_longest_run']}")
    print()
    print("  Available styles: " + ", ".join(styles))
    print("  Usage: python main.py game [style] [style] [mode] [scoring]")
    print("=" * 60)


def cmd_chart():
    """Simulate a game and save score charts."""
    import random
    from sim.game import SimTeam, simulate_game
    from sim.analysis import generate_all_charts

    print("Generating score charts...")
    print("-" * 60)
    random.seed(42)
    result = simulate_game(SimTeam("Me", "allround"), SimTeam("Opponent", "allround"))
    output_dir = os.path.join(os.path.dirname(__file__), "output")
    paths = generate_all_charts(result, output_dir=output_dir)
    print(f"\nDone! {len(paths)} charts saved to {output_dir}/")


def cmd_test():
    """Run all tests."""
    import subprocess
    print("Running tests...")
    print("-" * 60)
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "tests/", "-v"],
        cwd=os.path.dirname(os.path.abspath(__file__)),
    )
    sys.exit(result.returncode)


COMMANDS = {
    "play": cmd_play,
    "replay": cmd_replay,
    "game": cmd_game,
    "chart": cmd_chart,
    "test": cmd_test,
}


def main():
    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print(__doc__)
        print("Available commands:")
        for name, func in COMMANDS.items():
            print(f"  {name:12s} {func.__doc__}")
        sys.exit(1)

    try:
        COMMANDS[sys.argv[1]]()
    except ValueError as e:
        log.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
