"""Interactive command-line shell for Court Draw.

The shell keeps one session in memory, renders the roster and the current
draw as text, and saves the roster after every change. Commands can also
be passed with ``-c`` to run without a prompt.
"""

# Court Draw
# Copyright (C) 2025  Court Draw developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import random
import shlex
import sys
from typing import Callable, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.shortcuts import confirm as prompt_confirm

from courtdraw import __version__
from courtdraw.constants import (
    DEFAULT_GAME_MODE,
    DEFAULT_NUMBER_OF_COURTS,
    PRIORITY_ICON,
)
from courtdraw.controllers import session as commands
from courtdraw.controllers.session import CommandResult
from courtdraw.exceptions import (
    FileSaveException,
    InvalidPlayerDataException,
    PlayerNotFoundException,
)
from courtdraw.models.player import Gender, Player
from courtdraw.models.session import GameMode, Match, SessionState
from courtdraw.storage import JsonSessionStore
from courtdraw.utils import set_log_level, setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Command definitions with their arguments
COMMANDS = {
    "list": {"description": "Show the roster and settings", "args": ""},
    "add": {
        "description": "Add players, names separated by commas or spaces",
        "args": "<m|f> <names...>",
    },
    "delete": {"description": "Delete a player", "args": "<number>"},
    "select": {"description": "Select or unselect players", "args": "<number...>"},
    "priority": {"description": "Flag or unflag must-play players", "args": "<number...>"},
    "all": {"description": "Select every player", "args": ""},
    "none": {"description": "Unselect every player", "args": ""},
    "clear": {"description": "Delete every player", "args": "[-y]"},
    "mode": {"description": "Set the game mode", "args": "<mode>"},
    "courts": {"description": "Set the number of courts", "args": "<number>"},
    "generate": {"description": "Draw matches for the selected players", "args": ""},
    "confirm": {"description": "Confirm the draw and count the games", "args": ""},
    "matches": {"description": "Show the pending draw", "args": ""},
    "help": {"description": "Show available commands", "args": "[command]"},
    "exit": {"description": "Leave the shell", "args": ""},
}

EXIT_COMMANDS = {"exit", "quit"}


# ========== Rendering ==========


def format_player(player: Player, number: int, selected: bool) -> str:
    """One roster line: ``[x]  3. ♀ Amy (played 2) ★``."""
    box = "[x]" if selected else "[ ]"
    star = f" {PRIORITY_ICON}" if player.is_priority else ""
    return (
        f"{box} {number:>2}. {player.gender.icon} {player.name} "
        f"(played {player.play_count}){star}"
    )


def format_team(team) -> str:
    return " & ".join(f"{p.gender.icon} {p.name}" for p in team)


def format_match(match: Match) -> str:
    """``Court 1: ♂ Ben & ♀ Amy  vs  ♂ Dan & ♀ Cat``"""
    return f"Court {match.court}: {format_team(match.team_a)}  vs  {format_team(match.team_b)}"


def format_roster(state: SessionState) -> List[str]:
    if not state.players:
        return ["No players yet. Use 'add m <names>' or 'add f <names>'."]
    lines = [
        format_player(p, i, state.is_selected(p.id))
        for i, p in enumerate(state.players, start=1)
    ]
    lines.append(
        f"{len(state.selected_ids)} of {len(state.players)} selected | "
        f"mode: {state.game_mode.label} | courts: {state.number_of_courts}"
    )
    return lines


def format_matches(state: SessionState) -> List[str]:
    if not state.pending_matches:
        return ["No pending draw. Use 'generate'."]
    return [format_match(m) for m in state.pending_matches]


# ========== Shell ==========


class CourtDrawShell:
    """Runs shell commands against one session and its store."""

    def __init__(
        self,
        store: JsonSessionStore,
        state: Optional[SessionState] = None,
        rng: Optional[random.Random] = None,
        output: Callable[[str], None] = print,
        ask: Optional[Callable[[str], bool]] = None,
    ):
        """Initialize the shell.

        Args:
            store: Where the roster is saved after every change
            state: Starting session, loaded from ``store`` when omitted
            rng: Random source for draws
            output: Sink for every printed line
            ask: Yes/no question for destructive commands
        """
        self.store = store
        self.state = state if state is not None else store.load()
        self.rng = rng or random.Random()
        self.output = output
        self.ask = ask or (lambda question: prompt_confirm(question))

    def execute(self, line: str) -> bool:
        """Run one command line.

        Returns:
            False when the shell should stop, True otherwise
        """
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self._fail(f"Cannot parse command: {e}")
            return True
        if not parts:
            return True

        command, args = parts[0].lstrip("/").lower(), parts[1:]
        if command in EXIT_COMMANDS:
            return False
        if command not in COMMANDS:
            self._fail(f"Unknown command: {command}")
            self.output(f"Type {Colors.BOLD}help{Colors.ENDC} to see available commands")
            return True

        handler = getattr(self, f"_cmd_{command}")
        try:
            handler(args)
        except PlayerNotFoundException as e:
            self._fail(str(e))
        return True

    # --- command handlers ---

    def _cmd_help(self, args: List[str]) -> None:
        if args and args[0] in COMMANDS:
            info = COMMANDS[args[0]]
            self.output(f"{args[0]} {info['args']}".rstrip())
            self.output(f"  {info['description']}")
            if args[0] == "mode":
                for mode in GameMode:
                    self.output(f"  {mode.value:16} {mode.label}")
            return
        self.output(f"{Colors.BOLD}Available Commands:{Colors.ENDC}")
        for cmd, info in COMMANDS.items():
            usage = f"{cmd} {info['args']}".rstrip()
            self.output(f"  {Colors.OKGREEN}{usage:28}{Colors.ENDC} {info['description']}")

    def _cmd_list(self, args: List[str]) -> None:
        for line in format_roster(self.state):
            self.output(line)

    def _cmd_matches(self, args: List[str]) -> None:
        for line in format_matches(self.state):
            self.output(line)

    def _cmd_add(self, args: List[str]) -> None:
        if len(args) < 2:
            self._fail("Usage: add <m|f> <names...>")
            return
        try:
            gender = Gender.parse(args[0])
        except InvalidPlayerDataException as e:
            self._fail(str(e))
            return
        self._apply(commands.add_players(self.state, " ".join(args[1:]), gender))

    def _cmd_delete(self, args: List[str]) -> None:
        for player in self._resolve_players(args[:1]):
            self._apply(commands.delete_player(self.state, player.id))

    def _cmd_select(self, args: List[str]) -> None:
        for player in self._resolve_players(args):
            self._apply(commands.toggle_selection(self.state, player.id))

    def _cmd_priority(self, args: List[str]) -> None:
        for player in self._resolve_players(args):
            self._apply(commands.toggle_priority(self.state, player.id))

    def _cmd_all(self, args: List[str]) -> None:
        self._apply(commands.set_all_selected(self.state, True))

    def _cmd_none(self, args: List[str]) -> None:
        self._apply(commands.set_all_selected(self.state, False))

    def _cmd_clear(self, args: List[str]) -> None:
        if not self.state.players:
            return
        if "-y" not in args and not self.ask("Delete every player? This cannot be undone."):
            return
        result = commands.clear_all(self.state)
        self.state = result.state
        try:
            self.store.clear()
        except FileSaveException as e:
            self._fail(str(e))

    def _cmd_mode(self, args: List[str]) -> None:
        if not args:
            self._fail("Usage: mode <mode>  (see 'help mode')")
            return
        self._apply(commands.set_mode(self.state, " ".join(args)))

    def _cmd_courts(self, args: List[str]) -> None:
        if not args:
            self._fail("Usage: courts <number>")
            return
        self._apply(commands.set_courts(self.state, args[0]))

    def _cmd_generate(self, args: List[str]) -> None:
        if self._apply(commands.generate(self.state, self.rng)):
            self._cmd_matches(args)

    def _cmd_confirm(self, args: List[str]) -> None:
        if not self.state.pending_matches:
            self.output("Nothing to confirm.")
            return
        count = len(self.state.pending_matches)
        if self._apply(commands.confirm(self.state)):
            self.output(f"{Colors.OKGREEN}Confirmed {count} match(es).{Colors.ENDC}")

    # --- helpers ---

    def _resolve_players(self, args: List[str]) -> List[Player]:
        """Map roster numbers (or ids) typed by the user to players."""
        if not args:
            self._fail("Give at least one player number")
            return []
        players = []
        for arg in args:
            if arg.isdigit() and 1 <= int(arg) <= len(self.state.players):
                players.append(self.state.players[int(arg) - 1])
                continue
            player = self.state.player(arg)
            if player is None:
                raise PlayerNotFoundException(f"No player numbered {arg}")
            players.append(player)
        return players

    def _apply(self, result: CommandResult) -> bool:
        """Adopt the result's state, report its error and save roster changes."""
        before = self.state
        self.state = result.state
        if result.error is not None:
            self._fail(result.message)
        if (before.players, before.selected_ids) != (
            self.state.players,
            self.state.selected_ids,
        ):
            try:
                self.store.save(self.state)
            except FileSaveException as e:
                self._fail(str(e))
        return result.ok

    def _fail(self, message: str) -> None:
        self.output(f"{Colors.FAIL}{message}{Colors.ENDC}")


# ========== Entry points ==========


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
    completions = {cmd: None for cmd in COMMANDS}
    completions["quit"] = None
    completions["add"] = WordCompleter(["m", "f"])
    completions["mode"] = WordCompleter([mode.value for mode in GameMode])
    completions["help"] = WordCompleter(list(COMMANDS))
    return NestedCompleter.from_nested_dict(completions)


def run_interactive_mode(shell: CourtDrawShell) -> int:
    """Prompt for commands until exit or end of input."""
    prompt = PromptSession(history=InMemoryHistory(), completer=create_completer())
    shell.output(f"{Colors.OKBLUE}{Colors.BOLD}Court Draw {__version__}{Colors.ENDC}")
    shell.output(f"Roster file: {shell.store.path}")
    shell.output(f"Type {Colors.BOLD}help{Colors.ENDC} to see available commands")
    shell.execute("list")

    while True:
        try:
            line = prompt.prompt("courtdraw> ")
        except KeyboardInterrupt:
            shell.output(f"{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
            continue
        except EOFError:
            break
        try:
            if not shell.execute(line):
                break
        except Exception as e:
            shell.output(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
            logger.exception("Command execution failed")

    shell.output(f"{Colors.OKGREEN}Goodbye!{Colors.ENDC}")
    return 0


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="courtdraw",
        description="Fair random team draws for badminton club nights",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  courtdraw

  # Add players and draw two mixed doubles courts
  courtdraw -c "add m Ben Dan Eli Gus" -c "add f Amy Cat Fay Hal" \\
            -c "courts 2" -c generate
        """,
    )
    parser.add_argument("--data-file", help="Roster file (default: ~/.courtdraw/roster.json)")
    parser.add_argument(
        "--mode",
        default=DEFAULT_GAME_MODE,
        choices=[mode.value for mode in GameMode],
        help="Game mode to start with",
    )
    parser.add_argument(
        "--courts", type=int, default=DEFAULT_NUMBER_OF_COURTS, help="Number of courts"
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducible draws")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level",
    )
    parser.add_argument(
        "-c",
        "--command",
        action="append",
        dest="commands",
        metavar="COMMAND",
        help="Run a shell command and exit; may be repeated",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the courtdraw command."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        set_log_level(args.log_level)

    store = JsonSessionStore(args.data_file)
    state = store.load()
    state = commands.set_mode(state, args.mode).state
    courts = commands.set_courts(state, args.courts)
    if not courts.ok:
        parser.error(courts.message)
    state = courts.state

    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    shell = CourtDrawShell(store, state=state, rng=rng)

    if args.commands:
        for line in args.commands:
            if not shell.execute(line):
                break
        return 0

    return run_interactive_mode(shell)


if __name__ == "__main__":
    sys.exit(main())
