"""
mwtree/__main__.py
Interactive console for exploring the three tree variants.

Usage:
    python -m mwtree                          # classic B-tree, degree 3
    python -m mwtree --variant bstar -d 4     # B*-tree, degree 4
    python -m mwtree --log-level DEBUG        # trace splits and donations

Commands:
    select VARIANT     start a new empty tree (btree, bplus, bstar)
    generate COUNT     replace the tree with COUNT random keys
    insert KEY [...]   insert one or more integer keys
    delete KEY         delete one occurrence of KEY (leaf hits only)
    search KEY         show the node holding KEY
    show               print the current tree
    check              verify the tree's structural invariants
    .help              show help
    .quit              exit (also: exit, quit, .exit)
"""

from __future__ import annotations
import argparse
import logging
from dataclasses import dataclass

from mwtree.errors import InvalidConfiguration
from mwtree.generator import generate
from mwtree.invariants import find_violations
from mwtree.policy import Variant
from mwtree.render import render_node
from mwtree.tree import MultiwayTree, construct

SEPARATOR = "------------------"

HELP = """
Commands:
  select VARIANT     Start a new empty tree (btree, bplus, bstar)
  generate COUNT     Replace the tree with COUNT random keys
  insert KEY [...]   Insert one or more integer keys
  delete KEY         Delete one occurrence of KEY
  search KEY         Show the node holding KEY
  show               Print the current tree
  check              Verify structural invariants
  .help              Show this help
  .quit              Exit  (also: exit, quit, .exit)
"""


class CommandError(Exception):
    """A console command could not be executed."""


@dataclass
class Session:
    tree: MultiwayTree
    degree: int
    seed: int | None = None

    @property
    def variant(self) -> Variant:
        return self.tree.variant


# ── Commands ─────────────────────────────────────────────────────────

def _parse_int(text: str, what: str = "key") -> int:
    try:
        return int(text)
    except ValueError:
        raise CommandError(f"Not an integer {what}: {text!r}") from None


def _one_arg(cmd: str, args: list[str]) -> str:
    if len(args) != 1:
        raise CommandError(f"Usage: {cmd} <value>")
    return args[0]


def execute(session: Session, line: str) -> str:
    """Run one console command against session and return its output."""
    parts = line.split()
    if not parts:
        return ""
    cmd, args = parts[0].lower(), parts[1:]

    if cmd == "select":
        try:
            session.tree = construct(session.degree, _one_arg(cmd, args))
        except InvalidConfiguration as e:
            raise CommandError(str(e)) from e
        return f"Selected structure: {session.variant.value}"

    if cmd == "generate":
        count = _parse_int(_one_arg(cmd, args), "count")
        if count < 0:
            raise CommandError("Count must be >= 0")
        session.tree = generate(session.variant, count, session.degree, session.seed)
        return f"Tree was generated with {count} elements."

    if cmd == "insert":
        if not args:
            raise CommandError("Usage: insert <key> [<key> ...]")
        keys = [_parse_int(a) for a in args]
        for key in keys:
            session.tree.insert(key)
        return f"Inserted {len(keys)} element{'s' if len(keys) != 1 else ''}."

    if cmd == "delete":
        key = _parse_int(_one_arg(cmd, args))
        if session.tree.delete(key):
            return "Element deleted."
        return "Element not deleted (absent or not in a leaf)."

    if cmd == "search":
        key = _parse_int(_one_arg(cmd, args))
        node = session.tree.search(key)
        if node is None:
            return "Element not found."
        return f"Element found:\n{SEPARATOR}\n{render_node(session.tree, node)}{SEPARATOR}"

    if cmd == "show":
        return _show(session)

    if cmd == "check":
        problems = find_violations(session.tree, check_floor=False)
        if not problems:
            return "OK"
        return "\n".join(f"  {p}" for p in problems)

    raise CommandError(f"Unknown command: {cmd}")


def _show(session: Session) -> str:
    text = session.tree.render()
    if not text.endswith("\n"):
        text += "\n"
    return (
        f"Selected structure: {session.variant.value} (degree {session.degree})\n"
        f"{SEPARATOR}\n{text}{SEPARATOR}"
    )


# ── REPL ─────────────────────────────────────────────────────────────

def run_repl(session: Session) -> None:
    print(f"mwtree console  (variant={session.variant.value}, degree={session.degree})  "
          f"Type .help for help, exit or .quit to exit.")
    print()

    while True:
        try:
            line = input("mwtree> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        stripped = line.strip()
        if stripped.lower() in ("exit", "quit", ".quit", ".exit"):
            print("Bye!")
            return
        if stripped.lower() == ".help":
            print(HELP)
            continue
        if not stripped:
            continue

        try:
            output = execute(session, stripped)
        except CommandError as e:
            print(f"Error: {e}")
            continue
        if output:
            print(output)


# ── Entry point ───────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="python -m mwtree", description="mwtree interactive console")
    parser.add_argument("--variant", choices=[v.value for v in Variant], default=Variant.BTREE.value,
                        help="Tree variant to start with (default: btree)")
    parser.add_argument("-d", "--degree", type=int, default=3,
                        help="Tree degree t, at least 2 (default: 3)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed used by the generate command")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: WARNING)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        tree = construct(args.degree, args.variant)
    except InvalidConfiguration as e:
        parser.error(str(e))
    run_repl(Session(tree=tree, degree=args.degree, seed=args.seed))


if __name__ == "__main__":
    main()
