"""Command-line interface for wrapped."""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from .collector import SessionStore
from .exceptions import NoSessionsError, PersistenceError
from .parser import list_sessions
from .recap import DEFAULT_MODEL, summarize_year
from .renderer import render_terminal, save_html
from .report import generate_from_logs, generate_from_store, save_report


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="wrapped",
        description="Your year in code, from Claude Code sessions",
        epilog="""
Examples:
  wrapped gen                        Terminal + HTML report for this year
  wrapped gen 2024                   Report for a specific year
  wrapped gen --terminal             Terminal only
  wrapped gen --html -o ./my-wrapped HTML only, custom output directory
  wrapped gen --source store         Use manually recorded sessions
  wrapped gen --recap                Add an AI-written recap
  wrapped record --project api --messages 12 --tool Edit --tool Bash
  wrapped list                       Show sessions found for this year

Reads ~/.claude/projects (or $CLAUDE_CONFIG_DIR/projects).
--recap requires ANTHROPIC_API_KEY.
""",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # gen command
    gen_parser = subparsers.add_parser(
        "gen",
        help="Generate the yearly report"
    )
    gen_parser.add_argument(
        "year",
        nargs="?",
        type=int,
        default=datetime.now().year,
        help="Year to report on (default: current year)"
    )
    gen_parser.add_argument(
        "--terminal",
        action="store_true",
        help="Display in terminal only"
    )
    gen_parser.add_argument(
        "--html",
        action="store_true",
        help="Generate HTML only"
    )
    gen_parser.add_argument(
        "-o", "--output",
        metavar="DIR",
        default="./output",
        help="Output directory (default: ./output)"
    )
    gen_parser.add_argument(
        "--source",
        choices=["logs", "store"],
        default="logs",
        help="Session logs or recorded session store (default: logs)"
    )
    gen_parser.add_argument(
        "--projects-dir",
        metavar="DIR",
        type=Path,
        help="Claude Code projects directory"
    )
    gen_parser.add_argument(
        "--data-dir",
        metavar="DIR",
        default="./data",
        help="Recorded session store directory (default: ./data)"
    )
    gen_parser.add_argument(
        "--recap",
        action="store_true",
        help="Ask Claude for a short recap"
    )
    gen_parser.add_argument(
        "--model",
        default=DEFAULT_MODEL,
        help="Claude model for the recap"
    )
    gen_parser.add_argument(
        "--no-color",
        action="store_true",
        help="Plain terminal output"
    )

    # record command
    record_parser = subparsers.add_parser(
        "record",
        help="Record a session summary"
    )
    record_parser.add_argument("--project", required=True, help="Project name")
    record_parser.add_argument("--messages", type=int, default=0, help="Message count")
    record_parser.add_argument("--files-modified", nargs="*", default=[], metavar="FILE")
    record_parser.add_argument("--files-created", nargs="*", default=[], metavar="FILE")
    record_parser.add_argument("--lines-added", type=int, default=0)
    record_parser.add_argument("--lines-removed", type=int, default=0)
    record_parser.add_argument("--tool", action="append", default=[], metavar="NAME",
                               help="Tool call (repeat per call)")
    record_parser.add_argument("--language", action="append", default=[], metavar="NAME")
    record_parser.add_argument("--data-dir", metavar="DIR", default="./data")

    # list command
    list_parser = subparsers.add_parser(
        "list",
        help="List sessions found in the logs"
    )
    list_parser.add_argument("year", nargs="?", type=int, default=datetime.now().year)
    list_parser.add_argument("--projects-dir", metavar="DIR", type=Path)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Handle subcommands
    if args.command == "gen":
        return cmd_gen(args)
    elif args.command == "record":
        return cmd_record(args)
    elif args.command == "list":
        return cmd_list(args)
    else:
        parser.print_help()
        return 0


def cmd_gen(args) -> int:
    """Generate the report."""
    show_terminal = args.terminal or not args.html
    show_html = args.html or not args.terminal

    print(f"Analyzing sessions for {args.year}...", file=sys.stderr)
    try:
        if args.source == "store":
            report = generate_from_store(args.year, SessionStore(args.data_dir))
        else:
            report = generate_from_logs(args.year, args.projects_dir)
    except NoSessionsError as e:
        print(f"Error: No sessions found for {e.year}", file=sys.stderr)
        if args.source == "store":
            print("Record sessions with 'wrapped record' first", file=sys.stderr)
        else:
            print("Make sure you have used Claude Code this year, or pass --projects-dir", file=sys.stderr)
        return 1

    print(f"Found {report.stats.total_sessions} sessions", file=sys.stderr)

    recap = summarize_year(report, model=args.model) if args.recap else None

    try:
        json_path = save_report(report, args.output)
        print(f"Written to {json_path}", file=sys.stderr)

        if show_terminal:
            print(render_terminal(report, recap, color=not args.no_color))

        if show_html:
            html_path = save_html(report, args.output, recap)
            print(f"HTML written to {html_path}", file=sys.stderr)
    except PersistenceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


def cmd_record(args) -> int:
    """Record a session summary in the store."""
    store = SessionStore(args.data_dir)
    try:
        session = store.record_session({
            "messageCount": args.messages,
            "filesModified": args.files_modified,
            "filesCreated": args.files_created,
            "linesAdded": args.lines_added,
            "linesRemoved": args.lines_removed,
            "toolCalls": args.tool,
            "languages": args.language,
            "project": args.project,
        })
    except PersistenceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(f"Recorded {session['id']}", file=sys.stderr)
    return 0


def cmd_list(args) -> int:
    """List sessions found for a year."""
    sessions = list_sessions(args.projects_dir, year=args.year)

    if not sessions:
        print(f"No sessions found for {args.year}", file=sys.stderr)
        return 1

    print("Sessions:\n")
    for i, s in enumerate(sessions, 1):
        started = s["start_time"].strftime("%Y-%m-%d %H:%M")
        print(f"  {i}. {s['session_id'][:8]}")
        print(f"     {started} | {s['project']}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
