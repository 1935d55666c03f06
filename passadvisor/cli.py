"""CLI for PassAdvisor — analyze, generate, context (show/set/clear)."""

import argparse
import json
import logging
import sys
from getpass import getpass

from rich import print
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import CONTEXT_KEYS, load_config, save_config
from .evaluator import ContextInfo, StrengthLevel, analyze
from .generator import RandomSourceUnavailable, generate
from .logger import configure_logging
from .suggestions import suggest_improvements

logger = logging.getLogger(__name__)

LEVEL_STYLES = {
    StrengthLevel.VERY_WEAK: "bold red",
    StrengthLevel.WEAK: "red",
    StrengthLevel.MEDIUM: "yellow",
    StrengthLevel.STRONG: "green",
    StrengthLevel.VERY_STRONG: "bold green",
}


def _context_from_args(args, cfg) -> ContextInfo:
    saved = {} if args.no_saved_context else dict(cfg.get("context") or {})
    for key in CONTEXT_KEYS:
        value = getattr(args, key, None)
        if value is not None:
            saved[key] = value
    return ContextInfo.from_mapping(saved)


def cmd_analyze(args, cfg):
    pw = args.password
    if pw is None:
        pw = getpass("Password to analyze (input hidden): ")
    context = _context_from_args(args, cfg)

    report = suggest_improvements(pw, context, examples=args.examples)
    if report is None:
        print("[yellow]Nothing to analyze (empty password).[/yellow]")
        return 0
    result = report["result"]

    if args.json:
        out = result.to_dict()
        out["examples"] = report["examples"]
        out["examples_error"] = report["examples_error"]
        sys.stdout.write(json.dumps(out, indent=2) + "\n")
        return 0

    style = LEVEL_STYLES[result.level]
    header = f"Score: {result.score} / 100 — [{style}]{result.level.label}[/{style}]"
    body = (
        f"Estimated crack time: {escape(result.crack_time)}\n"
        f"Estimated entropy: {result.entropy_bits:.1f} bits"
    )
    print(Panel(body, title=header))
    if result.breach_detected:
        print("[bold red]Warning:[/bold red] this password is on a list of known leaked passwords.")
    if result.personal_info_detected:
        print("[bold yellow]Warning:[/bold yellow] this password contains your personal information.")

    if report["suggestions"]:
        print("\n[bold]Suggestions:[/bold]")
        for s in report["suggestions"]:
            print(f" • {escape(s)}")
    if report["examples"]:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Example stronger password")
        for ex in report["examples"]:
            table.add_row(Text(ex))
        print()
        print(table)
    if report["examples_error"]:
        print(f"[red]Could not generate example passwords: {escape(report['examples_error'])}[/red]")
    return 0


def cmd_generate(args, cfg):
    length = args.length if args.length is not None else int(cfg.get("generate_length", 16))
    try:
        for i in range(args.copies):
            pw = generate(length=length)
            # Text keeps symbols such as "[b]" or ":x:" from being read as markup
            line = Text.assemble((f"Password #{i+1}: ", "bold green"), pw)
            if args.check:
                result = analyze(pw)
                line.append(f"  ({result.score}/100, {result.level.label}, {result.crack_time})")
            print(line)
    except (ValueError, RandomSourceUnavailable) as e:
        print(f"[red]Failed to generate password: {escape(str(e))}[/red]")
        return 1
    return 0


# Context subcommands

def cmd_context_show(args, cfg):
    context = cfg.get("context") or {}
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Field")
    table.add_column("Value")
    for key in CONTEXT_KEYS:
        value = context.get(key)
        table.add_row(key, Text(str(value)) if value else "[dim]not set[/dim]")
    print(table)
    return 0


def cmd_context_set(args, cfg):
    changed = {key: getattr(args, key) for key in CONTEXT_KEYS if getattr(args, key) is not None}
    if not changed:
        print("[yellow]Nothing to set; pass at least one of --name, --birth-year, --mobile, --fav-word.[/yellow]")
        return 1
    cfg["context"].update(changed)
    save_config(cfg)
    print(f"[green]Saved context field(s):[/green] {', '.join(sorted(changed))}")
    return 0


def cmd_context_clear(args, cfg):
    cfg["context"] = {key: None for key in CONTEXT_KEYS}
    save_config(cfg)
    print("[green]Cleared saved context.[/green]")
    return 0


def _add_context_flags(p):
    p.add_argument("--name", type=str, help="Your name")
    p.add_argument("--birth-year", dest="birth_year", type=str, help="Your birth year")
    p.add_argument("--mobile", type=str, help="Your mobile number")
    p.add_argument("--fav-word", dest="fav_word", type=str, help="A favorite word")


def build_parser():
    parser = argparse.ArgumentParser(prog="passadvisor")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Logging level (DEBUG, INFO, WARNING, ...); defaults to the config value")
    sub = parser.add_subparsers(dest="cmd", required=True)

    an = sub.add_parser("analyze", help="Score a password and show suggestions")
    an.add_argument("password", type=str, nargs="?",
                    help="Password to evaluate (wrap in quotes); prompted for when omitted")
    _add_context_flags(an)
    an.add_argument("--no-saved-context", action="store_true", help="Ignore context saved in the config")
    an.add_argument("--examples", type=int, default=1, help="How many stronger example passwords to show")
    an.add_argument("--json", action="store_true", help="Print the result as JSON")
    an.set_defaults(func=cmd_analyze)

    gen = sub.add_parser("generate", help="Generate one or more passwords")
    gen.add_argument("--length", type=int, default=None, help="Password length (default 16)")
    gen.add_argument("--copies", type=int, default=1, help="How many passwords to generate")
    gen.add_argument("--check", action="store_true", help="Also show the score of each password")
    gen.set_defaults(func=cmd_generate)

    ctx = sub.add_parser("context", help="Saved personal hints checked during analysis")
    csub = ctx.add_subparsers(dest="ccmd", required=True)

    c_show = csub.add_parser("show", help="Show saved context")
    c_show.set_defaults(func=cmd_context_show)

    c_set = csub.add_parser("set", help="Save one or more context fields")
    _add_context_flags(c_set)
    c_set.set_defaults(func=cmd_context_set)

    c_clear = csub.add_parser("clear", help="Remove all saved context")
    c_clear.set_defaults(func=cmd_context_clear)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = load_config()
    try:
        configure_logging(args.log_level or cfg.get("log_level", "WARNING"))
    except ValueError as e:
        parser.error(str(e))
    logger.debug("running command %s", args.cmd)
    return args.func(args, cfg)


if __name__ == "__main__":
    sys.exit(main())
