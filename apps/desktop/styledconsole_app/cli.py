"""CLI entrypoints for the styled console window and headless markup tools."""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from styledconsole_core import StyledConsole, load_config
from styledconsole_core.config import config_path
from styledconsole_core.logging_setup import configure_from
from styledconsole_markup import (
    ColorValue,
    EffectRegistry,
    FontFamilyTable,
    Line,
    MarkupParser,
    StyledDocument,
    TextBlock,
)


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _color_payload(color: ColorValue | None) -> dict[str, Any] | None:
    if color is None:
        return None
    return {"r": color.r, "g": color.g, "b": color.b, "a": color.a, "hex": color.to_hex()}


def document_payload(document: StyledDocument) -> list[list[dict[str, Any]]]:
    return [
        [
            {
                "text": block.text,
                "text_color": _color_payload(block.text_color),
                "bg_color": _color_payload(block.bg_color),
                "font": {
                    "family": block.font.family,
                    "size": block.font.size,
                    "style": None if block.font.style is None else int(block.font.style),
                },
                "effect": block.effect.describe(),
            }
            for block in line
        ]
        for line in document
    ]


def _read_markup(args: argparse.Namespace) -> str:
    if args.file:
        return Path(args.file).read_text(encoding="utf-8")
    return args.text


def cmd_run(_args: argparse.Namespace) -> int:
    from .app import run_gui
    from .demo import demo

    return run_gui(demo, load_config())


def cmd_show(args: argparse.Namespace) -> int:
    from .app import run_gui

    markup = _read_markup(args)

    def script(console: StyledConsole) -> None:
        console.print(markup)
        if args.read:
            line = console.read_line()
            console.print(Line.of(TextBlock(text=f"> {line}")))

    return run_gui(script, load_config())


def cmd_parse(args: argparse.Namespace) -> int:
    cfg = load_config()
    families = [name.strip() for name in (args.families or "").split(",") if name.strip()]
    parser = MarkupParser(families=FontFamilyTable.of(families), defaults=cfg.style.defaults())
    _print_json(document_payload(parser.parse(_read_markup(args))))
    return 0


def cmd_effects(_args: argparse.Namespace) -> int:
    _print_json(EffectRegistry.with_builtins().names())
    return 0


def cmd_config(_args: argparse.Namespace) -> int:
    _print_json({"path": str(config_path()), "config": asdict(load_config())})
    return 0


def _add_markup_source(cmd: argparse.ArgumentParser) -> None:
    source = cmd.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", default=None, help="Markup text")
    source.add_argument("--file", default=None, help="Path to a UTF-8 file with markup text")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="styledconsole", description="Styled console window and markup tools")
    sub = parser.add_subparsers(dest="command", required=True)

    run_cmd = sub.add_parser("run", help="Open the console window with the built-in demo")
    run_cmd.set_defaults(func=cmd_run)

    show_cmd = sub.add_parser("show", help="Open the console window and print markup")
    _add_markup_source(show_cmd)
    show_cmd.add_argument("--read", action="store_true", help="Read one line of input afterwards and echo it")
    show_cmd.set_defaults(func=cmd_show)

    parse_cmd = sub.add_parser("parse", help="Parse markup and print the styled document as JSON")
    _add_markup_source(parse_cmd)
    parse_cmd.add_argument("--families", default=None, help="Comma-separated font families treated as installed")
    parse_cmd.set_defaults(func=cmd_parse)

    effects_cmd = sub.add_parser("effects", help="List registered effect names")
    effects_cmd.set_defaults(func=cmd_effects)

    config_cmd = sub.add_parser("config", help="Print the config path and effective settings")
    config_cmd.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_from(load_config().diagnostics, console=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
