"""Command line entry point for box-picker.

Usage:
    box-picker "What are you doing now?" c=Coding r=Reviewing s=Sleeping
    box-picker --multi --border double "Select tasks" b=Build t=Test l=Lint \\
        --describe b="Compile the project" --describe t="Run unit tests"

Choices written KEY=LABEL use KEY as the hotkey; plain labels are numbered
1, 2, ... The chosen value is printed on stdout (one per line with --multi).
The box is drawn on stderr, so $(box-picker ...) captures only the value.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Any

from .config import DEFAULT_CONFIG_PATH, load_picker_config
from .elements import ElementManager
from .errors import PickerError
from .picker import multi_pick_box, pick_box

# Options that may come from the user config file
CONFIG_KEYS = (
    "border_style",
    "selected_color",
    "description_display",
    "description_placement",
    "show_footer_hint",
    "box_width",
)


def parse_choices(raw: list[str], descriptions: list[str]) -> list[Any] | dict[str, Any]:
    """Turn CLI choice arguments into list or mapping choices.

    The mapping form is used only when every choice is written KEY=LABEL.
    Descriptions are KEY=TEXT, where KEY is the hotkey (1-based position for
    plain labels).
    """
    described: dict[str, str] = {}
    for item in descriptions:
        key, sep, text = item.partition("=")
        if sep:
            described[key] = text

    def make(key: str, label: str) -> Any:
        if key in described:
            return {"value": label, "description": described[key]}
        return label

    keyed = [item.partition("=") for item in raw]
    if raw and all(key and sep for key, sep, _ in keyed):
        return {key: make(key, label) for key, _, label in keyed}
    return [make(str(i + 1), item) for i, item in enumerate(raw)]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="box-picker", description="Boxed selection prompt for the terminal"
    )
    parser.add_argument("question", help="Question shown at the top of the box")
    parser.add_argument("choices", nargs="+", metavar="CHOICE", help="LABEL or KEY=LABEL")
    parser.add_argument("--multi", action="store_true", help="Allow several choices")
    parser.add_argument(
        "--border",
        dest="border_style",
        choices=["round", "single", "double"],
        help="Border style (default: round)",
    )
    parser.add_argument(
        "--color",
        dest="selected_color",
        metavar="STYLE",
        help="Highlight style for the selected line, e.g. 'cyan' or 'bold magenta'",
    )
    parser.add_argument(
        "--no-confirm",
        dest="confirm",
        action="store_false",
        help="Resolve immediately without a confirmation step",
    )
    parser.add_argument(
        "--descriptions",
        dest="description_display",
        choices=["always", "selected", "none"],
        help="When to show descriptions (default: selected)",
    )
    parser.add_argument(
        "--placement",
        dest="description_placement",
        choices=["inline", "footer"],
        help="Where to show descriptions (default: inline)",
    )
    parser.add_argument(
        "--no-hint",
        dest="show_footer_hint",
        action="store_const",
        const=False,
        help="Hide the usage hint",
    )
    parser.add_argument(
        "--width", dest="box_width", type=int, metavar="N", help="Fixed content width (min 15)"
    )
    parser.add_argument(
        "--default",
        dest="default_index",
        type=int,
        default=0,
        metavar="N",
        help="Initial cursor position (default: 0)",
    )
    parser.add_argument(
        "--describe",
        action="append",
        default=[],
        metavar="KEY=TEXT",
        help="Description for the choice with hotkey KEY (repeatable)",
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        metavar="PATH",
        help=f"User defaults file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument("--log-file", metavar="PATH", help="Write logs to PATH")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the box-picker command."""
    args = build_parser().parse_args(argv)

    # Logging to the terminal would corrupt the box, so only to a file
    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG if args.debug else logging.INFO,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    defaults = load_picker_config(args.config)
    options: dict[str, Any] = {
        key: defaults[key] for key in CONFIG_KEYS if key in defaults
    }
    for key in CONFIG_KEYS:
        value = getattr(args, key)
        if value is not None:
            options[key] = value

    choices = parse_choices(args.choices, args.describe)
    prompt = multi_pick_box if args.multi else pick_box
    try:
        result = asyncio.run(
            prompt(
                args.question,
                choices,
                default_index=args.default_index,
                confirm=args.confirm,
                manager=ElementManager(output=sys.stderr),
                **options,
            )
        )
    except PickerError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    if args.multi:
        for value in result.values:
            print(value)
    else:
        print(result.value)


if __name__ == "__main__":
    main()
