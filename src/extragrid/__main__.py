"""CLI entry point for extragrid.

Usage:
    python -m extragrid new <rows> <cols> [--header-rows N] [--header-cols N]
    python -m extragrid apply <script.json> [--input grid.json|grid.html]

Scripts are JSON lists of steps such as
``{"op": "selectRange", "args": [1, 1, 2, 1]}`` followed by
``{"op": "merge"}``. ``reset`` also takes ``"options"``
(``headerRows``, ``headerCols``, ``showCoords``).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from extragrid.config import ResetOptions, get_settings
from extragrid.editor import GridEditor
from extragrid.exceptions import GridError
from extragrid.logging import configure_logging
from extragrid.serde import GridData, to_html

# Script op name -> GridEditor method
OPERATIONS = {
    "reset": "reset",
    "selectCell": "select_cell",
    "selectRange": "select_range",
    "clearSelection": "clear_selection",
    "navigate": "navigate",
    "setContent": "set_content",
    "merge": "merge",
    "split": "split",
    "addRowAbove": "add_row_above",
    "addRowBelow": "add_row_below",
    "addColLeft": "add_col_left",
    "addColRight": "add_col_right",
    "deleteRows": "delete_rows",
    "deleteCols": "delete_cols",
    "moveRows": "move_rows",
    "moveCols": "move_cols",
    "toHeaderRows": "to_header_rows",
    "toHeaderCols": "to_header_cols",
    "toDataRows": "to_data_rows",
    "toDataCols": "to_data_cols",
    "undo": "undo",
    "redo": "redo",
}


class ScriptStep(BaseModel):
    """One step of an ``apply`` script."""

    model_config = ConfigDict(extra="forbid")

    op: str
    args: list[Any] = Field(default_factory=list)
    options: dict[str, Any] = Field(default_factory=dict)


_SCRIPT_ADAPTER = TypeAdapter(list[ScriptStep])


def render(data: GridData, fmt: str) -> str:
    """Render a grid snapshot in the requested output format."""
    if fmt == "html":
        return to_html(data)
    return data.to_json(indent=2)


def run_script(editor: GridEditor, steps: list[ScriptStep]) -> None:
    """Apply script steps to ``editor`` in order.

    Raises:
        ValueError: On an unknown operation name.
        GridError: If an operation raises (e.g. an illegal move).
    """
    for number, step in enumerate(steps, start=1):
        method_name = OPERATIONS.get(step.op)
        if method_name is None:
            raise ValueError(f"step {number}: unknown operation {step.op!r}")
        kwargs: dict[str, Any] = {}
        if step.options:
            if step.op != "reset":
                raise ValueError(f"step {number}: {step.op} takes no options")
            kwargs = ResetOptions.model_validate(step.options).model_dump()
        getattr(editor, method_name)(*step.args, **kwargs)


def cmd_new(args: argparse.Namespace) -> int:
    """Print a fresh grid."""
    editor = GridEditor()
    try:
        editor.reset(
            args.rows,
            args.cols,
            header_rows=args.header_rows,
            header_cols=args.header_cols,
            show_coords=True if args.coords else None,
        )
    except (ValueError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(render(editor.get_content(), args.format))
    return 0


def cmd_apply(args: argparse.Namespace) -> int:
    """Apply a script of operations and print the resulting grid."""
    script_file = Path(args.script)
    if not script_file.exists():
        print(f"Error: Script file not found: {script_file}", file=sys.stderr)
        return 1

    try:
        steps = _SCRIPT_ADAPTER.validate_json(script_file.read_text(encoding="utf-8"))
    except ValidationError as e:
        print(f"Error: Invalid script {script_file}: {e}", file=sys.stderr)
        return 1

    editor = GridEditor()
    if args.input:
        input_file = Path(args.input)
        if not input_file.exists():
            print(f"Error: Input file not found: {input_file}", file=sys.stderr)
            return 1
        try:
            editor.load(input_file.read_text(encoding="utf-8"))
        except (GridError, ValueError) as e:
            print(f"Error: Invalid grid in {input_file}: {e}", file=sys.stderr)
            return 1

    try:
        run_script(editor, steps)
    except (GridError, ValueError, TypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(render(editor.get_content(), args.format))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="extragrid",
        description="Edit merged-cell grids from the command line",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every operation at DEBUG level to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # new subcommand
    new_parser = subparsers.add_parser(
        "new",
        help="Print a fresh rows x cols grid",
    )
    new_parser.add_argument("rows", type=int, help="Number of rows")
    new_parser.add_argument("cols", type=int, help="Number of columns")
    new_parser.add_argument(
        "--header-rows",
        type=int,
        default=0,
        help="Leading rows made of header cells (default: 0)",
    )
    new_parser.add_argument(
        "--header-cols",
        type=int,
        default=0,
        help="Leading columns made of header cells (default: 0)",
    )
    new_parser.add_argument(
        "--coords",
        action="store_true",
        help="Fill each cell with its own 'row,col' coordinates",
    )
    new_parser.set_defaults(func=cmd_new)

    # apply subcommand
    apply_parser = subparsers.add_parser(
        "apply",
        help="Apply a JSON script of operations to a grid",
    )
    apply_parser.add_argument("script", help="Path to the JSON script")
    apply_parser.add_argument(
        "-i",
        "--input",
        default=None,
        help="Grid to start from, as JSON or HTML (default: empty grid)",
    )
    apply_parser.set_defaults(func=cmd_apply)

    for sub in (new_parser, apply_parser):
        sub.add_argument(
            "--format",
            choices=["json", "html"],
            default="json",
            help="Output format (default: json)",
        )

    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(
        json_output=settings.log_json,
        log_level="DEBUG" if args.verbose else settings.log_level,
    )

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
