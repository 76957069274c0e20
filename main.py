from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from smartgrid import GridConfig, SmartGrid, load_grid_config, save_csv
from smartgrid.export import export_grid_bundle
from smartgrid.sample_data import EXAMPLE_TASKS, ExampleTask, example_columns


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="smartgrid")
    parser.add_argument("--config", type=Path, default=None, help="TOML file with grid settings.")
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Print one page of the example grid as text.")
    _add_view_arguments(show)
    show.add_argument("--page", type=int, default=0)

    export = sub.add_parser("export", help="Export the filtered example grid.")
    _add_view_arguments(export)
    export.add_argument("--out", type=Path, default=None, help="Output directory. Default: Downloads or temp.")
    export.add_argument("--bundle", action="store_true", help="Also write text and PNG previews.")
    export.add_argument("--visible-only", action="store_true")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    config = load_grid_config(args.config) if args.config is not None else GridConfig()
    grid = _build_grid(args, config)

    if args.command == "show":
        grid.set_page(args.page)
        print(grid.render_ascii())
        return 0

    if args.command == "export":
        if args.bundle:
            out_dir = args.out if args.out is not None else Path.cwd()
            bundle = export_grid_bundle(grid, out_dir=out_dir, visible_only=args.visible_only)
            print(json.dumps(bundle.as_dict(), indent=2, sort_keys=True))
            return 0
        result = save_csv(
            grid.export_csv(visible_only=args.visible_only),
            directory=args.out,
            prefix=config.export_prefix,
        )
        print(result.message)
        return 0 if result.ok else 1
    return 2


def _add_view_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--title", default="", help="Case-insensitive title substring.")
    parser.add_argument("--min-priority", default=None)
    parser.add_argument("--max-priority", default=None)
    parser.add_argument("--level", default=None, choices=["High", "Medium", "Low"])
    parser.add_argument("--from", dest="date_from", default=None, help="Created on/after YYYY-MM-DD.")
    parser.add_argument("--to", dest="date_to", default=None, help="Created on/before YYYY-MM-DD.")
    parser.add_argument("--sort", default=None, help="Column label to sort by.")
    parser.add_argument("--desc", action="store_true")
    parser.add_argument("--hide", action="append", default=[], help="Hide a column label (repeatable).")


def _build_grid(args: argparse.Namespace, config: GridConfig) -> SmartGrid[ExampleTask]:
    grid: SmartGrid[ExampleTask] = SmartGrid(
        columns=example_columns(),
        source=EXAMPLE_TASKS,
        config=config,
        identity=lambda task: task.task_id,
    )
    labels = [column.label for column in grid.columns]
    grid.set_text_filter(labels.index("Title"), args.title)
    grid.set_number_range(labels.index("Priority"), args.min_priority, args.max_priority)
    grid.set_select_filter(labels.index("Level"), args.level)
    grid.set_date_range(labels.index("Created"), args.date_from, args.date_to)
    if args.sort is not None:
        if args.sort not in labels:
            raise SystemExit(f"unknown column: {args.sort}")
        grid.sort_by(labels.index(args.sort), ascending=not args.desc)
    elif args.desc:
        grid.sort_by(grid.sort_column_index, ascending=False)
    for label in args.hide:
        grid.toggle_column(label)
    return grid


if __name__ == "__main__":
    raise SystemExit(main())
