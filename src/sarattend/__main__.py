"""Start the SAR Attend application from the command line."""

import argparse
import logging
import pathlib
import sys
from typing import Optional, Sequence

from textual import logging as textual_logging

from sarattend import config, model
from sarattend.view import app


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sarattend",
        description="Sign search and rescue members in and out.",
    )
    parser.add_argument(
        "--config",
        type=pathlib.Path,
        help=f"TOML settings file (default: ./{config.CONFIG_FILE_NAME} if present).",
    )
    parser.add_argument(
        "--data",
        type=pathlib.Path,
        help="JSON file for saved members, sessions, and log.",
    )
    parser.add_argument(
        "--export-dir",
        type=pathlib.Path,
        help="Folder where downloaded logs are written.",
    )
    parser.add_argument(
        "--create-config",
        type=pathlib.Path,
        metavar="PATH",
        help="Write a settings file with the current values and exit.",
    )
    parser.add_argument("--debug", action="store_true", help="Log debug messages.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load settings and saved data, then run the Textual app."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        handlers=[textual_logging.TextualHandler()],
    )

    config_path = args.config
    if config_path is None and (pathlib.Path.cwd() / config.CONFIG_FILE_NAME).exists():
        config_path = pathlib.Path.cwd() / config.CONFIG_FILE_NAME
    try:
        if config_path is not None:
            config.settings.load(config_path)
        if args.data is not None:
            config.settings.data_path = args.data
        if args.export_dir is not None:
            config.settings.export_folder = args.export_dir
        if args.create_config is not None:
            config.settings.create_new_config_file(args.create_config)
            print(f"Created settings file {args.create_config}")
            return 0
    except config.ConfigError as err:
        print(f"sarattend: {err}", file=sys.stderr)
        return 2

    state_file = model.StateFile(config.settings.data_path)
    attendance = model.load_store(state_file, config.settings.default_roster)
    app.SarAttend(attendance, state_file).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
