from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from champion_gallery.collection import fetch_collection
from champion_gallery.config import Settings
from champion_gallery.device import WindowSize
from champion_gallery.state import CollectionSettled
from champion_gallery.store import Store
from champion_gallery.views import screen_to_dict, state_to_dict


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse the champion catalog")
    parser.add_argument("--config", default=None, help="Path to settings JSON")
    parser.add_argument("--width", type=int, default=None, help="Initial window width")
    parser.add_argument("--height", type=int, default=None, help="Initial window height")
    parser.add_argument("--verbose", action="store_true", help="Log at INFO level")

    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the gallery web app")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=5001)
    serve.add_argument("--debug", action="store_true")

    show = sub.add_parser("show", help="Fetch the catalog and print the screen for a path")
    show.add_argument("--path", default="/", help="Location path, e.g. /ahri")

    return parser


def _load_settings(path: Optional[str]) -> Settings:
    if path is None:
        return Settings()
    return Settings.load(Path(path))


def _initial_size(args: argparse.Namespace, settings: Settings) -> WindowSize:
    width = args.width if args.width is not None else settings.initial_width
    height = args.height if args.height is not None else settings.initial_height
    if width < 0 or height < 0:
        raise SystemExit("Window dimensions must be non-negative")
    return WindowSize(width, height)


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = _load_settings(args.config)
    size = _initial_size(args, settings)

    if args.command == "serve":
        from champion_gallery.app import create_app

        app = create_app(settings, initial_size=size)
        app.run(host=args.host, port=args.port, debug=args.debug, use_reloader=False)
        return

    if args.command == "show":
        store = Store(settings, initial_path=args.path, initial_size=size)
        state = store.dispatch(CollectionSettled(fetch_collection(settings)))
        print(json.dumps({
            "state": state_to_dict(state),
            "screen": screen_to_dict(store.screen(), settings),
        }, indent=2))
        return

    raise SystemExit(f"Unknown command: {args.command}")


if __name__ == "__main__":
    main()
