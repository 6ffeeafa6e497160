#!/usr/bin/env python3
"""
merge2048: sliding tile puzzle

Slide the tiles with w/a/s/d; equal tiles merge once per move and a new
tile appears after every move that changed the board. The game ends when
the board is full and nothing can move.

Features:
- Web interface pushing board updates over SocketIO
- Curses console interface reading raw keyboard bytes
- Headless replay of a scripted input file (e.g. for fuzzing or debugging)

Usage:
    python main.py                      # Web UI interface
    python main.py --console            # Console mode
    python main.py --port 8080          # Use custom port for Web UI
    python main.py --script moves.txt   # Headless replay, prints the result
"""

import sys
import argparse
import logging
import random

from merge2048.game.loop import GameLoop, RenderError
from merge2048.ui.inputs import ScriptReader
from merge2048.utils import config

logger = logging.getLogger("merge2048")


def configure_logging(debug=False, log_file=None):
    handler_args = {'filename': log_file} if log_file else {}
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        **handler_args,
    )


def run_script(path, rng=None):
    """Replay a file of input bytes without a renderer."""
    if path == '-':
        data = sys.stdin.buffer.read()
    else:
        with open(path, 'rb') as f:
            data = f.read()
    result = GameLoop(ScriptReader(data), rng=rng).run()
    print(f"{result.status.value}: score {result.score}, "
          f"best tile {result.max_tile}, moves {result.moves}")
    return result


def main(argv=None):
    parser = argparse.ArgumentParser(description="merge2048 - sliding tile puzzle")
    parser.add_argument('--console', action='store_true',
                        help="Run in console mode instead of web interface")
    parser.add_argument('--script', metavar='FILE',
                        help="Replay input bytes from FILE ('-' for stdin) without rendering")
    parser.add_argument('--port', type=int, default=None,
                        help="Port to run the web server on")
    parser.add_argument('--seed', type=int, default=None,
                        help="Seed the tile spawner for a reproducible game")
    parser.add_argument('--config', metavar='FILE',
                        help="JSON file with setting overrides")
    parser.add_argument('--log-file', metavar='FILE',
                        help="Write log records to FILE instead of stderr")
    parser.add_argument('--debug', action='store_true',
                        help="Verbose logging (and Flask debug mode for the web interface)")
    parser.add_argument('--no-browser', action='store_true',
                        help="Don't open browser automatically (web interface only)")
    args = parser.parse_args(argv)

    configure_logging(args.debug, args.log_file)

    rng = random.Random(args.seed) if args.seed is not None else None

    try:
        # Initialize configuration
        if args.config:
            config.load_settings(args.config)

        if args.script:
            run_script(args.script, rng)
        elif args.console:
            # Imported lazily: curses is not available everywhere
            from merge2048.ui.console import run_console
            run_console(rng)
        else:
            from merge2048.ui.web import run_server
            run_server(args.port, args.debug, not args.no_browser)
    except RenderError as e:
        logger.error("Game stopped: %s", e)
        print(f"merge2048 failed: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"merge2048: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
