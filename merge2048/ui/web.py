#!/usr/bin/env python3
"""
Web interface for merge2048.
Uses Flask and SocketIO: the renderer pushes board updates to every
connected browser and key presses come back as socket events.
"""

import logging
import os
import socket
import threading
import webbrowser

from flask import Flask, render_template, request
from flask_socketio import SocketIO, emit

from ..game.loop import GameLoop, RenderError
from ..utils import config
from .inputs import QueueReader

logger = logging.getLogger(__name__)

# Initialize Flask app and SocketIO
app = Flask(__name__,
            template_folder=os.path.join(os.path.dirname(os.path.dirname(__file__)), 'templates'))
app.config['SECRET_KEY'] = 'secret!'
socketio = SocketIO(app, cors_allowed_origins="*", async_mode="threading")

# Keys the page may send besides the raw w/a/s/d bytes
ARROW_KEYS = {
    'ArrowUp': ord('w'),
    'ArrowLeft': ord('a'),
    'ArrowDown': ord('s'),
    'ArrowRight': ord('d'),
}


# Get local IP address
def get_local_ip():
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        # doesn't need to be reachable
        s.connect(('10.255.255.255', 1))
        ip = s.getsockname()[0]
    except OSError:
        ip = '127.0.0.1'
    finally:
        s.close()
    return ip


def snapshot_payload(snapshot):
    """JSON-ready view of a snapshot."""
    return {
        'board': snapshot.values().tolist(),
        'score': int(snapshot.score),
        'max_tile': int(snapshot.max_tile),
        'moves': int(snapshot.moves),
        'won': snapshot.won,
        'game_over': snapshot.game_over,
        'status': snapshot.status.value,
    }


def key_to_byte(key):
    """Translate a browser key name into an input byte, None if unbound."""
    if not isinstance(key, str):
        return None
    if key in ARROW_KEYS:
        return ARROW_KEYS[key]
    if len(key) == 1:
        byte = ord(key)
        if byte in config.KEY_BINDINGS:
            return byte
    return None


class SocketRenderer:
    """Render sink broadcasting every frame to all connected clients."""

    def __init__(self, sio):
        self.sio = sio

    def __call__(self, snapshot):
        self.sio.emit('board_update', snapshot_payload(snapshot))


class WebSession:
    """One game at a time, driven by socket events from any browser."""

    def __init__(self, render, rng=None):
        self.render = render
        self.rng = rng
        self.reader = None
        self.loop = None
        self.thread = None
        self._lock = threading.Lock()

    def _run(self, loop):
        try:
            result = loop.run()
            logger.info("Game finished: %s, score %d", result.status.value, result.score)
        except RenderError as e:
            logger.error("Web renderer stopped: %s", e)

    def _stop_locked(self):
        if self.reader is not None:
            self.reader.close()
            self.thread.join()
        self.reader = None
        self.loop = None
        self.thread = None

    def start(self):
        """Start a new game, ending the current one first."""
        with self._lock:
            self._stop_locked()
            self.reader = QueueReader()
            self.loop = GameLoop(self.reader, self.render, rng=self.rng)
            self.thread = threading.Thread(target=self._run, args=(self.loop,), daemon=True)
            self.thread.start()

    def ensure_started(self):
        with self._lock:
            running = self.loop is not None
        if not running:
            self.start()

    def feed(self, byte):
        with self._lock:
            if self.reader is not None:
                self.reader.feed(byte)

    def snapshot(self):
        with self._lock:
            return self.loop.shared.snapshot() if self.loop is not None else None

    def close(self):
        with self._lock:
            self._stop_locked()


game_session = WebSession(SocketRenderer(socketio))


# Flask routes
@app.route('/')
def index():
    return render_template('index.html')


# SocketIO event handlers
@socketio.on('connect')
def handle_connect():
    logger.debug("Client connected: %s", request.sid)
    game_session.ensure_started()
    snapshot = game_session.snapshot()
    if snapshot is not None:
        emit('board_update', snapshot_payload(snapshot))


@socketio.on('key')
def handle_key(data):
    key = data.get('key') if isinstance(data, dict) else data
    byte = key_to_byte(key)
    if byte is not None:
        game_session.feed(byte)


@socketio.on('new_game')
def handle_new_game():
    logger.debug("New game requested by %s", request.sid)
    game_session.start()


def run_server(port_number=None, debug=False, open_browser=True):
    """
    Run the merge2048 web interface.

    Args:
        port_number: Port to run the server on
        debug: Whether to run in debug mode
        open_browser: Whether to open the browser automatically
    """
    port = port_number or config.WEB_PORT

    # Get local IP
    local_ip = get_local_ip()
    server_url = f"http://{local_ip}:{port}"
    print(f"Starting merge2048 web server at {server_url}")

    # Open browser if requested
    if open_browser:
        threading.Timer(1.0, lambda: webbrowser.open(server_url)).start()

    # Start the server
    try:
        socketio.run(app, host='0.0.0.0', port=port, debug=debug, allow_unsafe_werkzeug=True)
    finally:
        game_session.close()
