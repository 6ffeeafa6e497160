#!/usr/bin/env python3
"""
Input sources for the game loop.
Each source is a callable returning the next input byte as an int, or
None once the input is exhausted or unreadable.
"""

import logging
import os
import queue

logger = logging.getLogger(__name__)


class FdReader:
    """Blocking one-byte reads from a file descriptor (stdin by default)."""

    def __init__(self, fd=0):
        self.fd = fd

    def __call__(self):
        try:
            data = os.read(self.fd, 1)
        except OSError as e:
            logger.debug("Input read failed: %s", e)
            return None
        if not data:
            return None
        return data[0]


class ScriptReader:
    """Replays a fixed byte buffer, then reports end of input."""

    def __init__(self, data):
        self._data = bytes(data)
        self._pos = 0

    def __call__(self):
        if self._pos >= len(self._data):
            return None
        byte = self._data[self._pos]
        self._pos += 1
        return byte

    @property
    def remaining(self):
        return len(self._data) - self._pos


class QueueReader:
    """Input fed from another thread, e.g. socket event handlers."""

    def __init__(self):
        self._queue = queue.Queue()

    def __call__(self):
        return self._queue.get()

    def feed(self, byte):
        self._queue.put(byte)

    def close(self):
        self._queue.put(None)
