#!/usr/bin/env python3
"""
Handoff between the game loop and a renderer running on its own thread.
The game loop only wakes the renderer; the renderer pulls a snapshot.
"""

import logging
import threading
import time

from ..utils import config

logger = logging.getLogger(__name__)


class FrameSignal:
    """
    Coalescing wake-up flag. Any number of notify() calls made before the
    renderer gets to wait() again result in a single frame.
    """

    def __init__(self):
        self._cond = threading.Condition()
        self._pending = False
        self._closed = False

    def notify(self):
        with self._cond:
            self._pending = True
            self._cond.notify()

    def close(self):
        # The closing wake always asks for one last frame
        with self._cond:
            self._closed = True
            self._pending = True
            self._cond.notify()

    @property
    def closed(self):
        with self._cond:
            return self._closed

    def wait(self, timeout=None):
        """
        Block until a frame is pending or the signal is closed.
        Returns (pending, closed) and clears the pending flag.
        """
        with self._cond:
            self._cond.wait_for(lambda: self._pending or self._closed, timeout)
            pending, self._pending = self._pending, False
            return pending, self._closed

    def drain(self):
        """Drop wake-ups that arrived since the last wait(). Returns closed."""
        with self._cond:
            self._pending = False
            return self._closed


class RenderWorker(threading.Thread):
    """
    Renderer thread: waits for a wake-up, copies a snapshot under the lock,
    then draws outside it. Frames are at least `frame_interval` apart.
    """

    def __init__(self, shared, render, signal=None, frame_interval=None, clock=time.monotonic):
        super().__init__(name="render", daemon=True)
        self.shared = shared
        self.render = render
        self.signal = signal or FrameSignal()
        self.frame_interval = config.FRAME_INTERVAL if frame_interval is None else frame_interval
        self.clock = clock
        self.frames = 0
        self.error = None

    def run(self):
        last_frame = None
        try:
            while True:
                pending, closed = self.signal.wait()
                if pending:
                    # Collapse wakeups that arrive inside the frame interval
                    if last_frame is not None and not closed:
                        remaining = self.frame_interval - (self.clock() - last_frame)
                        if remaining > 0:
                            time.sleep(remaining)
                            closed = self.signal.drain()
                    snapshot = self.shared.snapshot()
                    self.render(snapshot)
                    self.frames += 1
                    last_frame = self.clock()
                if closed:
                    break
        except Exception as e:
            logger.error("Renderer failed: %s", e, exc_info=True)
            self.error = e

    def wake(self):
        self.signal.notify()

    @property
    def failed(self):
        return self.error is not None

    def stop(self):
        """Close the signal and wait for the renderer to draw its last frame."""
        self.signal.close()
        self.join()
