"""Element manager for running an interactive element to completion.

This module provides ElementManager which:
- Owns the raw input session and the output screen while an element runs
- Re-renders after every keystroke that does not finish the element
- Redraws periodically while the element asks for it (narrow terminal)
- Redraws on terminal resize notifications (SIGWINCH) where available
"""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import Any, TextIO, TypeVar

from .base import ActiveElement
from .terminal import RawInputReader, TerminalScreen

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Seconds between redraw attempts while an element wants refreshing
REFRESH_INTERVAL = 0.5


class ElementManager:
    """Coordinates one active element with terminal I/O.

    Only one element can be active at a time. TTY resources (TerminalScreen,
    RawInputReader) are lazily initialized on first use to allow instantiation
    in non-TTY environments (e.g., tests).
    The screen writes to output (stdout by default).
    """

    def __init__(self, output: TextIO | None = None) -> None:
        self._output = output
        self._screen: TerminalScreen | None = None
        self._input: RawInputReader | None = None
        self._active: ActiveElement[Any] | None = None
        self._redraw: asyncio.Event | None = None
        self._refresh_task: asyncio.Task[None] | None = None
        self._resize_handler_installed = False

    def _ensure_initialized(self) -> tuple[TerminalScreen, RawInputReader]:
        """Lazily initialize TTY resources on first use."""
        if self._screen is None:
            self._screen = TerminalScreen(self._output)
        if self._input is None:
            self._input = RawInputReader()
        return self._screen, self._input

    async def run(self, element: ActiveElement[T]) -> T:
        """Run an element until it returns a result.

        Input resources are released on every exit path, including a
        KeyboardInterrupt raised by the element.
        """
        if self._active:
            raise RuntimeError("Another element is already active")

        self._active = element
        element.on_activate()

        screen, input_reader = self._ensure_initialized()
        self._redraw = asyncio.Event()
        read_task: asyncio.Future[Any] | None = None
        redraw_task: asyncio.Future[Any] | None = None
        input_reader.start()

        try:
            screen.activate()
            self._render(element, screen)
            self._install_resize_handler()

            while True:
                if read_task is None:
                    read_task = asyncio.ensure_future(input_reader.read())
                redraw_task = asyncio.ensure_future(self._redraw.wait())
                done, _ = await asyncio.wait(
                    {read_task, redraw_task}, return_when=asyncio.FIRST_COMPLETED
                )
                if redraw_task in done:
                    self._redraw.clear()
                else:
                    redraw_task.cancel()
                redraw_task = None

                if read_task not in done:
                    # Timer or resize: same state, fresh terminal size
                    self._render(element, screen)
                    continue

                event = read_task.result()
                read_task = None
                finished, result = element.handle_input(event)
                if finished:
                    if result is None:
                        raise RuntimeError(
                            "ActiveElement completed without a result value"
                        )
                    return result
                if element.wants_render():
                    self._render(element, screen)

        finally:
            if redraw_task is not None:
                redraw_task.cancel()
            if read_task is not None:
                read_task.cancel()
            self._stop_refresh()
            self._remove_resize_handler()
            input_reader.stop()
            element.on_deactivate()
            screen.deactivate()
            self._active = None

    def _render(self, element: ActiveElement[Any], screen: TerminalScreen) -> None:
        screen.render(element.get_lines())
        if element.wants_refresh():
            self._start_refresh()
        else:
            self._stop_refresh()

    def _start_refresh(self) -> None:
        if self._refresh_task is not None:
            return
        logger.debug("starting redraw timer (%.1fs)", REFRESH_INTERVAL)
        self._refresh_task = asyncio.ensure_future(self._refresh_periodically())

    def _stop_refresh(self) -> None:
        if self._refresh_task is None:
            return
        logger.debug("stopping redraw timer")
        self._refresh_task.cancel()
        self._refresh_task = None

    async def _refresh_periodically(self) -> None:
        while True:
            await asyncio.sleep(REFRESH_INTERVAL)
            if self._redraw is not None:
                self._redraw.set()

    def _request_redraw(self) -> None:
        if self._redraw is not None:
            self._redraw.set()

    def _install_resize_handler(self) -> None:
        """Redraw on SIGWINCH, when the platform and loop support it."""
        if self._resize_handler_installed:
            return
        try:
            loop = asyncio.get_event_loop()
            loop.add_signal_handler(signal.SIGWINCH, self._request_redraw)
        except (AttributeError, NotImplementedError, RuntimeError, ValueError) as e:
            logger.debug("resize notifications unavailable: %s", e)
            return
        self._resize_handler_installed = True
        logger.debug("resize handler installed")

    def _remove_resize_handler(self) -> None:
        """Remove the SIGWINCH handler. Safe to call more than once."""
        if not self._resize_handler_installed:
            return
        self._resize_handler_installed = False
        asyncio.get_event_loop().remove_signal_handler(signal.SIGWINCH)
        logger.debug("resize handler removed")
