"""
Data models for browsers and open results
"""

import subprocess
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional


@dataclass
class BrowserInfo:
    """The system default browser"""
    common_name: str
    identifier: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "common_name": self.common_name,
            "identifier": self.identifier,
        }


@dataclass
class AvailableBrowser:
    """An installed browser found on the system"""
    name: str
    version: str
    type: str
    command: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "type": self.type,
            "command": self.command,
        }


class BrowserInstance:
    """
    A started browser process

    Handlers registered for the "stop" event are called with the exit code
    once the process terminates. The process is watched from a daemon thread
    that is only started when the first handler is registered.
    """

    EVENTS = ("stop",)

    def __init__(self, process: subprocess.Popen, command: str):
        self.process = process
        self.command = command
        self._handlers: Dict[str, List[Callable[[Optional[int]], None]]] = {"stop": []}
        self._lock = threading.Lock()
        self._watcher: Optional[threading.Thread] = None
        self._exit_code: Optional[int] = None
        self._stopped = False

    @property
    def pid(self) -> int:
        """Process identifier of the browser"""
        return self.process.pid

    @property
    def exit_code(self) -> Optional[int]:
        """Exit code once the process has stopped, None while running"""
        return self._exit_code

    def on(self, event: str, handler: Callable[[Optional[int]], None]) -> None:
        """
        Register an event handler

        Args:
            event: Event name, only "stop" is supported
            handler: Called with the exit code when the event fires
        """
        if event not in self.EVENTS:
            raise ValueError(f"Unknown event: {event}")

        with self._lock:
            if self._stopped:
                fire_now = True
            else:
                fire_now = False
                self._handlers[event].append(handler)
                if self._watcher is None:
                    self._watcher = threading.Thread(
                        target=self._watch,
                        name=f"browser-{self.pid}",
                        daemon=True,
                    )
                    self._watcher.start()

        if fire_now:
            handler(self._exit_code)

    def wait(self, timeout: Optional[float] = None) -> Optional[int]:
        """Wait for the browser to exit and return its exit code"""
        return self.process.wait(timeout=timeout)

    def _watch(self) -> None:
        code = self.process.wait()
        with self._lock:
            self._exit_code = code
            self._stopped = True
            handlers = list(self._handlers["stop"])
            self._handlers["stop"].clear()
        for handler in handlers:
            handler(code)

    def __repr__(self) -> str:
        return f"BrowserInstance(command={self.command!r}, pid={self.pid})"


@dataclass
class OpenResult:
    """Terminal outcome of a single open call"""
    error: Optional[Exception] = None
    message: Optional[str] = None
    extra: Optional[str] = None
    command: Optional[str] = None
    instance: Optional[BrowserInstance] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "error": str(self.error) if self.error else None,
            "message": self.message,
            "command": self.command,
            "pid": self.instance.pid if self.instance else None,
        }
