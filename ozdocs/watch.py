"""Debounced file watching for the preview watch mode."""

from __future__ import annotations

import os
import threading
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .logging import get_logger

_logger = get_logger("watch")

# Reads (opened/closed) are not changes; the build itself would retrigger on them.
_CHANGE_EVENTS = frozenset({"created", "modified", "deleted", "moved"})

_GLOB_CHARS = "*?["


class Debouncer:
    """Collapses bursts of triggers into one trailing call of ``action``.

    Each trigger cancels the pending timer and starts a new one, so ``action``
    runs once ``delay`` seconds after the last trigger of a burst.
    """

    def __init__(
        self,
        action: Callable[[], object],
        delay: float,
        *,
        name: str = "action",
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ) -> None:
        self._action = action
        self._delay = delay
        self._name = name
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self._state_lock = threading.Lock()
        self._run_lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def trigger(self) -> None:
        with self._state_lock:
            if self._timer is not None:
                self._timer.cancel()

            def fire() -> None:
                self._fire(timer)

            timer = self._timer_factory(self._delay, fire)
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        with self._state_lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _fire(self, timer: threading.Timer) -> None:
        with self._state_lock:
            # A newer trigger replaced this timer after it expired.
            if self._timer is not timer:
                return
            self._timer = None
        with self._run_lock:
            _logger.debug("Running %s", self._name)
            try:
                self._action()
            except Exception:
                _logger.exception("%s failed; still watching", self._name)


class PatternEventHandler(FileSystemEventHandler):
    """Calls ``callback`` for file changes matching any pattern.

    Patterns are relative to ``root`` unless they point outside it, in which
    case they are kept absolute and matched against absolute event paths.
    """

    def __init__(self, root: Path, patterns: Sequence[str], callback: Callable[[], None]) -> None:
        super().__init__()
        self.root = root.resolve()
        self.patterns = [_anchor_pattern(self.root, pattern) for pattern in patterns]
        self._callback = callback

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in _CHANGE_EVENTS:
            return
        for raw in (event.src_path, getattr(event, "dest_path", "")):
            if not raw:
                continue
            path = Path(os.fsdecode(raw)).resolve().as_posix()
            if self.matches(path):
                _logger.debug("%s %s", event.event_type, path)
                self._callback()
                return

    def matches(self, path: str) -> bool:
        absolute = path if os.path.isabs(path) else (self.root / path).as_posix()
        relative = self._relativize(absolute)
        for pattern in self.patterns:
            if os.path.isabs(pattern):
                if pattern_matches(absolute, pattern):
                    return True
            elif relative is not None and pattern_matches(relative, pattern):
                return True
        return False

    def _relativize(self, path: str) -> Optional[str]:
        try:
            return Path(path).relative_to(self.root).as_posix()
        except ValueError:
            return None


class WatchSession:
    """Owns the observer and the debouncers registered for one watch run."""

    def __init__(self, observer: Optional[Observer] = None) -> None:
        self.observer = observer if observer is not None else Observer()
        self.debouncers: List[Debouncer] = []
        self.handlers: List[PatternEventHandler] = []

    def add(
        self,
        root: Path,
        patterns: Sequence[str],
        action: Callable[[], object],
        *,
        delay: float,
        name: str,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ) -> Debouncer:
        debouncer = Debouncer(action, delay, name=name, timer_factory=timer_factory)
        handler = PatternEventHandler(root, patterns, debouncer.trigger)
        for base in watch_roots(handler.root, handler.patterns):
            _logger.debug("Watching %s for %s", base, ", ".join(handler.patterns))
            self.observer.schedule(handler, str(base), recursive=True)
        self.debouncers.append(debouncer)
        self.handlers.append(handler)
        return debouncer

    def trigger_all(self) -> None:
        """Run every registered action once, as if each watcher saw a change."""
        for debouncer in self.debouncers:
            debouncer.trigger()

    def start(self) -> None:
        self.observer.start()

    def stop(self) -> None:
        for debouncer in self.debouncers:
            debouncer.cancel()
        self.observer.stop()
        self.observer.join()

    def run_forever(self, poll_interval: float = 1.0) -> None:
        """Watch until interrupted."""
        self.start()
        try:
            while self.observer.is_alive():
                self.observer.join(poll_interval)
        except KeyboardInterrupt:
            _logger.info("Stopping watch")
        finally:
            self.stop()


def pattern_matches(path: str, pattern: str) -> bool:
    """Match a POSIX path against a glob where ``**`` spans directories."""
    normalized = path.replace("\\", "/")
    if pattern.endswith("/"):
        return normalized.startswith(pattern)
    if not any(ch in pattern for ch in _GLOB_CHARS):
        return normalized == pattern or normalized.startswith(f"{pattern}/")
    return _match_parts(normalized.split("/"), pattern.split("/"))


def watch_roots(root: Path, patterns: Iterable[str]) -> List[Path]:
    """Return the existing directories that cover every pattern, without nesting."""
    candidates: List[Path] = []
    for pattern in patterns:
        prefix = _static_prefix(pattern)
        base = Path(prefix) if os.path.isabs(pattern) else root / prefix
        while base != base.parent and not base.is_dir():
            base = base.parent
        candidates.append(base)

    roots: List[Path] = []
    for candidate in sorted(set(candidates), key=lambda item: (len(item.parts), str(item))):
        if not any(candidate == kept or kept in candidate.parents for kept in roots):
            roots.append(candidate)
    return roots


def _match_parts(parts: Sequence[str], pattern_parts: Sequence[str]) -> bool:
    if not pattern_parts:
        return not parts
    head, rest = pattern_parts[0], pattern_parts[1:]
    if head == "**":
        return any(_match_parts(parts[index:], rest) for index in range(len(parts) + 1))
    return bool(parts) and fnmatchcase(parts[0], head) and _match_parts(parts[1:], rest)


def _static_prefix(pattern: str) -> str:
    head = "/" if pattern.startswith("/") else ""
    parts: List[str] = []
    for part in pattern.lstrip("/").split("/"):
        if not part or any(ch in part for ch in _GLOB_CHARS):
            break
        parts.append(part)
    return head + "/".join(parts)


def _anchor_pattern(root: Path, pattern: str) -> str:
    joined = Path(os.path.normpath(os.path.join(root, pattern.replace("\\", "/"))))
    try:
        relative = joined.relative_to(root).as_posix()
    except ValueError:
        return joined.as_posix()
    return "**" if relative == "." else relative


__all__ = ["Debouncer", "PatternEventHandler", "WatchSession", "pattern_matches", "watch_roots"]
