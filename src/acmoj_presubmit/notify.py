# Copyright 2026 Pennyworth Technologies, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""User-facing notifications for a hook run.

A notifier shows info/warning/error messages, a progress indicator per
step, and a run log that is cleared at the start of every run and revealed
when a hook fails.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)


class ProgressReporter:
    """Receives status text for the step in progress."""

    def report(self, message: str) -> None:
        pass


class Notifier(ABC):
    """Notification sink used by the pipeline."""

    @abstractmethod
    def info(self, message: str) -> None:
        pass

    @abstractmethod
    def warning(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        pass

    @abstractmethod
    def append_log(self, line: str) -> None:
        pass

    def clear_log(self) -> None:
        pass

    def show_log(self) -> None:
        pass

    @contextmanager
    def progress(self, title: str) -> Iterator[ProgressReporter]:
        yield ProgressReporter()


class LoggingNotifier(Notifier):
    """Routes every notification to the logging module."""

    def __init__(self, name: str = "acmoj_presubmit.hooks"):
        self._logger = logging.getLogger(name)

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)

    def append_log(self, line: str) -> None:
        self._logger.debug(line)


class _StatusReporter(ProgressReporter):
    def __init__(self, status, title: str):
        self._status = status
        self._title = title

    def report(self, message: str) -> None:
        self._status.update(f"[cyan]{escape(self._title)}[/cyan] [dim]{escape(message)}[/dim]")


class ConsoleNotifier(Notifier):
    """Notifier that writes to a rich console (stderr by default).

    Run log lines are buffered and printed by show_log(), or immediately
    when verbose is set.
    """

    def __init__(self, console: Console | None = None, verbose: bool = False, quiet: bool = False):
        self.console = console or Console(stderr=True)
        self.verbose = verbose
        self.quiet = quiet
        self.log_lines: list[str] = []

    def info(self, message: str) -> None:
        if not self.quiet:
            self.console.print(f"[green]Info:[/green] {escape(message)}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]Error:[/red] {escape(message)}")

    def append_log(self, line: str) -> None:
        self.log_lines.append(line)
        if self.verbose:
            self.console.print(f"[dim]{escape(line)}[/dim]")

    def clear_log(self) -> None:
        self.log_lines.clear()

    def show_log(self) -> None:
        if self.verbose:
            return
        for line in self.log_lines:
            self.console.print(f"[dim]{escape(line)}[/dim]")

    @contextmanager
    def progress(self, title: str) -> Iterator[ProgressReporter]:
        if self.quiet or not self.console.is_terminal:
            yield ProgressReporter()
            return
        with self.console.status(f"[cyan]{escape(title)}[/cyan]") as status:
            yield _StatusReporter(status, title)


class _SafeReporter(ProgressReporter):
    def __init__(self, inner: ProgressReporter | None):
        self._inner = inner

    def report(self, message: str) -> None:
        if self._inner is None:
            return
        try:
            self._inner.report(message)
        except Exception as e:
            logger.warning("Progress report failed: %s", e)


class SafeNotifier(Notifier):
    """Wraps a notifier so its failures are logged and never propagate."""

    def __init__(self, inner: Notifier):
        self._inner = inner

    def _call(self, method: str, *args) -> None:
        try:
            getattr(self._inner, method)(*args)
        except Exception as e:
            logger.warning("Notifier %s failed: %s", method, e)

    def info(self, message: str) -> None:
        self._call("info", message)

    def warning(self, message: str) -> None:
        self._call("warning", message)

    def error(self, message: str) -> None:
        self._call("error", message)

    def append_log(self, line: str) -> None:
        self._call("append_log", line)

    def clear_log(self) -> None:
        self._call("clear_log")

    def show_log(self) -> None:
        self._call("show_log")

    @contextmanager
    def progress(self, title: str) -> Iterator[ProgressReporter]:
        try:
            manager = self._inner.progress(title)
            reporter = manager.__enter__()
        except Exception as e:
            logger.warning("Notifier progress failed: %s", e)
            yield _SafeReporter(None)
            return

        try:
            yield _SafeReporter(reporter)
        except BaseException as exc:
            try:
                manager.__exit__(type(exc), exc, exc.__traceback__)
            except Exception as e:
                logger.warning("Notifier progress failed: %s", e)
            raise
        else:
            try:
                manager.__exit__(None, None, None)
            except Exception as e:
                logger.warning("Notifier progress failed: %s", e)
