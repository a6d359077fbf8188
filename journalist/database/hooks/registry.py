#!/usr/bin/env python3
"""
registry.py
-------------------
Write hooks: plugins notified after the file backend persists an entry.

Provides:
- WriteContext: What was written, and where
- WriteHook: Abstract base class for hook implementations
- HookRegistry: Ordered set of hooks, each enabled or disabled

A hook failure never fails the write that triggered it. The registry
catches the exception, reports it as a warning, and moves on to the next
hook. The names of failed hooks are returned to the caller for inspection.

Registration happens while wiring the application; freeze() makes the
registry read-only afterwards.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple

from journalist.core.exceptions import HookError
from journalist.core.logging_manager import JournalLogger, safe_logger
from journalist.dataclasses.entry import Entry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteContext:
    """
    Details of a completed entry write.

    Attributes:
        date: Date of the entry
        entry_path: File that was written (or removed, for an empty entry)
        journal_dir: Root journal directory
        content: Exact text written to entry_path
    """

    date: date
    entry_path: Path
    journal_dir: Path
    content: str


class WriteHook(ABC):
    """
    Abstract base class for write hooks.

    Subclasses set `name` and implement on_entry_written(). Any exception
    they raise is absorbed by the registry.
    """

    name: str = "hook"
    enabled_by_default: bool = True

    @abstractmethod
    def on_entry_written(self, context: WriteContext, entry: Entry) -> None:
        """
        React to a successful write.

        Args:
            context: What was written, and where
            entry: The entry as written
        """
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(name='{self.name}')>"


class HookRegistry:
    """
    Ordered collection of write hooks.

    Attributes:
        logger: Optional journal logger; hook failures are reported there
            as well as on stderr
    """

    def __init__(self, logger: Optional[JournalLogger] = None) -> None:
        self.logger = logger
        self._hooks: List[Tuple[WriteHook, bool]] = []
        self._frozen = False

    def register(self, hook: WriteHook, enabled: Optional[bool] = None) -> None:
        """
        Add a hook at the end of the execution order.

        Args:
            hook: Hook to add
            enabled: Override the hook's enabled_by_default when not None

        Raises:
            HookError: If the registry is frozen or the name is taken
        """
        if self._frozen:
            raise HookError(f"Cannot register hook '{hook.name}': registry is frozen")
        if hook.name in self.list_hooks():
            raise HookError(f"Hook '{hook.name}' is already registered")

        is_enabled = hook.enabled_by_default if enabled is None else enabled
        self._hooks.append((hook, is_enabled))
        safe_logger(self.logger).log_debug(
            f"Registered hook {hook.name}", {"enabled": is_enabled}
        )

    def freeze(self) -> "HookRegistry":
        """Disallow further registration. Returns self."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def list_hooks(self) -> List[str]:
        """Names of all registered hooks, in execution order."""
        return [hook.name for hook, _ in self._hooks]

    def hooks(self) -> List[WriteHook]:
        """Registered hook objects, in execution order."""
        return [hook for hook, _ in self._hooks]

    def enabled_hooks(self) -> List[str]:
        return [hook.name for hook, enabled in self._hooks if enabled]

    def is_enabled(self, name: str) -> bool:
        return name in self.enabled_hooks()

    def execute_write_hooks(self, context: WriteContext, entry: Entry) -> List[str]:
        """
        Run every enabled hook in registration order.

        Args:
            context: Write details passed to each hook
            entry: The entry as written

        Returns:
            Names of hooks that raised (empty when all succeeded)
        """
        failed: List[str] = []
        for hook, enabled in self._hooks:
            if not enabled:
                continue
            try:
                hook.on_entry_written(context, entry)
            except Exception as e:
                failed.append(hook.name)
                logger.warning("Hook '%s' failed: %s", hook.name, e)
                safe_logger(self.logger).log_warning(
                    f"Hook '{hook.name}' failed",
                    {
                        "date": context.date.isoformat(),
                        "error_type": type(e).__name__,
                        "error": str(e),
                    },
                )
        return failed

    def __len__(self) -> int:
        return len(self._hooks)
