"""
Write-hook pipeline for the file storage backend.

Hooks are notified after each successful write; their failures are
reported but never fail the write.
"""
from .registry import HookRegistry, WriteContext, WriteHook

__all__ = ["HookRegistry", "WriteContext", "WriteHook"]
