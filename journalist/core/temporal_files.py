#!/usr/bin/env python3
"""
temporal_files.py
--------------------
Temporary file management for the editor workflow.

Entries are handed to the external editor through a temporary `.md` file
which must not outlive the edit session.

Usage:
    from journalist.core.temporal_files import TemporalFileManager

    with TemporalFileManager() as temp_manager:
        temp_file = temp_manager.create_temp_file(suffix=".md")
        # ... hand temp_file to the editor ...
    # Automatic cleanup on context exit
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

# --- Local imports ---
from .exceptions import TemporalFileError

logger = logging.getLogger(__name__)


class TemporalFileManager:
    """
    Manages temporary files with automatic cleanup.

    Usage:
        with TemporalFileManager() as temp_manager:
            temp_file = temp_manager.create_temp_file(suffix=".md")
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        """
        Initialize temporary file manager.

        Args:
            base_dir: Base directory for temporary files. Uses system temp if None.
        """
        self.base_dir = Path(base_dir) if base_dir else Path(tempfile.gettempdir())
        self.active_files: List[Path] = []

    def create_temp_file(
        self, suffix: str = "", prefix: str = "journalist_", content: Optional[str] = None
    ) -> Path:
        """
        Create a temporary file and track it for cleanup.

        Args:
            suffix: File suffix/extension
            prefix: File prefix
            content: Optional text to write into the file

        Returns:
            Path to the temporary file

        Raises:
            TemporalFileError: If file creation fails
        """
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                suffix=suffix,
                prefix=prefix,
                dir=self.base_dir,
                delete=False,
            ) as temp_file_obj:
                if content:
                    temp_file_obj.write(content)
                temp_path = Path(temp_file_obj.name)
        except OSError as e:
            raise TemporalFileError(f"Failed to create temporary file: {e}") from e

        self.active_files.append(temp_path)
        return temp_path

    def cleanup(self) -> Dict[str, int]:
        """
        Remove all tracked temporary files.

        Returns:
            Dictionary with cleanup statistics
        """
        cleanup_stats = {"files_removed": 0, "errors": 0}

        for temp_file in self.active_files[:]:
            try:
                if temp_file.exists():
                    temp_file.unlink()
                    cleanup_stats["files_removed"] += 1
                self.active_files.remove(temp_file)
            except OSError as e:
                logger.warning("Could not remove temporary file %s: %s", temp_file, e)
                cleanup_stats["errors"] += 1

        return cleanup_stats

    def __enter__(self) -> "TemporalFileManager":
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Optional[Any],
    ) -> None:
        """Context manager exit with automatic cleanup."""
        del exc_type, exc_val, exc_tb
        self.cleanup()
