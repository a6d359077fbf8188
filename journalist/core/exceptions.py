#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Journalist project.

This module defines a hierarchy of exceptions used throughout the project
to handle specific error conditions in the persistence core and its glue.

Exception Hierarchy:
    Exception (built-in)
    └── JournalError - Base for all journal errors
        ├── StorageError - Backend I/O or query failures
        │   └── MigrationError - A schema migration failed to apply
        ├── HookError - Write-hook registry misuse
        ├── ValidationError - Data validation failures
        │   └── EntryValidationError - Bullet/Entry construction failures
        ├── EditorError - External editor failures
        ├── ConfigError - Configuration loading failures
        └── TemporalFileError - Temporary file management errors

A date with no entry is never an error: lookups return None.

Usage:
    from journalist.core.exceptions import StorageError, ValidationError

    try:
        storage.save_entry(entry)
    except StorageError as e:
        logger.error(f"Save did not happen: {e}")
"""


class JournalError(Exception):
    """
    Base exception for every error raised by Journalist.

    Catch this to handle any project error, or catch specific
    subclasses for more granular error handling.
    """

    pass


class StorageError(JournalError):
    """
    Exception for storage backend failures.

    Raised when a backend operation fails due to disk errors, query errors,
    connection loss, or other I/O problems. The message names the failing
    operation and the date or range it was called with.

    Examples:
        >>> raise StorageError("save_entry(2024-03-15) failed: disk I/O error")
        >>> raise StorageError("load_entries(2024-03-01..2024-03-31) failed: no such table")

    See Also:
        MigrationError
    """

    pass


class MigrationError(StorageError):
    """
    Exception for schema migration failures.

    Raised when a migration unit fails to apply. The remaining units are not
    attempted and the backend stays at the last successfully applied
    version. Backend initialization treats this as fatal.

    Examples:
        >>> raise MigrationError("Failed to apply migration 2 (0002_entry_metadata): ...")
        >>> raise MigrationError("Duplicate migration version 3: 0003_a.sql, 0003_b.py")
    """

    pass


class HookError(JournalError):
    """
    Exception for write-hook registry misuse.

    Failures raised inside a hook are isolated by the registry and never
    surface as this exception; it only signals misuse such as registering
    on a frozen registry.

    Examples:
        >>> raise HookError("Hook registry is frozen; cannot register 'Simple Logger'")
    """

    pass


class ValidationError(JournalError):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Invalid date formats
    - Inverted date ranges
    - Unknown enum values

    Examples:
        >>> raise ValidationError("Invalid date format: expected YYYY-MM-DD")
        >>> raise ValidationError("Range start 2024-03-10 is after end 2024-03-01")
    """

    pass


class EntryValidationError(ValidationError):
    """
    Exception for bullet and entry construction failures.

    Raised when a Bullet would break the task-state invariant or carry
    more than one line of content.

    Examples:
        >>> raise EntryValidationError("Bullets of type 'note' cannot carry a task state")
        >>> raise EntryValidationError("Bullet content must be a single line")
    """

    pass


class EditorError(JournalError):
    """
    Exception for external editor failures.

    Raised when the editor cannot be started or exits with a non-zero
    status. Nothing is saved in that case.

    Examples:
        >>> raise EditorError("Editor exited with status 1")
    """

    pass


class ConfigError(JournalError):
    """
    Exception for configuration loading failures.

    Examples:
        >>> raise ConfigError("Cannot parse config.yaml: mapping values are not allowed here")
        >>> raise ConfigError("Unknown backend 'postgres'; expected one of: database, files")
    """

    pass


class TemporalFileError(JournalError):
    """
    Exception for temporary file management errors.

    Raised when temporary file operations fail:
    - Unable to create temp files
    - Cleanup failures
    - Permission issues

    Examples:
        >>> raise TemporalFileError("Cannot create temp file: /tmp not writable")
    """

    pass
