#!/usr/bin/env python3
"""
Journalist Dataclasses
----------------------
Plain data structures shared by every layer: bullets, entries, date ranges,
and the text codec that turns entries into editable text and back.
"""
from .date_range import DateRange, ViewScope
from .entry import Bullet, BulletType, Entry, TaskState

__all__ = [
    "Bullet",
    "BulletType",
    "DateRange",
    "Entry",
    "TaskState",
    "ViewScope",
]
