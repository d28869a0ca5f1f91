"""Dataclass models for graphs and everything nested inside them.

These are plain Python objects.  The codec serialises / deserialises them to
and from the JSON documents held in the key-value store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum


class Status(IntEnum):
    START = 0
    DOING = 1
    END = 2


def now() -> datetime:
    """Current local wall-clock time, truncated to whole seconds."""
    return datetime.now().replace(microsecond=0)


@dataclass
class Event:
    id: int
    content: str
    created_at: datetime


@dataclass
class Work:
    id: int
    content: str
    updated_at: datetime
    status: Status = Status.START
    priority: int = 0
    related_people: list[str] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)


@dataclass
class Relation:
    id: int
    w1: int
    w2: int
    description: str = ""


@dataclass
class Graph:
    id: int
    name: str
    works: dict[int, Work] = field(default_factory=dict)
    relations: dict[int, Relation] = field(default_factory=dict)


@dataclass
class WorkEvents:
    """Events of one work selected by a time window."""

    work_id: int
    content: str
    events: list[Event] = field(default_factory=list)


@dataclass
class Checkpoint:
    id: int
    graph_id: int
    created_at: datetime
    graph: Graph
