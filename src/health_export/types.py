"""Shared type aliases and typed dictionaries."""

from __future__ import annotations

from typing import NotRequired, TypeAlias, TypedDict

JSONValue: TypeAlias = (
    str | int | float | bool | None | list["JSONValue"] | dict[str, "JSONValue"]
)
JSONObject: TypeAlias = dict[str, JSONValue]


class StateOfMindEntryPayload(TypedDict):
    """One state-of-mind entry in the JSON export."""

    timestamp: str
    kind: str
    valence: float
    valencePercent: int
    valenceDescription: str
    labels: NotRequired[list[str]]
    associations: NotRequired[list[str]]


class WorkoutPayload(TypedDict):
    """One workout in the JSON export."""

    type: str
    startTime: str
    duration: float
    durationFormatted: str
    distance: NotRequired[float]
    distanceFormatted: NotRequired[str]
    calories: NotRequired[float]
