"""Canonical geometry model for extracted PDF vector data.

Every model is frozen and is built once by the compact decoder. Attribute
names are snake_case; the camelCase names used by the service are aliases,
so ``model_dump(by_alias=True)`` reproduces the service's field names.
Sequences are tuples, and coordinates, ``closed`` and ``line_width`` are
strict: strings and bools are rejected rather than converted.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag


class VectorModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


class VectorRecord(VectorModel):
    """Field-named record; unknown fields from the service are kept as extras."""

    model_config = ConfigDict(extra="allow")


class VectorPoint(VectorModel):
    x: float = Field(strict=True)
    y: float = Field(strict=True)


class VectorCurveStepLine(VectorModel):
    """A straight line from the previous point to ``end_point``."""

    is_bezier: Literal[False] = Field(default=False, alias="isBezier")
    end_point: VectorPoint = Field(alias="endPoint")


class VectorCurveStepBezier(VectorModel):
    """A cubic Bezier segment ending at ``end_point``."""

    is_bezier: Literal[True] = Field(default=True, alias="isBezier")
    end_point: VectorPoint = Field(alias="endPoint")
    control_point1: VectorPoint = Field(alias="controlPoint1")
    control_point2: VectorPoint = Field(alias="controlPoint2")


def _curve_step_tag(value: Any) -> str:
    if isinstance(value, dict):
        flag = value.get("isBezier", value.get("is_bezier"))
    else:
        flag = getattr(value, "is_bezier", None)
    return "bezier" if flag else "line"


VectorCurveStep = Annotated[
    Union[Annotated[VectorCurveStepLine, Tag("line")], Annotated[VectorCurveStepBezier, Tag("bezier")]],
    Discriminator(_curve_step_tag),
]


class VectorCurve(VectorModel):
    """An open or closed run of steps.

    When ``closed`` is true the last step ends on ``starting_point``. The
    service guarantees this; nothing here checks it.
    """

    starting_point: VectorPoint = Field(alias="startingPoint")
    closed: bool = Field(strict=True)
    steps: tuple[VectorCurveStep, ...]


class VectorPath(VectorModel):
    curves: tuple[VectorCurve, ...]


class VectorGroup(VectorRecord):
    """Points and paths on one page that share the same drawing style."""

    fill_color: str | None = Field(default=None, alias="fillColor")
    stroke_color: str | None = Field(default=None, alias="strokeColor")
    line_width: float = Field(alias="lineWidth", strict=True)
    pdf_layer_name: str | None = Field(default=None, alias="pdfLayerName")
    points: tuple[VectorPoint, ...]
    paths: tuple[VectorPath, ...]


class VectorPage(VectorRecord):
    groups: tuple[VectorGroup, ...]


class VectorResult(VectorRecord):
    file_name: str = Field(alias="fileName")
    pages: tuple[VectorPage, ...]


class VectorStatus(VectorRecord):
    ready: bool
    progress: str
