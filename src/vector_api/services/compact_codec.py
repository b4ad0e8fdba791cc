"""Expand the service's compact geometry payload into the canonical model.

The service sends points, steps, curves and paths as positional sequences
and only pages, groups and the result itself as field-named maps. The
functions below map each positional shape onto its model and copy every
other field of the maps through unchanged.
"""

from __future__ import annotations

from typing import Any, Literal, NotRequired, Sequence, TypedDict

from vector_api.schemas.vectors import (
    VectorCurve,
    VectorCurveStep,
    VectorCurveStepBezier,
    VectorCurveStepLine,
    VectorGroup,
    VectorPage,
    VectorPath,
    VectorPoint,
    VectorResult,
)

PathRevision = Literal["nested", "flat"]

# (x, y)
PackedVectorPoint = Sequence[float]
# (endPoint, controlPoint1 | None, controlPoint2 | None)
PackedVectorCurveStep = Sequence[Any]
# (startingPoint, closed, steps)
PackedVectorCurve = Sequence[Any]
# (curves,) for "nested"; a PackedVectorCurve for "flat"
PackedVectorPath = Sequence[Any]


class PackedVectorGroup(TypedDict):
    fillColor: NotRequired[str]
    lineWidth: float
    pdfLayerName: NotRequired[str]
    paths: list[PackedVectorPath]
    points: list[PackedVectorPoint]
    strokeColor: NotRequired[str]


class PackedVectorPage(TypedDict):
    groups: list[PackedVectorGroup]


class PackedVectorResult(TypedDict):
    fileName: str
    pages: list[PackedVectorPage]


def _has_item(packed: Sequence[Any], index: int) -> bool:
    return len(packed) > index and packed[index] is not None


def decode_point(packed: PackedVectorPoint) -> VectorPoint:
    return VectorPoint(x=packed[0], y=packed[1])


def decode_curve_step(packed: PackedVectorCurveStep) -> VectorCurveStep:
    """Decode one step; it is a Bezier only when both control points are present.

    A step carrying a single control point decodes as a line and the lone
    control point is dropped.
    """
    if _has_item(packed, 1) and _has_item(packed, 2):
        return VectorCurveStepBezier(
            is_bezier=True,
            end_point=decode_point(packed[0]),
            control_point1=decode_point(packed[1]),
            control_point2=decode_point(packed[2]),
        )
    return VectorCurveStepLine(is_bezier=False, end_point=decode_point(packed[0]))


def decode_curve(packed: PackedVectorCurve) -> VectorCurve:
    return VectorCurve(
        starting_point=decode_point(packed[0]),
        closed=packed[1],
        steps=[decode_curve_step(step) for step in packed[2]],
    )


def decode_path(packed: PackedVectorPath, revision: PathRevision = "nested") -> VectorPath:
    """Decode a path.

    ``nested`` paths are ``(curves,)``. ``flat`` is the older wire shape in
    which a path is a single curve tuple; it decodes to a path holding that
    one curve.
    """
    if revision == "flat":
        return VectorPath(curves=[decode_curve(packed)])
    if revision == "nested":
        return VectorPath(curves=[decode_curve(curve) for curve in packed[0]])
    raise ValueError(f"Unknown path revision: {revision!r}")


def decode_group(packed: PackedVectorGroup, revision: PathRevision = "nested") -> VectorGroup:
    return VectorGroup.model_validate(
        {
            **packed,
            "points": [decode_point(point) for point in packed["points"]],
            "paths": [decode_path(path, revision) for path in packed["paths"]],
        }
    )


def decode_page(packed: PackedVectorPage, revision: PathRevision = "nested") -> VectorPage:
    return VectorPage.model_validate(
        {
            **packed,
            "groups": [decode_group(group, revision) for group in packed["groups"]],
        }
    )


def decode_result(packed: PackedVectorResult, revision: PathRevision = "nested") -> VectorResult:
    return VectorResult.model_validate(
        {
            **packed,
            "pages": [decode_page(page, revision) for page in packed["pages"]],
        }
    )
