#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Projection kinds.

Every supported projection kind is a member of ProjectionKind and has an
entry in the PROJECTIONS dispatch table mapping it to the immutable value
type that implements the projection contract. Adding a kind means adding an
enumeration member and a table entry.
"""
import enum
import inspect
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from submaptive.core.exceptions import InvalidParameterError
from submaptive.projections.base import Projection, invert_points, project_points
from submaptive.projections.equirectangular import Equirectangular

__all__ = [
    "Equirectangular",
    "Projection",
    "ProjectionKind",
    "PROJECTIONS",
    "build_projection",
    "invert_points",
    "project_points",
    "projection_kind",
]


class ProjectionKind(enum.Enum):
    """Closed set of supported projection kinds."""
    EQUIRECTANGULAR = "equirectangular"

    def __str__(self) -> str:
        return self.value.replace("_", " ").capitalize()

    @classmethod
    def all(cls) -> Iterator["ProjectionKind"]:
        return iter(cls)

    @classmethod
    def parse(cls, name: Union[str, "ProjectionKind"]) -> "ProjectionKind":
        """Look up a kind by value or display name, ignoring case."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower().replace(" ", "_").replace("-", "_")
        for kind in cls:
            if kind.value == key:
                return kind
        known = ", ".join(kind.value for kind in cls)
        raise InvalidParameterError(f"Unknown projection kind '{name}' (known: {known})")

    @property
    def projection_type(self) -> type:
        return PROJECTIONS[self]

    def parameter_names(self) -> List[str]:
        """Names of the numeric parameters the kind accepts."""
        signature = inspect.signature(self.projection_type)
        return list(signature.parameters)

    def default_projection(self) -> Projection:
        return self.projection_type()

    def build(self, params: Optional[Mapping[str, Any]] = None, clamp: bool = False) -> Projection:
        """
        Build a projection of this kind from external parameters.

        Parameters
        ----------
        params : mapping, optional
            Parameter values by name; missing ones take their defaults.
        clamp : bool, optional
            Clamp values into their domain instead of rejecting them,
            by default False.

        Returns
        -------
        Projection
            A fresh immutable projection value.

        Raises
        ------
        InvalidParameterError
            On unknown parameter names or values outside their domain
            (the latter only when clamp is False).
        """
        params = dict(params or {})
        unknown = sorted(set(params) - set(self.parameter_names()))
        if unknown:
            raise InvalidParameterError(
                f"Unknown parameter(s) for {self}: {', '.join(unknown)}"
            )

        values: Dict[str, float] = {}
        for name, value in params.items():
            try:
                values[name] = float(value)
            except (TypeError, ValueError) as e:
                raise InvalidParameterError(f"Parameter {name} must be numeric, got {value!r}") from e

        projection_type = self.projection_type
        if clamp:
            return projection_type.clamped(**values)
        return projection_type(**values)


# Dispatch table: kind -> implementing value type
PROJECTIONS: Dict[ProjectionKind, type] = {
    ProjectionKind.EQUIRECTANGULAR: Equirectangular,
}


def build_projection(
    kind: Union[str, ProjectionKind],
    params: Optional[Mapping[str, Any]] = None,
    clamp: bool = False
) -> Projection:
    """Build a projection from a kind (or its name) and parameters."""
    return ProjectionKind.parse(kind).build(params, clamp=clamp)


def projection_kind(projection: Projection) -> ProjectionKind:
    """Reverse lookup of the kind implemented by a projection value."""
    for kind, projection_type in PROJECTIONS.items():
        if isinstance(projection, projection_type):
            return kind
    raise InvalidParameterError(f"Unsupported projection type: {type(projection).__name__}")
