"""Mini README: Command schema package for Tellodrone.

``model`` holds the immutable schema types and ``loader`` turns the bundled
``data/tello_data.json`` resource (or a configured replacement) into them.
"""

from .loader import build_schema, default_schema, load_schema
from .model import (
    CommandSchema,
    Constraint,
    EnumConstraint,
    ParameterSpec,
    RangeConstraint,
    SchemaIntegrityError,
)

__all__ = [
    "CommandSchema",
    "Constraint",
    "EnumConstraint",
    "ParameterSpec",
    "RangeConstraint",
    "SchemaIntegrityError",
    "build_schema",
    "default_schema",
    "load_schema",
]
