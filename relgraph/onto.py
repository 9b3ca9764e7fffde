"""Core enumerations shared across relgraph.

This module provides the string-based enum base class used throughout the
package together with the closed sets of values the engine works with.

Key Components:
    - BaseEnum: Base class for string-based enumerations with flexible membership testing
    - ReferentialAction: ON DELETE / ON UPDATE actions of a foreign key
    - EdgeOrientation: Forward or inverse side of a relationship
    - Cardinality: One-to-one or one-to-many

Example:
    >>> "SET NULL" in ReferentialAction  # True
    >>> "DROP" in ReferentialAction  # False
"""

from enum import EnumMeta

import yaml
from strenum import StrEnum


class MetaEnum(EnumMeta):
    """Metaclass for flexible enumeration membership testing.

    Allows checking whether a raw value is a valid member of an enum
    with the `in` operator.
    """

    def __contains__(self, member: object) -> bool:
        if isinstance(member, self):
            return True
        try:
            self(member)
            return True
        except ValueError:
            return False


class BaseEnum(StrEnum, metaclass=MetaEnum):
    """Base class for string-based enumerations."""

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return self.value


def _base_enum_representer(dumper, data):
    return dumper.represent_scalar("tag:yaml.org,2002:str", str(data.value))


# enums dump to YAML as their plain string values
yaml.add_representer(BaseEnum, _base_enum_representer)
yaml.add_multi_representer(BaseEnum, _base_enum_representer)
yaml.SafeDumper.add_multi_representer(BaseEnum, _base_enum_representer)


class ReferentialAction(BaseEnum):
    """Referential actions of a foreign key constraint.

    Attributes:
        NO_ACTION: Reject the change if referencing rows exist (checked late)
        RESTRICT: Reject the change if referencing rows exist
        CASCADE: Propagate the change to referencing rows
        SET_NULL: Null out the referencing column
        SET_DEFAULT: Reset the referencing column to its default
    """

    NO_ACTION = "NO ACTION"
    RESTRICT = "RESTRICT"
    CASCADE = "CASCADE"
    SET_NULL = "SET NULL"
    SET_DEFAULT = "SET DEFAULT"


class EdgeOrientation(BaseEnum):
    """Side of a relationship an edge describes.

    Attributes:
        FORWARD: Edge declared on the table owning the foreign-key column
        INVERSE: Edge declared on the referenced table
    """

    FORWARD = "forward"
    INVERSE = "inverse"


class Cardinality(BaseEnum):
    """Cardinality of a relationship derived from a foreign key."""

    ONE_TO_ONE = "O2O"
    ONE_TO_MANY = "O2M"
