"""
Executable taxonomy for rs-mule.

An executable identifier given on the command line is one of:
- a RightScript href (/api/right_scripts/<id>), used as-is
- a RightScript name, resolved to an href through its lineage
- a Chef recipe name (cookbook::recipe), used as-is

ExecutableType is the hint a caller may supply; ExecutableKind is what the
identifier turns out to be once the hint (or auto-detection) is applied.
"""

import re
from enum import Enum

from rsmule.errors import ConfigError


RECIPE_PATTERN = re.compile(r".*::.*")
RIGHT_SCRIPT_HREF_PATTERN = re.compile(r"^/api/right_scripts/[a-zA-Z0-9]*")


class ExecutableKind(str, Enum):
    """Concrete kind of an executable after classification."""
    RIGHT_SCRIPT_HREF = "right_script_href"
    RIGHT_SCRIPT_NAME = "right_script_name"
    RECIPE_NAME = "recipe_name"


class ExecutableType(str, Enum):
    """Hint for how the executable identifier should be interpreted."""
    AUTO = "auto"
    RIGHT_SCRIPT_NAME = "right_script_name"
    RIGHT_SCRIPT_HREF = "right_script_href"
    RECIPE_NAME = "recipe_name"

    @property
    def kind(self) -> ExecutableKind | None:
        """The kind this hint forces, or None for AUTO."""
        if self is ExecutableType.AUTO:
            return None
        return ExecutableKind(self.value)


class TagMatchStrategy(str, Enum):
    """How multiple tags are matched against instances."""
    ALL = "all"
    ANY = "any"


class UpdateTarget(str, Enum):
    """Objects related to a matched instance whose inputs can be updated."""
    CURRENT_INSTANCE = "current_instance"
    NEXT_INSTANCE = "next_instance"
    DEPLOYMENT = "deployment"


def parse_enum(enum_cls: type[Enum], value, option: str):
    """
    Coerce a value into a member of enum_cls.

    Args:
        enum_cls: Target enum class
        value: A member of enum_cls or its string value
        option: Option name used in the error message

    Returns:
        The matching enum member

    Raises:
        ConfigError: If value is not a recognized member
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = "|".join(m.value for m in enum_cls)
        raise ConfigError(f"Unknown {option} ({value}). Expected one of [{allowed}]") from None


def classify(identifier: str) -> ExecutableKind:
    """
    Detect what kind of executable an identifier names.

    Recipes are checked first, so "cookbook::recipe" is never mistaken for
    a RightScript name. Anything that is neither a recipe nor a RightScript
    href is treated as a RightScript name.
    """
    if RECIPE_PATTERN.match(identifier):
        return ExecutableKind.RECIPE_NAME
    if RIGHT_SCRIPT_HREF_PATTERN.match(identifier):
        return ExecutableKind.RIGHT_SCRIPT_HREF
    return ExecutableKind.RIGHT_SCRIPT_NAME


def resolve_kind(identifier: str, executable_type: ExecutableType | str = ExecutableType.AUTO) -> ExecutableKind:
    """Apply an executable type hint, falling back to classify() for auto."""
    executable_type = parse_enum(ExecutableType, executable_type, "executable_type")
    return executable_type.kind or classify(identifier)
