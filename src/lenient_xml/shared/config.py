"""Configuration for lenient XML parsing.

A single immutable ``ParserConfig`` controls how forgiving the scanner and the
tree builder are. Instances are frozen, so one configuration can be shared by
any number of concurrent parse calls.
"""

import json
from dataclasses import dataclass, fields, replace
from enum import Enum, auto
from typing import Any, Dict, List, Optional


class ClosingTagPolicy(Enum):
    """How a closing tag's name is checked against the open element."""

    STRICT = auto()    # Name must match the innermost open element
    LENIENT = auto()   # Pop the innermost element whatever the name


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Parser behavior switches.

    Attributes:
        closing_tag_policy: Whether closing tag names must match
        allow_padded_tags: Tolerate whitespace after ``<`` and ``</``
        max_depth: Maximum element nesting depth, ``None`` for unlimited
        collect_diagnostics: Record WARNING diagnostics for tolerated input
        name: Optional label used in logs
    """

    closing_tag_policy: ClosingTagPolicy = ClosingTagPolicy.STRICT
    allow_padded_tags: bool = False
    max_depth: Optional[int] = None
    collect_diagnostics: bool = True
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the configuration."""
        if not isinstance(self.closing_tag_policy, ClosingTagPolicy):
            raise ConfigValidationError(
                f"closing_tag_policy must be a ClosingTagPolicy, "
                f"got {self.closing_tag_policy!r}",
                field_name="closing_tag_policy",
                suggestions=[policy.name for policy in ClosingTagPolicy],
            )
        if self.max_depth is not None and (
            isinstance(self.max_depth, bool)
            or not isinstance(self.max_depth, int)
            or self.max_depth <= 0
        ):
            raise ConfigValidationError(
                "max_depth must be a positive integer or None",
                field_name="max_depth",
            )

    @property
    def is_strict(self) -> bool:
        """Check whether closing tag names are validated."""
        return self.closing_tag_policy is ClosingTagPolicy.STRICT

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = ParserConfig()
            >>> config.override(max_depth=64).max_depth
            64
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration field(s): {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-compatible dictionary."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = value.name if isinstance(value, Enum) else value
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected; enum fields accept their member name.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration field(s): {', '.join(unknown)}",
                field_name=unknown[0],
            )

        values = dict(data)
        policy = values.get("closing_tag_policy")
        if isinstance(policy, str):
            try:
                values["closing_tag_policy"] = ClosingTagPolicy[policy.upper()]
            except KeyError as e:
                raise ConfigValidationError(
                    f"Unknown closing_tag_policy: {policy}",
                    field_name="closing_tag_policy",
                    suggestions=[p.name for p in ClosingTagPolicy],
                ) from e
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def strict(cls) -> "ParserConfig":
        """Closing tags must match the element they close."""
        return cls(closing_tag_policy=ClosingTagPolicy.STRICT, name="strict")

    @classmethod
    def lenient(cls) -> "ParserConfig":
        """Tolerate mismatched closing names and padded tags."""
        return cls(
            closing_tag_policy=ClosingTagPolicy.LENIENT,
            allow_padded_tags=True,
            name="lenient",
        )
