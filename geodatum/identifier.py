"""Identifiers for datums and coordinate operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

LOCAL_AUTHORITY = "LOCAL"
DEFAULT_ROLE = "through"


@dataclass(frozen=True)
class Identifier:
    """Authority-qualified identifier of a geodetic component.

    Two identifiers are equal when their authority and code are equal; the
    human-readable names do not take part in equality.

    Attributes:
        authority: Naming authority (e.g., "EPSG", "IGNF", "LOCAL").
        code: Code within the authority (e.g., "6326").
        name: Full human-readable name.
        short_name: Short name used to build derived names (e.g., "WGS84").
            Defaults to ``name``.
    """

    authority: str
    code: str
    name: str = field(default="", compare=False)
    short_name: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if not self.authority:
            raise ValueError("Identifier authority must not be empty")
        if not self.code:
            raise ValueError("Identifier code must not be empty")
        # Frozen dataclass: fill defaults through object.__setattr__
        if not self.name:
            object.__setattr__(self, "name", self.code)
        if not self.short_name:
            object.__setattr__(self, "short_name", self.name)

    @property
    def key(self) -> str:
        """``authority:code`` string, unique per component."""
        return f"{self.authority}:{self.code}"

    @classmethod
    def local(cls, name: str, short_name: str = "") -> Identifier:
        """Create an identifier in the LOCAL authority, using the name as code."""
        return cls(authority=LOCAL_AUTHORITY, code=name, name=name, short_name=short_name)

    @classmethod
    def composite(
        cls,
        source: str,
        target: str,
        via: str,
        role: str = DEFAULT_ROLE,
    ) -> Identifier:
        """Build the identifier of an operation derived from two others.

        Args:
            source: Short name of the source component.
            target: Short name of the target component.
            via: Short name of the intermediate component.
            role: Word joining target and intermediate (default: "through").

        Returns:
            LOCAL identifier named ``"<source>to<target><role><via>"``.

        Example:
            >>> Identifier.composite("NTF", "ED50", "WGS84").name
            'NTFtoED50throughWGS84'
        """
        return cls.local(f"{source}to{target}{role}{via}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "authority": self.authority,
            "code": self.code,
            "name": self.name,
            "short_name": self.short_name,
        }

    def __str__(self) -> str:
        if self.name == self.code:
            return f"[{self.key}]"
        return f"[{self.key},{self.name}]"
