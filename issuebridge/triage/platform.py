"""Target platforms for triaged issues"""

from enum import Enum
from typing import Union


class Platform(str, Enum):
    """Where a piece of work is tracked"""

    GITHUB = "github"  # Engineering tracker
    LINEAR = "linear"  # Business tracker
    HYBRID = "hybrid"  # Split into one linked record per tracker

    @classmethod
    def parse(cls, value: Union[str, "Platform"]) -> "Platform":
        """
        Parse a platform name, accepting the engineering/business aliases.

        Raises:
            ValueError: If the value names no known platform
        """
        if isinstance(value, Platform):
            return value

        normalized = (value or "").strip().lower()
        aliases = {
            "engineering": cls.GITHUB,
            "business": cls.LINEAR,
        }
        if normalized in aliases:
            return aliases[normalized]
        return cls(normalized)

    @property
    def includes_engineering(self) -> bool:
        return self in (Platform.GITHUB, Platform.HYBRID)

    @property
    def includes_business(self) -> bool:
        return self in (Platform.LINEAR, Platform.HYBRID)
