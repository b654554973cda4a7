"""
Owner configuration loading.

WHAT: Turns configured owner entries into Owner representations.

WHY: The initial owners (and optionally their pets) are seed data supplied
by the deployment, not by API clients. Each entry is keyed, and the key
doubles as the name when the entry doesn't set one:

```yaml
owners:
  fred:
    name: Fred
    age: 35
    pets: [Dino, Baby Puss]
  barney:
    name: Barney
    age: 30
    pets: [Hoppy]
```

HOW: The YAML document is parsed with yaml.safe_load, each entry is
validated into an OwnerConfiguration, and document order is preserved.
Configuration is read once at startup.
"""

import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from petowners.core.exceptions import ConfigurationError
from petowners.schemas.owner import OwnerResponse


logger = logging.getLogger(__name__)


class OwnerConfiguration(BaseModel):
    """One configured owner."""

    name: str = Field(..., min_length=1)
    age: int = Field(default=0, ge=0)
    pets: List[str] = Field(default_factory=list)

    def create(self) -> OwnerResponse:
        """Build the Owner representation for this entry."""
        return OwnerResponse(name=self.name, age=self.age)


def parse_owner_configurations(
    entries: Optional[Mapping[str, Any]],
) -> List[OwnerConfiguration]:
    """
    Validate a mapping of entry key -> owner fields.

    Args:
        entries: Mapping such as {"fred": {"name": "Fred", "age": 35}}

    Returns:
        One OwnerConfiguration per entry, in mapping order

    Raises:
        ConfigurationError: If the mapping or an entry is malformed
    """
    if not entries:
        return []

    if not isinstance(entries, Mapping):
        raise ConfigurationError(
            message="Owners configuration must be a mapping of entries",
            got=type(entries).__name__,
        )

    configurations = []
    for key, fields in entries.items():
        if fields is not None and not isinstance(fields, Mapping):
            raise ConfigurationError(
                message=f"Owner entry {key!r} must be a mapping",
                entry=str(key),
            )
        fields = dict(fields or {})
        fields.setdefault("name", str(key))
        try:
            configurations.append(OwnerConfiguration.model_validate(fields))
        except PydanticValidationError as e:
            raise ConfigurationError(
                message=f"Invalid owner entry {key!r}",
                entry=str(key),
                errors=[err["msg"] for err in e.errors()],
            )

    return configurations


def load_owner_configurations(path: Union[str, Path]) -> List[OwnerConfiguration]:
    """
    Load owner entries from a YAML file.

    WHY: A missing file is not an error; the service then starts with
    only the owners given through the OWNERS setting (or none).

    Args:
        path: Path to a YAML document with a top-level "owners" mapping

    Returns:
        Parsed entries in document order

    Raises:
        ConfigurationError: If the YAML is invalid or has the wrong shape
    """
    path = Path(path)
    if not path.exists():
        logger.warning(f"Owners file {path} not found, no owners loaded from it")
        return []

    try:
        with open(path, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            message=f"Owners file {path} is not valid UTF-8 YAML",
            path=str(path),
            error=str(e),
        )

    if not document:
        return []

    if not isinstance(document, Mapping):
        raise ConfigurationError(
            message=f"Owners file {path} must contain a mapping",
            path=str(path),
        )

    configurations = parse_owner_configurations(document.get("owners"))
    logger.info(f"Loaded {len(configurations)} owner entries from {path}")
    return configurations


def owner_configurations_from_settings(settings: Any) -> List[OwnerConfiguration]:
    """
    Collect owner entries from the YAML file and the OWNERS setting.

    File entries come first, then OWNERS entries, each in their own order.
    """
    return load_owner_configurations(settings.OWNERS_FILE) + parse_owner_configurations(
        settings.OWNERS
    )
