"""Base configuration classes with strict validation.

All config classes should inherit from StrictBaseModel to get:
- extra='forbid': Catches typos in config keys
- validate_default=True: Defaults go through the same validators as user input
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Base model with strict validation that catches typos.

    All fields must be explicitly defined. Unknown fields raise ValidationError.

    Example:
        class NimConfig(StrictBaseModel):
            target: int
            max_take: int

        NimConfig(target=21, max_take=3)  # OK
        NimConfig(target=21, max_tkae=3)  # ValidationError: extra field 'max_tkae'
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )
