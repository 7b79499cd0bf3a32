# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
Settings for service-type mapping.

Defaults come from ``SVCMAP_*`` environment variables, so a deployment can
change the default lifetime or duplicate policy without touching code.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from svcmap.registry.lifetime import ServiceLifetime
from svcmap.registry.strategies import RegistrationStrategy


class MappingSettings(BaseSettings):
    """Defaults applied by ServiceTypeSelector."""

    model_config = SettingsConfigDict(
        env_prefix="SVCMAP_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    default_lifetime: ServiceLifetime = Field(
        default=ServiceLifetime.TRANSIENT,
        description="Lifetime of groups that never call with_lifetime()",
    )
    default_strategy: RegistrationStrategy = Field(
        default=RegistrationStrategy.APPEND,
        description="Registration strategy of groups that never call using()",
    )
    interface_prefix: str = Field(
        default="I", description="Prefix of the conventionally matching interface name"
    )
    interface_suffix: str = Field(
        default="", description="Suffix of the conventionally matching interface name"
    )

    def matching_interface_name(self, type_name: str) -> str:
        """Name an implementation's conventional interface must have."""
        return f"{self.interface_prefix}{type_name}{self.interface_suffix}"

    @classmethod
    def load(cls) -> MappingSettings:
        """Load mapping settings from environment variables or defaults."""
        return cls()
