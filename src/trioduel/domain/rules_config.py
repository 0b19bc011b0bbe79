"""Declarative rule configuration for the battle engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RosterRules:
    """Team assembly constants."""

    team_size: int = 3
    default_max_resource: int = 100


@dataclass(frozen=True, slots=True)
class DamageRules:
    """Damage variance and type-effectiveness constants."""

    variance_low: float = 0.85
    variance_high: float = 1.15
    minimum_damage: int = 1
    super_effective: float = 2.0
    not_very_effective: float = 0.5


@dataclass(frozen=True, slots=True)
class ResourceRules:
    """Resource pool recovery."""

    recovery_on_defend: int = 20


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    roster: RosterRules = RosterRules()
    damage: DamageRules = DamageRules()
    resource: ResourceRules = ResourceRules()


DEFAULT_RULES = RulesConfig()
