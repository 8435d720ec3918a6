"""Stat ledger, weapon progression and run counters."""

from .leveling import RunProgress
from .stats import StatKey, StatLedger, resolve_stat_identity
from .weapons import UpgradeCurve, Weapon, WeaponType

__all__ = [
    "RunProgress",
    "StatKey",
    "StatLedger",
    "resolve_stat_identity",
    "UpgradeCurve",
    "Weapon",
    "WeaponType",
]
