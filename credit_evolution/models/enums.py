"""Enumeration types for credit-evolution entities."""

from enum import Enum


class PreOriginationPolicy(str, Enum):
    """What to do with a settlement dated before its credit's origination."""

    SKIP = "SKIP"
    CLAMP = "CLAMP"


class InstallmentProgram(str, Enum):
    PERT = "PERT"
    REFIS = "REFIS"
    ORDINARY = "ORDINARY"
    SIMPLIFIED = "SIMPLIFIED"
    TRANSACTION = "TRANSACTION"
