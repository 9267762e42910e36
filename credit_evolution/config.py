"""Configuration management for credit-evolution."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from credit_evolution.exceptions import ConfigurationError
from credit_evolution.models.enums import PreOriginationPolicy

# Flat charge for the first month after origination
DEFAULT_POLICY_RATE = Decimal("1.0")


@dataclass
class EngineConfig:
    """Evolution and installment engine configuration."""

    policy_rate: Decimal = DEFAULT_POLICY_RATE
    pre_origination_policy: PreOriginationPolicy = PreOriginationPolicy.SKIP


@dataclass
class GeneratorConfig:
    """Synthetic portfolio generation configuration."""

    seed: int | None = None
    locale: str = "pt_BR"


@dataclass
class CreditEvolutionConfig:
    """Main configuration for credit-evolution."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "CreditEvolutionConfig":
        """Create config from environment variables."""
        import os

        raw_rate = os.getenv("CREDIT_POLICY_RATE", str(DEFAULT_POLICY_RATE))
        try:
            policy_rate = Decimal(raw_rate)
        except InvalidOperation as e:
            raise ConfigurationError(f"Invalid CREDIT_POLICY_RATE: {raw_rate!r}") from e

        raw_policy = os.getenv("CREDIT_PRE_ORIGINATION_POLICY", PreOriginationPolicy.SKIP.value)
        try:
            pre_origination_policy = PreOriginationPolicy(raw_policy.upper())
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid CREDIT_PRE_ORIGINATION_POLICY: {raw_policy!r}"
            ) from e

        log_format = os.getenv("LOG_FORMAT", "standard")
        if log_format not in ("standard", "json"):
            raise ConfigurationError(f"Invalid LOG_FORMAT: {log_format!r}")

        engine = EngineConfig(
            policy_rate=policy_rate,
            pre_origination_policy=pre_origination_policy,
        )

        generator = GeneratorConfig(
            seed=int(os.getenv("SEED")) if os.getenv("SEED") else None,
            locale=os.getenv("FAKER_LOCALE", "pt_BR"),
        )

        return cls(
            engine=engine,
            generator=generator,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
        )
