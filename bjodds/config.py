"""Configuration management with environment variable support."""

import logging
import os
from dataclasses import dataclass, field

from bjodds.exceptions import InvalidRulesError
from bjodds.strategy.rules import GameRules


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_seed() -> int | None:
    """Parse BJODDS_SEED; unset or empty means unseeded."""
    seed = os.getenv("BJODDS_SEED", "").strip()
    return int(seed) if seed else None


@dataclass(frozen=True)
class SimulationConfig:
    """Dealer simulation configuration."""

    trials: int = field(default_factory=lambda: int(os.getenv("BJODDS_TRIALS", "10000")))
    seed: int | None = field(default_factory=_env_seed)
    cache_size: int = field(
        default_factory=lambda: int(os.getenv("BJODDS_CACHE_SIZE", "1024"))
    )

    def __post_init__(self) -> None:
        if self.trials < 1:
            raise InvalidRulesError("BJODDS_TRIALS must be at least 1")
        if self.cache_size < 1:
            raise InvalidRulesError("BJODDS_CACHE_SIZE must be at least 1")


@dataclass(frozen=True)
class RulesConfig:
    """Default table rules."""

    num_decks: int = field(default_factory=lambda: int(os.getenv("BJODDS_DECKS", "6")))
    blackjack_payout: float = field(
        default_factory=lambda: float(os.getenv("BJODDS_BLACKJACK_PAYOUT", "1.5"))
    )
    dealer_hits_soft_17: bool = field(
        default_factory=lambda: _env_bool("BJODDS_H17", "true")
    )
    double_after_split: bool = field(
        default_factory=lambda: _env_bool("BJODDS_DAS", "true")
    )
    surrender_allowed: bool = field(
        default_factory=lambda: _env_bool("BJODDS_SURRENDER", "true")
    )
    max_splits: int = 4

    def to_rules(self) -> GameRules:
        """Build a validated rule snapshot; bad values fail here."""
        return GameRules(
            num_decks=self.num_decks,
            blackjack_payout=self.blackjack_payout,
            dealer_hits_soft_17=self.dealer_hits_soft_17,
            double_after_split=self.double_after_split,
            surrender_allowed=self.surrender_allowed,
            max_splits=self.max_splits,
        )


@dataclass(frozen=True)
class EngineConfig:
    """Engine configuration."""

    log_level: str = field(
        default_factory=lambda: os.getenv("BJODDS_LOG_LEVEL", "WARNING").upper()
    )
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)

    def configure_logging(self) -> None:
        """Apply ``log_level`` to the package logger."""
        logging.getLogger("bjodds").setLevel(self.log_level)


# Global configuration instance
config = EngineConfig()
