"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from cardtable.logging import GameLogConfig
from cardtable.models.game_state import GameType
from cardtable.models.values import BlackjackOptions, PokerOptions, UnoOptions


class TableConfig(BaseModel):
    """Table configuration."""

    game: GameType = GameType.BLACKJACK
    # Seat names; the blackjack dealer seat is added after these
    players: list[str] = Field(default_factory=lambda: ["Alice", "Bob"])
    num_rounds: int = 5
    seed: int | None = None


class RulesConfig(BaseModel):
    """Rules configuration."""

    initial_points: int = 0
    min_bet: int = 1
    max_bet: int = 1

    # Variant options
    blackjack: BlackjackOptions = BlackjackOptions()
    uno: UnoOptions = UnoOptions()
    poker: PokerOptions = PokerOptions()


class StrategyConfig(BaseModel):
    """Automated seat configuration."""

    hit_below: int = 17
    fold_below: int = 10


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    show_hands: bool = False


class SnapshotConfig(BaseModel):
    """Snapshot persistence configuration."""

    enabled: bool = False
    directory: str = "snapshots"


class Config(BaseModel):
    """Root configuration."""

    table: TableConfig = TableConfig()
    rules: RulesConfig = RulesConfig()
    strategy: StrategyConfig = StrategyConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogConfig = GameLogConfig()
    snapshots: SnapshotConfig = SnapshotConfig()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
