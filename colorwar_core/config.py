from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_ROWS = 8
DEFAULT_COLS = 8
DEFAULT_PLAYERS = 4
START_POWER = 3
CAPACITY = 4


class ConfigError(ValueError):
    """Raised when board dimensions, player count or power settings do not fit together."""


def debug_enabled() -> bool:
    return os.getenv('COLORWAR_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class GameConfig:
    """Construction parameters for a game. Validated on creation."""
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    players: int = DEFAULT_PLAYERS
    start_power: int = START_POWER
    capacity: int = CAPACITY

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise ConfigError(f'board must be at least 1x1, got {self.rows}x{self.cols}')
        if self.players < 2:
            raise ConfigError(f'need at least 2 players, got {self.players}')
        if self.players > self.rows * self.cols:
            raise ConfigError(
                f'{self.players} players cannot all enter a {self.rows}x{self.cols} board'
            )
        if self.start_power < 1:
            raise ConfigError(f'start power must be positive, got {self.start_power}')
        # A first placement must never explode on its own.
        if self.capacity <= self.start_power:
            raise ConfigError(
                f'capacity ({self.capacity}) must exceed start power ({self.start_power})'
            )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f'{name} must be an integer, got {raw!r}') from None


def config_from_env(base: Optional[GameConfig] = None) -> GameConfig:
    """Builds a GameConfig from COLORWAR_* environment variables, falling back to `base`."""
    b = base or GameConfig()
    return GameConfig(
        rows=_env_int('COLORWAR_ROWS', b.rows),
        cols=_env_int('COLORWAR_COLS', b.cols),
        players=_env_int('COLORWAR_PLAYERS', b.players),
        start_power=_env_int('COLORWAR_START_POWER', b.start_power),
        capacity=_env_int('COLORWAR_CAPACITY', b.capacity),
    )
