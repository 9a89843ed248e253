from __future__ import annotations

from dataclasses import dataclass

from .errors import ConfigError

# ----- Window -----
CELL_SIZE = 20
HUD_HEIGHT = 32

# ----- Colors -----
BG    = (20, 20, 24)
GREEN = (80, 200, 80)
HEAD  = (120, 235, 120)
RED   = (200, 70, 70)
TEXT  = (220, 220, 230)

# ----- Tunables -----
@dataclass
class Config:
    grid_w: int = 30
    grid_h: int = 30
    initial_length: int = 3
    growth_unit: int = 1
    tick_rate: float = 8.0     # simulation steps per second
    seed: int | None = 0       # None -> nondeterministic food

    @property
    def capacity(self) -> int:
        return self.grid_w * self.grid_h

    @property
    def move_every_ms(self) -> float:
        return 1000.0 / self.tick_rate

    def validate(self) -> "Config":
        """Raise ConfigError unless a fresh game can start from this config."""
        if self.grid_w <= 0 or self.grid_h <= 0:
            raise ConfigError(f"grid must be positive, got {self.grid_w}x{self.grid_h}")
        if self.initial_length < 1:
            raise ConfigError(f"initial_length must be >= 1, got {self.initial_length}")
        # The starting snake lies in the middle row, head at the centre column,
        # body trailing to the left.
        if self.initial_length > self.grid_w // 2 + 1:
            raise ConfigError(
                f"initial_length {self.initial_length} does not fit left of "
                f"column {self.grid_w // 2} on a {self.grid_w}-wide grid"
            )
        if self.initial_length >= self.capacity:
            raise ConfigError("no free cell left for the first food")
        if self.growth_unit < 1:
            raise ConfigError(f"growth_unit must be >= 1, got {self.growth_unit}")
        if self.tick_rate <= 0:
            raise ConfigError(f"tick_rate must be > 0, got {self.tick_rate}")
        return self

