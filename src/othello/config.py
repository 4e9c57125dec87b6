"""
Configuration parameters for the Othello engine.
"""
import os
from dataclasses import dataclass, asdict, field
from typing import Dict, Any, Optional
import json


@dataclass
class SearchConfig:
    """Configuration for the AI move search."""
    depth: int = 4  # Minimax plies
    mobility_weight: int = 5
    seed: Optional[int] = None  # Seed for the random strategy
    use_opening_book: bool = False


@dataclass
class ArenaConfig:
    """Configuration for bot tournaments."""
    rounds: int = 10
    k_factor: float = 32.0
    initial_rating: float = 1500.0
    output_dir: str = "tournament_results"
    elo_file: str = "elo_ratings.json"


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    log_dir: str = "logs"
    log_level: str = "INFO"
    log_to_file: bool = False


@dataclass
class Config:
    """Main configuration class."""
    project_name: str = "Othello"
    search: SearchConfig = field(default_factory=SearchConfig)
    arena: ArenaConfig = field(default_factory=ArenaConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def save(self, filepath: str):
        """Save config to JSON file."""
        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create config from dictionary."""
        return cls(
            project_name=config_dict.get('project_name', 'Othello'),
            search=SearchConfig(**config_dict.get('search', {})),
            arena=ArenaConfig(**config_dict.get('arena', {})),
            logging=LoggingConfig(**config_dict.get('logging', {}))
        )

    @classmethod
    def load(cls, filepath: str) -> 'Config':
        """Load config from JSON file."""
        with open(filepath, 'r') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)


def get_default_config() -> Config:
    """Get default configuration."""
    return Config()
