"""Configuration management for the Luma TUI runtime."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class RuntimeConfig:
    """Configuration settings for a running Program."""
    
    # Bounded wait for keyboard input on each loop iteration (~60 FPS)
    poll_interval_ms: int = 16
    
    # Threshold for the clock-driven tick delivered straight to the model
    tick_interval_ms: int = 100
    
    # Terminal modes acquired at startup
    mouse_capture: bool = True
    alt_screen: bool = True
    
    # Logging (stdout belongs to the UI, so logs go to a file or stderr)
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    
    def __post_init__(self):
        """Validate intervals."""
        if self.poll_interval_ms < 0:
            raise ValueError(f"poll_interval_ms must be >= 0, got {self.poll_interval_ms}")
        if self.tick_interval_ms <= 0:
            raise ValueError(f"tick_interval_ms must be > 0, got {self.tick_interval_ms}")
    
    @property
    def poll_interval(self) -> float:
        """Poll interval in seconds."""
        return self.poll_interval_ms / 1000.0
    
    @property
    def tick_interval(self) -> float:
        """Forced tick threshold in seconds."""
        return self.tick_interval_ms / 1000.0


# Default configuration instance
default_config = RuntimeConfig()
