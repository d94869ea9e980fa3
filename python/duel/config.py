"""Engine configuration."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EngineConfig:
    """Settings that shape how a battle resolves moves.

    Attributes:
        max_redirect_depth: Maximum number of chained redirects (copied, called,
            reflected or danced moves) resolved for a single use
        strict_redirects: Raise instead of failing the move when the redirect
            bound is hit
        random_seed: Seed for the battle's random source, None for OS entropy
        log_resolutions: Emit an info log line for every finished resolution
    """

    max_redirect_depth: int = 8
    strict_redirects: bool = False
    random_seed: Optional[int] = None
    log_resolutions: bool = True


DEFAULT_CONFIG = EngineConfig()
