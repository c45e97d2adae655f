"""Application configuration from environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Benchmark defaults loaded from BENCHMARKER_* environment variables.

    Command-line flags take precedence over these values.
    """
    
    # Seconds to sleep between ticks, measured from the end of the previous tick
    check_interval: float = 1.0
    
    # Per-check timeout in seconds
    timeout: float = 5.0
    
    # Root logger level
    log_level: str = "WARNING"
    
    # User-Agent header sent by HTTP checks
    user_agent: str = "downtime-benchmarker/0.1"
    
    class Config:
        env_prefix = "BENCHMARKER_"
        case_sensitive = False


settings = Settings()
