"""
Library configuration loaded from environment variables.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _optional_int(name: str) -> int | None:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return int(value)


class Config:
    """Library configuration."""
    
    # Logging
    LOG_LEVEL: str = os.getenv("DICE_LOG_LEVEL", "INFO")
    
    # Structured record formatting (0 writes compact JSON)
    JSON_INDENT: int = int(os.getenv("DICE_JSON_INDENT", "2"))
    
    # Seed for the demo entry point when none is given on the command line
    DEFAULT_SEED: int | None = _optional_int("DICE_DEFAULT_SEED")


config = Config()
settings = config  # Alias
