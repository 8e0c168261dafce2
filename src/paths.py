"""Centralized path configuration for the application."""

import os
from pathlib import Path

def get_data_root() -> Path:
    """
    Get the root directory for data files (dictionaries, graph exports, etc).

    Respects the TERMGRAPH_DATA_DIR environment variable.
    If not set, defaults to the current working directory.
    """
    env_path = os.getenv("TERMGRAPH_DATA_DIR")
    if env_path:
        return Path(env_path)
    return Path(".")

def get_dictionary_root() -> Path:
    """Get the directory that holds dictionary resource files."""
    return get_data_root() / "config" / "dictionaries"

def get_config_file() -> Path:
    """Get the path to the extractor configuration file."""
    return Path("config/dictionary_extraction.yaml")
