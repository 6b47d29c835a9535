import json
import os
from datetime import datetime

DEFAULT_CONFIG = {
    "max_steps": 1_000_000,
    "debug": False,
    "log_runs": True,
    "output_directory": "logs/",
    "log_file_prefix": "tapemachine_",
    "tables_directory": "tables/",
}

# Expected types for validation
CONFIG_SCHEMA = {
    "max_steps": int,
    "debug": bool,
    "log_runs": bool,
    "output_directory": str,
    "log_file_prefix": str,
    "tables_directory": str,
}


def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        # bool is an int subclass, so reject it explicitly for int keys
        if expected_type is int and isinstance(config[key], bool):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")
        if not isinstance(config[key], expected_type):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")

    if config["max_steps"] < 0:
        raise ValueError("max_steps must be 0 (unbounded) or a positive step budget.")


def load_config(path="config/runtime_config.json", quiet=False):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    validate_config(config)

    os.makedirs(config["output_directory"], exist_ok=True)

    if not quiet:
        print(f"[{datetime.now()}] Loaded config from {path}:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config


def save_config(config, path="config/runtime_config.json"):
    validate_config(config)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4)
