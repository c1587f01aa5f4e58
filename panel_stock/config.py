"""Configuration loading for the stock extractor."""

import copy
import os

import yaml

DEFAULT_CONFIG = {
    "wood_types": ["redwood", "whitewood"],
    "id_prefixes": {
        "redwood": "R1",
        "whitewood": "W1",
    },
    "id_suffix": "0",
    "pack_marker": "PACK",
    "export_sheet_name": "Processed Data",
    "export_file_name": "processed_output.xlsx",
    "strict_sections": False,
    "log_level": "INFO",
}


def load_config(config_path=None):
    """Load configuration from a YAML file, merged over :data:`DEFAULT_CONFIG`.

    A missing or empty file yields the defaults.  ``id_prefixes`` is merged
    key by key so a file can override a single wood type.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_path and os.path.exists(config_path):
        with open(config_path, "r") as f:
            user_config = yaml.safe_load(f) or {}
        prefixes = {**config["id_prefixes"], **(user_config.pop("id_prefixes", None) or {})}
        config.update(user_config)
        config["id_prefixes"] = prefixes
    return config
