from .config import (
    CONFIG_PATH_ENV,
    PROJECT_CONFIG_FILE_NAME,
    deep_merge,
    default_config_dir,
    global_config_path,
    load_config,
    load_config_file,
    load_raw_config,
    project_config_path,
)

__all__ = [
    "CONFIG_PATH_ENV",
    "PROJECT_CONFIG_FILE_NAME",
    "deep_merge",
    "default_config_dir",
    "global_config_path",
    "load_config",
    "load_config_file",
    "load_raw_config",
    "project_config_path",
]
