import os
import appdirs # type: ignore

config_dir : str = appdirs.user_config_dir("StoreLocalizer", "StoreLocalizer", roaming=True)

def GetConfigPath(*parts : str) -> str:
    """
    Locate a file in the per-user configuration directory
    """
    return os.path.join(config_dir, *parts)
