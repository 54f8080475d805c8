#!filepath: unimodel/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .fit_config import FitConfig
from .log_config import LogConfig


def project_root() -> str:
    """
    Project root derived from this file's location:
    unimodel/config/app_config.py -> unimodel/config -> unimodel -> project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


def default_config_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    fit: FitConfig = Field(default_factory=FitConfig)

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        Load YAML config + .env

        - defaults to unimodel/config/base.yml
        - independent of the current working directory
        - UNIMODEL_LOG_LEVEL overrides log.level
        """
        load_dotenv(os.path.join(project_root(), ".env"))

        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        level = os.getenv("UNIMODEL_LOG_LEVEL")
        if level:
            raw["log"] = {**(raw.get("log") or {}), "level": level}

        return cls(**raw)
