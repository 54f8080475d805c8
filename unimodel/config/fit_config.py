#!filepath: unimodel/config/fit_config.py
from typing import Dict, Optional

from pydantic import BaseModel, Field


class FitConfig(BaseModel):
    """
    Fit dispatch settings.

    - max_workers: worker threads for fit_many (None -> cpu count)
    - default_engines: engine used by the CLI when --engine is omitted
    """

    max_workers: Optional[int] = Field(default=None, ge=1)
    default_engines: Dict[str, str] = Field(default_factory=dict)
