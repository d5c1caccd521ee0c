"""Configuración del servidor y del logging."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml  # PyYAML
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_ENV_VAR = "AMORTIZER_CONFIG"

LOG_FORMAT = "[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s"
LOG_DATEFMT = "%H:%M:%S"


class Settings(BaseSettings):
    """Dónde y cómo escucha el servidor HTTP.

    Las variables de entorno AMORTIZER_* tienen prioridad sobre los valores
    pasados al constructor (los del archivo YAML).
    """

    model_config = SettingsConfigDict(
        env_prefix="AMORTIZER_",
        case_sensitive=False,
        extra="forbid",
        frozen=True,
    )

    host: str = Field(default="127.0.0.1", description="Dirección donde escucha el servidor")
    port: int = Field(default=8080, gt=0, lt=65536, description="Puerto preferido")
    port_fallback: bool = Field(default=True, description="Usar un puerto libre si el preferido está ocupado")
    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = Field(
        default="INFO", description="Nivel de log, válido para logging y uvicorn"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # env > YAML (init kwargs) > defaults
        return env_settings, init_settings


def load_config_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ValueError(f"No existe el archivo de configuración: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"El archivo de configuración debe ser un mapa YAML: {path}")
    return data


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Valores por defecto, luego el archivo YAML (si hay), luego el entorno."""
    if config_path is None and os.environ.get(CONFIG_ENV_VAR):
        config_path = Path(os.environ[CONFIG_ENV_VAR])
    values = load_config_file(config_path) if config_path is not None else {}
    return Settings(**values)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Agrega un único handler de consola al logger del paquete."""
    logger = logging.getLogger("amortizer")
    logger.setLevel(level)

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
