"""Runtime wiring for CLI and service entrypoints."""

from __future__ import annotations

from dataclasses import dataclass

from .config import AppConfig, load_config
from .logging import configure_logging
from .presets import TableConfig


@dataclass(slots=True)
class Runtime:
    config: AppConfig

    def table_config(self, **overrides) -> TableConfig:
        """Conversion options seeded with the configured default preset."""
        return TableConfig(preset=self.config.default_preset).merged(**overrides)


def build_runtime(config: AppConfig | None = None) -> Runtime:
    cfg = config or load_config()
    configure_logging(cfg.log_level, cfg.json_logs)
    return Runtime(config=cfg)
