import yaml
from typing import Any, Dict, Optional

from .models import EmulatorConfig, QuirkConfig

class ConfigLoader:
    def load_from_file(self, path: str) -> EmulatorConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self._parse_config(data or {})

    def load_from_string(self, text: str) -> EmulatorConfig:
        return self._parse_config(yaml.safe_load(text) or {})

    def _parse_config(self, data: Dict[str, Any]) -> EmulatorConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        defaults = EmulatorConfig()

        quirk_data = data.get("quirks", {}) or {}
        if not isinstance(quirk_data, dict):
            raise ValueError(f"quirks must be a mapping, got {type(quirk_data).__name__}")
        quirks = QuirkConfig(
            shift_uses_vx=bool(quirk_data.get("shift_uses_vx", False)),
            jump_uses_vx=bool(quirk_data.get("jump_uses_vx", False)),
        )

        config = EmulatorConfig(
            rom=self._parse_optional_path(data.get("rom")),
            load_address=self._parse_int(data.get("load_address", defaults.load_address)),
            cycles_per_frame=self._parse_int(data.get("cycles_per_frame", defaults.cycles_per_frame)),
            timer_hz=self._parse_int(data.get("timer_hz", defaults.timer_hz)),
            seed=self._parse_optional_int(data.get("seed")),
            history_limit=self._parse_int(data.get("history_limit", defaults.history_limit)),
            scale=self._parse_int(data.get("scale", defaults.scale)),
            quirks=quirks,
        )

        if not 0 <= config.load_address < 0x1000:
            raise ValueError(f"load_address out of range: {config.load_address:#x}")
        for name in ("cycles_per_frame", "timer_hz", "history_limit", "scale"):
            if getattr(config, name) <= 0:
                raise ValueError(f"{name} must be positive")
        return config

    def _parse_optional_int(self, value: Any) -> Optional[int]:
        if value is None:
            return None
        return self._parse_int(value)

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")

    def _parse_optional_path(self, value: Any) -> Optional[str]:
        if value is None:
            return None
        if not isinstance(value, str) or not value:
            raise ValueError(f"Invalid ROM path: {value!r}")
        return value
