import yaml
from typing import Dict, Any, Optional
from .models import SystemConfig, CpuInitialState

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self._parse_config(data or {})

    def load_from_string(self, text: str) -> SystemConfig:
        return self._parse_config(yaml.safe_load(text) or {})

    def _parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        arch = str(data.get("architecture", "CHIP8")).upper()

        initial_state_data = data.get("initial_state", {}) or {}
        registers = {
            str(name).lower(): self._parse_int(value)
            for name, value in (initial_state_data.get("registers", {}) or {}).items()
        }
        initial_state = CpuInitialState(
            pc=self._parse_int(initial_state_data.get("pc", 0x200)),
            i=self._parse_int(initial_state_data.get("i", 0)),
            registers=registers
        )

        return SystemConfig(
            architecture=arch,
            memory_size=self._parse_int(data.get("memory_size", 0x1000)),
            strict_opcodes=bool(data.get("strict_opcodes", False)),
            rng_seed=self._parse_optional_int(data.get("rng_seed")),
            program=data.get("program"),
            initial_state=initial_state
        )

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
