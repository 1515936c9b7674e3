# wallcon_monitor/config.py
from dataclasses import dataclass, field
from pathlib import Path
import configparser

DEFAULT_CONFIG_PATH = "wallcon_monitor.conf"


@dataclass
class DeviceConfig:
    timeout: float = 5.0


@dataclass
class MonitorConfig:
    delay: int = 5


@dataclass
class LoggingConfig:
    console_level: str = "WARNING"
    console_quiet: bool = False
    debug_modules: list[str] = field(default_factory=list)
    response_log: str | None = None


@dataclass
class AppConfig:
    device: DeviceConfig = field(default_factory=DeviceConfig)
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class Config:
    def __init__(self, path: str):
        self.path = Path(path).expanduser()
        self.parser = configparser.ConfigParser(inline_comment_prefixes=("#",))
        read = self.parser.read(self.path)
        if not read:
            raise FileNotFoundError(f"Config file not found: {self.path}")

    @classmethod
    def load_optional(cls, path: str | None) -> AppConfig:
        """Load ``path`` if given, else the default file when present."""
        if path:
            return cls.load(path)
        if Path(DEFAULT_CONFIG_PATH).exists():
            return cls.load(DEFAULT_CONFIG_PATH)
        return AppConfig()

    @classmethod
    def load(cls, path: str) -> AppConfig:
        cfg = cls(path)

        p = cfg.parser

        def _as_bool(value: str) -> bool:
            return value.strip().lower() == "true"

        # --- Device ---
        device_kwargs = {}
        if "device" in p:
            device_sec = p["device"]
            if "timeout" in device_sec:
                timeout = float(device_sec["timeout"])
                if timeout <= 0:
                    raise ValueError("[device] timeout must be positive")
                device_kwargs["timeout"] = timeout
        device_cfg = DeviceConfig(**device_kwargs)

        # --- Monitor ---
        monitor_kwargs = {}
        if "monitor" in p:
            monitor_sec = p["monitor"]
            if "delay" in monitor_sec:
                delay = int(monitor_sec["delay"])
                if delay <= 0:
                    raise ValueError("[monitor] delay must be a positive number of seconds")
                monitor_kwargs["delay"] = delay
        monitor_cfg = MonitorConfig(**monitor_kwargs)

        # --- Logging ---
        logging_kwargs = {}
        if "logging" in p:
            logging_sec = p["logging"]
            if "console_level" in logging_sec:
                logging_kwargs["console_level"] = logging_sec["console_level"]
            if "console_quiet" in logging_sec:
                logging_kwargs["console_quiet"] = _as_bool(logging_sec["console_quiet"])
            if "debug_modules" in logging_sec:
                raw = logging_sec["debug_modules"]
                logging_kwargs["debug_modules"] = [x.strip() for x in raw.split(",") if x.strip()]
            if "response_log" in logging_sec:
                raw_path = logging_sec["response_log"].strip()
                logging_kwargs["response_log"] = raw_path or None
        logging_cfg = LoggingConfig(**logging_kwargs)

        return AppConfig(
            device=device_cfg,
            monitor=monitor_cfg,
            logging=logging_cfg,
        )
