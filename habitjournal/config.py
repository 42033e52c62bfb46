#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Journal - Configuration
Centralized configuration read from the environment, with validation
"""

import os
import sys
from pathlib import Path
from typing import Dict, Any
from dataclasses import dataclass
from enum import Enum

import pytz


class Environment(Enum):
    """Runtime environments"""
    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class LogLevel(Enum):
    """Logging levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class StorageConfig:
    """Key-value blob storage"""
    data_dir: Path
    storage_key: str = "habitJournalDataV5"
    legacy_storage_key: str = "habitJournalDataV4"


@dataclass
class LoggingConfig:
    """Logging setup"""
    level: LogLevel = LogLevel.INFO
    to_file: bool = False
    log_dir: Path = Path("logs")
    log_format: str = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    max_bytes: int = 10485760  # 10MB
    backup_count: int = 5


@dataclass
class GamificationConfig:
    """Calendar and analytics settings"""
    timezone: str = "UTC"
    analytics_weeks: int = 8


@dataclass
class PomodoroConfig:
    """Pomodoro durations, in minutes"""
    work_minutes: int = 25
    break_minutes: int = 5


def _env_bool(key: str, default: str) -> bool:
    return os.getenv(key, default).lower() == 'true'


def _env_int(key: str, default: int, errors: list) -> int:
    raw = os.getenv(key)
    if raw is None or raw == '':
        return default
    try:
        return int(raw)
    except ValueError:
        errors.append(f"{key} must be an integer, got {raw!r}")
        return default


class JournalConfig:
    """Main configuration object"""

    def __init__(self):
        self._errors = []
        self._load_config()
        self._validate_config()

    def _load_config(self):
        """Read settings from environment variables"""
        env_name = os.getenv('HABITJOURNAL_ENV', 'development')
        try:
            self.environment = Environment(env_name)
        except ValueError:
            self._errors.append(f"HABITJOURNAL_ENV has unknown value {env_name!r}")
            self.environment = Environment.DEVELOPMENT

        self.storage = StorageConfig(
            data_dir=Path(os.getenv('DATA_DIR', 'data')),
            storage_key=os.getenv('STORAGE_KEY', 'habitJournalDataV5'),
            legacy_storage_key=os.getenv('LEGACY_STORAGE_KEY', 'habitJournalDataV4'),
        )

        level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
        try:
            level = LogLevel(level_name)
        except ValueError:
            self._errors.append(f"LOG_LEVEL has unknown value {level_name!r}")
            level = LogLevel.INFO

        self.logging = LoggingConfig(
            level=level,
            to_file=_env_bool('LOG_TO_FILE', 'false'),
            log_dir=Path(os.getenv('LOG_DIR', 'logs')),
            log_format=os.getenv('LOG_FORMAT', '%(asctime)s [%(levelname)s] %(name)s: %(message)s'),
        )

        self.gamification = GamificationConfig(
            timezone=os.getenv('TIMEZONE', 'UTC'),
            analytics_weeks=_env_int('ANALYTICS_WEEKS', 8, self._errors),
        )

        self.pomodoro = PomodoroConfig(
            work_minutes=_env_int('POMODORO_WORK_MINUTES', 25, self._errors),
            break_minutes=_env_int('POMODORO_BREAK_MINUTES', 5, self._errors),
        )

    def _validate_config(self):
        """Validate the loaded values"""
        errors = list(self._errors)

        if self.gamification.timezone not in pytz.all_timezones_set:
            errors.append(f"TIMEZONE {self.gamification.timezone!r} is not a known time zone")

        if self.gamification.analytics_weeks < 1:
            errors.append("ANALYTICS_WEEKS must be at least 1")

        if not 1 <= self.pomodoro.work_minutes <= 120:
            errors.append(f"POMODORO_WORK_MINUTES {self.pomodoro.work_minutes} is outside 1-120")

        if not 1 <= self.pomodoro.break_minutes <= 60:
            errors.append(f"POMODORO_BREAK_MINUTES {self.pomodoro.break_minutes} is outside 1-60")

        if not self.storage.storage_key or self.storage.storage_key == self.storage.legacy_storage_key:
            errors.append("STORAGE_KEY must be set and differ from LEGACY_STORAGE_KEY")

        if errors:
            raise ValueError("Configuration errors:\n" + "\n".join(f"• {error}" for error in errors))

    def ensure_directories(self):
        """Create the data and log directories"""
        directories = [self.storage.data_dir]
        if self.logging.to_file:
            directories.append(self.logging.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """Build a logging.config.dictConfig mapping"""
        handlers = ['console']
        handler_config = {
            'console': {
                'class': 'logging.StreamHandler',
                'level': self.logging.level.value,
                'formatter': 'default',
                'stream': sys.stdout
            }
        }

        if self.logging.to_file:
            handlers.append('file')
            handler_config['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.logging.level.value,
                'formatter': 'default',
                'filename': str(self.logging.log_dir / f"habitjournal_{self.environment.value}.log"),
                'maxBytes': self.logging.max_bytes,
                'backupCount': self.logging.backup_count,
                'encoding': 'utf-8'
            }

        return {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.logging.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': handler_config,
            'loggers': {
                'habitjournal': {
                    'level': self.logging.level.value,
                    'handlers': handlers,
                    'propagate': False
                },
                'apscheduler': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the configuration for diagnostics"""
        return {
            'environment': self.environment.value,
            'storage': {
                'data_dir': str(self.storage.data_dir),
                'storage_key': self.storage.storage_key,
                'legacy_storage_key': self.storage.legacy_storage_key
            },
            'logging': {
                'level': self.logging.level.value,
                'to_file': self.logging.to_file,
                'log_dir': str(self.logging.log_dir)
            },
            'timezone': self.gamification.timezone,
            'analytics_weeks': self.gamification.analytics_weeks,
            'pomodoro': {
                'work_minutes': self.pomodoro.work_minutes,
                'break_minutes': self.pomodoro.break_minutes
            }
        }


def load_config(ensure_dirs: bool = False) -> JournalConfig:
    """Build a configuration from the current environment"""
    config = JournalConfig()
    if ensure_dirs:
        config.ensure_directories()
    return config
