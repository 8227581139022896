'''
Configuration management for numkit.

Settings are grouped into dataclass sections and resolved in layers:

1. Defaults built into the package
2. An optional user configuration file (JSON)
3. Environment variables named ``NUMKIT_<SECTION>_<OPTION>``
4. Runtime modifications through ``set_config``

The numerical section controls iteration caps and tolerances of the special
functions and maximum-likelihood fitting, the testing section controls the
default significance level and the size limit for exact enumeration of rank
distributions, and the logging section configures the package logger.
'''

import os
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, get_type_hints

from .exceptions import ConfigurationError

logger = logging.getLogger("numkit.core.config")

CONFIG_ENV_PREFIX = "NUMKIT_"
DEFAULT_CONFIG_FILENAME = "numkit_config.json"
USER_CONFIG_DIR_ENV = "NUMKIT_CONFIG_DIR"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigSection(Enum):
    """Enumeration of configuration sections."""
    CORE = "core"
    NUMERICAL = "numerical"
    TESTING = "testing"
    LOGGING = "logging"


@dataclass
class CoreConfig:
    """
    Core configuration settings.

    Attributes:
        user_config_dir: Directory holding the user configuration file
    """
    user_config_dir: Path = field(default_factory=lambda: Path.home() / ".numkit")


@dataclass
class NumericalConfig:
    """
    Numerical configuration settings.

    Attributes:
        special_tolerance: Relative tolerance of series and continued fractions
        special_max_iterations: Iteration cap of series and continued fractions
        mle_tolerance: Convergence tolerance of numerical likelihood fits
        mle_max_iterations: Iteration cap of numerical likelihood fits
        optimization_method: SciPy minimizer used by numerical likelihood fits
    """
    special_tolerance: float = 1e-15
    special_max_iterations: int = 1000
    mle_tolerance: float = 1e-10
    mle_max_iterations: int = 1000
    optimization_method: str = "L-BFGS-B"


@dataclass
class TestingConfig:
    """
    Hypothesis testing configuration settings.

    Attributes:
        significance_level: Default test size used to flag significance
        exact_max_assignments: Largest number of rank assignments enumerated
            by an exact rank distribution before switching to the normal
            approximation
    """
    __test__ = False

    significance_level: float = 0.05
    exact_max_assignments: int = 2 ** 20


@dataclass
class LoggingConfig:
    """
    Logging configuration settings.

    Attributes:
        log_level: Level of the ``numkit`` logger
        log_file: Path to log file (None for no file logging)
        log_format: Format string for log messages
        log_date_format: Format string for log message timestamps
        console_logging: Whether to log to console
        file_logging: Whether to log to file
    """
    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"
    console_logging: bool = True
    file_logging: bool = False


@dataclass
class NumkitConfig:
    """Complete configuration, one attribute per section."""
    core: CoreConfig = field(default_factory=CoreConfig)
    numerical: NumericalConfig = field(default_factory=NumericalConfig)
    testing: TestingConfig = field(default_factory=TestingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigManager:
    """
    Configuration manager.

    Holds the current ``NumkitConfig`` and applies the file and environment
    layers on ``initialize``. Options modified at runtime are tracked so that
    ``get_modified_options`` can report them.
    """

    def __init__(self):
        self._config = NumkitConfig()
        self._initialized = False
        self._config_file: Optional[Path] = None
        self._modified_keys = set()

    def initialize(self) -> None:
        """
        Initialize the configuration manager.

        Resolves the user configuration file, loads it when present, applies
        environment overrides, validates the result and configures logging.
        """
        if self._initialized:
            return

        self._resolve_config_file()
        self._load_user_config()
        self._apply_env_overrides()
        self._validate_config()
        self._setup_logging()

        self._initialized = True
        logger.debug("Configuration manager initialized")

    def _resolve_config_file(self) -> None:
        env_config_dir = os.environ.get(USER_CONFIG_DIR_ENV)
        if env_config_dir:
            self._config.core.user_config_dir = Path(env_config_dir)
        self._config_file = self._config.core.user_config_dir / DEFAULT_CONFIG_FILENAME

    def _load_user_config(self) -> None:
        """Load the user configuration file if it exists."""
        if not self._config_file or not self._config_file.exists():
            logger.debug("No user configuration file found")
            return

        try:
            with open(self._config_file, 'r') as f:
                user_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load user configuration: {e}")
            return

        self._update_from_dict(user_config)
        logger.debug(f"Loaded user configuration from {self._config_file}")

    def _apply_env_overrides(self) -> None:
        """
        Apply environment variable overrides to the configuration.

        Variables are named ``NUMKIT_<SECTION>_<OPTION>``; unknown sections
        and options are ignored.
        """
        for env_var, value in os.environ.items():
            if not env_var.startswith(CONFIG_ENV_PREFIX) or env_var == USER_CONFIG_DIR_ENV:
                continue

            key = env_var[len(CONFIG_ENV_PREFIX):]
            parts = key.lower().split('_', 1)
            if len(parts) != 2:
                continue

            section, option = parts
            try:
                ConfigSection(section)
            except ValueError:
                continue

            section_obj = getattr(self._config, section)
            if not hasattr(section_obj, option):
                continue

            try:
                typed_value = self._coerce(getattr(section_obj, option), value)
            except (TypeError, ValueError) as e:
                logger.warning(f"Failed to apply environment override {env_var}: {e}")
                continue

            setattr(section_obj, option, typed_value)
            logger.debug(f"Applied environment override: {env_var}={value}")

    @staticmethod
    def _coerce(current_value: Any, value: Any) -> Any:
        """Convert ``value`` to the type of ``current_value``."""
        value_type = type(current_value)
        if isinstance(current_value, bool):
            if isinstance(value, str):
                return value.lower() in ('true', 'yes', '1', 'y')
            return bool(value)
        if isinstance(current_value, Path):
            return Path(value)
        if current_value is None:
            if isinstance(value, str) and value.lower() in ("", "none", "null"):
                return None
            if isinstance(value, str):
                return int(value) if value.lstrip("-").isdigit() else value
            return value
        if value_type is int:
            return int(value)
        if value_type is float:
            return float(value)
        if value_type is str:
            return str(value)
        return value

    def _setup_logging(self) -> None:
        """Configure the ``numkit`` logger from the logging section."""
        root_logger = logging.getLogger("numkit")

        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        root_logger.setLevel(getattr(logging, self._config.logging.log_level))

        formatter = logging.Formatter(
            fmt=self._config.logging.log_format,
            datefmt=self._config.logging.log_date_format
        )

        if self._config.logging.console_logging:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            root_logger.addHandler(console_handler)

        if self._config.logging.file_logging and self._config.logging.log_file:
            try:
                log_file = Path(self._config.logging.log_file)
                log_file.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_file)
                file_handler.setFormatter(formatter)
                root_logger.addHandler(file_handler)
            except OSError as e:
                logger.warning(f"Failed to set up file logging: {e}")

    def _validate_config(self) -> None:
        """Validate every section, resetting invalid values to defaults."""
        for section in ConfigSection:
            self._validate_section(getattr(self._config, section.value), section.value)

    def _validate_section(self, section: Any, section_name: str) -> None:
        hints = get_type_hints(type(section))
        for attr_name in hints:
            if attr_name.startswith("_"):
                continue
            value = getattr(section, attr_name)
            self._validate_constraint(section, attr_name, value, section_name)

    def _validate_constraint(self, section: Any, attr_name: str, value: Any, section_name: str) -> None:
        """
        Validate a specific constraint on a configuration value.

        Invalid values are logged and replaced by the section default.
        """
        default = getattr(type(section)(), attr_name)

        invalid = False
        if attr_name in ("special_max_iterations", "mle_max_iterations", "exact_max_assignments"):
            invalid = not isinstance(value, int) or value <= 0
        elif attr_name in ("special_tolerance", "mle_tolerance"):
            invalid = not isinstance(value, (int, float)) or not 0 < value < 1
        elif attr_name == "significance_level":
            invalid = not isinstance(value, (int, float)) or not 0 < value < 1
        elif attr_name == "log_level":
            invalid = value not in _LOG_LEVELS
        elif attr_name == "optimization_method":
            invalid = value not in ("BFGS", "L-BFGS-B", "Nelder-Mead", "Powell", "SLSQP")

        if invalid:
            logger.warning(
                f"Invalid {section_name}.{attr_name}: {value!r}, using {default!r}"
            )
            setattr(section, attr_name, default)

    def _update_from_dict(self, config_dict: Dict[str, Any]) -> None:
        """
        Update the configuration from a nested dictionary.

        Args:
            config_dict: Mapping of section names to option mappings
        """
        for section_name, section_dict in config_dict.items():
            if not hasattr(self._config, section_name):
                logger.warning(f"Unknown configuration section: {section_name}")
                continue

            section = getattr(self._config, section_name)
            for option_name, option_value in section_dict.items():
                if not hasattr(section, option_name):
                    logger.warning(f"Unknown configuration option: {section_name}.{option_name}")
                    continue

                if isinstance(getattr(section, option_name), Path) and isinstance(option_value, str):
                    option_value = Path(option_value)
                setattr(section, option_name, option_value)

    def save_user_config(self) -> None:
        """Save the current configuration to the user configuration file."""
        if not self._config_file:
            self._resolve_config_file()

        try:
            self._config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self._config_file, 'w') as f:
                json.dump(self.to_dict(), f, indent=2)
            logger.debug(f"Saved user configuration to {self._config_file}")
        except OSError as e:
            raise ConfigurationError(
                "Failed to save user configuration",
                setting=str(self._config_file),
                issue=str(e)
            ) from e

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary representation of the configuration, with paths as strings
        """
        result = {}
        for section in ConfigSection:
            section_obj = getattr(self._config, section.value)
            section_dict = {}
            for field_name in section_obj.__dataclass_fields__:
                value = getattr(section_obj, field_name)
                if isinstance(value, Path):
                    value = str(value)
                section_dict[field_name] = value
            result[section.value] = section_dict
        return result

    def get(self, section: str, option: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            section: The configuration section
            option: The configuration option
            default: Default value if the option is not found

        Returns:
            The configuration value, or the default if not found
        """
        section_obj = getattr(self._config, section, None)
        if section_obj is None or not hasattr(section_obj, option):
            return default
        return getattr(section_obj, option)

    def set(self, section: str, option: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            section: The configuration section
            option: The configuration option
            value: The value to set

        Raises:
            ConfigurationError: If the section or option is unknown or the
                value is invalid
        """
        if not self.has_section(section):
            raise ConfigurationError(
                f"Unknown configuration section: {section}",
                setting=f"{section}.{option}",
                value=value,
                issue="Section not found"
            )

        section_obj = getattr(self._config, section)
        if not hasattr(section_obj, option):
            raise ConfigurationError(
                f"Unknown configuration option: {section}.{option}",
                setting=f"{section}.{option}",
                value=value,
                issue="Option not found"
            )

        if option == "log_level" and isinstance(value, str):
            value = value.upper()

        try:
            typed_value = self._coerce(getattr(section_obj, option), value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Failed to set configuration option: {section}.{option}",
                setting=f"{section}.{option}",
                value=value,
                issue=str(e)
            ) from e

        previous = getattr(section_obj, option)
        setattr(section_obj, option, typed_value)
        self._validate_constraint(section_obj, option, typed_value, section)
        if getattr(section_obj, option) != typed_value:
            setattr(section_obj, option, previous)
            raise ConfigurationError(
                f"Invalid value for configuration option: {section}.{option}",
                setting=f"{section}.{option}",
                value=value,
                issue="Constraint violated"
            )

        self._modified_keys.add(f"{section}.{option}")
        if section == ConfigSection.LOGGING.value:
            self._setup_logging()
        logger.debug(f"Set configuration option: {section}.{option}={value}")

    def reset(self, section: Optional[str] = None, option: Optional[str] = None) -> None:
        """
        Reset configuration to default values.

        Args:
            section: The configuration section to reset, or None to reset all
            option: The configuration option to reset, or None to reset the
                entire section

        Raises:
            ConfigurationError: If the section or option is not found
        """
        if section is None:
            self._config = NumkitConfig()
            self._modified_keys.clear()
            self._setup_logging()
            logger.debug("Reset all configuration to defaults")
            return

        if not self.has_section(section):
            raise ConfigurationError(
                f"Unknown configuration section: {section}",
                setting=section,
                issue="Section not found"
            )

        default_section = type(getattr(self._config, section))()
        if option is None:
            setattr(self._config, section, default_section)
            self._modified_keys = {k for k in self._modified_keys if not k.startswith(f"{section}.")}
        else:
            if not hasattr(default_section, option):
                raise ConfigurationError(
                    f"Unknown configuration option: {section}.{option}",
                    setting=f"{section}.{option}",
                    issue="Option not found"
                )
            setattr(getattr(self._config, section), option, getattr(default_section, option))
            self._modified_keys.discard(f"{section}.{option}")

        if section == ConfigSection.LOGGING.value:
            self._setup_logging()

    def get_modified_options(self) -> List[str]:
        """Return the ``section.option`` keys modified at runtime."""
        return sorted(self._modified_keys)

    def has_section(self, section: str) -> bool:
        return section in {s.value for s in ConfigSection}

    def get_section(self, section: str) -> Any:
        """
        Get a configuration section object.

        Raises:
            ConfigurationError: If the section is not found
        """
        if not self.has_section(section):
            raise ConfigurationError(
                f"Unknown configuration section: {section}",
                setting=section,
                issue="Section not found"
            )
        return getattr(self._config, section)

    def get_config_file(self) -> Optional[Path]:
        return self._config_file


_config_manager = ConfigManager()


def initialize_config() -> None:
    """
    Initialize the configuration system.

    Loads the user configuration file and applies environment overrides.
    """
    _config_manager.initialize()


def get_config(section: str, option: str, default: Any = None) -> Any:
    """
    Get a configuration value.

    Args:
        section: The configuration section
        option: The configuration option
        default: Default value if the option is not found

    Returns:
        The configuration value, or the default if not found
    """
    if not _config_manager._initialized:
        initialize_config()
    return _config_manager.get(section, option, default)


def set_config(section: str, option: str, value: Any) -> None:
    """
    Set a configuration value.

    Raises:
        ConfigurationError: If the section or option is not found
    """
    if not _config_manager._initialized:
        initialize_config()
    _config_manager.set(section, option, value)


def reset_config(section: Optional[str] = None, option: Optional[str] = None) -> None:
    """
    Reset configuration to default values.

    Args:
        section: The configuration section to reset, or None to reset all
        option: The configuration option to reset, or None to reset the entire section
    """
    if not _config_manager._initialized:
        initialize_config()
    _config_manager.reset(section, option)


def save_config() -> None:
    """Save the current configuration to the user configuration file."""
    if not _config_manager._initialized:
        initialize_config()
    _config_manager.save_user_config()


def get_config_manager() -> ConfigManager:
    """
    Get the configuration manager instance.

    Returns:
        The configuration manager instance
    """
    if not _config_manager._initialized:
        initialize_config()
    return _config_manager


def get_numerical_config() -> NumericalConfig:
    """Get the numerical configuration section."""
    return get_config_manager().get_section(ConfigSection.NUMERICAL.value)


def get_testing_config() -> TestingConfig:
    """Get the hypothesis testing configuration section."""
    return get_config_manager().get_section(ConfigSection.TESTING.value)


def get_logging_config() -> LoggingConfig:
    """Get the logging configuration section."""
    return get_config_manager().get_section(ConfigSection.LOGGING.value)
