import os
import toml
import logging
from dataclasses import dataclass, field
from typing import Optional, Any, Mapping

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = os.path.expanduser("~/.config/nlsh")
DEFAULT_TIMEOUT = 30.0

TRUE_VALUES = ("1", "true", "yes", "on")


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


@dataclass
class Config:
    """Settings for one nlsh invocation.

    Build it directly when you need full control (tests do), or call
    ``Config.from_env()`` to resolve every field from the environment,
    then the TOML config file, then the defaults below.
    """

    provider: str = "openai"
    openai_api_key: Optional[str] = None
    google_api_key: Optional[str] = None
    openai_url_base: str = "https://api.openai.com"
    google_url_base: str = "https://generativelanguage.googleapis.com"
    openai_model: str = "gpt-3.5-turbo"
    gemini_model: str = "gemini-2.0-flash-exp"
    proxy: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    verbose: bool = False
    config_dir: str = DEFAULT_CONFIG_DIR
    log_dir: Optional[str] = None
    history_file: Optional[str] = None
    max_history: int = 100
    config_file: Optional[str] = field(default=None, repr=False)

    def __post_init__(self):
        # An empty selector behaves like an unset one.
        if not self.provider:
            self.provider = "openai"
        # Logs and history live under config_dir unless placed elsewhere.
        if self.log_dir is None:
            self.log_dir = os.path.join(self.config_dir, "logs")
        if self.history_file is None:
            self.history_file = os.path.join(self.config_dir, "history.json")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None,
                 config_file: Optional[str] = None) -> "Config":
        """
        Resolve a Config from environment variables, the config file and defaults.

        Args:
            environ: Mapping to read variables from (defaults to os.environ)
            config_file: Path of the TOML file (defaults to NLSH_CONFIG_FILE or
                ~/.config/nlsh/config.toml)

        Returns:
            A fully populated Config
        """
        environ = os.environ if environ is None else environ
        config_file = config_file or environ.get("NLSH_CONFIG_FILE") or os.path.join(DEFAULT_CONFIG_DIR, "config.toml")
        file_config = load_config_file(config_file)

        def get(key: str, default: Optional[Any] = None) -> Any:
            # 1. Environment variable (empty counts as unset)
            value = environ.get(key)
            if value:
                return value
            # 2. Config file
            for section in file_config.values():
                if isinstance(section, dict) and section.get(key) not in (None, ""):
                    return section[key]
            # 3. Default
            return default

        defaults = cls()
        config_dir = os.path.dirname(config_file) or DEFAULT_CONFIG_DIR
        return cls(
            provider=get("LLM_PROVIDER", defaults.provider),
            openai_api_key=get("OPENAI_API_KEY"),
            google_api_key=get("GOOGLE_API_KEY"),
            openai_url_base=get("OPENAI_URL_BASE", defaults.openai_url_base),
            google_url_base=get("GOOGLE_URL_BASE", defaults.google_url_base),
            openai_model=get("OPENAI_MODEL", defaults.openai_model),
            gemini_model=get("GEMINI_MODEL", defaults.gemini_model),
            proxy=get("OPENAI_PROXY"),
            timeout=float(get("NLSH_TIMEOUT", DEFAULT_TIMEOUT)),
            verbose=_as_bool(get("NLSH_VERBOSE", False)),
            config_dir=config_dir,
            log_dir=get("NLSH_LOG_DIR", os.path.join(config_dir, "logs")),
            history_file=get("NLSH_HISTORY_FILE", os.path.join(config_dir, "history.json")),
            max_history=int(get("NLSH_MAX_HISTORY", defaults.max_history)),
            config_file=config_file,
        )

    def validate(self) -> None:
        """
        Check that the selected provider is supported, has its API key and
        that the request timeout is positive.

        Raises:
            ConfigurationError: naming the unsupported provider, the missing variable
                or the bad timeout
        """
        from .providers import get_provider

        get_provider(self)

    def __str__(self) -> str:
        """Return string representation of the configuration."""
        config_dict = self.__dict__.copy()
        for name in ("openai_api_key", "google_api_key"):
            key = config_dict.get(name)
            if key:
                config_dict[name] = f"{key[:4]}...{key[-4:]}" if len(key) > 8 else "****"
        return str(config_dict)


def load_config_file(config_file: str) -> dict:
    """Loads configuration from the TOML file, or an empty dict if there is none."""
    if not os.path.exists(config_file):
        return {}
    try:
        with open(config_file, 'r') as f:
            return toml.load(f)
    except (toml.TomlDecodeError, IOError) as e:
        logger.warning(f"Could not read config file at {config_file}: {e}")
        return {}


def create_default_config(config_file: str) -> bool:
    """
    Writes a default configuration file.

    Returns:
        False if the file already exists or could not be written
    """
    if os.path.exists(config_file):
        logger.warning(f"Config file already exists at {config_file}")
        return False

    defaults = Config()
    default_config = {
        "api": {
            "LLM_PROVIDER": defaults.provider,
            "OPENAI_API_KEY": "",
            "OPENAI_MODEL": defaults.openai_model,
            "OPENAI_URL_BASE": defaults.openai_url_base,
            "GOOGLE_API_KEY": "",
            "GEMINI_MODEL": defaults.gemini_model,
            "GOOGLE_URL_BASE": defaults.google_url_base,
            "OPENAI_PROXY": "",
            "NLSH_TIMEOUT": DEFAULT_TIMEOUT,
        },
        "application": {
            "NLSH_LOG_DIR": defaults.log_dir,
            "NLSH_HISTORY_FILE": defaults.history_file,
            "NLSH_MAX_HISTORY": defaults.max_history,
        },
        "behavior": {
            "NLSH_VERBOSE": False,
        },
    }
    try:
        os.makedirs(os.path.dirname(config_file) or ".", exist_ok=True)
        with open(config_file, 'w') as f:
            toml.dump(default_config, f)
        logger.info(f"Created default config file at: {config_file}")
        return True
    except IOError as e:
        logger.error(f"Error creating default config file: {e}")
        return False


# Singleton instance holder
_config_instance: Optional[Config] = None

def get_config() -> Config:
    """Returns the process-wide Config, resolved from the environment on first use."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config.from_env()
    return _config_instance
