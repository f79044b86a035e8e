import os
from typing import Optional

from dotenv import load_dotenv


class EnvManager:
    """Read configuration values from the process environment and `.env`."""

    _loaded = False

    @classmethod
    def load(cls) -> None:
        if cls._loaded:
            return
        load_dotenv()
        cls._loaded = True

    @classmethod
    def get_env_variable(cls, name: str, default: Optional[str] = None) -> str:
        """Return the variable value, or `default` when unset or blank."""
        cls.load()
        value = os.environ.get(name, "").strip()
        if not value:
            if default is None:
                raise RuntimeError(f"{name} is not set.")
            return default
        return value
