import os

from dotenv import load_dotenv

# Project root .env, next to the app package
ENV_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), ".env")


def load_env(path: str = ENV_PATH) -> bool:
    """Load .env into the process environment without overriding real variables."""
    return load_dotenv(path, override=False)
