# The module is to define the configuration settings for the gateway.
# Date: 2025-07-02
# Version: 0.2.0

from functools import lru_cache
from typing import Dict, List

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class ServiceCandidate(BaseModel):
    """
    One entry of the static discovery candidate list.
    Attributes:
        name (str): The statically assigned name; the service owns tools prefixed '<name>_'.
        address (str): The base address probed for liveness, e.g. 'http://localhost:3002'.
    """
    name: str = Field(..., description="Statically assigned service name.")
    address: str = Field(..., description="Base address of the candidate service.")

    @property
    def prefix(self) -> str:
        return f"{self.name}_"


def _default_candidates() -> List[ServiceCandidate]:
    return [
        ServiceCandidate(name="git", address="http://localhost:3002"),
        ServiceCandidate(name="github", address="http://localhost:3003"),
        ServiceCandidate(name="data", address="http://localhost:3004"),
        ServiceCandidate(name="memory", address="http://localhost:3005"),
    ]


class Settings(BaseSettings):
    """
    The Settings class is used to define the configuration settings for the gateway.
    Values are read from the environment and from a '.env' file; list and dict
    fields are given as JSON.
    Attributes:
        HOST (str): Interface the HTTP server binds to.
        PORT (int): Port the HTTP server listens on.
        LOG_LEVEL (str): Level of the gateway logger.
        CORS_ORIGINS (List[str]): Origins allowed to call the API from a browser.
        DISCOVERY_ENABLED (bool): Run the background discovery loop. When False the
            registry is fixed at startup from STATIC_SERVICES.
        DISCOVERY_INTERVAL (float): Seconds between two discovery cycles.
        DISCOVERY_PROBE_TIMEOUT (float): Timeout of a single heartbeat probe.
        DISCOVERY_CANDIDATES (List[ServiceCandidate]): Endpoints probed on each cycle.
        STATIC_SERVICES (Dict[str, str]): Prefix to address table used when discovery is disabled.
        PROXY_TIMEOUT (float): Timeout of a forwarded tool call.
        SHELL_TIMEOUT (float): Maximum run time of a shell command.
        SHELL_MAX_OUTPUT (int): Maximum number of bytes kept from each output stream.
        SHELL_RESTRICTED (bool): Reject commands containing shell metacharacters.
        BROWSE_TIMEOUT (float): Navigation timeout of the browse_web tool, in seconds.
        BROWSE_MAX_CHARS (int): Maximum length of the text returned by browse_web.
    """
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # Discovery
    DISCOVERY_ENABLED: bool = True
    DISCOVERY_INTERVAL: float = 60.0
    DISCOVERY_PROBE_TIMEOUT: float = 1.0
    DISCOVERY_CANDIDATES: List[ServiceCandidate] = Field(default_factory=_default_candidates)
    STATIC_SERVICES: Dict[str, str] = Field(default_factory=dict)

    # Proxy
    PROXY_TIMEOUT: float = 60.0

    # Shell
    SHELL_TIMEOUT: float = 60.0
    SHELL_MAX_OUTPUT: int = 1024 * 1024
    SHELL_RESTRICTED: bool = False

    # Browser
    BROWSE_TIMEOUT: float = 30.0
    BROWSE_MAX_CHARS: int = 15000

    class Config:
        env_file = ".env"
        env_file_encoding = 'utf-8'
        extra = 'ignore'

# lru_cache to cache the settings instance.
@lru_cache
def get_settings():
    return Settings()
