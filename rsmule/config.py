"""
Configuration management for rs-mule.

Two kinds of configuration live here:
- AuthConfig: RightScale API credentials, from a YAML file or an inline hash
- RunExecutableOptions: The options of a single run_executable call
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from rsmule.errors import ConfigError
from rsmule.executable import ExecutableType, TagMatchStrategy, UpdateTarget, parse_enum


DEFAULT_API_URL = "https://my.rightscale.com"
DEFAULT_TIMEOUT = 300


class AuthConfig:
    """Authentication parameters for the RightScale API client."""

    KNOWN_KEYS = ["email", "password", "account_id", "refresh_token", "api_url", "timeout"]

    def __init__(self, data: Dict[str, Any]):
        self.email = data.get("email")
        self.password = data.get("password")
        self.account_id = data.get("account_id")
        self.refresh_token = data.get("refresh_token")
        self.api_url = str(data.get("api_url") or DEFAULT_API_URL).rstrip("/")
        self.timeout = data.get("timeout", DEFAULT_TIMEOUT)
        self.unknown_keys = sorted(k for k in data if k not in self.KNOWN_KEYS)

    @classmethod
    def from_file(cls, path: Path) -> "AuthConfig":
        """Load auth parameters from a YAML file."""
        path = Path(path).expanduser()
        if not path.exists():
            raise ConfigError(f"Authentication file not found: {path}")

        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax in {path}: {e}")

        if not data:
            raise ConfigError(f"Authentication file is empty: {path}")
        if not isinstance(data, dict):
            raise ConfigError(f"Authentication file must contain a mapping: {path}")
        return cls(data)

    def validate(self) -> None:
        """Validate that enough parameters are present to log in."""
        if self.unknown_keys:
            raise ConfigError(f"Unknown authentication parameter(s): {', '.join(self.unknown_keys)}")

        if not self.account_id:
            raise ConfigError("Authentication parameters are missing 'account_id'")

        has_password = bool(self.email and self.password)
        if not has_password and not self.refresh_token:
            raise ConfigError(
                "Authentication parameters need either 'email' and 'password' or 'refresh_token'"
            )

        try:
            self.timeout = int(self.timeout)
        except (TypeError, ValueError):
            raise ConfigError(f"Invalid timeout: {self.timeout}")

    def to_client_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for RightApiClient."""
        return {
            "email": self.email,
            "password": self.password,
            "account_id": str(self.account_id),
            "refresh_token": self.refresh_token,
            "api_url": self.api_url,
            "timeout": self.timeout,
        }

    def __repr__(self) -> str:
        # Never print secrets
        who = self.email or "refresh_token"
        return f"AuthConfig(account_id={self.account_id}, user={who}, api_url={self.api_url})"


def load_auth_config(
    auth_file: Optional[Path] = None,
    auth_hash: Optional[Mapping[str, Any]] = None,
) -> AuthConfig:
    """
    Load RightScale authentication parameters.

    Args:
        auth_file: Path to a YAML file of auth parameters
        auth_hash: Inline auth parameters. Takes precedence over auth_file.

    Returns:
        Validated AuthConfig

    Raises:
        ConfigError: If neither source is given or the parameters are invalid
    """
    if auth_hash:
        config = AuthConfig(dict(auth_hash))
    elif auth_file:
        config = AuthConfig.from_file(auth_file)
    else:
        raise ConfigError(
            "You must supply RightScale authentication details as either a hash or "
            "a yaml authentication file!"
        )

    config.validate()
    return config


def _as_list(value: Any) -> List[Any]:
    """Wrap a bare value in a list; None becomes an empty list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def normalize_tags(tags: Any) -> List[str]:
    """Normalize tags to a non-empty list of strings."""
    tags = [str(t) for t in _as_list(tags)]
    if not tags:
        raise ConfigError("At least one tag is required")
    return tags


@dataclass
class RunExecutableOptions:
    """
    Options for RunExecutable.run_executable.

    Attributes:
        executable_type: How to interpret the executable identifier
        right_script_revision: "latest" or a specific revision number.
            Revision 0 is the HEAD revision.
        tag_match_strategy: Whether instances must carry all tags or any of them
        inputs: Input name to Inputs 2.0 value (e.g. "text:foo")
        update_inputs: Objects that should also be updated with inputs
    """
    executable_type: ExecutableType = ExecutableType.AUTO
    right_script_revision: str = "latest"
    tag_match_strategy: TagMatchStrategy = TagMatchStrategy.ALL
    inputs: Dict[str, str] = field(default_factory=dict)
    update_inputs: List[UpdateTarget] = field(default_factory=list)

    def __post_init__(self):
        """Coerce string values to enums and bare values to lists."""
        self.executable_type = parse_enum(ExecutableType, self.executable_type, "executable_type")
        self.tag_match_strategy = parse_enum(
            TagMatchStrategy, self.tag_match_strategy, "tag_match_strategy"
        )
        self.update_inputs = [
            parse_enum(UpdateTarget, target, "update_inputs")
            for target in _as_list(self.update_inputs)
        ]
        self.right_script_revision = str(self.right_script_revision)
        self.inputs = dict(self.inputs or {})

    @property
    def match_all(self) -> bool:
        return self.tag_match_strategy is TagMatchStrategy.ALL

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]] = None) -> "RunExecutableOptions":
        """
        Build options from a mapping, ignoring keys that are None.

        Unknown keys are rejected so that typos do not silently fall back to
        defaults.
        """
        data = {k: v for k, v in (data or {}).items() if v is not None}
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown option(s): {', '.join(unknown)}")
        return cls(**data)
