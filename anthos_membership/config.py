import os
from dataclasses import dataclass
from typing import Mapping, Optional

from anthos_membership.errors import ConfigurationError

DEFAULT_FIELD_MANAGER = "anthos-membership"
DEFAULT_REQUEST_TIMEOUT = 30.0

_TRUTHY = ("1", "true", "yes", "on")


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in _TRUTHY


@dataclass
class Settings:
    debug: bool = False
    field_manager: str = DEFAULT_FIELD_MANAGER
    force_apply: bool = False
    request_timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        # GO_DEBUG only needs to be set, DEBUG must be truthy
        debug = _flag(env.get("DEBUG")) or bool(env.get("GO_DEBUG"))
        timeout = env.get("ANTHOS_REQUEST_TIMEOUT")
        try:
            request_timeout = float(timeout) if timeout else DEFAULT_REQUEST_TIMEOUT
        except ValueError as e:
            raise ConfigurationError(f"ANTHOS_REQUEST_TIMEOUT must be a number of seconds, got {timeout!r}") from e
        return cls(
            debug=debug,
            field_manager=env.get("ANTHOS_FIELD_MANAGER") or DEFAULT_FIELD_MANAGER,
            force_apply=_flag(env.get("ANTHOS_FORCE_APPLY")),
            request_timeout=request_timeout,
        )


@dataclass
class Auth:
    """Credentials for reaching one cluster.

    With ``host`` set the client talks to that endpoint using ``token`` and
    ``cluster_ca_certificate`` (PEM, or base64 encoded PEM as GKE reports it).
    Without it the in-cluster service account is tried, then ``kubeconfig``
    and ``context`` (or the kubeconfig defaults).
    """

    host: Optional[str] = None
    token: Optional[str] = None
    cluster_ca_certificate: Optional[str] = None
    insecure: bool = False
    kubeconfig: Optional[str] = None
    context: Optional[str] = None
