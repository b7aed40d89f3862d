from .config import Auth, Settings
from .errors import (
    ApiRequestError,
    ClientInitError,
    ConfigurationError,
    ErrorKind,
    InstallError,
    ManifestError,
    MembershipError,
)
from .kube import (
    delete_artifacts,
    get_membership_cr,
    get_membership_crd,
    install_exclusivity_manifests,
)

__version__ = "0.1.0"

__all__ = [
    "Auth",
    "Settings",
    "ApiRequestError",
    "ClientInitError",
    "ConfigurationError",
    "ErrorKind",
    "InstallError",
    "ManifestError",
    "MembershipError",
    "delete_artifacts",
    "get_membership_cr",
    "get_membership_crd",
    "install_exclusivity_manifests",
]
