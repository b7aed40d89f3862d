from .client import ClusterClient, new_api_client, new_cluster_client
from .codec import json_to_yaml, yaml_to_json
from .artifacts import (
    ARTIFACTS,
    CR_ABSPATH,
    CRD_ABSPATH,
    CRD_CREATE_ABSPATH,
    MEMBERSHIP_CR,
    MEMBERSHIP_CRD,
    Artifact,
    artifact_for_path,
    install_artifact,
    read_artifact,
)
from .membership import (
    delete_artifacts,
    get_membership_cr,
    get_membership_crd,
    install_exclusivity_manifests,
)

__all__ = [
    "ClusterClient",
    "new_api_client",
    "new_cluster_client",
    "json_to_yaml",
    "yaml_to_json",
    "ARTIFACTS",
    "CR_ABSPATH",
    "CRD_ABSPATH",
    "CRD_CREATE_ABSPATH",
    "MEMBERSHIP_CR",
    "MEMBERSHIP_CRD",
    "Artifact",
    "artifact_for_path",
    "install_artifact",
    "read_artifact",
    "delete_artifacts",
    "get_membership_cr",
    "get_membership_crd",
    "install_exclusivity_manifests",
]
