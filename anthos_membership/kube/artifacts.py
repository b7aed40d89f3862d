import logging
from dataclasses import dataclass
from typing import Dict, Tuple

from anthos_membership.errors import ApiRequestError

from .client import ClusterClient
from .codec import yaml_to_json

logger = logging.getLogger("anthos_membership.kube.artifacts")


@dataclass(frozen=True)
class Artifact:
    name: str
    path: str
    create_path: str


CRD_ABSPATH = "apis/apiextensions.k8s.io/v1beta1/customresourcedefinitions/memberships.hub.gke.io"
CRD_CREATE_ABSPATH = "apis/apiextensions.k8s.io/v1beta1/customresourcedefinitions"
CR_ABSPATH = "apis/hub.gke.io/v1/memberships/membership"

# Named resources are read and patched by name, but CRDs are created on the collection
MEMBERSHIP_CRD = Artifact("CRD", CRD_ABSPATH, CRD_CREATE_ABSPATH)
MEMBERSHIP_CR = Artifact("CR", CR_ABSPATH, CR_ABSPATH)

ARTIFACTS: Dict[str, Artifact] = {a.path: a for a in (MEMBERSHIP_CRD, MEMBERSHIP_CR)}


def artifact_for_path(path: str) -> Artifact:
    return ARTIFACTS.get(path) or Artifact(path, path, path)


def read_artifact(kube: ClusterClient, path: str) -> Tuple[bytes, bool]:
    """GET ``path``; a missing resource comes back as ``(b"", False)``."""
    try:
        return kube.get(path), True
    except ApiRequestError as e:
        if e.not_found:
            logger.debug("%s not found", path)
            return b"", False
        raise


def install_artifact(kube: ClusterClient, artifact: Artifact, manifest: str) -> None:
    """Create ``artifact`` from ``manifest`` if absent, otherwise apply it as a patch."""
    body = yaml_to_json(manifest)
    _, found = read_artifact(kube, artifact.path)
    if not found:
        # the create endpoint only accepts JSON
        logger.debug("installing the artifact %s", artifact.create_path)
        kube.create(artifact.create_path, body)
        return
    logger.debug("updating the artifact %s", artifact.path)
    kube.apply(artifact.path, manifest)
