import logging
from typing import Optional

from anthos_membership.config import Auth, Settings
from anthos_membership.errors import ClientInitError, InstallError, ManifestError, MembershipError

from .artifacts import MEMBERSHIP_CR, MEMBERSHIP_CRD, Artifact, install_artifact, read_artifact
from .client import new_cluster_client
from .codec import json_to_yaml

logger = logging.getLogger("anthos_membership.membership")


def _client(auth: Auth, settings: Optional[Settings]):
    try:
        return new_cluster_client(auth, settings)
    except ClientInitError:
        raise
    except Exception as e:
        raise ClientInitError(f"initializing kube client: {e}") from e


def _get_manifest(auth: Auth, artifact: Artifact, settings: Optional[Settings]) -> str:
    kube = _client(auth, settings)
    body, found = read_artifact(kube, artifact.path)
    if not found:
        return ""
    try:
        return json_to_yaml(body)
    except ManifestError as e:
        raise ManifestError(str(e), manifest=artifact.name) from e


def get_membership_crd(auth: Auth, settings: Optional[Settings] = None) -> str:
    """Return the live membership CRD as YAML, or an empty string if there is none."""
    return _get_manifest(auth, MEMBERSHIP_CRD, settings)


def get_membership_cr(auth: Auth, settings: Optional[Settings] = None) -> str:
    """Return the live membership CR as YAML, or an empty string if there is none."""
    return _get_manifest(auth, MEMBERSHIP_CR, settings)


def install_exclusivity_manifests(
        auth: Auth,
        crd_manifest: str,
        cr_manifest: str,
        settings: Optional[Settings] = None,
) -> None:
    """Install or upgrade the membership CRD and CR.

    Empty manifests are skipped. The CRD goes first since the CR depends on
    it; a failure on the CR leaves an installed CRD behind.
    """
    kube = _client(auth, settings)
    for artifact, manifest in ((MEMBERSHIP_CRD, crd_manifest), (MEMBERSHIP_CR, cr_manifest)):
        if not manifest:
            logger.debug("install_exclusivity_manifests: empty %s manifest, skipping", artifact.name)
            continue
        logger.debug("install_exclusivity_manifests: installing %s manifest", artifact.name)
        try:
            install_artifact(kube, artifact, manifest)
        except ManifestError as e:
            raise InstallError(artifact.name, ManifestError(str(e), manifest=artifact.name)) from e
        except MembershipError as e:
            raise InstallError(artifact.name, e) from e


def delete_artifacts(auth: Auth, settings: Optional[Settings] = None) -> None:
    """Delete the membership CRD and CR.

    Stops at the first artifact found missing, so an absent CRD means the CR
    is not looked at.
    """
    kube = _client(auth, settings)
    for artifact in (MEMBERSHIP_CRD, MEMBERSHIP_CR):
        _, found = read_artifact(kube, artifact.path)
        if not found:
            logger.debug("delete_artifacts: %s not present, nothing left to delete", artifact.name)
            return
        logger.info("Deleting %s %s", artifact.name, artifact.path)
        kube.delete(artifact.path)
