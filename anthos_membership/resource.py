import logging
from typing import Dict, Mapping, Optional

from anthos_membership.config import Auth, Settings
from anthos_membership.kube import (
    delete_artifacts,
    get_membership_cr,
    get_membership_crd,
    install_exclusivity_manifests,
)

logger = logging.getLogger("anthos_membership.resource")

CRD_FIELD = "crd_manifest"
CR_FIELD = "cr_manifest"


class ExclusivityResource:
    """Create/read/update/delete of the membership exclusivity artifacts as one resource.

    State is a plain mapping holding the two manifests as YAML text, the
    shape an infrastructure tool stores.
    """

    def __init__(self, auth: Auth, settings: Optional[Settings] = None):
        self.auth = auth
        self.settings = settings

    def create(self, state: Mapping[str, str]) -> Dict[str, str]:
        logger.info("Installing membership exclusivity artifacts")
        install_exclusivity_manifests(
            self.auth,
            state.get(CRD_FIELD, ""),
            state.get(CR_FIELD, ""),
            settings=self.settings,
        )
        return self.read()

    update = create

    def read(self) -> Dict[str, str]:
        return {
            CRD_FIELD: get_membership_crd(self.auth, self.settings),
            CR_FIELD: get_membership_cr(self.auth, self.settings),
        }

    def delete(self) -> None:
        logger.info("Deleting membership exclusivity artifacts")
        delete_artifacts(self.auth, self.settings)

    def exists(self) -> bool:
        state = self.read()
        return bool(state[CRD_FIELD] or state[CR_FIELD])
