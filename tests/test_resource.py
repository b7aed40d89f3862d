import yaml

from anthos_membership.config import Auth
from anthos_membership.kube import CR_ABSPATH, CRD_ABSPATH
from anthos_membership.resource import CR_FIELD, CRD_FIELD, ExclusivityResource

from .conftest import CR_MANIFEST, CR_OBJECT, CRD_MANIFEST


def test_create_returns_refreshed_state(cluster):
    resource = ExclusivityResource(Auth())
    state = resource.create({CRD_FIELD: CRD_MANIFEST, CR_FIELD: CR_MANIFEST})

    assert yaml.safe_load(state[CRD_FIELD]) == yaml.safe_load(CRD_MANIFEST)
    assert yaml.safe_load(state[CR_FIELD]) == yaml.safe_load(CR_MANIFEST)
    assert resource.exists()


def test_update_patches_existing_artifacts(populated):
    ExclusivityResource(Auth()).update({CR_FIELD: CR_MANIFEST})
    assert "PATCH" in populated.methods
    assert "POST" not in populated.methods


def test_read_absent(cluster):
    resource = ExclusivityResource(Auth())
    assert resource.read() == {CRD_FIELD: "", CR_FIELD: ""}
    assert not resource.exists()


def test_read_only_cr(cluster):
    cluster.objects[CR_ABSPATH] = CR_OBJECT
    state = ExclusivityResource(Auth()).read()
    assert state[CRD_FIELD] == ""
    assert yaml.safe_load(state[CR_FIELD]) == CR_OBJECT


def test_delete(populated):
    ExclusivityResource(Auth()).delete()
    assert CRD_ABSPATH not in populated.objects
    assert CR_ABSPATH not in populated.objects
