import json
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from kubernetes.client import ApiException

from anthos_membership.config import Settings
from anthos_membership.kube import CR_ABSPATH, CRD_ABSPATH, ClusterClient

CRD_MANIFEST = """\
apiVersion: apiextensions.k8s.io/v1beta1
kind: CustomResourceDefinition
metadata:
  name: memberships.hub.gke.io
spec:
  group: hub.gke.io
  names:
    kind: Membership
    plural: memberships
    singular: membership
  scope: Cluster
  version: v1
"""

CR_MANIFEST = """\
apiVersion: hub.gke.io/v1
kind: Membership
metadata:
  name: membership
spec:
  owner:
    id: projects/example-project
"""

CRD_OBJECT = {
    "apiVersion": "apiextensions.k8s.io/v1beta1",
    "kind": "CustomResourceDefinition",
    "metadata": {"name": "memberships.hub.gke.io"},
}

CR_OBJECT = {
    "apiVersion": "hub.gke.io/v1",
    "kind": "Membership",
    "metadata": {"name": "membership"},
}


@dataclass
class Call:
    method: str
    path: str
    body: Any
    headers: Dict[str, str]
    query: List[Any]


class FakeApiServer:
    """Stands in for kubernetes.client.ApiClient, keeping objects by absolute path."""

    def __init__(self, objects: Optional[Dict[str, dict]] = None):
        self.objects: Dict[str, dict] = dict(objects or {})
        self.errors: Dict[tuple, Exception] = {}
        self.calls: List[Call] = []

    def fail(self, method: str, path: str, exc: Exception):
        self.errors[(method, path)] = exc

    @property
    def methods(self) -> List[str]:
        return [c.method for c in self.calls]

    def call_api(self, resource_path, method, query_params=None, header_params=None, body=None, **_):
        path = resource_path.lstrip("/")
        self.calls.append(Call(method, path, body, dict(header_params or {}), list(query_params or [])))
        if (method, path) in self.errors:
            raise self.errors[(method, path)]

        if method == "POST":
            name = body["metadata"]["name"]
            key = path if path.endswith("/" + name) else f"{path}/{name}"
            if key in self.objects:
                raise ApiException(status=409, reason="Conflict")
            self.objects[key] = body
            return self._response(body)

        if path not in self.objects:
            raise ApiException(status=404, reason="Not Found")
        if method == "GET":
            return self._response(self.objects[path])
        if method == "PATCH":
            self.objects[path] = body
            return self._response(body)
        if method == "DELETE":
            return self._response(self.objects.pop(path))
        raise AssertionError(f"unexpected method {method}")

    @staticmethod
    def _response(obj):
        return SimpleNamespace(data=json.dumps(obj).encode())


@pytest.fixture
def server():
    return FakeApiServer()


@pytest.fixture
def settings():
    return Settings(field_manager="test-manager")


@pytest.fixture
def kube(server, settings):
    return ClusterClient(server, settings)


@pytest.fixture
def cluster(monkeypatch, server):
    """Route every façade client construction to the fake server."""

    def factory(auth, settings=None):
        return ClusterClient(server, settings or Settings())

    monkeypatch.setattr("anthos_membership.kube.membership.new_cluster_client", factory)
    return server


@pytest.fixture
def populated(cluster):
    cluster.objects[CRD_ABSPATH] = dict(CRD_OBJECT)
    cluster.objects[CR_ABSPATH] = dict(CR_OBJECT)
    return cluster
