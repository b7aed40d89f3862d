import atexit
import base64
import binascii
import hashlib
import json
import logging
import os
import tempfile
from typing import Any, Dict, List, Optional, Tuple

import urllib3
import yaml
from kubernetes import client, config
from kubernetes.client import ApiException
from kubernetes.config import ConfigException

from anthos_membership.config import Auth, Settings
from anthos_membership.errors import ApiRequestError, ClientInitError

logger = logging.getLogger("anthos_membership.kube")

JSON_CONTENT_TYPE = "application/json"
APPLY_PATCH_CONTENT_TYPE = "application/apply-patch+yaml"

_temp_files: List[str] = []
_ca_files: Dict[str, str] = {}


def _cleanup_temp_files():
    for path in _temp_files:
        try:
            os.remove(path)
        except OSError:
            logger.debug("Failed to remove %s, might be already gone.", path)
    _temp_files.clear()
    _ca_files.clear()


atexit.register(_cleanup_temp_files)


def _write_ca_file(ca_certificate: str) -> str:
    if "-----BEGIN" in ca_certificate:
        pem = ca_certificate.encode()
    else:
        try:
            pem = base64.b64decode(ca_certificate, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ClientInitError(f"cluster CA certificate is neither PEM nor base64: {e}") from e
    # one file per distinct certificate for the life of the process
    digest = hashlib.sha256(pem).hexdigest()
    path = _ca_files.get(digest)
    if path and os.path.isfile(path):
        return path
    fd, path = tempfile.mkstemp(prefix="anthos-ca-", suffix=".crt")
    with os.fdopen(fd, "wb") as f:
        f.write(pem)
    _temp_files.append(path)
    _ca_files[digest] = path
    return path


def new_api_client(auth: Auth, settings: Optional[Settings] = None) -> client.ApiClient:
    settings = settings or Settings()
    configuration = client.Configuration()
    if auth.host:
        configuration.host = auth.host
        if auth.token:
            configuration.api_key = {"authorization": auth.token}
            configuration.api_key_prefix = {"authorization": "Bearer"}
        if auth.insecure:
            configuration.verify_ssl = False
        elif auth.cluster_ca_certificate:
            configuration.ssl_ca_cert = _write_ca_file(auth.cluster_ca_certificate)
    elif auth.kubeconfig or auth.context:
        _load_kube_config(auth, configuration)
    else:
        try:
            config.load_incluster_config(client_configuration=configuration)
        except ConfigException:
            _load_kube_config(auth, configuration)
    configuration.debug = settings.debug
    logger.debug("Kubernetes client configured for %s", configuration.host)
    return client.ApiClient(configuration)


def _load_kube_config(auth: Auth, configuration: client.Configuration):
    try:
        config.load_kube_config(
            config_file=auth.kubeconfig,
            context=auth.context,
            client_configuration=configuration,
        )
    except (ConfigException, OSError) as e:
        raise ClientInitError(f"loading kubeconfig: {e}") from e


class ClusterClient:
    """Raw requests against absolute API paths, returning response bodies."""

    def __init__(self, api_client: client.ApiClient, settings: Optional[Settings] = None):
        self.api_client = api_client
        self.settings = settings or Settings()

    def get(self, path: str) -> bytes:
        return self._request("GET", "GET", path)

    def create(self, path: str, body: bytes) -> bytes:
        # ApiClient serializes bodies itself, so hand it the decoded document
        return self._request(
            "CREATE", "POST", path,
            body=json.loads(body),
            content_type=JSON_CONTENT_TYPE,
        )

    def apply(self, path: str, manifest: str) -> bytes:
        # apply-patch+yaml bodies go out JSON encoded, which is valid YAML
        query: List[Tuple[str, Any]] = [("fieldManager", self.settings.field_manager)]
        if self.settings.force_apply:
            query.append(("force", "true"))
        return self._request(
            "PATCH", "PATCH", path,
            body=yaml.safe_load(manifest),
            content_type=APPLY_PATCH_CONTENT_TYPE,
            query=query,
        )

    def delete(self, path: str) -> bytes:
        return self._request("DELETE", "DELETE", path)

    def _request(
            self,
            operation: str,
            method: str,
            path: str,
            body: Any = None,
            content_type: Optional[str] = None,
            query: Optional[List[Tuple[str, Any]]] = None,
    ) -> bytes:
        headers = {"Accept": JSON_CONTENT_TYPE}
        timeout = self.settings.request_timeout
        if content_type:
            headers["Content-Type"] = content_type
        logger.debug("%s %s", method, path)
        try:
            resp = self.api_client.call_api(
                "/" + path.lstrip("/"),
                method,
                query_params=query or [],
                header_params=headers,
                body=body,
                auth_settings=["BearerToken"],
                _preload_content=False,
                _return_http_data_only=True,
                # (connect, read)
                _request_timeout=(timeout, timeout) if timeout else None,
            )
        except ApiException as e:
            raise ApiRequestError(operation, path, status=e.status, reason=e.reason) from e
        except urllib3.exceptions.HTTPError as e:
            raise ApiRequestError(operation, path, reason=str(e)) from e
        return resp.data or b""


def new_cluster_client(auth: Auth, settings: Optional[Settings] = None) -> ClusterClient:
    settings = settings or Settings()
    return ClusterClient(new_api_client(auth, settings), settings)
