"""Translation between the JSON the API server speaks and the YAML kept in state."""

import json
from typing import Union

import yaml

from anthos_membership.errors import ManifestError


def yaml_to_json(text: str) -> bytes:
    try:
        docs = [d for d in yaml.safe_load_all(text) if d is not None]
    except yaml.YAMLError as e:
        raise ManifestError(f"converting yaml to json: {e}") from e
    if not docs:
        raise ManifestError("converting yaml to json: no document found")
    if len(docs) > 1:
        raise ManifestError(f"converting yaml to json: expected one document, got {len(docs)}")
    try:
        return json.dumps(docs[0], separators=(",", ":")).encode()
    except (TypeError, ValueError) as e:
        # timestamps and other YAML-only types have no JSON form
        raise ManifestError(f"converting yaml to json: {e}") from e


def json_to_yaml(data: Union[bytes, str]) -> str:
    try:
        obj = json.loads(data)
    except ValueError as e:
        raise ManifestError(f"converting json to yaml: {e}") from e
    return yaml.safe_dump(obj, default_flow_style=False, allow_unicode=True)
