"""Values derived from the cluster model for resource templates."""

from __future__ import annotations

import json
from typing import Any, Optional, Union

from osacluster.api import OpenShiftManagedCluster

_GO_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def master_lbc_name_prefix(cs: OpenShiftManagedCluster) -> str:
    """Return the first DNS label of the cluster's FQDN."""
    return cs.properties.fqdn.split(".")[0]


def _dumps(value: Any) -> str:
    text = json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)
    for char, escape in _GO_ESCAPES.items():
        text = text.replace(char, escape)
    return text


def _matches(key: str, name: str) -> bool:
    return key.lower() == name


def _decode_entry(registry: str, entry: Any) -> dict[str, str]:
    if entry is None:
        return {"auth": ""}
    if not isinstance(entry, dict):
        raise ValueError(f"docker config entry for {registry!r} is not an object")
    auth = ""
    for key, value in entry.items():
        if not _matches(key, "auth") or value is None:
            continue
        if not isinstance(value, str):
            raise ValueError(f"auth for {registry!r} is not a string")
        auth = value
    return {"auth": auth}


def _merge(raw: Union[bytes, str], auths: Optional[dict[str, dict[str, str]]]) -> Optional[dict[str, dict[str, str]]]:
    doc = json.loads(raw)
    if doc is None:
        return auths
    if not isinstance(doc, dict):
        raise ValueError("docker config is not an object")
    for key, value in doc.items():
        if not _matches(key, "auths"):
            continue
        if value is None:
            auths = None
            continue
        if not isinstance(value, dict):
            raise ValueError("docker config auths is not an object")
        if auths is None:
            auths = {}
        for registry, entry in value.items():
            auths[registry] = _decode_entry(registry, entry)
    return auths


def combined_image_pull_secret(
    image_pull_secret: Union[bytes, str], geneva_image_pull_secret: Union[bytes, str]
) -> bytes:
    """Merge two docker config JSON documents into one, later entries winning."""
    auths = _merge(image_pull_secret, None)
    auths = _merge(geneva_image_pull_secret, auths)
    return _dumps({"auths": auths}).encode("utf-8")