"""Check that image tags in a plugin configuration match the VM image version."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

import yaml

DEFAULT_CONFIG_PATH = "pluginconfig/pluginconfig-311.yaml"
_REDHAT_REGISTRY = "registry.access.redhat.com/openshift3"
_MISSING = object()


class PluginConfigError(ValueError):
    """Raised when a plugin configuration is malformed or inconsistent."""


@dataclass
class VersionConfig:
    """VM image version and container images of one plugin version."""

    image_version: str = ""
    images: dict[str, str] = field(default_factory=dict)


@dataclass
class SimpleConfig:
    """The parts of a plugin configuration needed for tag checking."""

    versions: dict[str, VersionConfig] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimpleConfig":
        """Build a configuration from a decoded document."""
        versions = _as_mapping(_lookup(data, "versions"), "versions")
        return cls(
            versions={
                _key(name): _version_from_value(value, f"versions.{_key(name)}")
                for name, value in versions.items()
            }
        )


def _key(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def _lookup(data: Mapping[Any, Any], name: str) -> Any:
    """Return the last value whose key matches name case-insensitively."""
    found = _MISSING
    for key, value in data.items():
        if _key(key).lower() == name.lower():
            found = value
    return found


def _as_mapping(value: Any, what: str) -> Mapping[Any, Any]:
    if value is _MISSING or value is None:
        return {}
    if not isinstance(value, Mapping):
        raise PluginConfigError(f"{what} must be a mapping, not {type(value).__name__}")
    return value


def _as_string(value: Any, what: str) -> str:
    if value is _MISSING or value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise PluginConfigError(f"{what} must be a string, not {type(value).__name__}")


def _version_from_value(value: Any, what: str) -> VersionConfig:
    data = _as_mapping(value, what)
    images = _as_mapping(_lookup(data, "images"), f"{what}.images")
    return VersionConfig(
        image_version=_as_string(_lookup(data, "imageVersion"), f"{what}.imageVersion"),
        images={
            _key(image): _as_string(url, f"{what}.images.{_key(image)}") for image, url in images.items()
        },
    )


def validate(template: SimpleConfig) -> None:
    """Raise PluginConfigError if a Red Hat image tag does not match its VM image version."""
    for plugin_version, config in template.versions.items():
        vm_version = config.image_version
        vm_version_parts = vm_version.split(".")
        if len(vm_version_parts) < 2:
            raise PluginConfigError(f"{plugin_version}] ImageVersion {vm_version} has no '.'")
        vm_ocp_version = vm_version_parts[1]
        for image, url_with_tag in config.images.items():
            # e.g. registry.access.redhat.com/openshift3/prometheus-alertmanager:v3.11.129
            url_parts = url_with_tag.split(":")
            if len(url_parts) != 2:
                raise PluginConfigError(f"{plugin_version}] {image} {url_with_tag} has no tag")
            url, tag = url_parts
            if _REDHAT_REGISTRY not in url:
                continue
            tag_parts = tag.split(".")
            if len(tag_parts) != 3:
                raise PluginConfigError(f"{plugin_version}] tag {tag} is not in the form v3.11.<minor>")
            if tag_parts[2] != vm_ocp_version:
                raise PluginConfigError(
                    f"{plugin_version}] VM version {vm_version} and container tag {tag} do not match"
                )


def load_config(path: str) -> SimpleConfig:
    """Read a plugin configuration from a YAML file."""
    with open(path, encoding="utf-8") as stream:
        document = yaml.safe_load(stream)
    if not isinstance(document, Mapping):
        raise PluginConfigError(f"{path} does not hold a configuration mapping")
    return SimpleConfig.from_dict(document)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Validate a plugin configuration file; return the exit status."""
    parser = argparse.ArgumentParser(
        prog="validate-pluginconfig",
        description="Check that image tags in a plugin configuration match the VM image version.",
    )
    parser.add_argument("path", nargs="?", default=DEFAULT_CONFIG_PATH, help="configuration file")
    args = parser.parse_args(argv)
    template = load_config(args.path)
    try:
        validate(template)
    except PluginConfigError as err:
        print(err)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())