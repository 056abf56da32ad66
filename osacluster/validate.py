"""Predicates used to validate cluster definitions."""

from __future__ import annotations

import ipaddress
import re
from enum import Enum
from typing import Union

from osacluster.api import VMSize

_IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
_IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]
_IPInterface = Union[ipaddress.IPv4Interface, ipaddress.IPv6Interface]

_CLUSTER_NAME = re.compile(r"[-\w._()]+", re.ASCII)
_LOCATION = re.compile(r"[a-z0-9]+", re.IGNORECASE)
_LABEL = r"(?:[a-z0-9]|[a-z0-9][-a-z0-9]{0,61}[a-z0-9])"
_RFC1123 = re.compile(rf"{_LABEL}(?:\.{_LABEL})*", re.IGNORECASE)
# Guards against InvalidDomainNameLabel in cloud app hostnames.
_CLOUD_DOMAIN_LABEL = re.compile(r"[a-z][a-z0-9-]{1,61}[a-z0-9]\.")
_AGENT_POOL_PROFILE_NAME = re.compile(r"[a-z0-9]{1,12}")
_RPM_PACKAGE = re.compile(r"[a-zA-Z0-9_\-.+]+")
_ESCAPED_PATH = re.compile(r"(?:[A-Za-z0-9\-_.~$&+,/:;=@!'()*\[\]]|%[0-9A-Fa-f]{2})*")
_HEX32 = re.compile(r"[0-9a-fA-F]{32}")
_BASE36 = re.compile(r"[0-9A-Za-z]+")
_DECIMAL = re.compile(r"[0-9]+")
_URN_PREFIX = "urn:uuid:"

_MASTER_AND_INFRA_VM_SIZES = frozenset(
    size.value
    for size in (
        VMSize.STANDARD_D4S_V3,
        VMSize.STANDARD_D8S_V3,
        VMSize.STANDARD_D16S_V3,
        VMSize.STANDARD_D32S_V3,
    )
)

_COMPUTE_VM_SIZES = frozenset(
    size.value
    for size in (
        VMSize.STANDARD_D4S_V3,
        VMSize.STANDARD_D8S_V3,
        VMSize.STANDARD_D16S_V3,
        VMSize.STANDARD_D32S_V3,
        VMSize.STANDARD_E4S_V3,
        VMSize.STANDARD_E8S_V3,
        VMSize.STANDARD_E16S_V3,
        VMSize.STANDARD_E32S_V3,
        VMSize.STANDARD_F8S_V2,
        VMSize.STANDARD_F16S_V2,
        VMSize.STANDARD_F32S_V2,
    )
)


def _parse_cidr(text: str) -> _IPInterface:
    """Parse an address with a numeric prefix length, e.g. 10.0.0.1/24."""
    address, slash, prefix = text.partition("/")
    if not slash or "%" in address or not (prefix.isascii() and prefix.isdigit()):
        raise ValueError(f"invalid CIDR address: {text}")
    return ipaddress.ip_interface(text)


def _parse_ip(text: str) -> _IPAddress | None:
    if "%" in text:
        return None
    try:
        return ipaddress.ip_address(text)
    except ValueError:
        return None


def _as_network(value: Union[str, _IPNetwork]) -> _IPNetwork:
    if isinstance(value, str):
        return _parse_cidr(value).network
    return value


def _size_value(size: Union[str, VMSize]) -> str:
    return size.value if isinstance(size, Enum) else size


def is_valid_cluster_name(name: str) -> bool:
    """Return whether name is an acceptable cluster name."""
    return _CLUSTER_NAME.fullmatch(name) is not None


def is_valid_location(location: str) -> bool:
    """Return whether location looks like an Azure region name."""
    return _LOCATION.fullmatch(location) is not None


def is_valid_lower_case_hostname(hostname: str) -> bool:
    """Return whether hostname is an RFC 1123 hostname in lower case."""
    # OpenShift masters refuse upper case in subdomains and certificate names.
    return (
        len(hostname.encode("utf-8")) <= 255
        and _RFC1123.fullmatch(hostname) is not None
        and hostname.lower() == hostname
    )


def is_valid_cloud_app_hostname(hostname: str, location: str) -> bool:
    """Return whether hostname is a single label under <location>.cloudapp.azure.com."""
    if _CLOUD_DOMAIN_LABEL.match(hostname) is None:
        return False
    return hostname.endswith(f".{location}.cloudapp.azure.com") and hostname.count(".") == 4


def is_ip_within_subnet(ip: str, subnet_cidr: str) -> bool:
    """Return whether the address ip lies inside subnet_cidr."""
    try:
        network = _parse_cidr(subnet_cidr).network
    except ValueError:
        return False
    address = _parse_ip(ip)
    if address is None:
        return False
    if network.version == 4 and address.version == 6:
        mapped = address.ipv4_mapped
        if mapped is None:
            return False
        address = mapped
    elif network.version == 6 and address.version == 4:
        address = ipaddress.IPv6Address(f"::ffff:{address}")
    return address in network


def is_valid_ipv4_cidr(cidr: str) -> bool:
    """Return whether cidr is an IPv4 network whose address has no host bits set."""
    try:
        interface = _parse_cidr(cidr)
    except ValueError:
        return False
    ip = interface.ip
    if ip.version == 6 and ip.ipv4_mapped is None:
        return False
    return ip == interface.network.network_address


def is_valid_blob_name(name: str) -> bool:
    """Return whether name is usable as a storage blob name."""
    if not 1 <= len(name.encode("utf-8")) <= 1024:
        return False
    if name.endswith((".", "/")):
        return False
    if "./" in name or "/." in name:
        return False
    # The name must survive being used as a URL path unchanged.
    return _ESCAPED_PATH.fullmatch(name) is not None


def vnet_contains_subnet(vnet: Union[str, _IPNetwork], subnet: Union[str, _IPNetwork]) -> bool:
    """Return whether the network vnet contains the network subnet."""
    vnet_net = _as_network(vnet)
    subnet_net = _as_network(subnet)
    if vnet_net.version != subnet_net.version:
        return False
    if vnet_net.prefixlen > subnet_net.prefixlen:
        return False
    masked = ipaddress.ip_network((subnet_net.network_address, vnet_net.prefixlen), strict=False)
    return masked.network_address == vnet_net.network_address


def _is_plain_uuid(text: str) -> bool:
    if len(text) == 36:
        if any(text[pos] != "-" for pos in (8, 13, 18, 23)):
            return False
        text = text.replace("-", "")
    return len(text) == 32 and _HEX32.fullmatch(text) is not None


def is_valid_uuid(value: str) -> bool:
    """Return whether value is a UUID in canonical, hash-like, braced or URN form."""
    if not value.isascii():
        return False
    length = len(value)
    if length in (32, 36):
        return _is_plain_uuid(value)
    if length == 38:
        return value.startswith("{") and value.endswith("}") and _is_plain_uuid(value[1:-1])
    if length in (41, 45):
        return value.startswith(_URN_PREFIX) and _is_plain_uuid(value[len(_URN_PREFIX):])
    return False


def is_valid_agent_pool_hostname(hostname: str) -> bool:
    """Return whether hostname names a master or agent pool VM."""
    parts = hostname.split("-")
    if len(parts) == 2:  # master-XXXXXX
        prefix, instance = parts
        return prefix == "master" and len(instance) == 6 and _BASE36.fullmatch(instance) is not None
    if len(parts) == 3:  # name-XXXXXXXXXX-XXXXXX
        name, stamp, instance = parts
        return (
            _AGENT_POOL_PROFILE_NAME.fullmatch(name) is not None
            and name != "master"
            and len(stamp) == 10
            and len(instance) == 6
            and _DECIMAL.fullmatch(stamp) is not None
            and _BASE36.fullmatch(instance) is not None
        )
    return False


def is_valid_master_and_infra_vm_size(size: Union[str, VMSize], running_under_test: bool) -> bool:
    """Return whether size may be used for master and infra pools."""
    value = _size_value(size)
    if running_under_test and value == VMSize.STANDARD_D2S_V3.value:
        return True
    return value in _MASTER_AND_INFRA_VM_SIZES


def is_valid_compute_vm_size(size: Union[str, VMSize], running_under_test: bool) -> bool:
    """Return whether size may be used for compute pools."""
    value = _size_value(size)
    if running_under_test and value == VMSize.STANDARD_D2S_V3.value:
        return True
    return value in _COMPUTE_VM_SIZES


def is_valid_rpm_package_name(name: str) -> bool:
    """Return whether name is an rpm package name rather than a file name."""
    return not name.endswith(".rpm") and _RPM_PACKAGE.fullmatch(name) is not None