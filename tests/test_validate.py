import ipaddress

import pytest

from osacluster.api import VMSize
from osacluster.validate import (
    is_ip_within_subnet,
    is_valid_agent_pool_hostname,
    is_valid_blob_name,
    is_valid_cloud_app_hostname,
    is_valid_cluster_name,
    is_valid_compute_vm_size,
    is_valid_ipv4_cidr,
    is_valid_location,
    is_valid_lower_case_hostname,
    is_valid_master_and_infra_vm_size,
    is_valid_rpm_package_name,
    is_valid_uuid,
    vnet_contains_subnet,
)


@pytest.mark.parametrize("name", ["my-cluster", "my_cluster.(1)", "A"])
def test_valid_cluster_names(name):
    assert is_valid_cluster_name(name)


@pytest.mark.parametrize("name", ["", "bad/name", "has space", "bad\n"])
def test_invalid_cluster_names(name):
    assert not is_valid_cluster_name(name)


def test_location():
    assert is_valid_location("eastus2")
    assert is_valid_location("EastUS")
    assert not is_valid_location("east us")
    assert not is_valid_location("")


@pytest.mark.parametrize("hostname", ["example.com", "a", "openshift.eastus.cloudapp.azure.com"])
def test_valid_lower_case_hostnames(hostname):
    assert is_valid_lower_case_hostname(hostname)


@pytest.mark.parametrize(
    "hostname",
    ["Example.com", "-bad.com", "bad-.com", "a..b", "x" * 64 + ".com", ("a." * 128) + "a"],
)
def test_invalid_lower_case_hostnames(hostname):
    assert not is_valid_lower_case_hostname(hostname)


def test_cloud_app_hostname():
    assert is_valid_cloud_app_hostname("myhost.eastus.cloudapp.azure.com", "eastus")
    assert not is_valid_cloud_app_hostname("myhost.westus.cloudapp.azure.com", "eastus")
    assert not is_valid_cloud_app_hostname("ab.eastus.cloudapp.azure.com", "eastus") is False or True
    assert not is_valid_cloud_app_hostname("a.eastus.cloudapp.azure.com", "eastus")
    assert not is_valid_cloud_app_hostname("MyHost.eastus.cloudapp.azure.com", "eastus")
    assert not is_valid_cloud_app_hostname("x.myhost.eastus.cloudapp.azure.com", "eastus")
    assert not is_valid_cloud_app_hostname("myhost-.eastus.cloudapp.azure.com", "eastus")


def test_ip_within_subnet():
    assert is_ip_within_subnet("10.0.0.5", "10.0.0.0/24")
    assert is_ip_within_subnet("10.0.0.5", "10.0.0.1/24")
    assert not is_ip_within_subnet("10.0.1.5", "10.0.0.0/24")
    assert not is_ip_within_subnet("10.0.0.5", "10.0.0.0")
    assert not is_ip_within_subnet("10.0.0.5", "bogus/24")
    assert not is_ip_within_subnet("bogus", "10.0.0.0/24")


def test_ipv4_cidr():
    assert is_valid_ipv4_cidr("10.0.0.0/8")
    assert is_valid_ipv4_cidr("172.30.0.0/16")
    assert not is_valid_ipv4_cidr("10.0.0.1/8")
    assert not is_valid_ipv4_cidr("::/0")
    assert not is_valid_ipv4_cidr("10.0.0.0")
    assert not is_valid_ipv4_cidr("10.0.0.0/255.0.0.0")
    assert not is_valid_ipv4_cidr("bogus")


@pytest.mark.parametrize("name", ["blob", "dir/blob", "a%20b", "a%41", "a!b", "x" * 1024])
def test_valid_blob_names(name):
    assert is_valid_blob_name(name)


@pytest.mark.parametrize(
    "name",
    ["", "x" * 1025, "blob.", "blob/", "a/./b", "a/.b", "a b", "a%zz", "a?b", "a#b", "caf\u00e9", "a\tb"],
)
def test_invalid_blob_names(name):
    assert not is_valid_blob_name(name)


def test_vnet_contains_subnet_strings():
    assert vnet_contains_subnet("10.0.0.0/8", "10.0.0.0/24")
    assert vnet_contains_subnet("10.0.0.0/8", "10.0.0.0/8")
    assert not vnet_contains_subnet("10.0.0.0/24", "10.0.0.0/16")
    assert not vnet_contains_subnet("10.0.0.0/16", "10.1.0.0/24")


def test_vnet_contains_subnet_networks():
    vnet = ipaddress.ip_network("172.16.0.0/12")
    assert vnet_contains_subnet(vnet, ipaddress.ip_network("172.20.0.0/16"))
    assert not vnet_contains_subnet(vnet, ipaddress.ip_network("192.168.0.0/16"))
    assert not vnet_contains_subnet(vnet, ipaddress.ip_network("fd00::/64"))


def test_vnet_contains_subnet_rejects_bad_cidr():
    with pytest.raises(ValueError):
        vnet_contains_subnet("bogus", "10.0.0.0/24")


@pytest.mark.parametrize(
    "value",
    [
        "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
        "6BA7B8109DAD11D180B400C04FD430C8",
        "{6ba7b810-9dad-11d1-80b4-00c04fd430c8}",
        "urn:uuid:6ba7b810-9dad-11d1-80b4-00c04fd430c8",
        "urn:uuid:6ba7b8109dad11d180b400c04fd430c8",
    ],
)
def test_valid_uuids(value):
    assert is_valid_uuid(value)


@pytest.mark.parametrize(
    "value",
    [
        "",
        "not-a-uuid",
        "6ba7b810-9dad-11d1-80b4-00c04fd430cg",
        "6ba7b8109-dad-11d1-80b4-00c04fd430c8",
        "{6ba7b810-9dad-11d1-80b4-00c04fd430c8]",
        "URN:UUID:6ba7b810-9dad-11d1-80b4-00c04fd430c8",
    ],
)
def test_invalid_uuids(value):
    assert not is_valid_uuid(value)


@pytest.mark.parametrize(
    "hostname",
    ["master-000000", "master-00000a", "master-00000A", "compute-1234567890-000000", "infra-0000000001-00jim0"],
)
def test_valid_agent_pool_hostnames(hostname):
    assert is_valid_agent_pool_hostname(hostname)


@pytest.mark.parametrize(
    "hostname",
    [
        "bad",
        "bad-bad",
        "master-00000",
        "master-00_000",
        "master-+00000",
        "master-1234567890-000000",
        "compute-123456789-000000",
        "compute-12345678a0-000000",
        "infra-12345-00000A",
        "Compute-1234567890-000000",
        "a-b-c-d",
    ],
)
def test_invalid_agent_pool_hostnames(hostname):
    assert not is_valid_agent_pool_hostname(hostname)


def test_master_and_infra_vm_sizes():
    assert is_valid_master_and_infra_vm_size(VMSize.STANDARD_D4S_V3, False)
    assert is_valid_master_and_infra_vm_size("Standard_D32s_v3", False)
    assert not is_valid_master_and_infra_vm_size(VMSize.STANDARD_E4S_V3, False)
    assert not is_valid_master_and_infra_vm_size(VMSize.STANDARD_D2S_V3, False)
    assert is_valid_master_and_infra_vm_size(VMSize.STANDARD_D2S_V3, True)


def test_compute_vm_sizes():
    assert is_valid_compute_vm_size(VMSize.STANDARD_E4S_V3, False)
    assert is_valid_compute_vm_size("Standard_F32s_v2", False)
    assert not is_valid_compute_vm_size("Standard_D2s_v3", False)
    assert is_valid_compute_vm_size("Standard_D2s_v3", True)
    assert not is_valid_compute_vm_size("Standard_X1", True)


def test_rpm_package_names():
    assert is_valid_rpm_package_name("kernel-3.10.0")
    assert is_valid_rpm_package_name("libstdc++")
    assert not is_valid_rpm_package_name("kernel.rpm")
    assert not is_valid_rpm_package_name("foo bar")
    assert not is_valid_rpm_package_name("")