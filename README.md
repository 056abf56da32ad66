# osacluster

A model of a managed OpenShift cluster on Azure with JSON round trips, a few
values derived from it, predicates for validating cluster requests, and a
checker for plugin configuration files.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `osacluster.api`: the cluster model. `OpenShiftManagedCluster` holds
  `Properties`, which in turn holds `NetworkProfile`, a list of
  `RouterProfile`, a list of `AgentPoolProfile`, `AuthProfile` with
  `IdentityProvider` entries, `ServicePrincipalProfile`, `AzProfile`,
  `MonitorProfile` and `CertProfile`. The enumerations `ProvisioningState`,
  `OSType`, `AgentPoolProfileRole` and `VMSize` list the known values.
  `OpenShiftManagedCluster.to_dict()` gives a JSON-ready mapping, leaving out
  empty optional fields, and `OpenShiftManagedCluster.from_dict(data)` builds
  a cluster from decoded JSON. An identity provider whose `kind` is
  `AADIdentityProvider` is decoded into an `AADIdentityProvider`; any other
  provider value is kept as it was given. Fields such as
  `NetworkProfile.private_endpoint` are internal only and never written or
  read.
- `osacluster.derive`:
  - `master_lbc_name_prefix(cs)` returns the first label of
    `cs.properties.fqdn`.
  - `combined_image_pull_secret(image_pull_secret, geneva_image_pull_secret)`
    merges the `auths` of two docker config JSON documents (bytes or str)
    into one compact JSON document with sorted keys, returned as bytes;
    registries in the second document win over those in the first.
- `osacluster.validate`: predicates returning `True` or `False`:
  `is_valid_cluster_name`, `is_valid_location`,
  `is_valid_lower_case_hostname`, `is_valid_cloud_app_hostname`,
  `is_ip_within_subnet`, `is_valid_ipv4_cidr`, `is_valid_blob_name`,
  `vnet_contains_subnet` (taking CIDR strings or `ipaddress` networks),
  `is_valid_uuid`, `is_valid_agent_pool_hostname`,
  `is_valid_master_and_infra_vm_size`, `is_valid_compute_vm_size` and
  `is_valid_rpm_package_name`. The two VM size checks also accept
  `Standard_D2s_v3` when `running_under_test` is true.
- `osacluster.pluginconfig`: `load_config(path)` reads a YAML plugin
  configuration into a `SimpleConfig` of `VersionConfig` entries
  (`image_version` and `images`). `validate(template)` raises
  `PluginConfigError` when an image version has no `.`, an image has no
  single `:tag`, or an image from `registry.access.redhat.com/openshift3`
  has a tag that is not of three dot-separated parts whose last part equals
  the second part of the VM image version.

## Example

```python
from osacluster import api, derive, validate

cs = api.OpenShiftManagedCluster.from_dict({
    "name": "mycluster",
    "location": "eastus",
    "tags": {},
    "properties": {"fqdn": "mycluster-api.eastus.cloudapp.azure.com"},
})

print(derive.master_lbc_name_prefix(cs))                       # mycluster-api
print(cs.to_dict()["location"])                                # eastus
print(validate.is_valid_location("eastus"))                    # True
print(validate.is_valid_agent_pool_hostname("master-00000a"))  # True
print(validate.vnet_contains_subnet("10.0.0.0/8", "10.1.0.0/16"))  # True

print(derive.combined_image_pull_secret(
    '{"auths": {"a.example.com": {"auth": "token"}}}',
    '{"auths": {"b.example.com": {"auth": "token"}}}',
))
# b'{"auths":{"a.example.com":{"auth":"token"},"b.example.com":{"auth":"token"}}}'
```

## Checking a plugin configuration

```
osacluster-validate-pluginconfig [path]
```

The path defaults to `pluginconfig/pluginconfig-311.yaml`. When the
configuration fails `validate`, the command prints the problem and exits with
status 1; otherwise it exits quietly with status 0. A file that cannot be read
or is not a mapping raises an error rather than being reported this way.

## What the package does not do

It holds the cluster model and checks on it only. It has no public API
version shapes or conversions to them, makes no calls to Azure, and does not
create, update, monitor or store clusters.