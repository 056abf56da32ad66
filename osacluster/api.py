"""Internal model of a managed OpenShift cluster and its JSON form."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

API_VERSION = "internal"


class ProvisioningState(str, Enum):
    """Current state of the cluster resource."""

    CREATING = "Creating"
    UPDATING = "Updating"
    ADMIN_UPDATING = "AdminUpdating"
    FAILED = "Failed"
    SUCCEEDED = "Succeeded"
    DELETING = "Deleting"
    MIGRATING = "Migrating"
    UPGRADING = "Upgrading"


class OSType(str, Enum):
    """Operating system of the VMs in an agent pool."""

    LINUX = "Linux"
    WINDOWS = "Windows"


class AgentPoolProfileRole(str, Enum):
    """Role of an agent pool."""

    COMPUTE = "compute"
    INFRA = "infra"
    MASTER = "master"


class VMSize(str, Enum):
    """Supported virtual machine sizes."""

    # General purpose
    STANDARD_D2S_V3 = "Standard_D2s_v3"
    STANDARD_D4S_V3 = "Standard_D4s_v3"
    STANDARD_D8S_V3 = "Standard_D8s_v3"
    STANDARD_D16S_V3 = "Standard_D16s_v3"
    STANDARD_D32S_V3 = "Standard_D32s_v3"
    # Memory optimised
    STANDARD_E4S_V3 = "Standard_E4s_v3"
    STANDARD_E8S_V3 = "Standard_E8s_v3"
    STANDARD_E16S_V3 = "Standard_E16s_v3"
    STANDARD_E32S_V3 = "Standard_E32s_v3"
    # Compute optimised
    STANDARD_F8S_V2 = "Standard_F8s_v2"
    STANDARD_F16S_V2 = "Standard_F16s_v2"
    STANDARD_F32S_V2 = "Standard_F32s_v2"


class _Omit(Enum):
    EMPTY = "empty"  # left out when zero, empty or None
    NIL = "nil"  # left out only when None
    NEVER = "never"  # always written


@dataclass(frozen=True)
class _ListOf:
    item: type


_PROVIDER = object()


def _json(name: str, *, omit: _Omit = _Omit.EMPTY, codec: Any = None, skip: bool = False, **kwargs: Any) -> Any:
    return field(metadata={"json": name, "omit": omit, "codec": codec, "skip": skip}, **kwargs)


@dataclass
class ResourcePurchasePlan:
    """Billing plan of the resource."""

    name: Optional[str] = _json("name", omit=_Omit.NIL, default=None)
    product: Optional[str] = _json("product", omit=_Omit.NIL, default=None)
    promotion_code: Optional[str] = _json("promotionCode", omit=_Omit.NIL, default=None)
    publisher: Optional[str] = _json("publisher", omit=_Omit.NIL, default=None)


@dataclass
class CertProfile:
    """Key vault location of a certificate."""

    key_vault_secret_url: str = _json("keyVaultSecretURL", default="")


@dataclass
class NetworkProfile:
    """Networking configuration of the cluster."""

    vnet_cidr: str = _json("vnetCidr", default="")
    management_subnet_cidr: Optional[str] = _json("managementSubnetCidr", omit=_Omit.NIL, default=None)
    vnet_id: str = _json("vnetId", default="")
    peer_vnet_id: Optional[str] = _json("peerVnetId", omit=_Omit.NIL, default=None)
    private_endpoint: Optional[str] = _json("privateEndpoint", skip=True, default=None)
    management_subnet_id: str = _json("managementSubnetId", skip=True, default="")
    internal_load_balancer_frontend_ip_id: str = _json(
        "internalLoadBalancerFrontendIPID", skip=True, default=""
    )
    nameservers: list[str] = _json("nameservers", default_factory=list)


@dataclass
class RouterProfile:
    """An OpenShift router."""

    name: str = _json("name", default="")
    public_subdomain: str = _json("publicSubdomain", default="")
    fqdn: str = _json("fqdn", default="")
    router_cert_profile: CertProfile = _json(
        "routerCertProfile", omit=_Omit.NEVER, codec=CertProfile, default_factory=CertProfile
    )


@dataclass
class AgentPoolProfile:
    """Configuration of a pool of cluster VMs."""

    name: str = _json("name", default="")
    count: int = _json("count", default=0)
    vm_size: str = _json("vmSize", default="")
    subnet_cidr: str = _json("subnetCidr", default="")
    os_type: str = _json("osType", default="")
    role: str = _json("role", default="")


@dataclass
class MonitorProfile:
    """Log analytics workspace configuration."""

    enabled: bool = _json("enabled", omit=_Omit.NEVER, default=False)
    workspace_resource_id: str = _json("workspaceResourceId", default="")
    workspace_id: str = _json("workspaceId", default="")
    workspace_key: str = _json("workspaceKey", default="")


@dataclass
class AADIdentityProvider:
    """Azure Active Directory identity provider."""

    kind: str = _json("kind", default="")
    client_id: str = _json("clientId", default="")
    secret: str = _json("secret", default="")
    tenant_id: str = _json("tenantId", default="")
    customer_admin_group_id: Optional[str] = _json("customerAdminGroupId", omit=_Omit.NIL, default=None)


@dataclass
class IdentityProvider:
    """A named identity provider."""

    name: str = _json("name", default="")
    provider: Any = _json("provider", codec=_PROVIDER, default=None)


@dataclass
class AuthProfile:
    """Authentication configuration."""

    identity_providers: list[IdentityProvider] = _json(
        "identityProviders", codec=_ListOf(IdentityProvider), default_factory=list
    )


@dataclass
class ServicePrincipalProfile:
    """Client credentials used for Azure resource management."""

    client_id: str = _json("clientId", default="")
    secret: str = _json("secret", default="")


@dataclass
class AzProfile:
    """Azure context in which the cluster lives."""

    tenant_id: str = _json("tenantId", default="")
    subscription_id: str = _json("subscriptionId", default="")
    resource_group: str = _json("resourceGroup", default="")


@dataclass
class Properties:
    """Cluster definition."""

    provisioning_state: str = _json("provisioningState", default="")
    open_shift_version: str = _json("openShiftVersion", default="")
    cluster_version: str = _json("clusterVersion", default="")
    public_hostname: str = _json("publicHostname", default="")
    fqdn: str = _json("fqdn", default="")
    private_api_server: bool = _json("privateApiServer", default=False)
    network_profile: NetworkProfile = _json(
        "networkProfile", omit=_Omit.NEVER, codec=NetworkProfile, default_factory=NetworkProfile
    )
    router_profiles: list[RouterProfile] = _json(
        "routerProfiles", codec=_ListOf(RouterProfile), default_factory=list
    )
    agent_pool_profiles: list[AgentPoolProfile] = _json(
        "agentPoolProfiles", codec=_ListOf(AgentPoolProfile), default_factory=list
    )
    auth_profile: AuthProfile = _json(
        "authProfile", omit=_Omit.NEVER, codec=AuthProfile, default_factory=AuthProfile
    )
    master_service_principal_profile: ServicePrincipalProfile = _json(
        "masterServicePrincipalProfile",
        omit=_Omit.NEVER,
        codec=ServicePrincipalProfile,
        default_factory=ServicePrincipalProfile,
    )
    worker_service_principal_profile: ServicePrincipalProfile = _json(
        "workerServicePrincipalProfile",
        omit=_Omit.NEVER,
        codec=ServicePrincipalProfile,
        default_factory=ServicePrincipalProfile,
    )
    az_profile: AzProfile = _json("azProfile", omit=_Omit.NEVER, codec=AzProfile, default_factory=AzProfile)
    monitor_profile: MonitorProfile = _json(
        "monitorProfile", omit=_Omit.NEVER, codec=MonitorProfile, default_factory=MonitorProfile
    )
    api_cert_profile: CertProfile = _json(
        "apiCertProfile", omit=_Omit.NEVER, codec=CertProfile, default_factory=CertProfile
    )
    refresh_cluster: Optional[bool] = _json("refreshCluster", omit=_Omit.NIL, default=None)


@dataclass
class OpenShiftManagedCluster:
    """A managed cluster resource."""

    plan: Optional[ResourcePurchasePlan] = _json(
        "plan", omit=_Omit.NIL, codec=ResourcePurchasePlan, default=None
    )
    properties: Properties = _json("properties", omit=_Omit.NEVER, codec=Properties, default_factory=Properties)
    id: str = _json("id", default="")
    name: str = _json("name", default="")
    type: str = _json("type", default="")
    location: str = _json("location", default="")
    tags: Optional[dict[str, str]] = _json("tags", omit=_Omit.NEVER, default=None)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping of this cluster."""
        return _encode_object(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OpenShiftManagedCluster":
        """Build a cluster from a decoded JSON mapping."""
        return _decode_object(cls, data)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, (str, int, float, bool, list, tuple, dict)) and not value


def _encode_value(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _encode_object(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_encode_value(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _encode_value(item) for key, item in value.items()}
    return value


def _encode_object(obj: Any) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for f in dataclasses.fields(obj):
        meta = f.metadata
        if not meta or meta["skip"]:
            continue
        value = getattr(obj, f.name)
        omit = meta["omit"]
        if omit is _Omit.NIL and value is None:
            continue
        if omit is _Omit.EMPTY and _is_empty(value):
            continue
        out[meta["json"]] = _encode_value(value)
    return out


def _decode_provider(value: Any) -> Any:
    if isinstance(value, Mapping) and value.get("kind") == "AADIdentityProvider":
        return _decode_object(AADIdentityProvider, value)
    return value


def _decode_value(codec: Any, value: Any) -> Any:
    if codec is _PROVIDER:
        return _decode_provider(value)
    if isinstance(codec, _ListOf):
        if not isinstance(value, list):
            raise TypeError(f"expected a list of {codec.item.__name__}, got {type(value).__name__}")
        return [_decode_object(codec.item, item) for item in value]
    if isinstance(codec, type):
        return _decode_object(codec, value)
    if isinstance(value, list):
        return list(value)
    if isinstance(value, Mapping):
        return dict(value)
    return value


def _decode_object(cls: type, data: Any) -> Any:
    if not isinstance(data, Mapping):
        raise TypeError(f"expected an object for {cls.__name__}, got {type(data).__name__}")
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        meta = f.metadata
        if not meta or meta["skip"]:
            continue
        value = data.get(meta["json"])
        if value is None:
            continue
        kwargs[f.name] = _decode_value(meta["codec"], value)
    return cls(**kwargs)