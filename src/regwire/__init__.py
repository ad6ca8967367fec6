from regwire.binder import LifetimeBinder
from regwire.config import ScanConfig, discover_first_party_packages
from regwire.contracts import ContractResolver, RegistrationEntry
from regwire.exceptions import (
    RegWireAmbiguousEntryPointError,
    RegWireError,
    RegWireInvalidRegistrationError,
    RegWireModuleLoadError,
    RegWireNoFirstPartyModulesError,
    RegWireUnknownLifecycleError,
)
from regwire.generic_registrar import GenericRegistrar
from regwire.lifecycle import InterfaceStrategy, Lifecycle
from regwire.markers import (
    GenericRegistrationTarget,
    RegistrationMetadata,
    get_registration_metadata,
    is_resource_target,
    register_resource,
    register_service,
    service,
)
from regwire.registration import build_registration_table, register_resources, register_services
from regwire.resources import ResourceOptions, add_resource
from regwire.scanner import CandidateType, ModuleScanner
from regwire.services import HostContainer, ServiceCollection, ServiceDescriptor

__all__ = [
    "CandidateType",
    "ContractResolver",
    "GenericRegistrar",
    "GenericRegistrationTarget",
    "HostContainer",
    "InterfaceStrategy",
    "Lifecycle",
    "LifetimeBinder",
    "ModuleScanner",
    "RegWireAmbiguousEntryPointError",
    "RegWireError",
    "RegWireInvalidRegistrationError",
    "RegWireModuleLoadError",
    "RegWireNoFirstPartyModulesError",
    "RegWireUnknownLifecycleError",
    "RegistrationEntry",
    "RegistrationMetadata",
    "ResourceOptions",
    "ScanConfig",
    "ServiceCollection",
    "ServiceDescriptor",
    "add_resource",
    "build_registration_table",
    "discover_first_party_packages",
    "get_registration_metadata",
    "is_resource_target",
    "register_resource",
    "register_resources",
    "register_service",
    "register_services",
    "service",
]
