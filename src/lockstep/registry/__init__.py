"""Registry publishing."""

from lockstep.registry.client import build_publish_args, publish_executable, run_package_manager
from lockstep.registry.publisher import PackageManagerPublisher, RegistryPublisher

__all__ = [
    "PackageManagerPublisher",
    "RegistryPublisher",
    "build_publish_args",
    "publish_executable",
    "run_package_manager",
]
