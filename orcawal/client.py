"""Cloud instances and the interface every cloud provider client implements."""

from __future__ import annotations

import abc
import enum
import ipaddress
from dataclasses import dataclass, field
from typing import ClassVar, Iterable, List, Tuple, Union

SSH_PORT = 22


class InstanceStatus(enum.Enum):
    """Coarse life-cycle state of a cloud instance."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    TERMINATED = "terminated"

    @classmethod
    def from_str(cls, text: str) -> "InstanceStatus":
        """Map a provider's status string; anything unknown counts as inactive."""
        lowered = text.lower()
        if lowered == "running":
            return cls.ACTIVE
        if lowered == "terminated":
            return cls.TERMINATED
        return cls.INACTIVE


@dataclass(frozen=True)
class Instance:
    """A cloud provider instance."""

    id: str
    region: str
    main_ip: Union[ipaddress.IPv4Address, str]
    tags: Tuple[str, ...] = field(default_factory=tuple)
    specs: str = ""
    status: Union[InstanceStatus, str] = InstanceStatus.ACTIVE

    def __post_init__(self) -> None:
        if not isinstance(self.main_ip, ipaddress.IPv4Address):
            object.__setattr__(self, "main_ip", ipaddress.IPv4Address(self.main_ip))
        if not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", tuple(self.tags))
        if not isinstance(self.status, InstanceStatus):
            object.__setattr__(self, "status", InstanceStatus.from_str(self.status))

    def is_active(self) -> bool:
        """Whether the instance is running."""
        return self.status is InstanceStatus.ACTIVE

    def is_inactive(self) -> bool:
        """Whether the instance is not ready for use."""
        return not self.is_active()

    def is_terminated(self) -> bool:
        """Whether the instance is being deleted."""
        return self.status is InstanceStatus.TERMINATED

    def ssh_address(self) -> Tuple[str, int]:
        """Host and port to reach the instance over ssh."""
        return (str(self.main_ip), SSH_PORT)


class ServerProviderClient(abc.ABC):
    """Operations a cloud provider must offer to host a testbed."""

    USERNAME: ClassVar[str]

    @abc.abstractmethod
    async def list_instances(self) -> List[Instance]:
        """List all existing instances, whatever their status."""

    @abc.abstractmethod
    async def start_instances(self, instances: Iterable[Instance]) -> None:
        """Start the given instances."""

    @abc.abstractmethod
    async def stop_instances(self, instances: Iterable[Instance]) -> None:
        """Halt the given instances; they may still be billed."""

    @abc.abstractmethod
    async def create_instance(self, region: str) -> Instance:
        """Create an instance in a region."""

    @abc.abstractmethod
    async def delete_instance(self, instance: Instance) -> None:
        """Delete an instance so that it is no longer billed."""

    @abc.abstractmethod
    async def register_ssh_public_key(self, public_key: str) -> None:
        """Authorize a public key to access the machines."""

    @abc.abstractmethod
    async def instance_setup_commands(self) -> List[str]:
        """Provider-specific commands to prepare an instance."""