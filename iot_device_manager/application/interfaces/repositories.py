"""
Repository interfaces (ports) for domain entities.

These interfaces define the contract for device storage operations
without specifying the implementation details.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional

from ...domain.entities.device import Device


class DeviceRepository(ABC):
    """
    Repository interface for Device entities.

    Validation failures are reported through boolean results rather than
    exceptions. Callers only ever receive snapshots of stored devices.
    """

    @abstractmethod
    def list(self) -> List[Device]:
        """
        Get all devices.

        Returns:
            Snapshot copies of every stored device
        """
        pass

    @abstractmethod
    def get(self, device_id: str) -> Optional[Device]:
        """
        Get device by ID.

        Args:
            device_id: Device identifier

        Returns:
            Snapshot of the device if found, None otherwise
        """
        pass

    @abstractmethod
    def add(self, device: Device) -> bool:
        """
        Add a new device, assigning a fresh identifier and timestamp.

        Args:
            device: Device to add

        Returns:
            False if the device has no name
        """
        pass

    @abstractmethod
    def update(self, device: Device) -> bool:
        """
        Overwrite the mutable fields of an existing device.

        Args:
            device: Device carrying the identifier and the new values

        Returns:
            False if no device has that identifier
        """
        pass

    @abstractmethod
    def delete(self, device_id: str) -> bool:
        """
        Delete device by ID.

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    def toggle_status(self, device_id: str) -> bool:
        """
        Flip the online flag of a device.

        Returns:
            True if toggled, False if not found
        """
        pass

    @abstractmethod
    def subscribe(self, observer: Callable[[Device, str], Any]) -> Callable[[], None]:
        """
        Observe field changes on every stored device.

        Returns:
            A callable that removes the observer
        """
        pass
