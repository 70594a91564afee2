"""Client-side checks for VPS creation values."""

from ..api.exceptions import ValidationError
from ..models.vm import CPU_RANGE, DISK_RANGE, MEMORY_RANGE, VMRequest


def check_cpu(cpu: int) -> None:
    """Raise ValidationError unless cpu is within CPU_RANGE."""
    low, high = CPU_RANGE
    if not low <= cpu <= high:
        raise ValidationError(f"CPU cores must be between {low} and {high}")


def check_memory(memory: int) -> None:
    """Raise ValidationError unless memory is within MEMORY_RANGE."""
    low, high = MEMORY_RANGE
    if not low <= memory <= high:
        raise ValidationError(f"Memory must be between {low}MB and {high}MB")


def check_disk(disk_size: int) -> None:
    """Raise ValidationError unless disk_size is within DISK_RANGE."""
    low, high = DISK_RANGE
    if not low <= disk_size <= high:
        raise ValidationError(f"Disk size must be between {low}GB and {high}GB")


def build_request(name: str, cpu: int, memory: int, disk_size: int, image: str) -> VMRequest:
    """Validate resource values and build a creation request.

    Args:
        name: VPS name
        cpu: CPU cores
        memory: Memory in MB
        disk_size: Disk size in GB
        image: Base image tag

    Returns:
        Validated request

    Raises:
        ValidationError: If any value is out of range or empty
    """
    check_cpu(cpu)
    check_memory(memory)
    check_disk(disk_size)
    if not name.strip():
        raise ValidationError("VPS name must not be empty")
    if not image.strip():
        raise ValidationError("Base image must not be empty")
    return VMRequest(name=name, cpu=cpu, memory=memory, disk_size=disk_size, image=image)
