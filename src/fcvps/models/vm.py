"""VPS models."""

from datetime import datetime

from pydantic import BaseModel, Field

CPU_RANGE = (1, 8)
MEMORY_RANGE = (128, 8192)
DISK_RANGE = (1, 100)

DEFAULT_CPU = 1
DEFAULT_MEMORY = 512
DEFAULT_DISK = 10
DEFAULT_IMAGE = "ubuntu-24.04"

BASE_IMAGES = [
    "ubuntu-20.04",
    "ubuntu-22.04",
    "ubuntu-24.04",
    "centos-7",
    "debian-11",
]


class VM(BaseModel):
    """VPS record as tracked by the management service."""

    id: str
    name: str
    cpu: int
    memory: int
    disk_size: int
    image: str = ""
    status: str
    ip_address: str = ""
    created_at: datetime | None = None
    socket_path: str = ""
    kernel_path: str = ""
    rootfs_path: str = ""
    tap_device: str = ""

    @property
    def short_id(self) -> str:
        """First 8 characters of the ID, as shown in tables and menus."""
        return self.id[:8]


class VMRequest(BaseModel):
    """Payload for creating a VPS."""

    name: str = Field(..., min_length=1, description="VPS name")
    cpu: int = Field(DEFAULT_CPU, ge=CPU_RANGE[0], le=CPU_RANGE[1], description="CPU cores")
    memory: int = Field(
        DEFAULT_MEMORY, ge=MEMORY_RANGE[0], le=MEMORY_RANGE[1], description="Memory in MB"
    )
    disk_size: int = Field(
        DEFAULT_DISK, ge=DISK_RANGE[0], le=DISK_RANGE[1], description="Disk size in GB"
    )
    image: str = Field(DEFAULT_IMAGE, min_length=1, description="Base image")
