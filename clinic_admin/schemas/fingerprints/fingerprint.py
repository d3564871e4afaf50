# clinic_admin/schemas/fingerprint.py
from ..common.common import CamelModel


class EnrollmentResponse(CamelModel):
    message: str
    slot: int
    user_code: str


class DeviceStatusResponse(CamelModel):
    device_mode: str
    ready: bool


class EnrollmentCallback(CamelModel):
    user_code: str
    success: bool = True
