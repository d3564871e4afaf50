from typing import Protocol

SIGNUP_MODE = "signup"
AUTH_MODE = "auth"


class DeviceRegistry(Protocol):
    """Shared state the fingerprint scanner reads its instructions from."""

    def request_enrollment(self, user_code: str, slot: int) -> None:
        ...

    def get_mode(self) -> str:
        ...

    def reset(self) -> None:
        ...
