# Routers package
from . import auth_router
from . import patients_router
from . import appointments_router
from . import medications_router
from . import fingerprints_router

__all__ = [
    "auth_router",
    "patients_router",
    "appointments_router",
    "medications_router",
    "fingerprints_router",
]
