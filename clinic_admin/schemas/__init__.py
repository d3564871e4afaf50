# Schemas package (re-export feature modules for stable imports)
from .auth.auth import *
from .patients.patient import *
from .appointments.appointment import *
from .medications.medication import *
from .fingerprints.fingerprint import *
from .common.common import *
