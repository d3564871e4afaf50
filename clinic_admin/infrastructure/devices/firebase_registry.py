import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials, db

from ...application.ports.device_registry import DeviceRegistry, SIGNUP_MODE, AUTH_MODE
from ...config import Settings

logger = logging.getLogger(__name__)

APP_NAME = "clinic-device-registry"


def _init_firebase_app(settings: Settings) -> "firebase_admin.App":
    try:
        return firebase_admin.get_app(APP_NAME)
    except ValueError:
        pass

    if settings.FIREBASE_CLIENT_EMAIL and settings.FIREBASE_PRIVATE_KEY and settings.FIREBASE_PROJECT_ID:
        cred = credentials.Certificate({
            "type": "service_account",
            "project_id": settings.FIREBASE_PROJECT_ID,
            "private_key": settings.firebase_private_key,
            "client_email": settings.FIREBASE_CLIENT_EMAIL,
            "token_uri": "https://oauth2.googleapis.com/token",
        })
    else:
        # fall back to GOOGLE_APPLICATION_CREDENTIALS / metadata server
        cred = credentials.ApplicationDefault()

    app = firebase_admin.initialize_app(cred, {
        "projectId": settings.FIREBASE_PROJECT_ID or None,
        "databaseURL": settings.FIREBASE_DATABASE_URL,
    }, name=APP_NAME)
    logger.info("Firebase device registry initialized")
    return app


class FirebaseDeviceRegistry(DeviceRegistry):
    """Device state kept in a Firebase Realtime Database node.

    The scanner firmware watches ``DeviceMode``; in ``signup`` mode it
    enrolls the finger into slot ``FingerPrintCount`` for ``GetUser``.
    """

    def __init__(self, settings: Settings, app: Optional["firebase_admin.App"] = None):
        self._app = app or _init_firebase_app(settings)
        self._ref = db.reference(settings.FIREBASE_DEVICE_PATH, app=self._app)

    def request_enrollment(self, user_code: str, slot: int) -> None:
        self._ref.update({
            "DeviceMode": SIGNUP_MODE,
            "FingerPrintCount": slot,
            "GetUser": user_code,
        })

    def get_mode(self) -> str:
        mode = self._ref.child("DeviceMode").get()
        return mode or AUTH_MODE

    def reset(self) -> None:
        self._ref.update({"DeviceMode": AUTH_MODE})
