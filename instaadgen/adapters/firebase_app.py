from __future__ import annotations

from pathlib import Path
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore, storage


def init_firebase(credentials_path: Optional[Path], storage_bucket: str = "") -> firebase_admin.App:
    """
    Initialise the default Firebase app once per process.
    Without a service account file, application default credentials are used.
    """
    if firebase_admin._apps:
        return firebase_admin.get_app()

    cred = credentials.Certificate(str(credentials_path)) if credentials_path else credentials.ApplicationDefault()
    options = {"storageBucket": storage_bucket} if storage_bucket else None
    return firebase_admin.initialize_app(cred, options)


def firestore_client(app: firebase_admin.App):
    return firestore.client(app)


def storage_bucket(app: firebase_admin.App):
    return storage.bucket(app=app)
