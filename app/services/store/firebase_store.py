"""Key-value tree store backed by a Firebase Realtime Database."""
import logging
from typing import Any, Dict, Optional

import firebase_admin
from firebase_admin import credentials, db
from firebase_admin.exceptions import FirebaseError

from app.services.store.base import TreeStore, join_path
from app.services.store.exceptions import StoreReadError, StoreWriteError

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "news-pulse"


def get_firebase_app(
    database_url: str, credentials_path: str = "", timeout: float = 10.0
) -> firebase_admin.App:
    """
    The named Firebase app for the tree store, initialized on first use.

    A service-account JSON file is used when credentials_path is set,
    otherwise Application Default Credentials.
    """
    try:
        return firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
        pass

    if credentials_path:
        cred = credentials.Certificate(credentials_path)
    else:
        cred = credentials.ApplicationDefault()
    return firebase_admin.initialize_app(
        cred,
        {"databaseURL": database_url, "httpTimeout": timeout},
        name=FIREBASE_APP_NAME,
    )


class FirebaseTreeStore(TreeStore):
    """
    TreeStore over firebase_admin.db references.

    Push ids are assigned by the server. Failed calls are not retried;
    the request timeout comes from the app's httpTimeout option.
    """

    def __init__(
        self,
        database_url: str = "",
        credentials_path: str = "",
        timeout: float = 10.0,
        firebase_app: Optional[firebase_admin.App] = None,
    ):
        if firebase_app is None:
            if not database_url:
                raise ValueError("firebase_database_url is required for the firebase store")
            firebase_app = get_firebase_app(database_url, credentials_path, timeout)
        self.firebase_app = firebase_app

    def _reference(self, path: str) -> db.Reference:
        return db.reference(f"/{join_path(path)}", app=self.firebase_app)

    def push(self, path: str, value: Dict[str, Any]) -> str:
        try:
            return self._reference(path).push(value).key
        except (FirebaseError, ValueError) as e:
            logger.error("Push to %s failed: %s", path, e)
            raise StoreWriteError(f"Could not write to {path}") from e

    def get(self, path: str) -> Optional[Any]:
        try:
            return self._reference(path).get()
        except (FirebaseError, ValueError) as e:
            logger.error("Read of %s failed: %s", path, e)
            raise StoreReadError(f"Could not read {path}") from e

    def update(self, path: str, values: Dict[str, Any]) -> None:
        try:
            self._reference(path).update(values)
        except (FirebaseError, ValueError) as e:
            logger.error("Update of %s failed: %s", path, e)
            raise StoreWriteError(f"Could not update {path}") from e

    def remove(self, path: str) -> None:
        try:
            self._reference(path).delete()
        except (FirebaseError, ValueError) as e:
            logger.error("Remove of %s failed: %s", path, e)
            raise StoreWriteError(f"Could not remove {path}") from e

    def query(self, path: str, field: str, equal_to: Any) -> Dict[str, Any]:
        # The field needs an ".indexOn" rule in the database security rules
        try:
            result = self._reference(path).order_by_child(field).equal_to(equal_to).get()
        except (FirebaseError, ValueError) as e:
            logger.error("Query of %s failed: %s", path, e)
            raise StoreReadError(f"Could not read {path}") from e
        return dict(result) if isinstance(result, dict) else {}
