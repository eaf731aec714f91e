"""Session state and its durable persistence."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable

from pydantic import BaseModel, ConfigDict, ValidationError

from bustrack_admin._constants import TOKEN_KEY, USER_KEY
from bustrack_admin.exceptions import BusTrackError
from bustrack_admin.models.auth import LoginResponse
from bustrack_admin.models.user import User
from bustrack_admin.storage import DurableStorage

_logger = logging.getLogger(__name__)

Authenticator = Callable[[str, str], Awaitable[LoginResponse]]
SessionListener = Callable[["Session"], None]


class Session(BaseModel):
    """Immutable snapshot of the authentication state.

    Parameters
    ----------
    token : str or None
        Bearer token; ``None`` when signed out.
    user : User or None
        Cached copy of the signed-in account.
    loading : bool
        ``True`` until durable storage has been read once.
    """

    model_config = ConfigDict(frozen=True)

    token: str | None = None
    user: User | None = None
    loading: bool = True

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None


class SessionStore:
    """Holds the current :class:`Session` and keeps durable storage in sync.

    Every transition swaps the whole snapshot, so readers never observe a
    token without its user. Listeners registered with :meth:`subscribe`
    receive each new snapshot.

    Usage::

        store = SessionStore(JsonFileStorage(path), authenticator)
        if await store.login("admin@example.com", "secret"):
            print(store.session.user.name)
    """

    def __init__(
        self,
        storage: DurableStorage,
        authenticator: Authenticator,
        *,
        restore: bool = True,
    ) -> None:
        self._storage = storage
        self._authenticator = authenticator
        self._session = Session()
        self._listeners: list[SessionListener] = []
        if restore:
            self.restore()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def session(self) -> Session:
        return self._session

    @property
    def token(self) -> str | None:
        return self._session.token

    @property
    def user(self) -> User | None:
        return self._session.user

    @property
    def loading(self) -> bool:
        return self._session.loading

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that removes it again."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def restore(self) -> Session:
        """Rehydrate from durable storage.

        The stored token is trusted as-is: no server round trip, no expiry
        check. Only the first call has an effect.
        """
        if not self._session.loading:
            return self._session

        token = self._storage.get_item(TOKEN_KEY)
        raw_user = self._storage.get_item(USER_KEY)
        user: User | None = None
        if token and raw_user:
            try:
                user = User.model_validate(json.loads(raw_user))
            except (json.JSONDecodeError, ValidationError):
                _logger.warning("Stored user record is unreadable; starting signed out")

        if token and user is not None:
            self._set(Session(token=token, user=user, loading=False))
        else:
            self._set(Session(loading=False))
        return self._session

    async def login(self, email: str, password: str) -> bool:
        """Authenticate and persist the session.

        Never raises: bad credentials and an unreachable server both
        return ``False`` and leave the current session untouched. A
        storage write failure also returns ``False`` and leaves the store
        signed out.
        """
        try:
            result = await self._authenticator(email, password)
        except BusTrackError as exc:
            _logger.warning("Login failed: %s", exc)
            return False

        try:
            self._storage.set_item(TOKEN_KEY, result.token)
            self._storage.set_item(USER_KEY, json.dumps(result.user.to_storage()))
        except OSError as exc:
            _logger.warning("Could not persist session: %s", exc)
            self._discard_stored_keys()
            if self._session.is_authenticated:
                # Storage no longer holds the old token either.
                self._set(Session(loading=False))
            return False
        self._set(Session(token=result.token, user=result.user, loading=False))
        return True

    def logout(self) -> None:
        self._storage.remove_item(TOKEN_KEY)
        self._storage.remove_item(USER_KEY)
        self._set(Session(loading=False))

    def update_user(self, user: User) -> None:
        """Replace the cached user copy (e.g. after a profile edit)."""
        if not self._session.is_authenticated:
            return
        self._storage.set_item(USER_KEY, json.dumps(user.to_storage()))
        self._set(self._session.model_copy(update={"user": user}))

    def _discard_stored_keys(self) -> None:
        for key in (TOKEN_KEY, USER_KEY):
            try:
                self._storage.remove_item(key)
            except OSError:
                _logger.debug("Could not remove stored %s", key, exc_info=True)

    def _set(self, session: Session) -> None:
        self._session = session
        for listener in list(self._listeners):
            try:
                listener(session)
            except Exception:
                _logger.debug("Session listener failed", exc_info=True)
