"""Login service — checks submitted credentials against the configured pair.

A thin caller around two collaborators it does not own:

- a request form, read as plain ``key -> str`` lookups
  (``login_username``, ``login_password``, ``action``);
- a config object exposing ``get(key)`` (``Settings`` satisfies it).

A successful login stores a member record under ``session["login"]``. The
record can also be carried as a signed token via ``issue_token`` and turned
back into a session with ``login_with_token``. Passwords never enter the
session or a token.
"""

import hmac
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, MutableMapping, Optional, Protocol, Union

from ..core.token_codec import TokenCodec
from ..exceptions import AuthenticationError, ValidationError

logger = logging.getLogger(__name__)

SESSION_KEY = "login"

# Status 1 is the top-level administrator; it passes every status check.
ADMIN_STATUS = 1

_INPUT_NAMES = {"username": "login_username", "password": "login_password"}


class ConfigSource(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...


@dataclass(frozen=True)
class LoginParams:
    """Credentials read from one request."""
    username: str = ""
    password: str = field(default="", repr=False)
    from_submit: bool = False


@dataclass(frozen=True)
class LoginState:
    """Outcome of handling one request.

    ``login_input`` names the form field to focus when ``message`` is an error.
    """
    params: LoginParams
    member: Optional[Dict[str, Any]] = None
    message: Optional[str] = None
    login_input: Optional[str] = None


def read_credentials(form: Mapping[str, str], session: Mapping[str, Any]) -> LoginParams:
    """Read submitted credentials, falling back to the logged-in member's name."""
    username = (form.get("login_username") or "").strip()
    if not username:
        member = session.get(SESSION_KEY) or {}
        return LoginParams(
            username=member.get("username", ""),
            from_submit="login_username" in form,
        )
    return LoginParams(
        username=username,
        password=form.get("login_password") or "",
        from_submit="login_password" in form,
    )


def check_login(params: LoginParams, config: ConfigSource) -> Dict[str, Any]:
    """Return the member record for valid credentials.

    Raises:
        ValidationError: A credential is missing.
        AuthenticationError: Unknown username or wrong password; ``field``
            tells which.
    """
    if not params.username:
        raise ValidationError("Please fill up this form", field="username")
    if not params.password:
        raise ValidationError("Please fill up this form", field="password")

    if params.username != config.get("login_username"):
        raise AuthenticationError("not a registered user", field="username")

    stored = config.get("login_password") or ""
    if not hmac.compare_digest(params.password.encode("utf-8"), stored.encode("utf-8")):
        raise AuthenticationError("password incorrect", field="password")

    return {"username": params.username, "status": ADMIN_STATUS}


class LoginService:
    """Session-backed login workflow for a single configured account."""

    def __init__(
        self,
        config: ConfigSource,
        session: MutableMapping[str, Any],
        codec: Optional[TokenCodec] = None,
    ) -> None:
        self._config = config
        self._session = session
        self._codec = codec

    def handle(self, form: Mapping[str, str]) -> LoginState:
        """Run the login workflow for one request.

        ``action=logout`` (without a credential submission) logs out. A
        submission is checked and, when valid, replaces the session marker.
        Anything else reports the current session.
        """
        params = read_credentials(form, self._session)

        if form.get("action") == "logout" and not params.from_submit:
            self.logout()
            return LoginState(params=LoginParams(), message="Logout successful")

        if not params.from_submit:
            return LoginState(params=params, member=self.is_member())

        try:
            member = self.login(params)
        except (ValidationError, AuthenticationError) as e:
            return LoginState(
                params=params,
                message=e.message,
                login_input=_INPUT_NAMES.get(e.details.get("field"), "login_username"),
            )
        return LoginState(params=params, member=member)

    def login(self, params: LoginParams) -> Dict[str, Any]:
        """Check ``params`` and store the member in the session.

        On failure the session marker is cleared and the error re-raised.
        """
        try:
            member = check_login(params, self._config)
        except (ValidationError, AuthenticationError) as e:
            self._session.pop(SESSION_KEY, None)
            logger.warning(
                "Login failed",
                extra={"username": params.username, "reason": e.error_code.value},
            )
            raise

        self._session[SESSION_KEY] = member
        logger.info("Login succeeded", extra={"username": member["username"]})
        return member

    def logout(self) -> None:
        member = self._session.pop(SESSION_KEY, None)
        if member:
            logger.info("Logout", extra={"username": member.get("username")})

    def is_member(self) -> Optional[Dict[str, Any]]:
        """Logged-in member record, or None."""
        return self._session.get(SESSION_KEY) or None

    def is_admin(self) -> Optional[Dict[str, Any]]:
        """Logged-in member record if it has administrator status, else None."""
        member = self.is_member()
        if member is not None and member.get("status") == ADMIN_STATUS:
            return member
        return None

    @staticmethod
    def check_status(
        member: Optional[Mapping[str, Any]],
        statuses: Union[int, Iterable[int]],
    ) -> Optional[Mapping[str, Any]]:
        """Return ``member`` if its status is allowed. Administrators always are."""
        if not member:
            return None
        status = member.get("status")
        if status == ADMIN_STATUS:
            return member
        if isinstance(statuses, int):
            return member if status == statuses else None
        return member if status in set(statuses) else None

    def issue_token(self) -> str:
        """Encode the logged-in member as a signed token."""
        member = self.is_member()
        if member is None:
            raise AuthenticationError("Not logged in")
        return self._require_codec().encode(member)

    def member_from_token(self, token: str) -> Dict[str, Any]:
        """Verify ``token`` and return the member record it carries.

        Does not touch the session. Codec errors (bad signature, expired,
        malformed) propagate unchanged.
        """
        member = self._require_codec().verify(token)
        if "username" not in member or "status" not in member:
            raise AuthenticationError("Token does not carry a member record")
        return member

    def login_with_token(self, token: str) -> Dict[str, Any]:
        """Make the member carried by ``token`` the logged-in one.

        On any failure the session is left untouched.
        """
        member = self.member_from_token(token)
        self._session[SESSION_KEY] = member
        logger.info("Login restored from token", extra={"username": member["username"]})
        return member

    def _require_codec(self) -> TokenCodec:
        if self._codec is None:
            raise RuntimeError("LoginService was created without a TokenCodec")
        return self._codec
