import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
from pydantic import EmailStr, TypeAdapter, ValidationError, validate_call

from artprints.configs.config import API_BASE_URL, settings
from artprints.configs.logging_init import format_pydantic, logger
from artprints.models.artworks import Artwork, ImageRecord, UploadedArtwork
from artprints.models.users import FirebaseAuthResult, ProfileResponse, UserSession

_artwork_list = TypeAdapter(list[Artwork])

# Firebase Auth REST error codes mapped to messages shown under the forms
FIREBASE_ERROR_MESSAGES = {
    "EMAIL_NOT_FOUND": "No account found for this email.",
    "INVALID_PASSWORD": "Incorrect password.",
    "INVALID_LOGIN_CREDENTIALS": "Invalid email or password.",
    "USER_DISABLED": "This account has been disabled.",
    "EMAIL_EXISTS": "An account already exists for this email.",
    "INVALID_EMAIL": "Please enter a valid email address.",
    "WEAK_PASSWORD": "Password should be at least 6 characters.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts. Please try again later.",
}


class SessionExpiredError(Exception):
    """The backend rejected the session cookie (HTTP 401)."""


class AuthProviderError(Exception):
    """Sign in / sign up rejected by the identity provider."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


def _session_headers(session: UserSession) -> dict[str, str]:
    if not session.session_cookie:
        return {}
    return {"Cookie": f"{settings.backend.session_cookie_name}={session.session_cookie}"}


def _check_session(response: httpx.Response, action: str) -> None:
    if response.status_code == 401:
        logger.warning(f"Session rejected by backend while trying to {action}")
        raise SessionExpiredError(f"Session expired while trying to {action}")


def _firebase_error(response: httpx.Response) -> AuthProviderError:
    try:
        code = response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return AuthProviderError("Failed to sign in. Please try again.")

    # Codes can carry a detail suffix, e.g. "WEAK_PASSWORD : Password should be ..."
    base_code = str(code).split(":")[0].strip()
    message = FIREBASE_ERROR_MESSAGES.get(base_code, "Failed to sign in. Please try again.")
    return AuthProviderError(message, code=base_code)


# ------------------------------------------------------
# Artworks
# ------------------------------------------------------


@validate_call(validate_return=True)
def api_call_fetch_artworks(page: int) -> list[Artwork] | None:
    """
    Fetch one page of artworks from the marketplace API.

    An empty list is a successful answer meaning there is nothing left to
    load. ``None`` means the request failed (transport error, bad status or a
    payload that is not a list of artworks); the failure is logged here.

    Args:
        page: Page number, starting at 1

    Returns:
        The artworks of the page, or None if the fetch failed
    """
    try:
        response = httpx.get(
            f"{API_BASE_URL}/artworks",
            params={"page": page},
            timeout=settings.performance.api_request_timeout,
        )
        response.raise_for_status()
        artworks = _artwork_list.validate_python(response.json())
    except httpx.HTTPError as e:
        logger.error(f"Failed to fetch artworks page {page}: {e}")
        return None
    except ValueError as e:
        # Covers non-JSON bodies and payloads that fail validation
        logger.error(f"Malformed artworks response for page {page}: {e}")
        return None

    logger.info(f"Fetched {len(artworks)} artworks for page {page}")
    return artworks


# ------------------------------------------------------
# Identity provider (Firebase Auth REST API)
# ------------------------------------------------------


def _firebase_accounts_call(endpoint: str, email: str, password: str) -> FirebaseAuthResult:
    try:
        response = httpx.post(
            f"{settings.firebase.identity_toolkit_url}/accounts:{endpoint}",
            params={"key": settings.firebase.api_key},
            json={"email": email, "password": password, "returnSecureToken": True},
            timeout=settings.performance.api_request_timeout,
        )
    except httpx.HTTPError as e:
        logger.error(f"Identity provider unreachable ({endpoint}): {e}")
        raise AuthProviderError("Could not reach the sign-in service. Please try again.") from e

    if response.status_code != 200:
        error = _firebase_error(response)
        logger.warning(f"Identity provider rejected {endpoint} for {email}: {error.code}")
        raise error

    try:
        return FirebaseAuthResult.model_validate(response.json())
    except ValueError as e:
        # Non-JSON body or a payload missing token fields
        logger.error(f"Malformed identity provider response ({endpoint}): {e}")
        raise AuthProviderError("Failed to sign in. Please try again.") from e


@validate_call(validate_return=True)
def api_call_firebase_sign_in(email: EmailStr, password: str) -> FirebaseAuthResult:
    """
    Sign in with email and password.

    Raises:
        AuthProviderError: credentials rejected or provider unreachable
    """
    logger.info(f"Signing in: {email}")
    return _firebase_accounts_call("signInWithPassword", email, password)


@validate_call(validate_return=True)
def api_call_firebase_sign_up(email: EmailStr, password: str) -> FirebaseAuthResult:
    """
    Create an email/password account.

    Raises:
        AuthProviderError: account rejected or provider unreachable
    """
    logger.info(f"Creating account: {email}")
    return _firebase_accounts_call("signUp", email, password)


@validate_call(validate_return=True)
def api_call_refresh_id_token(session: UserSession) -> UserSession | None:
    """
    Exchange the refresh token for a new ID token.

    Returns:
        The session with fresh token fields, or None if the refresh failed
    """
    if not session.refresh_token:
        return None

    try:
        response = httpx.post(
            f"{settings.firebase.secure_token_url}/token",
            params={"key": settings.firebase.api_key},
            data={"grant_type": "refresh_token", "refresh_token": session.refresh_token},
            timeout=settings.performance.api_request_timeout,
        )
    except httpx.HTTPError as e:
        logger.error(f"Token refresh failed: {e}")
        return None

    if response.status_code != 200:
        logger.error(f"Token refresh rejected: {response.text}")
        return None

    try:
        data = response.json()
        id_token = data["id_token"]
        expires_in = int(data.get("expires_in", 3600))
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        logger.error(f"Malformed token refresh response: {e}")
        return None

    logger.debug(f"ID token refreshed for {session.email}")
    return session.model_copy(
        update={
            "id_token": id_token,
            "refresh_token": data.get("refresh_token", session.refresh_token),
            "expire_datetime": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
        }
    )


# ------------------------------------------------------
# Session cookie exchange
# ------------------------------------------------------


@validate_call(validate_return=True)
def api_call_session_login(id_token: str, account_type: str | None = None) -> str | None:
    """
    Exchange an identity provider token for a backend session cookie.

    Args:
        id_token: Firebase ID token
        account_type: Account type chosen at sign up (artist, printshop)

    Returns:
        The session cookie value, or None if the exchange failed
    """
    payload: dict[str, Any] = {"token": id_token}
    if account_type:
        payload["accountType"] = account_type

    try:
        response = httpx.post(
            f"{API_BASE_URL}/sessionLogin",
            json=payload,
            timeout=settings.performance.api_request_timeout,
        )
    except httpx.HTTPError as e:
        logger.error(f"Session login failed: {e}")
        return None

    if response.status_code != 200:
        logger.error(f"Session login rejected: {response.text}")
        return None

    cookie = response.cookies.get(settings.backend.session_cookie_name)
    if not cookie:
        logger.error("Session login succeeded but no session cookie was set")
        return None

    logger.info("Session cookie set")
    return cookie


@validate_call(validate_return=True)
def api_call_session_logout(session: UserSession) -> bool:
    """
    Revoke the backend session.

    Returns:
        True if the backend confirmed the logout
    """
    try:
        response = httpx.post(
            f"{API_BASE_URL}/sessionLogout",
            headers=_session_headers(session),
            timeout=settings.performance.api_request_timeout,
        )
    except httpx.HTTPError as e:
        logger.error(f"Logout error: {e}")
        return False

    if response.status_code != 200:
        logger.error(f"Logout rejected: {response.text}")
        return False

    logger.info(f"Logged out: {session.email}")
    return True


# ------------------------------------------------------
# Profile
# ------------------------------------------------------


@validate_call(validate_return=True)
def api_call_fetch_profile(session: UserSession) -> ProfileResponse | None:
    """
    Fetch the signed-in user's profile and artworks.

    Raises:
        SessionExpiredError: the backend rejected the session cookie

    Returns:
        The profile, or None if the request failed
    """
    try:
        response = httpx.get(
            f"{API_BASE_URL}/getprofile",
            headers=_session_headers(session),
            timeout=settings.performance.api_request_timeout,
        )
    except httpx.HTTPError as e:
        logger.error(f"Failed to fetch profile: {e}")
        return None

    _check_session(response, "fetch the profile")

    if response.status_code != 200:
        logger.error(f"Failed to fetch profile: {response.status_code} {response.text}")
        return None

    try:
        profile = ProfileResponse.model_validate(response.json())
    except ValueError as e:
        logger.error(f"Malformed profile response: {e}")
        return None

    logger.debug(f"Profile fetched: {format_pydantic(profile.user)}")
    return profile


@validate_call(validate_return=True)
def api_call_update_profile(
    session: UserSession,
    fields: dict[str, str],
    files: dict[str, tuple[str, bytes, str]] | None = None,
) -> dict[str, Any]:
    """
    Update the profile with a multipart form.

    Args:
        session: Signed-in session
        fields: Text fields (name, description, dateOfBirth)
        files: Optional images keyed by form field (avatar, background),
            as ``(filename, content, content_type)``

    Raises:
        SessionExpiredError: the backend rejected the session cookie

    Returns:
        ``{"success": bool, "message": str}``
    """
    try:
        response = httpx.post(
            f"{API_BASE_URL}/updateprofile",
            data=fields,
            files=files or None,
            headers=_session_headers(session),
            timeout=settings.performance.upload_timeout,
        )
    except httpx.HTTPError as e:
        logger.error(f"Profile update failed: {e}")
        return {"success": False, "message": "Could not reach the server"}

    _check_session(response, "update the profile")

    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    if response.status_code != 200:
        message = body.get("message") or response.text or f"HTTP {response.status_code}"
        logger.error(f"Profile update rejected: {message}")
        return {"success": False, "message": message}

    logger.info(f"Profile updated for {session.email}")
    return {"success": True, "message": body.get("message", "Profile updated")}


# ------------------------------------------------------
# Upload
# ------------------------------------------------------


@validate_call(validate_return=True)
def api_call_upload_artwork(
    session: UserSession, filename: str, content: bytes, content_type: str
) -> UploadedArtwork | None:
    """
    Upload an image file to the marketplace (stored on the image CDN).

    Args:
        session: Session holding a valid ID token
        filename: Original file name
        content: Raw file bytes
        content_type: MIME type of the file

    Returns:
        The uploaded image URL, or None if the upload failed
    """
    try:
        response = httpx.post(
            f"{API_BASE_URL}/artworks/upload",
            files={"file": (filename, content, content_type)},
            headers={"Authorization": f"Bearer {session.id_token}"},
            timeout=settings.performance.upload_timeout,
        )
    except httpx.HTTPError as e:
        logger.error(f"Upload error: {e}")
        return None

    if response.status_code != 200:
        logger.error(f"Upload failed: {response.status_code} {response.text}")
        return None

    try:
        uploaded = UploadedArtwork.model_validate(response.json())
    except ValueError as e:
        logger.error(f"Malformed upload response: {e}")
        return None

    logger.info(f"Uploaded {filename} -> {uploaded.url}")
    return uploaded


@validate_call(validate_return=True)
def api_call_record_image(session: UserSession, url: str) -> ImageRecord | None:
    """
    Record an uploaded image in the Firestore images collection.

    Returns:
        The stored record, or None if Firestore is disabled or the write failed
    """
    if not settings.firebase.firestore_enabled or not settings.firebase.project_id:
        logger.debug("Firestore not configured - skipping image record")
        return None

    record = ImageRecord(
        id=str(uuid.uuid4()),
        url=url,
        created_at=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )

    try:
        response = httpx.post(
            f"{settings.firebase.firestore_documents_url}/{settings.firebase.images_collection}",
            json=record.to_firestore_fields(),
            headers={"Authorization": f"Bearer {session.id_token}"},
            timeout=settings.performance.api_request_timeout,
        )
    except httpx.HTTPError as e:
        logger.error(f"Failed to record image in Firestore: {e}")
        return None

    if response.status_code != 200:
        logger.error(f"Firestore rejected image record: {response.text}")
        return None

    logger.debug(f"Image recorded: {record.id}")
    return record


# ------------------------------------------------------
# Orders
# ------------------------------------------------------


@validate_call(validate_return=True)
def api_call_create_order(session: UserSession, artwork_ids: list[str]) -> dict[str, Any] | None:
    """
    Create an order for the artworks in the cart.

    Raises:
        SessionExpiredError: the backend rejected the session cookie

    Returns:
        The created order, or None if the request failed
    """
    try:
        response = httpx.post(
            f"{API_BASE_URL}/orders",
            json={"items": artwork_ids},
            headers=_session_headers(session),
            timeout=settings.performance.api_request_timeout,
        )
    except httpx.HTTPError as e:
        logger.error(f"Order creation failed: {e}")
        return None

    _check_session(response, "create an order")

    if response.status_code not in (200, 201):
        logger.error(f"Order rejected: {response.status_code} {response.text}")
        return None

    logger.info(f"Order created with {len(artwork_ids)} items")
    try:
        return dict(response.json())
    except (ValueError, TypeError):
        return {}
