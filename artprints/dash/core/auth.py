from artprints.configs.logging_init import logger
from artprints.dash.layouts.app_layout import (
    PROTECTED_PATHS,
    handle_authenticated_user,
    handle_unauthenticated_user,
)
from artprints.models.users import UserSession


def process_authentication(pathname, local_data, search=None):
    """
    Resolve the page for the current URL and session.

    Pages in ``PROTECTED_PATHS`` need a session with a backend cookie;
    anonymous visits to them are redirected to ``/signin``.

    Args:
        pathname (str): Current URL pathname
        local_data (dict): ``local-store`` data holding the session
        search (str): Current URL query string

    Returns:
        tuple: (page_content, header, pathname, local_data)
    """
    pathname = pathname or "/"
    session = UserSession.from_store(local_data)

    if not session.is_authenticated:
        if pathname in PROTECTED_PATHS:
            logger.info(f"{pathname} requires a session - redirecting to /signin")
        return handle_unauthenticated_user(pathname, local_data, search)

    return handle_authenticated_user(pathname, session)
