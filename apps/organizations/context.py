"""
Request-scoped active organization.

The dashboard lets an operator pick the organization they are working on.
The choice is stored in the session (and mirrored in a cookie for clients
without a session) and resolved once per request. Services never read it
themselves; views resolve it here and pass it down explicitly.
"""

from typing import Optional

from django.conf import settings


SESSION_KEY = 'active_org_id'


def parse_organization_id(value) -> Optional[int]:
    """
    Coerce a raw organization id to a positive int.

    Returns None for missing, zero, negative or non-numeric values.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        organization_id = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    if organization_id <= 0:
        return None
    return organization_id


def get_active_organization_id(request) -> Optional[int]:
    """Return the active organization id for this request, if any."""
    cookie_name = getattr(settings, 'ACTIVE_ORGANIZATION_COOKIE', SESSION_KEY)

    session = getattr(request, 'session', None)
    if session is not None:
        organization_id = parse_organization_id(session.get(SESSION_KEY))
        if organization_id is not None:
            return organization_id

    return parse_organization_id(request.COOKIES.get(cookie_name))


def set_active_organization_id(request, response, organization_id: int):
    """Persist the active organization in the session and a cookie."""
    cookie_name = getattr(settings, 'ACTIVE_ORGANIZATION_COOKIE', SESSION_KEY)
    max_age = getattr(settings, 'ACTIVE_ORGANIZATION_COOKIE_MAX_AGE', 60 * 60 * 24 * 30)

    request.session[SESSION_KEY] = organization_id
    response.set_cookie(
        cookie_name,
        str(organization_id),
        max_age=max_age,
        path='/',
        samesite='Lax',
    )
    return response
