"""FastAPI dependencies: baby data manager, cookie-backed session, role guards."""

from typing import Annotated, Iterator, MutableMapping, Optional
from urllib.parse import quote, unquote

from fastapi import Depends, HTTPException, Request, Response, status

from lailatov.core.constants import ROLE_COACH, ROLE_PARENT, SESSION_ROLE_KEY, SESSION_USERNAME_KEY
from lailatov.core.settings import settings
from lailatov.services.auth_manager import Session
from lailatov.services.babies_data import BabyDataManager

SESSION_KEYS = (SESSION_ROLE_KEY, SESSION_USERNAME_KEY)


class CookieStorage(MutableMapping[str, str]):
    """
    Session keys read from the request cookies and written back on the response.
    Values are percent-encoded, since Hebrew usernames are not valid cookie text.
    """

    def __init__(self, request: Request, response: Response):
        self._response = response
        self._values = {
            key: unquote(request.cookies[key])
            for key in SESSION_KEYS
            if key in request.cookies
        }

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._values[key] = value
        self._response.set_cookie(
            key,
            quote(value, safe=""),
            max_age=settings.SESSION_COOKIE_MAX_AGE_DAYS * 24 * 60 * 60,
            samesite="lax",
        )

    def __delitem__(self, key: str) -> None:
        del self._values[key]
        self._response.delete_cookie(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)


def get_baby_manager() -> BabyDataManager:
    return BabyDataManager()


def get_session(request: Request, response: Response) -> Session:
    return Session(CookieStorage(request, response))


async def require_coach(session: Annotated[Session, Depends(get_session)]) -> Session:
    """Coach pages. Raises 403 otherwise."""
    if not session.is_coach():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Coach access required")
    return session


async def require_parent_or_coach(
    parent_username: str,
    session: Annotated[Session, Depends(get_session)],
) -> Session:
    """Parent pages: the matching parent, or the coach reviewing their data."""
    if not (session.is_coach() or session.is_parent(parent_username)):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied for this family")
    return session


ManagerDep = Annotated[BabyDataManager, Depends(get_baby_manager)]
SessionDep = Annotated[Session, Depends(get_session)]
CoachDep = Annotated[Session, Depends(require_coach)]
ParentDep = Annotated[Session, Depends(require_parent_or_coach)]


def redirect_for(role: Optional[str], username: Optional[str]) -> Optional[str]:
    if role == ROLE_COACH:
        return "/coach/dashboard"
    if role == ROLE_PARENT and username:
        return f"/parent/{quote(username, safe='')}"
    return None
