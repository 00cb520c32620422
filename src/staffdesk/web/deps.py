from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from staffdesk.app import App
from staffdesk.core.modules.record.models import AuthToken
from staffdesk.errors import AuthenticationError

# The token belongs to the records API; it is only passed through
bearer_scheme = HTTPBearer(auto_error=False)
cookie_scheme = APIKeyCookie(name="token", auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


def _candidate_tokens(credentials: HTTPAuthorizationCredentials | None, token_cookie: str | None) -> list[AuthToken]:
    """Bearer header first, then the token cookie."""
    candidates = []
    if credentials and credentials.scheme.lower() == "bearer":
        candidates.append(AuthToken(credentials.credentials))
    if token_cookie:
        candidates.append(AuthToken(token_cookie))
    return candidates


async def get_auth_token(
    app: Annotated[App, Depends(get_app)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
    token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> AuthToken:
    """The caller's records API token, or 401 when none was sent."""
    for auth_token in _candidate_tokens(credentials, token_cookie):
        if await app.is_auth_token_valid(auth_token):
            return auth_token
    raise AuthenticationError


AppDep = Annotated[App, Depends(get_app)]
AuthTokenDep = Annotated[AuthToken, Depends(get_auth_token)]
