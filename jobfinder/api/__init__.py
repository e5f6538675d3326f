from .base import ApiClient, Resource
from .auth import AuthResource
from .jobs import JobsResource
from .applications import ApplicationsResource
from .profiles import ProfilesResource
from .cvs import CVsResource

from jobfinder.config import Settings
from jobfinder.errors import ApiError
from jobfinder.log import get_logger
from jobfinder.session import FileTokenStore, SessionContext

log = get_logger(__name__)

__all__ = [
    "ApiClient", "Resource", "AuthResource", "JobsResource",
    "ApplicationsResource", "ProfilesResource", "CVsResource",
    "JobBoardApi", "get_api",
]


class JobBoardApi:
    """One client, one resource object per remote resource."""

    def __init__(self, client: ApiClient, settings: Settings | None = None) -> None:
        self.client = client
        self.settings = settings or Settings()
        self.auth = AuthResource(client)
        self.jobs = JobsResource(client)
        self.applications = ApplicationsResource(client)
        self.profiles = ProfilesResource(client)
        self.cvs = CVsResource(client)

    @property
    def session(self) -> SessionContext:
        return self.client.session


def get_api(settings: Settings, session: SessionContext | None = None) -> JobBoardApi:
    """Build the client.  Without an explicit session, the persisted one is
    loaded and checked against the server before first use."""
    restore = session is None
    if session is None:
        session = SessionContext(FileTokenStore(settings.token_file))
    log.debug("API client for %s (timeout %.0fs)", settings.api_url, settings.timeout)
    client = ApiClient(settings.api_url, session, timeout=settings.timeout)
    api = JobBoardApi(client, settings)
    if restore:
        try:
            api.auth.restore()
        except ApiError as exc:
            log.warning("Could not verify the saved session: %s", exc)
    return api
