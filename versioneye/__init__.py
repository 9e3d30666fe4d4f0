# ruff: noqa: I001
from .__version__ import __description__, __title__, __version__  # noqa: F401
from ._exceptions import (  # noqa: F401
    DecodeError,
    StatusError,
    TransportError,
    VersionEyeError,
)
from ._transports import DEFAULT_BASE_URL, HttpTransport, Transport  # noqa: F401
from ._decoders import PageDecoder, PageResult  # noqa: F401
from ._models import Comment, OrganisationData, UserData  # noqa: F401
from ._pagination import Page, PageIterator, paginated  # noqa: F401
from ._resources import (  # noqa: F401
    Comments,
    Organisation,
    Organisations,
    User,
    Users,
    VersionEye,
)

try:
    from .cli import main
except ImportError:

    def main() -> None:  # type: ignore[misc]
        import sys

        print(
            'The "versioneye" command requires the CLI extra. '
            'Install it with: pip install "versioneye[cli]"',
            file=sys.stderr,
        )
        sys.exit(1)


_EXCLUDED_FROM_ALL = {"cli", "main"}

__all__ = sorted(
    (
        member
        for member in list(vars().keys())
        if (
            not member.startswith("_")
            or member in ["__description__", "__title__", "__version__"]
        )
        and member not in _EXCLUDED_FROM_ALL
    ),
    key=str.casefold,
)
