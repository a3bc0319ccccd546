"""socketpaw — Socket Mode receiver with OAuth and custom HTTP routes."""

from socketpaw.asgi import DispatchApp, ResponseWriter
from socketpaw.dispatcher import RequestDispatcher
from socketpaw.errors import (
    CustomRouteInitializationError,
    HTTPServerListenError,
    OAuthCallbackError,
    ReceiverError,
)
from socketpaw.installer import Installer, InstallerOptions, InstallerRouteSet
from socketpaw.oauth import CallbackOptions, SlackInstaller
from socketpaw.receiver import SocketModeReceiver
from socketpaw.routes import CustomRoute, build_custom_routes, match_custom_route
from socketpaw.server import HTTPListener, TLSOptions, create_server
from socketpaw.socket_mode import BoltSocketModeClient, SocketLifecycle, SocketModeClient

__all__ = [
    "BoltSocketModeClient",
    "CallbackOptions",
    "CustomRoute",
    "CustomRouteInitializationError",
    "DispatchApp",
    "HTTPListener",
    "HTTPServerListenError",
    "Installer",
    "InstallerOptions",
    "InstallerRouteSet",
    "OAuthCallbackError",
    "ReceiverError",
    "RequestDispatcher",
    "ResponseWriter",
    "SlackInstaller",
    "SocketLifecycle",
    "SocketModeClient",
    "SocketModeReceiver",
    "TLSOptions",
    "build_custom_routes",
    "create_server",
    "match_custom_route",
]
